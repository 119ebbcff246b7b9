"""Regional labour cost multiplier derived from a resolved UK postcode record.

The record uses postcodes.io field names (``region``, ``admin_district``,
``parliamentary_constituency``, ``country``). Rules are checked in order and
the first match wins.
"""

from typing import Any, Dict, Mapping, Optional

LONDON = 1.5
HIGH_VALUE = 1.25
SOUTH_EAST = 1.15
LOW_COST = 0.85
NORTH_AND_WALES = 0.92
SCOTLAND = 0.95
STANDARD = 1.0

HIGH_COST_REGIONS = {"South East", "East of England"}
HIGH_COST_DISTRICTS = (
    "Oxford", "Cambridge", "Brighton and Hove", "Bath and North East Somerset",
    "Windsor and Maidenhead", "Wokingham", "Surrey", "Buckinghamshire",
    "Hertfordshire", "Bristol", "Edinburgh", "St Albans", "Winchester",
    "Guildford", "Elmbridge", "Mole Valley", "Waverley",
)
LOW_COST_REGIONS = {"North East", "Yorkshire and The Humber", "North West", "Wales"}
LOW_COST_DISTRICTS = (
    "Burnley", "Blackpool", "Stoke", "Kingston upon Hull", "Middlesbrough",
    "Hartlepool", "Blackburn", "Bradford", "Barnsley", "Doncaster",
    "Rotherham", "Wakefield", "Sunderland", "Gateshead", "South Tyneside",
    "Blaenau Gwent", "Merthyr Tydfil", "Neath Port Talbot",
)

_REASONS = {
    LONDON: "London area",
    HIGH_VALUE: "High-value area",
    SOUTH_EAST: "South East/East England",
    LOW_COST: "Lower cost area",
    NORTH_AND_WALES: "Northern England/Wales",
    SCOTLAND: "Scotland",
}


def _contains_any(value: Optional[str], names) -> bool:
    return bool(value) and any(name in value for name in names)


def cost_multiplier(record: Mapping[str, Any]) -> float:
    region = record.get("region")
    district = record.get("admin_district")
    constituency = record.get("parliamentary_constituency")

    if region == "London":
        return LONDON
    if _contains_any(district, HIGH_COST_DISTRICTS) or _contains_any(constituency, HIGH_COST_DISTRICTS):
        return HIGH_VALUE
    if region in HIGH_COST_REGIONS:
        return SOUTH_EAST
    if _contains_any(district, LOW_COST_DISTRICTS):
        return LOW_COST
    if region in LOW_COST_REGIONS:
        return NORTH_AND_WALES
    if record.get("country") == "Scotland" and not _contains_any(district, ("Edinburgh",)):
        return SCOTLAND
    return STANDARD


def cost_reason(multiplier: float) -> str:
    return _REASONS.get(multiplier, "Standard pricing area")


def location_summary(record: Mapping[str, Any]) -> Dict[str, Any]:
    multiplier = cost_multiplier(record)
    return {
        "costMultiplier": multiplier,
        "costReason": cost_reason(multiplier),
        "region": record.get("region"),
    }
