"""Compose vision difficulty factors into a single price adjustment."""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from tradematch.core.models import CostAdjustmentResult, VisionAssessment

logger = logging.getLogger(__name__)

NEUTRAL_FACTOR = 1.0

# Returned by the boundary when the vision response could not be parsed at all.
FALLBACK_RESULT = CostAdjustmentResult(adjustment=1.0, confidence=0)

_FIELD_ALIASES = {
    "complexity": ("complexity",),
    "condition": ("condition",),
    "access": ("access",),
    "material_quality": ("materialQuality", "material_quality"),
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _usable_factor(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def coerce_assessment(raw: Mapping[str, Any]) -> VisionAssessment:
    """Build a VisionAssessment from a loosely shaped vision payload.

    Absent, non-numeric, non-finite and non-positive factors are left as ``None``.
    Numeric strings such as ``"1.05"`` are accepted.
    """
    values = {}
    for field_name, keys in _FIELD_ALIASES.items():
        value = None
        for key in keys:
            candidate = raw.get(key)
            if isinstance(candidate, str):
                try:
                    candidate = float(candidate.strip())
                except ValueError:
                    candidate = None
            value = _usable_factor(candidate)
            if value is not None:
                break
        if value is None and any(key in raw for key in keys):
            logger.debug("Vision factor %s is unusable (%r); using neutral value", field_name, raw.get(keys[0]))
        values[field_name] = value
    return VisionAssessment(**values)


def compose(assessment: VisionAssessment) -> CostAdjustmentResult:
    factors = [
        _usable_factor(assessment.complexity),
        _usable_factor(assessment.condition),
        _usable_factor(assessment.access),
        _usable_factor(assessment.material_quality),
    ]
    factors = [NEUTRAL_FACTOR if factor is None else factor for factor in factors]
    average = sum(factors) / len(factors)

    confidence = _round_half_up((1 - abs(1 - average)) * 100)
    confidence = max(0, min(100, confidence))

    return CostAdjustmentResult(adjustment=round(average, 2), confidence=confidence)


def apply_display_band(result: CostAdjustmentResult, low: int, high: int) -> CostAdjustmentResult:
    """Narrow confidence to a display band such as 60-95. Adjustment is untouched."""
    if low > high:
        raise ValueError("display band low must not exceed high")
    return CostAdjustmentResult(adjustment=result.adjustment, confidence=max(low, min(high, result.confidence)))
