"""Utilities for turning vendor responses into core models."""

import json
import logging
import math
import re
from typing import Any, Dict, Iterable, List, Optional

from tradematch.core.models import Candidate

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_MISSING_ADDRESS = "Address not available"


class VisionParseError(ValueError):
    """Raised when a vision model reply carries no usable JSON object."""


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def _safe_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        if value is None:
            return None
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _safe_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        try:
            number = float(text)
        except ValueError:
            # Thousands separators, e.g. "1,234".
            if re.fullmatch(r"\d{1,3}(,\d{3})+", text):
                return int(text.replace(",", ""))
            return None
        return int(number) if math.isfinite(number) else None
    return None


def to_candidate(result: Dict[str, Any]) -> Optional[Candidate]:
    """Map a Places search or details result to a Candidate; nameless results yield ``None``."""
    name = _strip_or_none(result.get("name"))
    if not name:
        logger.debug("Skipping place without name: %s", result.get("place_id"))
        return None

    rating = _safe_float(result.get("rating")) or 0.0
    rating = max(0.0, min(5.0, rating))
    review_count = max(_safe_int(result.get("user_ratings_total")) or 0, 0)

    phone = _strip_or_none(result.get("formatted_phone_number") or result.get("international_phone_number"))
    website = _strip_or_none(result.get("website"))
    location = (result.get("geometry") or {}).get("location") or {}
    opening_hours = result.get("opening_hours") or {}

    return Candidate(
        name=name,
        address=_strip_or_none(result.get("formatted_address") or result.get("vicinity")) or _MISSING_ADDRESS,
        rating=rating,
        review_count=review_count,
        categories=tuple(str(t) for t in result.get("types") or []),
        has_website=website is not None,
        has_phone=phone is not None,
        is_open_now=opening_hours.get("open_now") is True,
        place_id=result.get("place_id"),
        phone=phone,
        website=website,
        latitude=_safe_float(location.get("lat")),
        longitude=_safe_float(location.get("lng")),
        price_level=_safe_int(result.get("price_level")),
    )


def to_candidates(results: Iterable[Dict[str, Any]]) -> List[Candidate]:
    candidates = []
    for result in results or []:
        if not isinstance(result, dict):
            continue
        candidate = to_candidate(result)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def parse_vision_payload(text: Optional[str]) -> Dict[str, Any]:
    """Extract the JSON object embedded in a vision model reply.

    Models often wrap the JSON in prose or markdown fences, so everything from
    the first ``{`` to the last ``}`` is taken as the payload.
    """
    if not text:
        raise VisionParseError("Vision response is empty")
    match = _JSON_OBJECT.search(text)
    if not match:
        raise VisionParseError("No JSON found in vision response")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise VisionParseError(f"Vision response JSON is invalid: {exc}") from exc
    if not isinstance(payload, dict):
        raise VisionParseError("Vision response JSON is not an object")
    return payload
