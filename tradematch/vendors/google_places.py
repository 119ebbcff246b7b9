"""Client utilities for the Google Places API."""

import logging
from typing import Any, Dict, Iterable, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/place"
_TIMEOUT = 10
_DETAIL_FIELDS = (
    "place_id,name,formatted_address,formatted_phone_number,international_phone_number,"
    "geometry,website,rating,user_ratings_total,types,opening_hours,price_level"
)


class GooglePlacesError(RuntimeError):
    """Raised when the Places API returns a non-successful response."""


def _get(endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
    response = _SESSION.get(f"{_BASE_URL}/{endpoint}/json", params=params, timeout=_TIMEOUT)
    response.raise_for_status()
    payload = response.json()
    status = payload.get("status")
    if status not in {"OK", "ZERO_RESULTS"}:
        logger.error("%s failed: status=%s, error_message=%s", endpoint, status, payload.get("error_message"))
        raise GooglePlacesError(payload.get("error_message") or status)
    return payload


def text_search(
    query: str,
    api_key: str,
    types: Optional[Iterable[str]] = None,
    pagetoken: Optional[str] = None,
) -> Dict[str, Any]:
    params = {"query": query, "key": api_key}
    if types:
        params["type"] = "|".join(types)
    if pagetoken:
        params["pagetoken"] = pagetoken
    return _get("textsearch", params)


def nearby_search(
    latitude: float,
    longitude: float,
    radius_m: int,
    keyword: str,
    api_key: str,
    types: Optional[Iterable[str]] = None,
) -> Dict[str, Any]:
    params = {
        "location": f"{latitude},{longitude}",
        "radius": radius_m,
        "keyword": keyword,
        "key": api_key,
    }
    if types:
        params["type"] = "|".join(types)
    return _get("nearbysearch", params)


def place_details(place_id: str, api_key: str) -> Dict[str, Any]:
    params = {"place_id": place_id, "key": api_key, "fields": _DETAIL_FIELDS}
    return _get("details", params).get("result", {})
