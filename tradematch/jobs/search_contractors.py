"""Contractor search job: Places lookup, ranking and response shaping."""

import argparse
import json
import logging
from typing import Any, Dict, List, Mapping, Optional

from tradematch.core.config import ConfigError, get_settings
from tradematch.core.job_types import place_types, search_keyword
from tradematch.etl.transform import to_candidates
from tradematch.pricing.location import location_summary
from tradematch.ranking.ranker import policy_from_settings, rank
from tradematch.vendors import google_places

logger = logging.getLogger(__name__)


def _fetch_places(
    *,
    keyword: str,
    query: str,
    types: List[str],
    latitude: Optional[float],
    longitude: Optional[float],
    api_key: str,
    radius_m: int,
) -> List[Dict[str, Any]]:
    if latitude is not None and longitude is not None:
        logger.info("Nearby search within %dm of %s,%s for keyword=%s", radius_m, latitude, longitude, keyword)
        response = google_places.nearby_search(
            latitude=latitude,
            longitude=longitude,
            radius_m=radius_m,
            keyword=keyword,
            api_key=api_key,
            types=types,
        )
    else:
        logger.info("Text search for query=%s", query)
        response = google_places.text_search(query=query, api_key=api_key, types=types)
    return response.get("results", [])


def _with_details(results: List[Dict[str, Any]], api_key: str) -> List[Dict[str, Any]]:
    """Merge Place Details into each result; a failed lookup keeps the search result as-is."""
    enriched = []
    for result in results:
        place_id = result.get("place_id")
        if not place_id:
            enriched.append(result)
            continue
        try:
            details = google_places.place_details(place_id=place_id, api_key=api_key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to fetch details for %s: %s", place_id, exc)
            enriched.append(result)
            continue
        enriched.append({**result, **details})
    return enriched


def search_contractors(
    *,
    job_type: str,
    location: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    postcode_record: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    settings = get_settings()
    api_key = settings.google_api_key
    if not api_key:
        raise ConfigError("GOOGLE_API_KEY is required")

    job_type = (job_type or "").strip()
    location = (location or "").strip()
    if not job_type or not location:
        raise ValueError("job_type and location are required")

    keyword = search_keyword(job_type)
    query = f"{keyword} in {location}"

    results = _fetch_places(
        keyword=keyword,
        query=query,
        types=place_types(job_type),
        latitude=latitude,
        longitude=longitude,
        api_key=api_key,
        radius_m=settings.search_radius_m,
    )
    logger.info("Places returned %d results for %s", len(results), query)

    if settings.fetch_details:
        results = _with_details(results, api_key)

    ranking = rank(
        to_candidates(results),
        keyword,
        top_n=settings.top_n,
        policy=policy_from_settings(settings),
    )

    return {
        "contractors": [contractor.to_dict() for contractor in ranking.contractors],
        "searchQuery": query,
        "totalFound": len(results),
        "filters": ranking.tier.to_dict(),
        "locationData": location_summary(postcode_record) if postcode_record else None,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search and rank contractors for a job")
    parser.add_argument("--job-type", dest="job_type", required=True, help="Job type slug, e.g. painting-room")
    parser.add_argument("--location", dest="location", required=True, help="Town, city or postcode to search")
    parser.add_argument("--lat", dest="latitude", type=float, help="Latitude for a radius search")
    parser.add_argument("--lng", dest="longitude", type=float, help="Longitude for a radius search")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args()

    try:
        result = search_contractors(
            job_type=args.job_type,
            location=args.location,
            latitude=args.latitude,
            longitude=args.longitude,
        )
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
