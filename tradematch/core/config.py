"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing."""


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    openai_api_key: str
    vision_model: str = "gpt-4o-mini"
    worker_port: int = 9000
    strict_min_rating: float = 4.0
    strict_min_reviews: int = 5
    relaxed_min_rating: float = 3.5
    relaxed_min_reviews: int = 3
    min_acceptable: int = 3
    top_n: int = 5
    search_radius_m: int = 16000
    fetch_details: bool = False
    confidence_band: Optional[Tuple[int, int]] = None


def _parse_band(raw: Optional[str]) -> Optional[Tuple[int, int]]:
    if not raw:
        return None
    try:
        low, high = (int(part.strip()) for part in raw.split(","))
    except ValueError:
        logger.warning("CONFIDENCE_DISPLAY_BAND=%r is not 'low,high'; ignoring.", raw)
        return None
    if not 0 <= low <= high <= 100:
        logger.warning("CONFIDENCE_DISPLAY_BAND=%r is outside 0-100; ignoring.", raw)
        return None
    return low, high


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY", "")
    openai_api_key = os.getenv("OPENAI_API_KEY", "")
    vision_model = os.getenv("VISION_MODEL", "gpt-4o-mini")
    worker_port = int(os.getenv("WORKER_PORT", "9000"))
    strict_min_rating = float(os.getenv("RANK_STRICT_MIN_RATING", "4.0"))
    strict_min_reviews = int(os.getenv("RANK_STRICT_MIN_REVIEWS", "5"))
    relaxed_min_rating = float(os.getenv("RANK_RELAXED_MIN_RATING", "3.5"))
    relaxed_min_reviews = int(os.getenv("RANK_RELAXED_MIN_REVIEWS", "3"))
    min_acceptable = int(os.getenv("RANK_MIN_ACCEPTABLE", "3"))
    top_n = int(os.getenv("RANK_TOP_N", "5"))
    search_radius_m = int(os.getenv("PLACES_SEARCH_RADIUS_M", "16000"))
    fetch_details = os.getenv("PLACES_FETCH_DETAILS", "false").lower() in {"1", "true", "yes"}
    confidence_band = _parse_band(os.getenv("CONFIDENCE_DISPLAY_BAND"))

    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; contractor searches will fail.")
    if not openai_api_key:
        logger.warning("OPENAI_API_KEY is not configured; photo analysis will fail.")

    return Settings(
        google_api_key=google_api_key,
        openai_api_key=openai_api_key,
        vision_model=vision_model,
        worker_port=worker_port,
        strict_min_rating=strict_min_rating,
        strict_min_reviews=strict_min_reviews,
        relaxed_min_rating=relaxed_min_rating,
        relaxed_min_reviews=relaxed_min_reviews,
        min_acceptable=min_acceptable,
        top_n=top_n,
        search_radius_m=search_radius_m,
        fetch_details=fetch_details,
        confidence_band=confidence_band,
    )
