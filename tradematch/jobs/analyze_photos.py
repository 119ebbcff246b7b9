"""Photo analysis job: vision call, payload parsing and cost adjustment."""

import argparse
import json
import logging
from typing import Any, Dict, List, Sequence

from tradematch.core.config import ConfigError, get_settings
from tradematch.etl.transform import VisionParseError, parse_vision_payload
from tradematch.ranking.composer import FALLBACK_RESULT, apply_display_band, coerce_assessment, compose
from tradematch.vendors import vision

logger = logging.getLogger(__name__)

MAX_IMAGES = 10
# Supplier profit plus platform fee applied to model material estimates.
PLATFORM_MARKUP = 1.15


def _factor_deltas(raw: Dict[str, Any]) -> Dict[str, str]:
    assessment = coerce_assessment(raw)
    factors = {
        "complexity": assessment.complexity,
        "condition": assessment.condition,
        "access": assessment.access,
        "materialQuality": assessment.material_quality,
    }
    return {name: f"{((value or 1.0) - 1) * 100:.1f}" for name, value in factors.items()}


def _marked_up_materials(materials: Any) -> List[Dict[str, Any]]:
    marked_up = []
    for material in materials if isinstance(materials, list) else []:
        if not isinstance(material, dict):
            continue
        cost = material.get("estimatedCost")
        if isinstance(cost, bool) or not isinstance(cost, (int, float)):
            logger.debug("Skipping material without numeric cost: %s", material)
            continue
        marked_up.append({**material, "baseCost": cost, "estimatedCost": round(cost * PLATFORM_MARKUP, 2)})
    return marked_up


def analyze_photos(images: Sequence[str], job_type: str) -> Dict[str, Any]:
    """Assess job photos and return the composed adjustment with model insights.

    A reply that cannot be parsed yields the neutral fallback adjustment with
    ``parsed`` set to False rather than an error.
    """
    if not images:
        raise ValueError("No images provided")
    if len(images) > MAX_IMAGES:
        raise ValueError(f"Maximum {MAX_IMAGES} images allowed")

    settings = get_settings()
    if not settings.openai_api_key:
        raise ConfigError("OPENAI_API_KEY is required")

    logger.info("Analyzing %d photos for %s", len(images), job_type)
    text = vision.analyze_images(images, job_type, api_key=settings.openai_api_key, model=settings.vision_model)

    try:
        payload = parse_vision_payload(text)
    except VisionParseError as exc:
        logger.warning("Vision reply could not be parsed, using fallback adjustment: %s", exc)
        return {
            **FALLBACK_RESULT.to_dict(),
            "parsed": False,
            "insights": [],
            "detectedIssues": False,
            "materials": [],
            "factors": {},
        }

    result = compose(coerce_assessment(payload))
    if settings.confidence_band:
        result = apply_display_band(result, *settings.confidence_band)

    insights = payload.get("insights")
    return {
        **result.to_dict(),
        "parsed": True,
        "insights": insights if isinstance(insights, list) else [],
        "detectedIssues": payload.get("detectedIssues") is True,
        "materials": _marked_up_materials(payload.get("materials")),
        "factors": _factor_deltas(payload),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Analyze job photos and compute a cost adjustment")
    parser.add_argument("--job-type", dest="job_type", required=True, help="Job type slug, e.g. painting-room")
    parser.add_argument("images", nargs="+", help="Image URLs or data URIs")
    return parser


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args()

    try:
        result = analyze_photos(args.images, args.job_type)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
