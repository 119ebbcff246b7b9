"""HTTP entrypoint exposing contractor search and photo analysis (Cloud Run friendly)."""

from __future__ import annotations

import logging
import math
import os
from typing import Any, Dict, Optional

import requests
from flask import Flask, jsonify, request

from tradematch.core.config import ConfigError, get_settings
from tradematch.jobs.analyze_photos import MAX_IMAGES, analyze_photos
from tradematch.jobs.search_contractors import search_contractors
from tradematch.ranking.composer import FALLBACK_RESULT, apply_display_band, coerce_assessment, compose
from tradematch.vendors.google_places import GooglePlacesError
from tradematch.vendors.vision import VisionError

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; reads settings only, no vendor calls."""
    settings = get_settings()
    return (
        jsonify(
            {
                "status": "ok",
                "worker_port_config": settings.worker_port,
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


def _optional_float(payload: Dict[str, Any], key: str) -> Optional[float]:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise TypeError(f"{key} must be a number, not a boolean")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{key} must be finite")
    return number


@app.post("/api/search-contractors")
def search() -> Any:
    """
    Search and rank contractors.
    Required JSON fields: jobType, location
    Optional: latitude, longitude (float), postcode (resolved postcode record)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"error": "JSON object body is required"}), 400

    job_type = str(payload.get("jobType") or "").strip()
    location = str(payload.get("location") or "").strip()
    if not job_type:
        return jsonify({"error": "Job type is required"}), 400
    if not location:
        return jsonify({"error": "Location is required"}), 400

    try:
        latitude = _optional_float(payload, "latitude")
        longitude = _optional_float(payload, "longitude")
    except (TypeError, ValueError):
        return jsonify({"error": "latitude and longitude must be numeric"}), 400

    postcode_record = payload.get("postcode")
    if postcode_record is not None and not isinstance(postcode_record, dict):
        return jsonify({"error": "postcode must be an object"}), 400

    try:
        result = search_contractors(
            job_type=job_type,
            location=location,
            latitude=latitude,
            longitude=longitude,
            postcode_record=postcode_record,
        )
    except ConfigError as exc:
        logger.error("Contractor search misconfigured: %s", exc)
        return jsonify({"error": "Contractor search is not configured"}), 500
    except (GooglePlacesError, requests.RequestException) as exc:
        logger.exception("Contractor search failed: %s", exc)
        return jsonify({"error": "Failed to search contractors", "message": str(exc)}), 502

    return jsonify(result), 200


@app.post("/api/analyze-photos")
def photos() -> Any:
    """
    Analyze job photos with the vision model.
    Required JSON fields: images (list of {data: url}), jobType
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    images = payload.get("images") if isinstance(payload, dict) else None

    if not isinstance(images, list) or not images:
        return jsonify({"error": "No images provided"}), 400
    if len(images) > MAX_IMAGES:
        return jsonify({"error": f"Maximum {MAX_IMAGES} images allowed"}), 400

    urls = [img.get("data") if isinstance(img, dict) else img for img in images]
    if not all(isinstance(url, str) and url for url in urls):
        return jsonify({"error": "Each image must carry a data URL"}), 400

    try:
        result = analyze_photos(urls, str(payload.get("jobType") or "home improvement"))
    except ConfigError as exc:
        logger.error("Photo analysis misconfigured: %s", exc)
        return jsonify({"error": "Photo analysis is not configured"}), 500
    except VisionError as exc:
        return jsonify({"error": "Failed to analyze photos", "message": str(exc)}), 502

    return jsonify(result), 200


@app.post("/api/compose-adjustment")
def compose_adjustment() -> Any:
    """Compose an adjustment from factors a client already obtained."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify(FALLBACK_RESULT.to_dict()), 200

    result = compose(coerce_assessment(payload))
    band = get_settings().confidence_band
    if band:
        result = apply_display_band(result, *band)
    return jsonify(result.to_dict()), 200


def main() -> None:
    """Cloud Run injects PORT; fall back to the configured worker port locally."""
    env_port = os.getenv("PORT")
    port = int(env_port or get_settings().worker_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
