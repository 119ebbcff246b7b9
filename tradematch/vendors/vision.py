"""OpenAI vision client used to assess job photos."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from openai import OpenAI, OpenAIError

logger = logging.getLogger(__name__)

MAX_IMAGES_SENT = 5
MAX_TOKENS = 1000
TEMPERATURE = 0.3

PROMPT_TEMPLATE = """You are an expert construction, decoration and renovation estimator. Analyse these photos of a {job_type} project.

Please evaluate and provide your assessment as JSON with this exact structure:
{{
  "complexity": 1.05,
  "condition": 0.95,
  "access": 1.0,
  "materialQuality": 1.0,
  "insights": ["insight 1", "insight 2", "insight 3"],
  "detectedIssues": false,
  "materials": [
    {{"item": "Paint (5L)", "quantity": 3, "unit": "tins", "estimatedCost": 45}},
    {{"item": "Primer", "quantity": 2, "unit": "litres", "estimatedCost": 25}}
  ]
}}

Guidelines:
- complexity: 0.9 to 1.3 (simple=0.9-1.0, average=1.0-1.1, complex=1.1-1.3)
- condition: 0.85 to 1.1 (excellent=0.85-0.95, good=0.95-1.0, poor=1.0-1.1)
- access: 0.9 to 1.1 (easy=0.9-0.95, normal=0.95-1.0, difficult=1.0-1.1)
- materialQuality: 0.95 to 1.1 (basic=0.95-1.0, standard=1.0, high-end=1.0-1.1)
- insights: 3-5 specific observations about the space
- detectedIssues: true if any problems found
- materials: List 5-10 key materials needed with realistic quantities and costs in GBP"""


class VisionError(RuntimeError):
    """Raised when the vision model call itself fails."""


_client: Optional[OpenAI] = None
_client_key: Optional[str] = None


def get_client(api_key: str) -> OpenAI:
    """Return the cached client, rebuilding it when a different key is supplied."""
    global _client, _client_key
    if _client is None or _client_key != api_key:
        _client = OpenAI(api_key=api_key)
        _client_key = api_key
    return _client


def build_messages(image_urls: Sequence[str], job_type: str) -> List[Dict[str, Any]]:
    content: List[Dict[str, Any]] = [{"type": "text", "text": PROMPT_TEMPLATE.format(job_type=job_type)}]
    for url in list(image_urls)[:MAX_IMAGES_SENT]:
        content.append({"type": "image_url", "image_url": {"url": url, "detail": "auto"}})
    return [{"role": "user", "content": content}]


def analyze_images(image_urls: Sequence[str], job_type: str, api_key: str, model: str) -> str:
    """Send the photos to the vision model and return its raw text reply."""
    client = get_client(api_key)
    try:
        response = client.chat.completions.create(
            model=model,
            messages=build_messages(image_urls, job_type),
            max_tokens=MAX_TOKENS,
            temperature=TEMPERATURE,
        )
    except OpenAIError as exc:
        logger.error("Vision request failed: %s", exc)
        raise VisionError(str(exc)) from exc

    text = response.choices[0].message.content or ""
    logger.debug("Vision reply: %s", text[:500])
    return text
