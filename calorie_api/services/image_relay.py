from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from calorie_api.config import Settings
from calorie_api.errors import ConfigurationError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

# Checked in order; a later hint overrides an earlier one.
MIME_HINTS = (
    ("png", "image/png"),
    ("bmp", "image/bmp"),
    ("gif", "image/gif"),
    ("tiff", "image/tiff"),
    ("heic", "image/heic"),
)

ANALYSIS_PROMPT = (
    "You are a food recognition and nutrition expert. Analyze the food items in this image. "
    "For each distinct food item you see, provide a JSON array element with these fields: "
    "food (string), estimated_calories (number, kcal), and confidence (0-1, number). "
    "Respond ONLY with a valid JSON array, no extra text or explanation. "
    "Estimate calories from the visible portion size, not a standard serving: "
    "if only half of an item is shown, report half the calories. Be logical and practical."
)


@dataclass(frozen=True)
class ImagePayload:
    data: str
    mime_type: str = DEFAULT_MIME_TYPE


def parse_image(image: str) -> ImagePayload:
    """
    Split a data-URI at the first comma and infer the MIME type from its prefix.
    Input without a comma is treated as raw base64 and passed through unchanged.
    """
    if "," not in image:
        return ImagePayload(data=image, mime_type=DEFAULT_MIME_TYPE)

    prefix, data = image.split(",", 1)
    mime_type = DEFAULT_MIME_TYPE
    for hint, mime in MIME_HINTS:
        if hint in prefix:
            mime_type = mime
    return ImagePayload(data=data, mime_type=mime_type)


def build_request_body(payload: ImagePayload, prompt: str = ANALYSIS_PROMPT) -> Dict[str, Any]:
    return {
        "contents": [
            {
                "parts": [
                    {"text": prompt},
                    {
                        "inline_data": {
                            "mime_type": payload.mime_type,
                            "data": payload.data,
                        }
                    },
                ]
            }
        ]
    }


def _error_details(exc: requests.RequestException) -> Any:
    res = exc.response
    if res is None:
        return str(exc)
    try:
        return res.json()
    except ValueError:
        return res.text or str(exc)


class ImageRelay:
    """Forwards one image + the fixed prompt to Gemini and hands back the raw reply."""

    def __init__(self, settings: Settings, prompt: str = ANALYSIS_PROMPT):
        self.settings = settings
        self.prompt = prompt

    def analyze(self, image: Optional[str]) -> Dict[str, Any]:
        if not image or not image.strip():
            raise ValidationError("No image provided")

        if not self.settings.gemini_api_key:
            logger.error("GEMINI_API_KEY not set in environment")
            raise ConfigurationError("GEMINI_API_KEY not set in environment")

        payload = parse_image(image.strip())
        if not payload.data:
            raise ValidationError("No image provided")
        logger.info("Image received, mimeType: %s", payload.mime_type)

        body = build_request_body(payload, self.prompt)
        try:
            logger.info("Sending request to Gemini API (model=%s)", self.settings.gemini_model)
            res = requests.post(
                self.settings.generate_content_url,
                params={"key": self.settings.gemini_api_key},
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self.settings.request_timeout,
            )
            res.raise_for_status()
        except requests.RequestException as e:
            details = _error_details(e)
            logger.error("Error from Gemini API: %s", details)
            raise UpstreamError("Failed to analyze image", details=details) from e

        try:
            data = res.json()
        except ValueError as e:
            logger.error("Gemini API returned a non-JSON body (status=%s)", res.status_code)
            raise UpstreamError("Failed to analyze image", details=res.text[:500]) from e

        logger.info("Gemini API response received")
        return data
