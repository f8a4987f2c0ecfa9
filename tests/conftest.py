"""Shared fixtures: settings, fake Gemini responses, app client."""
from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from calorie_api.config import Settings
from calorie_api.main import create_app
from calorie_api.services.image_relay import ImageRelay

PNG_DATA_URI = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUg=="


def gemini_reply(*texts: str) -> dict:
    """Gemini generateContent body with one candidate holding the given text parts."""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": t} for t in texts], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", request_timeout=5.0, max_body_bytes=1024)


@pytest.fixture
def relay(settings: Settings) -> MagicMock:
    fake = MagicMock(spec=ImageRelay)
    fake.analyze.return_value = gemini_reply(
        '[{"food": "Apple", "estimated_calories": 95, "confidence": 0.9}]'
    )
    return fake


@pytest.fixture
def client(settings: Settings, relay: MagicMock) -> TestClient:
    return TestClient(create_app(settings, relay=relay), raise_server_exceptions=False)
