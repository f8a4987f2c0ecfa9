"""HTTP tests for /api/analyze-image and /health."""
from __future__ import annotations

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from calorie_api.config import Settings
from calorie_api.errors import ConfigurationError, UpstreamError, ValidationError
from calorie_api.main import create_app
from calorie_api.services.image_relay import ImageRelay

from conftest import PNG_DATA_URI, gemini_reply


def test_health(client: TestClient) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "OK"
    assert body["message"] == "Calorie Counter API (Gemini Pro Vision)"
    assert body["timestamp"]


def test_analyze_returns_raw_provider_response(client: TestClient, relay: MagicMock) -> None:
    res = client.post("/api/analyze-image", json={"image": PNG_DATA_URI})
    assert res.status_code == 200
    assert res.json() == {"gemini": relay.analyze.return_value}
    relay.analyze.assert_called_once_with(PNG_DATA_URI)


def test_analyze_with_interpret(client: TestClient) -> None:
    res = client.post("/api/analyze-image", params={"interpret": "true"}, json={"image": PNG_DATA_URI})
    assert res.status_code == 200
    result = res.json()["result"]
    assert result["items"] == [{"food": "Apple", "estimated_calories": 95.0, "confidence": 0.9}]
    assert result["raw_text"].startswith("[")


def test_missing_image_field_is_400(client: TestClient, relay: MagicMock) -> None:
    relay.analyze.side_effect = ValidationError("No image provided")
    res = client.post("/api/analyze-image", json={})
    assert res.status_code == 400
    assert res.json() == {"error": "No image provided"}


def test_missing_image_with_real_relay_is_400(settings: Settings) -> None:
    client = TestClient(create_app(settings))
    res = client.post("/api/analyze-image", json={"other": 1})
    assert res.status_code == 400
    assert res.json()["error"] == "No image provided"


def test_empty_body_is_400(client: TestClient) -> None:
    res = client.post("/api/analyze-image", content=b"not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invalid request body"


def test_wrong_method_is_405(client: TestClient) -> None:
    res = client.get("/api/analyze-image")
    assert res.status_code == 405
    assert res.json() == {"error": "Method Not Allowed"}


def test_missing_credential_is_500(settings: Settings) -> None:
    relay = MagicMock(spec=ImageRelay)
    relay.analyze.side_effect = ConfigurationError("GEMINI_API_KEY not set in environment")
    client = TestClient(create_app(settings, relay=relay))
    res = client.post("/api/analyze-image", json={"image": PNG_DATA_URI})
    assert res.status_code == 500
    assert res.json() == {"error": "GEMINI_API_KEY not set in environment"}


def test_missing_credential_with_real_relay_is_500() -> None:
    client = TestClient(create_app(Settings(gemini_api_key="")))
    res = client.post("/api/analyze-image", json={"image": PNG_DATA_URI})
    assert res.status_code == 500
    assert "GEMINI_API_KEY" in res.json()["error"]


def test_upstream_failure_carries_details(client: TestClient, relay: MagicMock) -> None:
    relay.analyze.side_effect = UpstreamError("Failed to analyze image", details={"error": {"code": 400}})
    res = client.post("/api/analyze-image", json={"image": PNG_DATA_URI})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to analyze image", "details": {"error": {"code": 400}}}


def test_unexpected_error_is_500(client: TestClient, relay: MagicMock) -> None:
    relay.analyze.side_effect = RuntimeError("boom")
    res = client.post("/api/analyze-image", json={"image": PNG_DATA_URI})
    assert res.status_code == 500
    assert res.json() == {"error": "Internal server error", "details": "boom"}


def test_oversized_body_is_413(client: TestClient, relay: MagicMock) -> None:
    res = client.post("/api/analyze-image", json={"image": "A" * 2048})
    assert res.status_code == 413
    assert res.json() == {"error": "Payload too large"}
    relay.analyze.assert_not_called()


def test_interpret_with_non_finite_numbers_still_renders(client: TestClient, relay: MagicMock) -> None:
    relay.analyze.return_value = gemini_reply(
        '[{"food": "Soup", "estimated_calories": NaN, "confidence": "Infinity"}]'
    )
    res = client.post("/api/analyze-image", params={"interpret": "true"}, json={"image": PNG_DATA_URI})
    assert res.status_code == 200
    assert res.json()["result"]["items"] == [{"food": "Soup", "estimated_calories": None, "confidence": None}]


def test_default_body_has_no_result_key(client: TestClient) -> None:
    res = client.post("/api/analyze-image", json={"image": PNG_DATA_URI})
    assert set(res.json()) == {"gemini"}


def test_chunked_oversized_body_is_413(client: TestClient, relay: MagicMock) -> None:
    body = ('{"image": "' + "A" * 2048 + '"}').encode()
    chunks = iter([body[:512], body[512:]])
    res = client.post("/api/analyze-image", content=chunks, headers={"Content-Type": "application/json"})
    assert res.status_code == 413
    assert res.json() == {"error": "Payload too large"}
    relay.analyze.assert_not_called()


def test_openapi_documents_error_schema(client: TestClient) -> None:
    op = client.get("/openapi.json").json()["paths"]["/api/analyze-image"]["post"]
    for status in ("400", "413", "500"):
        assert op["responses"][status]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
