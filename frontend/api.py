import base64
import os
from typing import Optional

import requests
from dotenv import load_dotenv

load_dotenv()


BASE_URL = os.getenv("API_BASE_URL", "http://127.0.0.1:5000").rstrip("/")


def to_data_uri(file_bytes: bytes, mime_type: Optional[str] = None) -> str:
    """Encode raw image bytes as `data:<mime>;base64,<payload>`."""
    mime = mime_type or "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(file_bytes).decode()}"


def _json_or_error(res: requests.Response):
    """
    Parse the response as JSON.
    Errors are normalized to {"error": "...", "details"?: ...}.
    """
    try:
        res.raise_for_status()
        try:
            return res.json()
        except ValueError:
            return {"error": f"Unexpected response (non-JSON): {res.text[:500]}"}
    except requests.exceptions.HTTPError:
        try:
            j = res.json()
        except ValueError:
            return {"error": f"HTTP {res.status_code}: {res.text[:500]}"}
        if isinstance(j, dict) and "error" in j:
            return j
        return {"error": j.get("detail", j) if isinstance(j, dict) else j}


def analyze_image(image: str, base: Optional[str] = None, timeout: float = 60) -> dict:
    """
    POST /api/analyze-image
    Returns: {"gemini": {...}} or {"error": "..."}
    """
    url = f"{base or BASE_URL}/api/analyze-image"
    try:
        res = requests.post(url, json={"image": image}, timeout=timeout)
    except requests.RequestException as e:
        return {"error": f"Network error: {e}"}
    return _json_or_error(res)


def health(base: Optional[str] = None) -> dict:
    """GET /health"""
    url = f"{base or BASE_URL}/health"
    try:
        res = requests.get(url, timeout=5)
    except requests.RequestException as e:
        return {"error": f"Network error: {e}"}
    return _json_or_error(res)


__all__ = [
    "to_data_uri",
    "analyze_image",
    "health",
]
