from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
DEFAULT_MAX_BODY_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_base: str = DEFAULT_GEMINI_API_BASE
    request_timeout: float = 30.0
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    front_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    port: int = 5000

    @property
    def generate_content_url(self) -> str:
        return f"{self.gemini_api_base.rstrip('/')}/models/{self.gemini_model}:generateContent"


def _parse_origins(raw: str) -> List[str]:
    if not raw or raw.strip() == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def load_settings() -> Settings:
    """
    Read settings from the environment (and .env if present).
    A missing GEMINI_API_KEY is not an error here; the relay reports it per request.
    """
    load_dotenv()
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        gemini_model=os.getenv("GEMINI_MODEL", "").strip() or DEFAULT_GEMINI_MODEL,
        gemini_api_base=os.getenv("GEMINI_API_BASE", "").strip() or DEFAULT_GEMINI_API_BASE,
        request_timeout=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "30")),
        max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(DEFAULT_MAX_BODY_BYTES))),
        front_origins=_parse_origins(os.getenv("FRONT_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        port=int(os.getenv("PORT", "5000")),
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
