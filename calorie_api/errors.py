from typing import Any, Optional


class AnalyzeError(Exception):
    """Base error for the analyze flow. Rendered as {"error", "details"?}."""

    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AnalyzeError):
    """Missing or unusable input."""

    status_code = 400


class ConfigurationError(AnalyzeError):
    """Provider credential is not configured."""

    status_code = 500


class UpstreamError(AnalyzeError):
    """The vision API call failed (network, timeout, non-2xx, bad body)."""

    status_code = 500


class PayloadTooLargeError(AnalyzeError):
    """Request body exceeds the configured limit."""

    status_code = 413
