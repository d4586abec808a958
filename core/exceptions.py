# core/exceptions.py
"""
Error taxonomy for the extraction pipeline.

Only URL validation and the fetch can fail a call; every later stage falls
back to a placeholder value instead of raising.  Each exception knows the
HTTP status the API answers with and how to render itself as the JSON error
body ``{"error": ..., "details": ..., "kind": ...}``.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    INVALID_URL = "invalid_url"
    NETWORK_UNREACHABLE = "network_unreachable"
    UPSTREAM_HTTP_ERROR = "upstream_http_error"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class ExtractorException(Exception):
    """Base class for every failure the extractor reports to its caller."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = 500

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message, "kind": self.kind.value}
        if self.details:
            body["details"] = self.details
        return body


class InvalidURLError(ExtractorException):
    kind = ErrorKind.INVALID_URL
    status_code = 400


class NetworkUnreachableError(ExtractorException):
    kind = ErrorKind.NETWORK_UNREACHABLE
    status_code = 504


class FetchTimeoutError(ExtractorException):
    kind = ErrorKind.TIMEOUT
    status_code = 504


class UpstreamHTTPError(ExtractorException):
    """The source site answered, but with an error status."""

    kind = ErrorKind.UPSTREAM_HTTP_ERROR

    def __init__(self, upstream_status: int, reason: str = "", details: Optional[str] = None):
        self.upstream_status = upstream_status
        self.reason = reason
        message = (
            f"Failed to fetch URL: {upstream_status} {reason}".rstrip()
            + ". Check if the URL is accessible and not blocking requests."
        )
        super().__init__(message, details)

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return self.upstream_status if self.upstream_status >= 400 else 500

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["status"] = self.upstream_status
        return body


class InternalExtractionError(ExtractorException):
    kind = ErrorKind.INTERNAL
    status_code = 500


class ExtractionConfigError(Exception):
    """Raised when the selector configuration file cannot be found or read."""


class ValidationError(ExtractorException):
    """Malformed request body (missing or non-string ``url``)."""

    kind = ErrorKind.INVALID_URL
    status_code = 400

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in errors
        )
        super().__init__("URL is required and must be a string.", details or None)
