# services/extractor/url_validator.py
"""URL checks shared by the request guard and the image resolver."""

import re
from typing import Any, Optional
from urllib.parse import urljoin, urlparse

from core.exceptions import InvalidURLError

ALLOWED_SCHEMES = ("http", "https")
_WHITESPACE = re.compile(r"\s")


def validate_url(raw: Any) -> str:
    """
    Return ``raw`` stripped if it is an absolute http(s) URL.

    Runs before any network I/O; everything else raises ``InvalidURLError``.
    """
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidURLError("URL is required and must be a string.")

    candidate = raw.strip()
    if _WHITESPACE.search(candidate):
        raise InvalidURLError("Invalid URL format.", details=f"URL contains whitespace: {candidate!r}")

    try:
        parsed = urlparse(candidate)
        # Accessing .port validates the port component
        parsed.port
    except ValueError as exc:
        raise InvalidURLError("Invalid URL format.", details=str(exc)) from exc

    if not parsed.scheme or not parsed.netloc or not parsed.hostname:
        raise InvalidURLError("Invalid URL format.", details=f"Not an absolute URL: {candidate!r}")

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidURLError(
            "Only http and https URLs are supported.",
            details=f"Unsupported scheme: {parsed.scheme!r}",
        )

    return candidate


def is_absolute_or_data(src: str) -> bool:
    return src.startswith("http") or src.startswith("data:")


def resolve_url(src: Optional[str], base_url: str) -> Optional[str]:
    """
    Make ``src`` absolute against ``base_url``.

    Absolute and ``data:`` URLs come back unchanged; ``None`` means the value
    could not be resolved.
    """
    if not src:
        return None
    src = src.strip()
    if not src:
        return None
    if is_absolute_or_data(src):
        return src
    try:
        resolved = urljoin(base_url, src)
    except ValueError:
        return None
    if urlparse(resolved).scheme.lower() not in ALLOWED_SCHEMES:
        return None
    return resolved
