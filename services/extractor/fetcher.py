# services/extractor/fetcher.py
"""
Single-shot page download.

One GET, browser-like headers, a hard time budget and no retries.  Callers
that want resilience retry at their own layer; this module only reports
precisely *why* a fetch failed.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional

import httpx
from bs4 import UnicodeDammit
from loguru import logger

from core.config import get_settings
from core.exceptions import (
    FetchTimeoutError,
    InvalidURLError,
    NetworkUnreachableError,
    UpstreamHTTPError,
)


@dataclass(frozen=True)
class FetchedPage:
    """
    Raw response body plus the charset named by ``Content-Type``, if any.

    The body stays undecoded so the parser can honour a ``<meta charset>``
    declaration when the header is silent.
    """

    content: bytes
    url: str
    status_code: int
    encoding: Optional[str] = None

    @property
    def html(self) -> str:
        known = [self.encoding] if self.encoding else []
        return UnicodeDammit(self.content, known, is_html=True).unicode_markup or ""


def default_headers() -> Dict[str, str]:
    settings = get_settings()
    return {
        "User-Agent": settings.DEFAULT_USER_AGENT,
        "Accept": settings.DEFAULT_ACCEPT,
        "Accept-Language": settings.DEFAULT_ACCEPT_LANGUAGE,
    }


class PageFetcher:
    """
    Downloads HTML with ``httpx``.

    Pass a shared ``httpx.AsyncClient`` to reuse its connection pool (the API
    does this); without one, a short-lived client is opened per call.
    ``transport`` is only used for that short-lived client and exists so
    tests can plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.client = client
        self.timeout = timeout if timeout is not None else settings.TIMEOUT
        self.headers = headers or default_headers()
        self.max_redirects = settings.MAX_REDIRECTS
        self.transport = transport

    async def fetch(self, url: str) -> FetchedPage:
        """Download ``url``; raises an ``ExtractorException`` subclass on failure."""
        logger.debug(f"Fetching {url} (timeout={self.timeout}s)")
        try:
            response = await asyncio.wait_for(self._get(url), timeout=self.timeout)
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise FetchTimeoutError(
                f"Failed to fetch URL: the request timed out after {self.timeout:g} seconds.",
                details=str(exc) or type(exc).__name__,
            ) from exc
        except httpx.InvalidURL as exc:
            raise InvalidURLError("Invalid URL format.", details=str(exc)) from exc
        except httpx.RequestError as exc:
            raise NetworkUnreachableError(
                "Failed to fetch URL: No response received. "
                "The site might be down or blocking requests.",
                details=str(exc) or type(exc).__name__,
            ) from exc

        if response.status_code >= 400:
            raise UpstreamHTTPError(
                response.status_code,
                response.reason_phrase,
                details=f"GET {response.url} returned {response.status_code}",
            )

        final_url = str(response.url)
        if final_url != url:
            logger.debug(f"{url} redirected to {final_url}")
        return FetchedPage(
            content=response.content,
            url=final_url,
            status_code=response.status_code,
            encoding=response.charset_encoding,
        )

    async def _get(self, url: str) -> httpx.Response:
        timeout = httpx.Timeout(self.timeout)
        if self.client is not None:
            return await self.client.get(
                url, headers=self.headers, timeout=timeout, follow_redirects=True
            )
        async with httpx.AsyncClient(
            transport=self.transport,
            max_redirects=self.max_redirects,
        ) as client:
            return await client.get(
                url, headers=self.headers, timeout=timeout, follow_redirects=True
            )
