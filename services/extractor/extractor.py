# services/extractor/extractor.py
"""
The extraction pipeline:

    validate → fetch → parse → title → content candidate → images
             → thumbnail → normalise

Only validation and the fetch can fail.  Once a page is downloaded, every
later stage degrades to a fallback value, so a fetched page always yields a
usable result.  Each call parses into its own tree; nothing mutable is
shared between concurrent extractions.
"""

import asyncio
from typing import Optional, Union
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from loguru import logger
from prometheus_client import Counter, Histogram

from core.config import get_settings
from core.exceptions import ExtractorException, InternalExtractionError
from models.extraction import ExtractionResult

from .config_loader import ExtractionRules, get_extraction_rules
from .content import select_content
from .fetcher import PageFetcher
from .thumbnail import resolve_thumbnail
from .title import extract_title
from .url_validator import validate_url

EXTRACT_REQUESTS = Counter("extractor_requests_total", "Total number of extraction requests")
EXTRACT_ERRORS = Counter("extractor_errors_total", "Failed extractions by error kind", ["kind"])
EXTRACT_DURATION = Histogram("extractor_duration_seconds", "Time spent extracting a URL")
CONTENT_FALLBACKS = Counter(
    "extractor_content_fallback_total",
    "Extractions where no content candidate qualified and <body> was used",
)


class ContentExtractor:
    """Turns a URL into ``{title, content, thumbnailUrl}`` for the post editor."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        rules: Optional[ExtractionRules] = None,
        parser: Optional[str] = None,
    ):
        self.fetcher = fetcher or PageFetcher()
        self.rules = rules or get_extraction_rules()
        self.parser = parser or get_settings().HTML_PARSER

    async def extract(self, url: str) -> ExtractionResult:
        """
        Validate, fetch and extract ``url``.

        Raises an ``ExtractorException`` subclass describing the failure.
        Cancelling the awaiting task aborts the in-flight request and skips
        every later stage.
        """
        EXTRACT_REQUESTS.inc()
        with EXTRACT_DURATION.time():
            try:
                target = validate_url(url)
                logger.info(f"Extracting content from {target}")
                page = await self.fetcher.fetch(target)

                # Parsing and heuristics are CPU-bound, run them in the thread pool
                loop = asyncio.get_running_loop()
                result = await loop.run_in_executor(
                    None, self.extract_from_html, page.content, page.url, page.encoding
                )
            except ExtractorException as exc:
                EXTRACT_ERRORS.labels(kind=exc.kind.value).inc()
                logger.warning(f"Extraction failed for {url!r} [{exc.kind.value}]: {exc.message}")
                raise
            except Exception as exc:  # pylint: disable=broad-except
                EXTRACT_ERRORS.labels(kind=InternalExtractionError.kind.value).inc()
                logger.exception(f"Unexpected error extracting {url!r}: {exc}")
                raise InternalExtractionError("Failed to scrape the URL.", details=str(exc)) from exc

        logger.info(f"Extracted '{result.title}' from {page.url}")
        return result

    def extract_from_html(
        self,
        html: Union[str, bytes],
        base_url: str,
        encoding: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Pure part of the pipeline: parse ``html`` fetched from ``base_url``
        and run the heuristics.  ``base_url`` should be the final URL after
        redirects; relative links and the site name are derived from it.

        Raw bytes are decoded by the parser, which uses ``encoding`` (the
        header charset) when given and otherwise sniffs ``<meta charset>``.
        """
        if isinstance(html, bytes) and encoding:
            soup = BeautifulSoup(html, self.parser, from_encoding=encoding)
        else:
            soup = BeautifulSoup(html or "", self.parser)
        hostname = urlparse(base_url).hostname

        title = extract_title(soup, self.rules, hostname)
        content, selector = select_content(soup, base_url, self.rules)
        if selector is None:
            CONTENT_FALLBACKS.inc()
        thumbnail = resolve_thumbnail(soup, base_url, self.rules)

        return ExtractionResult(
            title=title,
            content=content or self.rules.placeholder_content,
            thumbnailUrl=thumbnail,
        )
