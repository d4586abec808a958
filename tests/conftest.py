# tests/conftest.py
from typing import Callable, List

import httpx
import pytest
from bs4 import BeautifulSoup

from services.extractor import ContentExtractor
from services.extractor.config_loader import ExtractionRules, get_extraction_rules
from services.extractor.fetcher import PageFetcher

LONG_TEXT = "Lorem ipsum dolor sit amet, consectetur adipiscing elit. " * 6  # ~340 chars


@pytest.fixture
def rules() -> ExtractionRules:
    return get_extraction_rules()


@pytest.fixture
def soup_of() -> Callable[[str], BeautifulSoup]:
    def _parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    return _parse


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def html_transport() -> Callable[..., RecordingTransport]:
    """Build a transport that answers every request with ``html`` and ``status``."""

    def _factory(html: str = "", status: int = 200) -> RecordingTransport:
        return RecordingTransport(lambda request: httpx.Response(status, html=html))

    return _factory


@pytest.fixture
def extractor_for(rules) -> Callable[[httpx.AsyncBaseTransport], ContentExtractor]:
    def _factory(transport: httpx.AsyncBaseTransport, timeout: float = 15.0) -> ContentExtractor:
        return ContentExtractor(
            fetcher=PageFetcher(transport=transport, timeout=timeout),
            rules=rules,
            parser="html.parser",
        )

    return _factory
