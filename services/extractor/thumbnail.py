# services/extractor/thumbnail.py
from typing import Optional

from bs4 import BeautifulSoup

from .config_loader import ExtractionRules
from .title import first_value
from .url_validator import resolve_url


def resolve_thumbnail(soup: BeautifulSoup, base_url: str, rules: ExtractionRules) -> Optional[str]:
    """
    Representative image: og:image, twitter:image, then the first image in
    ``<article>``, ``.featured-image`` or ``#content``.

    Reads the untouched document, not the cleaned content.  A value that
    cannot be made absolute means no thumbnail rather than an error.
    """
    candidate = first_value(soup, rules.thumbnail_sources)
    if not candidate:
        return None
    return resolve_url(candidate, base_url)
