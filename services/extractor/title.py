# services/extractor/title.py
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup

from .config_loader import ExtractionRules, SourceSelector


def read_source(soup: BeautifulSoup, source: SourceSelector) -> Optional[str]:
    """Value of the first element matching ``source`` (attribute or text), stripped."""
    el = soup.select_one(source.css)
    if el is None:
        return None
    value = el.get(source.attr) if source.attr else el.get_text()
    if isinstance(value, list):
        value = " ".join(value)
    value = (value or "").strip()
    return value or None


def first_value(soup: BeautifulSoup, sources: Iterable[SourceSelector]) -> Optional[str]:
    for source in sources:
        value = read_source(soup, source)
        if value:
            return value
    return None


def _site_patterns(name: str, separators: List[str]) -> List[re.Pattern]:
    escaped = re.escape(name)
    patterns = []
    for sep in separators:
        sep_re = re.escape(sep)
        patterns.append(re.compile(rf"^\s*{escaped}\s*{sep_re}\s*", re.I))
        patterns.append(re.compile(rf"\s*{sep_re}\s*{escaped}\s*$", re.I))
    patterns.append(re.compile(rf"^\s*{escaped}\s*", re.I))
    patterns.append(re.compile(rf"\s*{escaped}\s*$", re.I))
    return patterns


def clean_title(title: str, hostname: Optional[str], separators: List[str]) -> str:
    """
    Strip a leading or trailing site name from ``title``.

    The site name is the hostname without ``www.``; a second pass uses just
    its first label (``myblog.wordpress.com`` → ``myblog``).  Best effort:
    titles can be under- or over-stripped.
    """
    if not title or not hostname:
        return title

    site = hostname.lower()
    if site.startswith("www."):
        site = site[4:]

    cleaned = title
    for pattern in _site_patterns(site, separators):
        cleaned = pattern.sub("", cleaned)

    labels = site.split(".")
    if len(labels) > 1 and labels[0]:
        for pattern in _site_patterns(labels[0], separators):
            cleaned = pattern.sub("", cleaned)

    for sep in separators:
        sep_re = re.escape(sep)
        cleaned = re.sub(rf"^\s*{sep_re}\s*", "", cleaned)
        cleaned = re.sub(rf"\s*{sep_re}\s*$", "", cleaned)

    return cleaned.strip()


def extract_title(soup: BeautifulSoup, rules: ExtractionRules, hostname: Optional[str] = None) -> str:
    """
    og:title → twitter:title → <title> → first <h1> → post-title classes,
    cleaned of the site name, or the configured fallback.
    """
    raw = first_value(soup, rules.title_sources) or rules.title_fallback
    # Collapse internal whitespace left over from multi-line <title> tags
    raw = " ".join(raw.split())
    return clean_title(raw, hostname, rules.title_separators) or rules.title_fallback
