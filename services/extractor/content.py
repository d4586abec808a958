# services/extractor/content.py
"""
Article-body selection.

Candidates are tried from the most specific selector to the least specific.
Each candidate is cloned before it is cleaned so the parsed document stays
intact for the next attempt, and the first one whose cleaned text is longer
than ``min_content_length`` wins.  When none qualifies the whole ``<body>`` is
used, cleaned the same way.
"""

import copy
import re
from typing import Iterable, Optional, Tuple, Union

from bs4 import BeautifulSoup, Tag
from loguru import logger

from .config_loader import ExtractionRules
from .url_validator import is_absolute_or_data, resolve_url

Node = Union[BeautifulSoup, Tag]

_LEADING_INT = re.compile(r"^\s*(\d+)")
_BLANK_LINES = re.compile(r"\n\s*\n")


def strip_noise(root: Node, noise_selector: str) -> int:
    """Remove every descendant of ``root`` matching the combined denylist."""
    removed = 0
    for el in root.select(noise_selector):
        # extract() is safe on elements already detached with their parent
        el.extract()
        removed += 1
    return removed


def _dimension(img: Tag, attr: str) -> int:
    """Leading integer of a width/height attribute, 0 when absent or unparsable."""
    value = img.get(attr)
    if not value:
        return 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def is_undersized(img: Tag, min_dimension: int) -> bool:
    """True for spacer/icon images with an explicit width or height below the minimum."""
    width = _dimension(img, "width")
    height = _dimension(img, "height")
    return (0 < width < min_dimension) or (0 < height < min_dimension)


def process_images(root: Node, base_url: str, min_dimension: int) -> int:
    """
    Absolutise relative ``src`` values and drop undersized images.

    Images whose ``src`` cannot be resolved keep their original value.
    Returns the number of images dropped.
    """
    dropped = 0
    for img in root.find_all("img"):
        src = img.get("src")
        if src and not is_absolute_or_data(src):
            resolved = resolve_url(src, base_url)
            if resolved:
                img["src"] = resolved
        if is_undersized(img, min_dimension):
            img.decompose()
            dropped += 1
    return dropped


def _is_empty(el: Tag) -> bool:
    if el.get_text(strip=True):
        return False
    if el.find(True) is not None:
        return False
    return "background-image" not in (el.get("style") or "")


def remove_empty_elements(root: Node, tags: Iterable[str]) -> int:
    """
    Drop ``tags`` elements with no text, no child elements and no
    background image.  Walks in reverse document order so wrappers emptied
    by their children's removal go too.
    """
    removed = 0
    for el in reversed(root.find_all(list(tags))):
        if _is_empty(el):
            el.decompose()
            removed += 1
    return removed


def text_length(root: Node) -> int:
    return len(" ".join(root.get_text(" ").split()))


def clean_candidate(element: Node, base_url: str, rules: ExtractionRules) -> Node:
    """Clone ``element`` and run noise removal, image fixes and empty pruning on the clone."""
    clone = copy.copy(element)
    strip_noise(clone, rules.noise_selector)
    process_images(clone, base_url, rules.min_image_dimension)
    remove_empty_elements(clone, rules.empty_element_tags)
    return clone


def normalize_html(html: str) -> str:
    return _BLANK_LINES.sub("\n", html).strip()


def select_content(soup: BeautifulSoup, base_url: str, rules: ExtractionRules) -> Tuple[str, Optional[str]]:
    """
    Return ``(content_html, selector)``; ``selector`` is ``None`` when the
    body fallback (or the placeholder) was used.
    """
    for selector in rules.content_selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        cleaned = clean_candidate(element, base_url, rules)
        length = text_length(cleaned)
        if length > rules.min_content_length:
            logger.debug(f"Content candidate '{selector}' accepted ({length} chars)")
            return normalize_html(cleaned.decode_contents()), selector
        logger.debug(f"Content candidate '{selector}' too short ({length} chars)")

    body = soup.body if soup.body is not None else soup
    cleaned = clean_candidate(body, base_url, rules)
    content = normalize_html(cleaned.decode_contents())
    if not content:
        logger.debug("Nothing left after cleaning, using placeholder content")
        return rules.placeholder_content, None
    logger.debug(f"No candidate qualified, falling back to <body> ({text_length(cleaned)} chars)")
    return content, None
