# services/extractor/config_loader.py
"""
Loads the extractor's selector tables from ``configs/extraction.yaml`` and
validates them with Pydantic models.

The tables are data, not logic: tuning which containers count as article
bodies or which regions count as noise only means editing the YAML.

Public API:
* ``load_extraction_rules(path)`` – read and validate a specific file.
* ``get_extraction_rules()`` – the process-wide rules (validated once).
"""

from pathlib import Path
from typing import List, Optional

import soupsieve
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.config import get_settings
from core.exceptions import ExtractionConfigError


def _check_css(selector: str) -> str:
    try:
        soupsieve.compile(selector)
    except soupsieve.SelectorSyntaxError as exc:
        raise ValueError(f"Invalid CSS selector '{selector}': {exc}") from exc
    return selector


class SourceSelector(BaseModel):
    """A CSS selector plus the attribute to read (``None`` means element text)."""

    model_config = ConfigDict(frozen=True)

    css: str
    attr: Optional[str] = None

    @field_validator("css")
    @classmethod
    def _validate_css(cls, value: str) -> str:
        return _check_css(value)


class ExtractionRules(BaseModel):
    """Every tunable knob of the heuristic pipeline."""

    model_config = ConfigDict(frozen=True)

    min_content_length: int = Field(default=200, ge=0)
    min_image_dimension: int = Field(default=50, ge=0)
    title_fallback: str = "Untitled Post"
    placeholder_content: str = "<p>Content could not be extracted or was empty after cleaning.</p>"
    title_separators: List[str] = Field(default_factory=lambda: ["|", "-", "–", "—", ":"])
    title_sources: List[SourceSelector] = Field(..., min_length=1)
    content_selectors: List[str] = Field(..., min_length=1)
    thumbnail_sources: List[SourceSelector] = Field(default_factory=list)
    empty_element_tags: List[str] = Field(default_factory=lambda: ["p", "div", "span"])
    noise_selectors: List[str] = Field(..., min_length=1)

    @field_validator("content_selectors", "noise_selectors")
    @classmethod
    def _validate_selectors(cls, selectors: List[str]) -> List[str]:
        return [_check_css(s) for s in selectors]

    @property
    def noise_selector(self) -> str:
        """The denylist joined into one selector, so removal is a single pass."""
        return ", ".join(self.noise_selectors)


# Resolve the path relative to this file (two levels up → project root)
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "extraction.yaml"

_cached_rules: Optional[ExtractionRules] = None


def load_extraction_rules(path: Optional[Path] = None) -> ExtractionRules:
    """
    Read ``path`` (default: ``configs/extraction.yaml``) and validate it.

    Raises
    ------
    ExtractionConfigError
        If the file is missing or is not a YAML mapping.
    pydantic.ValidationError
        If a field is missing, out of range, or a selector does not compile.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except OSError as exc:
        raise ExtractionConfigError(f"Cannot read extraction config '{config_path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise ExtractionConfigError(f"Extraction config '{config_path}' must be a mapping")

    return ExtractionRules(**raw)


def get_extraction_rules() -> ExtractionRules:
    """Return the validated rules, loading them on first use."""
    global _cached_rules
    if _cached_rules is None:
        override = get_settings().EXTRACTION_CONFIG_PATH
        _cached_rules = load_extraction_rules(Path(override) if override else None)
    return _cached_rules
