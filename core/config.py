# core/config.py
"""
Runtime settings for the extraction service.

Values come from the environment (or a local ``.env``).  Everything the
fetcher needs to look like a desktop browser lives here so it can be tuned
without touching code.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # API
    PROJECT_NAME: str = "Post Content Extractor"
    PORT: int = 8000
    DEBUG: bool = False
    WORKERS: int = 1
    LOG_LEVEL: str = "INFO"
    ALLOWED_HOSTS: List[str] = Field(default_factory=lambda: ["*"])

    # Outbound fetch
    DEFAULT_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
    DEFAULT_ACCEPT: str = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
    DEFAULT_ACCEPT_LANGUAGE: str = "en-US,en;q=0.5"
    TIMEOUT: float = 15.0
    MAX_REDIRECTS: int = 10

    # Parsing
    HTML_PARSER: str = "html.parser"
    EXTRACTION_CONFIG_PATH: Optional[str] = None


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
