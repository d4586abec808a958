# models/extraction.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExtractionRequest(BaseModel):
    """Body of ``POST /api/v1/scrape``."""

    url: str = Field(..., description="Absolute http(s) URL of the page to import")

    model_config = ConfigDict(
        json_schema_extra={"example": {"url": "https://example.com/blog/hello-world"}}
    )


class ExtractionResult(BaseModel):
    """
    What the extractor pulled out of a page.

    Serialises with the camel-case keys the post editor expects:
    ``{"title", "content", "thumbnailUrl"}``.
    """

    title: str
    content_html: str = Field(..., alias="content")
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")

    model_config = ConfigDict(populate_by_name=True)

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    error: str
    kind: str
    details: Optional[str] = None
    status: Optional[int] = None
