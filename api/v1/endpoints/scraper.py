# api/v1/endpoints/scraper.py
from fastapi import APIRouter, Depends, Request
from loguru import logger

from core.exceptions import ErrorKind
from models.extraction import ErrorResponse, ExtractionRequest, ExtractionResult
from services.extractor import ContentExtractor

router = APIRouter()


def get_extractor(request: Request) -> ContentExtractor:
    """The extractor built in the app lifespan (overridable in tests)."""
    return request.app.state.extractor


@router.post(
    "/scrape",
    response_model=ExtractionResult,
    responses={
        400: {"model": ErrorResponse, "description": ErrorKind.INVALID_URL.value},
        500: {"model": ErrorResponse, "description": ErrorKind.INTERNAL.value},
        504: {"model": ErrorResponse, "description": "timeout or network_unreachable"},
    },
)
async def scrape_url(
    request: ExtractionRequest,
    extractor: ContentExtractor = Depends(get_extractor),
) -> ExtractionResult:
    """
    Import a post from a URL.

    Upstream HTTP errors are answered with the upstream's own status code.
    """
    logger.info(f"Processing scrape request for URL: {request.url}")
    return await extractor.extract(request.url)
