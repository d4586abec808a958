import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from prometheus_client import make_asgi_app

from api.v1.endpoints import scraper
from core.config import settings
from core.exceptions import ExtractorException, InternalExtractionError, ValidationError
from core.logging import setup_logging
from services.extractor import ContentExtractor
from services.extractor.fetcher import PageFetcher

VERSION = "1.0.0"

# Prometheus metrics endpoint
metrics_app = make_asgi_app()


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    logger.info("Initializing application...")

    # One pooled client for every request; parse trees are still per call
    client = httpx.AsyncClient(max_redirects=settings.MAX_REDIRECTS)
    app.state.http_client = client
    app.state.extractor = ContentExtractor(fetcher=PageFetcher(client=client))
    logger.info(f"Loaded user agent: {settings.DEFAULT_USER_AGENT}")

    try:
        yield
    finally:
        logger.info("Shutting down application...")
        await client.aclose()


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Imports blog posts from arbitrary web pages",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=settings.ALLOWED_HOSTS,
)

app.include_router(scraper.router, prefix="/api/v1", tags=["scraper"])


@app.middleware("http")
async def add_timing_header(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    error = ValidationError(errors=exc.errors())
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(ExtractorException)
async def extractor_exception_handler(request: Request, exc: ExtractorException):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}")
    error = InternalExtractionError("Failed to scrape the URL.", details=str(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.mount("/metrics", metrics_app)


@app.get("/health")
async def health_check():
    return {"status": "healthy", "timestamp": time.time()}


@app.get("/")
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": VERSION,
        "description": "Imports blog posts from arbitrary web pages",
        "docs_url": "/docs",
        "health_check": "/health",
        "scrape": "/api/v1/scrape",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS,
        log_level=settings.LOG_LEVEL.lower(),
    )
