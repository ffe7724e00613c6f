"""
Bookmark Checker v1 - Check-URL Service

FastAPI service for probing URLs on behalf of browser clients.
Answers {url} with {url, status, statusCode?, errorMessage?, responseTimeMs}.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from bookmarks.checker import UrlChecker
from bookmarks.models import Bookmark
from config import configure_logging, get_config
from . import __version__
from .models import (
    CheckUrlRequest,
    CheckUrlResponse,
    ErrorResponse,
    HealthResponse,
)

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_config().checker
    app.state.checker = UrlChecker(timeout=settings.timeout, user_agent=settings.user_agent)
    logger.info(f"Check-URL service starting (timeout={settings.timeout}s)")

    yield

    await app.state.checker.close()
    logger.info("Check-URL service shutting down")


app = FastAPI(
    title="Bookmark Checker Check-URL Service",
    description="Probes URLs with a HEAD request and reports their reachability",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_checker(request: Request) -> UrlChecker:
    """Get the shared URL checker created at startup"""
    return request.app.state.checker


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(checker: UrlChecker = Depends(get_checker)):
    """Check service health."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        timeout=checker.timeout,
    )


@app.post(
    "/check-url",
    response_model=CheckUrlResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Missing URL"},
        500: {"model": ErrorResponse, "description": "Unexpected failure"},
    },
    tags=["Checking"],
)
async def check_url(request: CheckUrlRequest, checker: UrlChecker = Depends(get_checker)):
    """
    Probe a single URL.

    Malformed URLs, HTTP error statuses, timeouts and network failures are
    all reported with status "invalid" and a 200 response; only a missing
    URL or an unexpected fault produces an error status.
    """
    if not request.url:
        raise HTTPException(
            status_code=400,
            detail=ErrorResponse(error="URL is required").model_dump(exclude_none=True),
        )

    logger.info(f"Checking URL: {request.url}")

    try:
        result = await checker.check(Bookmark(id="probe", name=request.url, url=request.url))
    except Exception as e:
        logger.exception(f"Unexpected error checking {request.url}")
        raise HTTPException(
            status_code=500,
            detail=ErrorResponse(
                error="Internal server error",
                detail=str(e),
                url=request.url,
            ).model_dump(exclude_none=True),
        )

    logger.info(
        f"{request.url} is {result.status.value} "
        f"(status={result.status_code}, {result.response_time_ms}ms)"
    )

    return CheckUrlResponse(
        url=request.url,
        status=result.status.value,
        status_code=result.status_code,
        error_message=result.error_message,
        response_time_ms=result.response_time_ms or 0,
    )


# Run with: uvicorn checker_service.main:app --host 0.0.0.0 --port 8001
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("checker_service.main:app", host="0.0.0.0", port=8001, reload=get_config().is_development)
