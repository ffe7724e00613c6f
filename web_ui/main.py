"""
Bookmark Checker v1 - Session API Main Application

FastAPI application exposing upload, check, review and export of one
in-memory bookmark session.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookmarks.checker import BookmarkChecker, create_checker
from bookmarks.session import BookmarkSession
from config import configure_logging, get_config
from . import __version__
from .models import HealthResponse
from .routes import bookmarks_router, export_router
from .state import get_checker

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Session API starting...")
    settings = get_config().checker

    app.state.session = BookmarkSession()
    app.state.batch_size = settings.batch_size
    app.state.checker = create_checker(
        timeout=settings.timeout,
        user_agent=settings.user_agent,
        service_url=settings.service_url,
    )

    yield

    # Cleanup
    app.state.session.reset()
    await app.state.checker.close()
    logger.info("Session API shutting down")


app = FastAPI(
    title="Bookmark Checker",
    description="Check bookmark exports for dead links",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(bookmarks_router)
app.include_router(export_router)


@app.get("/health", response_model=HealthResponse)
async def health_check(checker: BookmarkChecker = Depends(get_checker)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        checker=checker.__class__.__name__,
    )


# Run with: uvicorn web_ui.main:app --host 0.0.0.0 --port 8000
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("web_ui.main:app", host="0.0.0.0", port=8000, reload=get_config().is_development)
