"""
Bookmark Checker v1 - Bookmark Routes

Routes for loading a bookmark file, listing results and running checks.
"""

import logging
from typing import Optional

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
)

from bookmarks.checker import BookmarkChecker
from bookmarks.orchestrator import BatchOrchestrator
from bookmarks.parser import UnsupportedFileTypeError, load_bookmark_file
from bookmarks.session import BookmarkSession
from config import get_config
from ..models import (
    BookmarkDisplay,
    BookmarkListResponse,
    CheckStartedResponse,
    ErrorResponse,
    StatsResponse,
    StatusFilter,
    UploadResponse,
)
from ..state import get_batch_size, get_checker, get_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["Bookmarks"])


def stats_for(session: BookmarkSession) -> StatsResponse:
    return StatsResponse.from_result(session.stats(), is_checking=session.is_checking)


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        413: {"model": ErrorResponse, "description": "File too large"},
        415: {"model": ErrorResponse, "description": "Unsupported file type"},
        422: {"model": ErrorResponse, "description": "No bookmarks found"},
        409: {"model": ErrorResponse, "description": "Check in progress"},
    },
)
async def upload_bookmarks(
    file: UploadFile = File(...),
    session: BookmarkSession = Depends(get_session),
):
    """
    Load a bookmark file into the session.

    Accepts .html/.htm browser exports and .md/.markdown tables. The current
    session is only replaced when at least one bookmark was parsed, and
    never while a check run still has probes in flight.
    """
    if session.is_busy:
        raise HTTPException(
            409,
            ErrorResponse(
                error="Check in progress",
                detail="Wait for the running check to finish before uploading",
            ).model_dump(),
        )

    filename = file.filename or ""
    max_bytes = get_config().upload.max_bytes

    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise HTTPException(
            413,
            ErrorResponse(
                error="File too large",
                detail=f"Bookmark files are limited to {max_bytes} bytes",
            ).model_dump(),
        )

    try:
        file_type, bookmarks = load_bookmark_file(filename, data)
    except UnsupportedFileTypeError as e:
        raise HTTPException(
            415,
            ErrorResponse(error="Unsupported file type", detail=str(e)).model_dump(),
        )

    if not bookmarks:
        logger.info(f"No bookmarks found in {filename}")
        raise HTTPException(
            422,
            ErrorResponse(
                error="No bookmarks found",
                detail=f"Could not parse any bookmarks from {filename}",
            ).model_dump(),
        )

    session.load(bookmarks)

    return UploadResponse(
        filename=filename,
        file_type=file_type.value,
        loaded=len(bookmarks),
        stats=stats_for(session),
    )


@router.get("", response_model=BookmarkListResponse)
async def list_bookmarks(
    status: StatusFilter = Query("all"),
    search: Optional[str] = Query(None),
    session: BookmarkSession = Depends(get_session),
):
    """
    Get the loaded bookmarks, optionally filtered by status and a search
    string matched against name and URL.
    """
    matches = session.filter(status=status, search=search)
    return BookmarkListResponse(
        bookmarks=[BookmarkDisplay.from_bookmark(b) for b in matches],
        total=len(matches),
    )


@router.get("/stats", response_model=StatsResponse)
async def get_stats(session: BookmarkSession = Depends(get_session)):
    """Get total/valid/invalid/pending counts."""
    return stats_for(session)


@router.post(
    "/check",
    status_code=202,
    response_model=CheckStartedResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Nothing loaded"},
        409: {"model": ErrorResponse, "description": "Check already running"},
    },
)
async def start_check(
    background_tasks: BackgroundTasks,
    session: BookmarkSession = Depends(get_session),
    checker: BookmarkChecker = Depends(get_checker),
    batch_size: int = Depends(get_batch_size),
):
    """
    Start checking every loaded bookmark.

    The run happens in the background; poll /bookmarks/stats or /bookmarks
    to follow its progress.
    """
    if not len(session):
        raise HTTPException(
            400,
            ErrorResponse(error="No bookmarks loaded", detail="Upload a bookmark file first").model_dump(),
        )

    if session.is_busy:
        raise HTTPException(
            409,
            ErrorResponse(error="Check already running").model_dump(),
        )

    session.is_checking = True
    orchestrator = BatchOrchestrator(checker, batch_size=batch_size)
    background_tasks.add_task(orchestrator.run_check, session)
    logger.info(f"Scheduled check of {len(session)} bookmarks")

    return CheckStartedResponse(total=len(session), batch_size=batch_size)


@router.post("/reset", response_model=StatsResponse)
async def reset_session(session: BookmarkSession = Depends(get_session)):
    """
    Discard all loaded bookmarks.

    Results of a check that is still running are ignored when they arrive.
    """
    session.reset()
    return stats_for(session)
