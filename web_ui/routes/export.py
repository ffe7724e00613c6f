"""
Bookmark Checker v1 - Export Routes

Routes for downloading the invalid bookmark report.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from bookmarks.exporter import CSV_MEDIA_TYPE, export_filename, export_invalid_bookmarks
from bookmarks.session import BookmarkSession
from ..models import ErrorResponse
from ..state import get_session

router = APIRouter(prefix="/export", tags=["Export"])


@router.get(
    "/csv",
    responses={404: {"model": ErrorResponse, "description": "No invalid bookmarks"}},
)
async def export_csv(session: BookmarkSession = Depends(get_session)):
    """
    Export invalid bookmarks as CSV.

    Returns a file named invalid-bookmarks-<date>.csv.
    """
    content = export_invalid_bookmarks(session.bookmarks)

    if not content:
        raise HTTPException(404, ErrorResponse(error="No invalid bookmarks to export").model_dump())

    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{export_filename()}"'
        },
    )
