"""
Bookmark Checker v1 - Invalid Bookmark Report

CSV export of bookmarks that failed their check.
"""

from datetime import date
from typing import Iterable, Optional

from .models import Bookmark, BookmarkStatus

CSV_HEADERS = ["Name", "URL", "Category", "ErrorMessage", "StatusCode"]
CSV_MEDIA_TYPE = "text/csv;charset=utf-8"


def quote_field(value: Optional[str]) -> str:
    """Wrap a value in double quotes, doubling any embedded quotes"""
    return '"' + (value or "").replace('"', '""') + '"'


def export_invalid_bookmarks(bookmarks: Iterable[Bookmark]) -> str:
    """
    Render invalid bookmarks as CSV.

    Returns:
        CSV text with a header row, or an empty string when no bookmark
        is invalid (nothing should be offered for download then)
    """
    invalid = [b for b in bookmarks if b.status == BookmarkStatus.INVALID]
    if not invalid:
        return ""

    rows = [",".join(CSV_HEADERS)]
    for bookmark in invalid:
        rows.append(",".join([
            quote_field(bookmark.name),
            quote_field(bookmark.url),
            quote_field(bookmark.category),
            quote_field(bookmark.error_message),
            str(bookmark.status_code) if bookmark.status_code is not None else "",
        ]))

    return "\n".join(rows)


def export_filename(day: Optional[date] = None) -> str:
    """File name for the invalid bookmark report, e.g. invalid-bookmarks-2024-01-31.csv"""
    day = day or date.today()
    return f"invalid-bookmarks-{day.isoformat()}.csv"
