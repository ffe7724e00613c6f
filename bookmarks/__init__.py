"""
Bookmark Checker v1 - Bookmarks Module

Parses HTML and Markdown bookmark exports, checks their URLs in bounded
concurrent batches and exports the broken ones.
"""

__version__ = "1.0.0"

from .models import Bookmark, BookmarkFileType, BookmarkStatus, CheckResult
from .parser import (
    UnsupportedFileTypeError,
    detect_file_type,
    load_bookmark_file,
    parse_bookmark_file,
)
from .checker import RemoteUrlChecker, UrlChecker, create_checker
from .session import BookmarkSession
from .orchestrator import BatchOrchestrator
from .exporter import export_filename, export_invalid_bookmarks

__all__ = [
    "Bookmark",
    "BookmarkFileType",
    "BookmarkStatus",
    "CheckResult",
    "UnsupportedFileTypeError",
    "detect_file_type",
    "load_bookmark_file",
    "parse_bookmark_file",
    "RemoteUrlChecker",
    "UrlChecker",
    "create_checker",
    "BookmarkSession",
    "BatchOrchestrator",
    "export_filename",
    "export_invalid_bookmarks",
]
