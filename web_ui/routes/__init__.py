"""
Bookmark Checker v1 - Session API Routes
"""

from .bookmarks import router as bookmarks_router
from .export import router as export_router

__all__ = ["bookmarks_router", "export_router"]
