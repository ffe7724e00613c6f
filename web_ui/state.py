"""
Bookmark Checker v1 - Session API Application State

Accessors for the objects created by the application lifespan.
"""

from fastapi import Request

from bookmarks.checker import BookmarkChecker
from bookmarks.session import BookmarkSession


def get_session(request: Request) -> BookmarkSession:
    """Get the in-memory bookmark session"""
    return request.app.state.session


def get_checker(request: Request) -> BookmarkChecker:
    """Get the checker used for check runs"""
    return request.app.state.checker


def get_batch_size(request: Request) -> int:
    """Get the configured batch size"""
    return request.app.state.batch_size
