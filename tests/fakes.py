"""
Bookmark Checker v1 - Test Doubles

Checker and transport doubles shared by the test modules.
"""

import asyncio
from typing import Callable

import httpx

from bookmarks.checker import annotate
from bookmarks.models import Bookmark, BookmarkStatus


def make_bookmarks(count: int) -> list[Bookmark]:
    """Build ``count`` pending bookmarks with distinct ids and urls."""
    return [
        Bookmark(id=f"bm-{i}", name=f"Site {i}", url=f"https://site{i}.example.com/")
        for i in range(count)
    ]


class FakeChecker:
    """
    Checker double that records when each probe starts and ends.

    URLs listed in ``invalid_urls`` come back invalid with a 404; URLs in
    ``raising_urls`` make the checker raise.
    """

    def __init__(self, delay: float = 0.01, invalid_urls=(), raising_urls=()):
        self.delay = delay
        self.invalid_urls = set(invalid_urls)
        self.raising_urls = set(raising_urls)
        self.events: list[tuple[str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def check(self, bookmark: Bookmark) -> Bookmark:
        self.events.append(("start", bookmark.id))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            if bookmark.url in self.raising_urls:
                raise RuntimeError("checker exploded")
            if bookmark.url in self.invalid_urls:
                return annotate(
                    bookmark,
                    BookmarkStatus.INVALID,
                    status_code=404,
                    error_message="HTTP 404 Not Found",
                    response_time_ms=10,
                )
            return annotate(
                bookmark,
                BookmarkStatus.VALID,
                status_code=200,
                response_time_ms=10,
            )
        finally:
            self.in_flight -= 1
            self.events.append(("end", bookmark.id))

    async def close(self) -> None:
        self.closed = True


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)
