"""
Bookmark Checker v1 - URL Checker

Single reachability probes for bookmarks. Every failure is reported on the
returned bookmark as an ``invalid`` status with an error message; checkers
never raise for an unreachable URL.

Two implementations share the same interface:
- UrlChecker probes the URL directly with a HEAD request
- RemoteUrlChecker delegates the probe to the check-url service
"""

import asyncio
import dataclasses
import logging
import time
from typing import Optional, Protocol
from urllib.parse import urlparse

import httpx

from config import DEFAULT_USER_AGENT
from .models import Bookmark, BookmarkStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
INVALID_URL_MESSAGE = "Invalid URL format"
GENERIC_FAILURE_MESSAGE = "Check failed"
TIMEOUT_MESSAGE = "Request timed out"


class BookmarkChecker(Protocol):
    """Anything that can probe a bookmark and return the annotated copy"""

    async def check(self, bookmark: Bookmark) -> Bookmark:
        ...

    async def close(self) -> None:
        ...


def is_valid_url(url: str) -> bool:
    """Check if URL is a well-formed absolute URL."""
    try:
        result = urlparse(url)
    except ValueError:
        return False
    return all([result.scheme, result.netloc])


def elapsed_ms(started: float) -> int:
    """Milliseconds elapsed since a ``time.perf_counter()`` reading"""
    return int(round((time.perf_counter() - started) * 1000))


def describe_error(error: Exception) -> str:
    """Human readable description of a failed request"""
    message = str(error).strip()
    if message:
        return message
    if isinstance(error, httpx.TimeoutException):
        return TIMEOUT_MESSAGE
    return error.__class__.__name__


def annotate(
    bookmark: Bookmark,
    status: BookmarkStatus,
    *,
    status_code: Optional[int] = None,
    error_message: Optional[str] = None,
    response_time_ms: Optional[int] = None,
) -> Bookmark:
    """Return a copy of ``bookmark`` carrying a check outcome"""
    return dataclasses.replace(
        bookmark,
        status=status,
        status_code=status_code,
        error_message=error_message,
        response_time_ms=response_time_ms,
    )


class UrlChecker:
    """
    Probes bookmark URLs with a HEAD request.

    Redirects are followed and only a final 2xx answer counts as valid.
    The HTTP client is created on first use and reused for later checks.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                follow_redirects=True,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def check(self, bookmark: Bookmark) -> Bookmark:
        """
        Probe a single bookmark.

        Args:
            bookmark: Bookmark whose URL should be checked

        Returns:
            A copy of the bookmark with status valid or invalid
        """
        if not is_valid_url(bookmark.url):
            return annotate(
                bookmark,
                BookmarkStatus.INVALID,
                error_message=INVALID_URL_MESSAGE,
                response_time_ms=0,
            )

        client = await self._get_client()
        started = time.perf_counter()

        try:
            # One deadline for the whole probe, redirect hops included
            response = await asyncio.wait_for(client.head(bookmark.url), self.timeout)
        except asyncio.TimeoutError:
            response_time = elapsed_ms(started)
            logger.debug(f"Probe timed out for {bookmark.url} after {response_time}ms")
            return annotate(
                bookmark,
                BookmarkStatus.INVALID,
                error_message=TIMEOUT_MESSAGE,
                response_time_ms=response_time,
            )
        except httpx.HTTPError as e:
            response_time = elapsed_ms(started)
            logger.debug(f"Probe failed for {bookmark.url}: {e!r}")
            return annotate(
                bookmark,
                BookmarkStatus.INVALID,
                error_message=describe_error(e),
                response_time_ms=response_time,
            )

        response_time = elapsed_ms(started)

        if response.is_success:
            logger.debug(f"{bookmark.url} -> {response.status_code} in {response_time}ms")
            return annotate(
                bookmark,
                BookmarkStatus.VALID,
                status_code=response.status_code,
                response_time_ms=response_time,
            )

        logger.debug(f"{bookmark.url} -> {response.status_code} {response.reason_phrase}")
        return annotate(
            bookmark,
            BookmarkStatus.INVALID,
            status_code=response.status_code,
            error_message=f"HTTP {response.status_code} {response.reason_phrase}".strip(),
            response_time_ms=response_time,
        )


class RemoteUrlChecker:
    """
    Checks bookmarks through the check-url service.

    A failing service does not abort anything: the affected bookmark is
    marked invalid with the service's error text or a generic message.
    """

    def __init__(
        self,
        service_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.service_url = service_url.rstrip("/")
        # Leave headroom for the service's own probe timeout
        self.timeout = timeout + 5.0
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.service_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self):
        """Close the HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def check(self, bookmark: Bookmark) -> Bookmark:
        client = await self._get_client()

        try:
            response = await client.post("/check-url", json={"url": bookmark.url})
        except httpx.HTTPError as e:
            logger.warning(f"Check service unreachable for {bookmark.url}: {e!r}")
            return annotate(
                bookmark,
                BookmarkStatus.INVALID,
                error_message=GENERIC_FAILURE_MESSAGE,
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code != 200 or not isinstance(data, dict):
            logger.warning(
                f"Check service returned {response.status_code} for {bookmark.url}"
            )
            return annotate(
                bookmark,
                BookmarkStatus.INVALID,
                error_message=_service_error(data) or GENERIC_FAILURE_MESSAGE,
            )

        try:
            status = BookmarkStatus(data.get("status"))
        except ValueError:
            status = None
        if status not in (BookmarkStatus.VALID, BookmarkStatus.INVALID):
            logger.warning(f"Malformed check response for {bookmark.url}: {data}")
            return annotate(
                bookmark,
                BookmarkStatus.INVALID,
                error_message=GENERIC_FAILURE_MESSAGE,
            )

        try:
            status_code = _optional_int(data.get("statusCode"))
            response_time = _optional_int(data.get("responseTimeMs"))
        except (TypeError, ValueError):
            logger.warning(f"Malformed check response for {bookmark.url}: {data}")
            return annotate(
                bookmark,
                BookmarkStatus.INVALID,
                error_message=GENERIC_FAILURE_MESSAGE,
            )

        error_message = data.get("errorMessage")
        return annotate(
            bookmark,
            status,
            status_code=status_code,
            error_message=str(error_message) if error_message is not None else None,
            response_time_ms=response_time,
        )


def _optional_int(value) -> Optional[int]:
    """Coerce a numeric wire field, rejecting booleans and fractional values"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(f"Expected a number, got {value!r}")
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"Expected a whole number, got {value!r}")
    return int(number)


def _service_error(data) -> Optional[str]:
    """Pull an error message out of a service error body, if present"""
    if not isinstance(data, dict):
        return None
    detail = data.get("detail", data)
    if isinstance(detail, dict):
        return detail.get("error")
    if isinstance(detail, str):
        return detail
    return None


def create_checker(
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT,
    service_url: Optional[str] = None,
) -> UrlChecker | RemoteUrlChecker:
    """Build the remote checker when a service URL is given, else a local one"""
    if service_url:
        logger.info(f"Using check-url service at {service_url}")
        return RemoteUrlChecker(service_url, timeout=timeout)
    return UrlChecker(timeout=timeout, user_agent=user_agent)
