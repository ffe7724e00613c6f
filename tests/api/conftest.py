"""
Bookmark Checker v1 - API Test Fixtures

TestClient fixtures for both FastAPI applications with their checkers
replaced by test doubles.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from bookmarks.checker import UrlChecker
from checker_service.main import app as checker_app, get_checker as get_url_checker
from web_ui.main import app as session_app
from web_ui.state import get_batch_size, get_checker as get_session_checker

from tests.fakes import FakeChecker

BATCH_SIZE = 2


def probe_handler(request: httpx.Request) -> httpx.Response:
    """Answer HEAD probes by path: /missing is a 404, /down is unreachable."""
    if request.url.path == "/missing":
        return httpx.Response(404)
    if request.url.path == "/down":
        raise httpx.ConnectError("Connection refused", request=request)
    return httpx.Response(200)


@pytest.fixture
def url_checker() -> UrlChecker:
    return UrlChecker(transport=httpx.MockTransport(probe_handler))


@pytest.fixture
def checker_client(url_checker):
    """Client for the check-url service."""
    checker_app.dependency_overrides[get_url_checker] = lambda: url_checker
    with TestClient(checker_app) as client:
        yield client
    checker_app.dependency_overrides.clear()


@pytest.fixture
def session_checker() -> FakeChecker:
    return FakeChecker(delay=0, invalid_urls={"http://example.org/docs"})


@pytest.fixture
def session_client(session_checker):
    """Client for the session API with a fresh, empty session."""
    session_app.dependency_overrides[get_session_checker] = lambda: session_checker
    session_app.dependency_overrides[get_batch_size] = lambda: BATCH_SIZE
    with TestClient(session_app) as client:
        yield client
    session_app.dependency_overrides.clear()
