"""
Bookmark Checker v1 - Test Configuration and Fixtures

Shared fixtures for unit and API tests.
"""

from typing import Callable

import pytest

from tests.fakes import FakeChecker, RecordingTransport


SAMPLE_HTML = """<!DOCTYPE NETSCAPE-Bookmark-file-1>
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>
    <DT><H3>Toolbar</H3>
    <DL><p>
        <DT><A HREF="https://example.com/" ADD_DATE="1700000000">  Example  </A>
        <DT><A HREF="http://example.org/docs">Docs</A>
        <DT><A HREF="place:sort=8">Recent Tags</A>
        <DT><A HREF="https://empty.example.com/"></A>
    </DL><p>
    <DT><A>No href</A>
</DL><p>
"""

SAMPLE_MARKDOWN = """# Tools
| Name | URL | Desc |
|---|---|---|
| Foo | https://foo.com | bar |
| Baz | ftp://baz.com | x |
"""


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN


@pytest.fixture
def fake_checker() -> FakeChecker:
    return FakeChecker()


@pytest.fixture
def recording_transport() -> Callable[..., RecordingTransport]:
    return RecordingTransport
