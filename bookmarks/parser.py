"""
Bookmark Checker v1 - Bookmark File Parser

Parses browser HTML bookmark exports and Markdown bookmark tables into
Bookmark records.

Supported Markdown layout:

    # Category

    | Name | URL | Description |
    | ---- | --- | ----------- |
    | Example | https://example.com | Optional text |

Parsing never raises on malformed content; a file without usable links
simply yields an empty list.
"""

import itertools
import logging
import re
import uuid
from pathlib import Path
from typing import Iterator, Optional

from bs4 import BeautifulSoup

from .models import Bookmark, BookmarkFileType

logger = logging.getLogger(__name__)

FILE_EXTENSIONS = {
    "html": BookmarkFileType.HTML,
    "htm": BookmarkFileType.HTML,
    "md": BookmarkFileType.MARKDOWN,
    "markdown": BookmarkFileType.MARKDOWN,
}

HEADING_PREFIX = re.compile(r"^#+\s*")


class UnsupportedFileTypeError(ValueError):
    """Raised when a file extension is not a supported bookmark format."""

    def __init__(self, filename: str):
        super().__init__(
            f"Unsupported file type: {filename!r} (expected .html, .htm, .md or .markdown)"
        )
        self.filename = filename


class IdGenerator:
    """
    Generates bookmark ids that are unique within one parse call.

    A random token distinguishes separate parses; a counter distinguishes
    bookmarks within a parse, no matter how quickly they are produced.
    """

    def __init__(self):
        self._token = uuid.uuid4().hex[:8]
        self._counter = itertools.count()

    def __call__(self) -> str:
        return f"bookmark-{self._token}-{next(self._counter)}"


def detect_file_type(filename: str) -> Optional[BookmarkFileType]:
    """
    Detect the bookmark format from a file name's extension.

    Returns:
        The file type, or None if the extension is not supported
    """
    if "." not in filename:
        return None
    extension = filename.rsplit(".", 1)[-1].lower()
    return FILE_EXTENSIONS.get(extension)


def parse_html_bookmarks(content: str) -> list[Bookmark]:
    """
    Extract every http(s) anchor from an HTML bookmark export.

    Anchors are returned in document order. Folder structure is not
    interpreted, so HTML bookmarks carry no category.
    """
    soup = BeautifulSoup(content, "html.parser")
    next_id = IdGenerator()
    bookmarks = []

    for a_tag in soup.find_all("a"):
        url = a_tag.get("href")
        if not url or not url.startswith("http"):
            continue

        bookmarks.append(Bookmark(
            id=next_id(),
            name=a_tag.get_text().strip(),
            url=url,
        ))

    return bookmarks


def parse_markdown_bookmarks(content: str) -> list[Bookmark]:
    """Extract bookmarks from Markdown tables grouped under headings."""
    return list(_iter_markdown_bookmarks(content))


def _iter_markdown_bookmarks(content: str) -> Iterator[Bookmark]:
    next_id = IdGenerator()
    current_category = ""
    in_table = False
    header_row_seen = False

    for raw_line in content.split("\n"):
        line = raw_line.strip()

        if line.startswith("#"):
            current_category = HEADING_PREFIX.sub("", line).strip()
            in_table = False
            header_row_seen = False
            continue

        if line.startswith("|"):
            if not in_table:
                # Header row
                in_table = True
                continue

            if not header_row_seen:
                # Separator row
                header_row_seen = True
                continue

            bookmark = _parse_table_row(line, current_category, next_id)
            if bookmark is not None:
                yield bookmark

        elif line == "":
            in_table = False
            header_row_seen = False


def _parse_table_row(
    line: str,
    category: str,
    next_id: IdGenerator,
) -> Optional[Bookmark]:
    cells = [cell.strip() for cell in line.split("|")]
    cells = [cell for cell in cells if cell]
    if len(cells) < 2:
        return None

    name, url = cells[0], cells[1]
    if not url.startswith(("http://", "https://")):
        return None

    return Bookmark(
        id=next_id(),
        name=name,
        url=url,
        description=cells[2] if len(cells) > 2 else None,
        category=category or None,
    )


def parse_bookmark_file(content: str, file_type: BookmarkFileType) -> list[Bookmark]:
    """
    Parse bookmark file content of the given type.

    Returns:
        List of Bookmark objects, all pending; empty if nothing was found
    """
    if file_type == BookmarkFileType.HTML:
        return parse_html_bookmarks(content)
    if file_type == BookmarkFileType.MARKDOWN:
        return parse_markdown_bookmarks(content)
    return []


def load_bookmark_file(filename: str, data: bytes) -> tuple[BookmarkFileType, list[Bookmark]]:
    """
    Detect the format of an uploaded file and parse its raw bytes.

    Args:
        filename: Original file name, used only for format detection
        data: Raw file contents

    Returns:
        Tuple of the detected file type and the parsed bookmarks

    Raises:
        UnsupportedFileTypeError: If the extension is not supported
    """
    file_type = detect_file_type(filename)
    if file_type is None:
        raise UnsupportedFileTypeError(filename)

    content = data.decode("utf-8-sig", errors="replace")
    bookmarks = parse_bookmark_file(content, file_type)
    logger.info(f"Parsed {len(bookmarks)} bookmarks from {filename} ({file_type.value})")
    return file_type, bookmarks


def parse_bookmarks_path(file_path: str | Path) -> tuple[BookmarkFileType, list[Bookmark]]:
    """
    Convenience function to parse a bookmark file from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        UnsupportedFileTypeError: If the extension is not supported
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Bookmarks file not found: {path}")
    return load_bookmark_file(path.name, path.read_bytes())
