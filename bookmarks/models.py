"""
Bookmark Checker v1 - Bookmark Data Model

Core records shared by the parser, checker, orchestrator and exporter.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional


class BookmarkStatus(str, Enum):
    """Check lifecycle of a bookmark"""
    PENDING = "pending"
    CHECKING = "checking"
    VALID = "valid"
    INVALID = "invalid"


class BookmarkFileType(str, Enum):
    """Supported bookmark export formats"""
    HTML = "html"
    MARKDOWN = "markdown"


@dataclass
class Bookmark:
    """A named URL together with the outcome of its last check"""
    id: str
    name: str
    url: str
    description: Optional[str] = None
    category: Optional[str] = None
    status: BookmarkStatus = BookmarkStatus.PENDING
    status_code: Optional[int] = None
    error_message: Optional[str] = None
    response_time_ms: Optional[int] = None

    def __post_init__(self):
        if not self.name:
            self.name = self.url

    @property
    def is_checked(self) -> bool:
        return self.status in (BookmarkStatus.VALID, BookmarkStatus.INVALID)

    def clear_result(self) -> None:
        """Drop any previous check result and return to pending"""
        self.status = BookmarkStatus.PENDING
        self.status_code = None
        self.error_message = None
        self.response_time_ms = None

    def apply_result(self, result: "Bookmark") -> None:
        """Copy the check outcome of ``result`` onto this bookmark"""
        self.status = result.status
        self.status_code = result.status_code
        self.error_message = result.error_message
        self.response_time_ms = result.response_time_ms


@dataclass
class CheckResult:
    """Aggregate counts derived from a bookmark set"""
    total: int = 0
    valid: int = 0
    invalid: int = 0
    pending: int = 0
    checking: int = 0

    @classmethod
    def from_bookmarks(cls, bookmarks: list[Bookmark]) -> "CheckResult":
        counts = {status: 0 for status in BookmarkStatus}
        for bookmark in bookmarks:
            counts[bookmark.status] += 1
        return cls(
            total=len(bookmarks),
            valid=counts[BookmarkStatus.VALID],
            invalid=counts[BookmarkStatus.INVALID],
            pending=counts[BookmarkStatus.PENDING],
            checking=counts[BookmarkStatus.CHECKING],
        )

    def to_dict(self) -> dict:
        return asdict(self)
