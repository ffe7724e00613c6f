"""
Bookmark Checker v1 - Bookmark Session

The in-memory working set a check run operates on.

Every load or reset bumps the session generation. Updates are tagged with
the generation they were started under, so results from a run that
outlived a reset are dropped instead of being merged into the new set.
"""

import logging
from typing import Iterable, Optional

from .models import Bookmark, BookmarkStatus, CheckResult

logger = logging.getLogger(__name__)

STATUS_FILTERS = ("all",) + tuple(status.value for status in BookmarkStatus)


class BookmarkSession:
    """Owned, mutable collection of bookmarks keyed by id"""

    def __init__(self, bookmarks: Optional[list[Bookmark]] = None):
        self._bookmarks: list[Bookmark] = []
        self._generation = 0
        self._active_runs = 0
        self.is_checking = False
        if bookmarks:
            self.load(bookmarks)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def bookmarks(self) -> list[Bookmark]:
        return self._bookmarks

    def __len__(self) -> int:
        return len(self._bookmarks)

    @property
    def is_busy(self) -> bool:
        """
        True while a check is flagged or any run still has probes in flight.

        A run that outlived a reset or reload keeps the session busy until
        its current batch settles, so a new run never overlaps it.
        """
        return self.is_checking or self._active_runs > 0

    def begin_run(self) -> None:
        self._active_runs += 1

    def end_run(self) -> None:
        self._active_runs = max(0, self._active_runs - 1)

    def load(self, bookmarks: list[Bookmark]) -> None:
        """Replace the working set with freshly parsed bookmarks"""
        ids = [b.id for b in bookmarks]
        if len(set(ids)) != len(ids):
            raise ValueError("Bookmark ids must be unique within a session")
        self._bookmarks = list(bookmarks)
        self._generation += 1
        self.is_checking = False
        logger.info(f"Session loaded {len(bookmarks)} bookmarks (generation {self._generation})")

    def reset(self) -> None:
        """Discard the working set; in-flight results become stale"""
        self._bookmarks = []
        self._generation += 1
        self.is_checking = False
        logger.info(f"Session reset (generation {self._generation})")

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def reset_results(self, generation: int) -> bool:
        """Return every bookmark to pending before a new run"""
        if not self.is_current(generation):
            return False
        for bookmark in self._bookmarks:
            bookmark.clear_result()
        return True

    def mark_checking(self, ids: Iterable[str], generation: int) -> bool:
        """Flag bookmarks as being checked; ignored if the generation is stale"""
        if not self.is_current(generation):
            return False
        wanted = set(ids)
        for bookmark in self._bookmarks:
            if bookmark.id in wanted:
                bookmark.status = BookmarkStatus.CHECKING
        return True

    def merge(self, results: Iterable[Bookmark], generation: int) -> bool:
        """
        Merge check results into the working set by id match.

        Returns:
            False if the results were stale and have been discarded
        """
        if not self.is_current(generation):
            logger.info(f"Discarding stale results from generation {generation}")
            return False
        by_id = {result.id: result for result in results}
        for bookmark in self._bookmarks:
            result = by_id.get(bookmark.id)
            if result is not None:
                bookmark.apply_result(result)
        return True

    def stats(self) -> CheckResult:
        return CheckResult.from_bookmarks(self._bookmarks)

    def invalid(self) -> list[Bookmark]:
        return [b for b in self._bookmarks if b.status == BookmarkStatus.INVALID]

    def filter(self, status: str = "all", search: Optional[str] = None) -> list[Bookmark]:
        """
        Filter bookmarks for the results view.

        Args:
            status: "all" or one of the bookmark status values
            search: Case-insensitive substring matched against name and url
        """
        if status not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {status}")

        query = (search or "").lower()
        matches = []
        for bookmark in self._bookmarks:
            if status != "all" and bookmark.status.value != status:
                continue
            if query and query not in bookmark.name.lower() and query not in bookmark.url.lower():
                continue
            matches.append(bookmark)
        return matches
