"""
Bookmark Checker v1 - Batch Orchestrator

Runs a checker over a whole bookmark session in fixed-size batches.

Batches run one after another; the checks inside a batch run
concurrently, so at most ``batch_size`` probes are in flight at any time.
"""

import asyncio
import logging
from typing import Callable, Optional

from .checker import BookmarkChecker, GENERIC_FAILURE_MESSAGE, annotate
from .models import Bookmark, BookmarkStatus, CheckResult
from .session import BookmarkSession

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5

# (event, batch_index, batch) with event "checking" or "checked"
ProgressCallback = Callable[[str, int, list[Bookmark]], None]


def make_batches(bookmarks: list[Bookmark], batch_size: int) -> list[list[Bookmark]]:
    """Split bookmarks into consecutive batches of at most ``batch_size``"""
    return [
        bookmarks[i:i + batch_size]
        for i in range(0, len(bookmarks), batch_size)
    ]


class BatchOrchestrator:
    """
    Drives a BookmarkChecker over a BookmarkSession.

    Example:
        orchestrator = BatchOrchestrator(UrlChecker())
        result = await orchestrator.run_check(session)
    """

    def __init__(
        self,
        checker: BookmarkChecker,
        batch_size: int = DEFAULT_BATCH_SIZE,
        on_progress: Optional[ProgressCallback] = None,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.checker = checker
        self.batch_size = batch_size
        self.on_progress = on_progress

    async def run_check(self, session: BookmarkSession) -> CheckResult:
        """
        Check every bookmark in the session.

        If the session is reset or reloaded while the run is in flight,
        the run stops after the current batch and its results are dropped.

        Returns:
            Aggregate counts of the session after the run
        """
        generation = session.generation
        session.reset_results(generation)
        batches = make_batches(list(session.bookmarks), self.batch_size)

        logger.info(
            f"Checking {len(session)} bookmarks in {len(batches)} batches "
            f"of up to {self.batch_size}"
        )
        session.is_checking = True
        session.begin_run()

        try:
            for index, batch in enumerate(batches):
                if not session.mark_checking([b.id for b in batch], generation):
                    break
                self._notify("checking", index, batch)

                results = await self._check_batch(batch)

                if not session.merge(results, generation):
                    break
                self._notify("checked", index, results)
        finally:
            session.end_run()
            if session.is_current(generation):
                session.is_checking = False

        result = session.stats()
        logger.info(
            f"Check finished: {result.valid} valid, {result.invalid} invalid "
            f"of {result.total}"
        )
        return result

    async def _check_batch(self, batch: list[Bookmark]) -> list[Bookmark]:
        """Check all members of a batch concurrently and wait for all of them"""
        outcomes = await asyncio.gather(
            *(self.checker.check(bookmark) for bookmark in batch),
            return_exceptions=True,
        )

        results = []
        for bookmark, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(f"Checker failed for {bookmark.url}: {outcome!r}")
                outcome = annotate(
                    bookmark,
                    BookmarkStatus.INVALID,
                    error_message=GENERIC_FAILURE_MESSAGE,
                )
            results.append(outcome)
        return results

    def _notify(self, event: str, index: int, batch: list[Bookmark]) -> None:
        if self.on_progress is not None:
            self.on_progress(event, index, batch)
