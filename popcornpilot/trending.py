"""
Trending aggregation over a trend store.

Recording a search is fire-and-forget from the point of view of the search
state: store failures are logged and never reach the caller.
"""

import asyncio

from popcornpilot.config import DEFAULT_TRENDING_LIMIT
from popcornpilot.exceptions import AggregationError
from popcornpilot.logging import get_logger
from popcornpilot.protocols import TrendStore
from popcornpilot.types.movies import MovieSummary
from popcornpilot.types.trending import TrendRecord

logger = get_logger("trending")


class TrendingAggregator:
    """Records successful searches and reads the ranked trending view."""

    def __init__(self, store: TrendStore) -> None:
        """
        Initialize the aggregator.

        Args:
            store: Store providing atomic upsert-increment and ranked reads
        """
        self.store = store
        self._background: set[asyncio.Task[None]] = set()

    async def record_search(self, term: str, movie: MovieSummary) -> None:
        """
        Count one successful search for ``term``.

        The first movie recorded for a term stays its representative movie.
        Never raises: failures are logged at WARNING.

        Args:
            term: Search term exactly as typed (case-sensitive)
            movie: Top result of the search
        """
        if not term:
            logger.debug("Ignoring empty search term")
            return
        try:
            await self.store.upsert_increment(term, movie)
        except AggregationError as e:
            logger.warning("Failed to record search %r: %s", term, e)
        except Exception:
            logger.warning("Unexpected error recording search %r", term, exc_info=True)
        else:
            logger.debug("Recorded search %r (movie %d)", term, movie.id)

    def record_search_in_background(self, term: str, movie: MovieSummary) -> asyncio.Task[None]:
        """
        Schedule ``record_search`` as a detached task and return it.

        The caller does not need to await the task; a reference is kept until
        it finishes.
        """
        task = asyncio.create_task(self.record_search(term, movie))
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    @property
    def pending(self) -> int:
        """Number of background recordings still running."""
        return len(self._background)

    async def drain(self) -> None:
        """Wait for all background recordings to finish."""
        while self._background:
            await asyncio.gather(*list(self._background))

    async def get_trending_view(self, limit: int = DEFAULT_TRENDING_LIMIT) -> list[TrendRecord]:
        """
        Read the top ``limit`` trend records, highest count first.

        Returns an empty list when the store cannot be read; the failure is
        logged.

        Args:
            limit: Maximum number of records (default: 5)

        Returns:
            List of TrendRecord sorted by count descending
        """
        try:
            return await self.store.list_top_trending(limit)
        except AggregationError as e:
            logger.warning("Failed to load trending view: %s", e)
        except Exception:
            logger.warning("Unexpected error loading trending view", exc_info=True)
        return []
