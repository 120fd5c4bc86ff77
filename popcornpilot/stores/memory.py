"""In-process trend store.

Every mutation runs without suspending the event loop between reading and
writing a record, so an upsert is atomic for all tasks sharing the loop.
"""

import itertools
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timezone

from popcornpilot.logging import get_logger
from popcornpilot.types.movies import MovieSummary
from popcornpilot.types.trending import TrendRecord

logger = get_logger("trending")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryTrendStore:
    """Trend store kept in a dict keyed by search term."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._records: dict[str, TrendRecord] = {}
        self._sequence: dict[str, int] = {}
        self._counter = itertools.count()

    async def upsert_increment(self, term: str, movie: MovieSummary) -> None:
        existing = self._records.get(term)
        if existing is None:
            self._records[term] = TrendRecord(
                search_term=term,
                count=1,
                movie_id=movie.id,
                poster_url=movie.poster_url,
                title=movie.title,
                created_at=self._clock(),
            )
            self._sequence[term] = next(self._counter)
            logger.debug("Created trend record for %r", term)
        else:
            self._records[term] = replace(existing, count=existing.count + 1)
            logger.debug("Incremented trend record for %r to %d", term, existing.count + 1)

    async def list_top_trending(self, limit: int) -> list[TrendRecord]:
        if limit <= 0:
            return []
        ranked = sorted(
            self._records.values(),
            key=lambda record: (
                -record.count,
                record.created_at,
                self._sequence[record.search_term],
            ),
        )
        return ranked[:limit]

    def get(self, term: str) -> TrendRecord | None:
        """Return the current record for ``term`` without touching the counter."""
        return self._records.get(term)

    def __len__(self) -> int:
        return len(self._records)

    async def close(self) -> None:
        """No-op for compatibility with MongoTrendStore."""
        pass
