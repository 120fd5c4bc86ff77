"""Protocol definitions for the catalog gateway and the trend store."""

from __future__ import annotations

from typing import Protocol

from popcornpilot.types.movies import CatalogPage, MovieSummary
from popcornpilot.types.trending import TrendRecord


class CatalogGateway(Protocol):
    """Minimal catalog API used by the fetch orchestrator."""

    async def discover(self, sort_by: str = "popularity.desc") -> CatalogPage:
        ...

    async def search(self, query: str) -> CatalogPage:
        ...


class TrendStore(Protocol):
    """Persistence API used by the trending aggregator.

    ``upsert_increment`` must be a single atomic operation on the store side.
    """

    async def upsert_increment(self, term: str, movie: MovieSummary) -> None:
        ...

    async def list_top_trending(self, limit: int) -> list[TrendRecord]:
        ...
