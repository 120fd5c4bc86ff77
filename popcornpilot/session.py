"""
One user's search session.

Wires the debouncer, the fetch orchestrator and the trending aggregator
together. Starting a session fetches the default "popular" list and reads
the trending view once; the trending view is not re-read after searches are
recorded unless ``refresh_trending`` is called.
"""

import asyncio
from typing import Any

from popcornpilot.async_client import AsyncTMDBClient
from popcornpilot.config import DEFAULT_TRENDING_LIMIT, Settings
from popcornpilot.debounce import DEFAULT_QUIET_INTERVAL, Debouncer
from popcornpilot.logging import get_logger
from popcornpilot.orchestrator import FetchOrchestrator
from popcornpilot.protocols import CatalogGateway, TrendStore
from popcornpilot.stores import InMemoryTrendStore, MongoTrendStore
from popcornpilot.trending import TrendingAggregator
from popcornpilot.types.search import SearchOutcome
from popcornpilot.types.trending import TrendRecord

logger = get_logger()


class SearchSession:
    """
    Search state for a single user session.

    Example:
        ```python
        async with SearchSession.from_settings(Settings.from_env()) as session:
            session.start()
            session.on_input_change("dune")
            ...
            print(session.outcome, session.trending)
        ```
    """

    def __init__(
        self,
        movies: CatalogGateway,
        store: TrendStore,
        quiet_interval: float = DEFAULT_QUIET_INTERVAL,
        trending_limit: int = DEFAULT_TRENDING_LIMIT,
        owned: list[Any] | None = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            movies: Catalog gateway
            store: Trend store
            quiet_interval: Debounce quiet interval in seconds
            trending_limit: Size of the trending view
            owned: Resources with an async ``close()`` to release in ``aclose()``
        """
        self.trending_limit = trending_limit
        self.aggregator = TrendingAggregator(store)
        self.orchestrator = FetchOrchestrator(movies, self.aggregator)
        self.debouncer = Debouncer(self.orchestrator.settle, quiet_interval)
        self._trending: list[TrendRecord] = []
        self._trending_task: asyncio.Task[list[TrendRecord]] | None = None
        self._owned = list(owned or [])
        self._started = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchSession":
        """
        Build a session with a TMDB client and a store chosen from settings.

        MongoDB is used when ``settings.mongo_uri`` is set; otherwise the
        trend counts live in memory for the lifetime of the process.
        """
        client = AsyncTMDBClient.from_settings(settings)
        store: InMemoryTrendStore | MongoTrendStore
        if settings.mongo_uri:
            store = MongoTrendStore.from_settings(settings)
        else:
            logger.info("No MongoDB URI configured; keeping trend counts in memory")
            store = InMemoryTrendStore()
        return cls(
            client.movies,
            store,
            quiet_interval=settings.debounce_interval,
            trending_limit=settings.trending_limit,
            owned=[client, store],
        )

    @property
    def raw_query(self) -> str:
        return self.debouncer.raw_value

    @property
    def settled_query(self) -> str:
        return self.orchestrator.settled_query

    @property
    def outcome(self) -> SearchOutcome:
        return self.orchestrator.outcome

    @property
    def trending(self) -> list[TrendRecord]:
        """Last trending snapshot read from the store."""
        return list(self._trending)

    def start(self) -> asyncio.Task[None]:
        """
        Fetch the default list and read the trending view.

        The two run concurrently. Returns the fetch task.
        """
        if self._started:
            raise RuntimeError("Session already started")
        self._started = True
        fetch = self.orchestrator.settle("")
        self._trending_task = asyncio.create_task(self.refresh_trending())
        return fetch

    def on_input_change(self, raw: str) -> None:
        """Forward a keystroke-level change to the debouncer."""
        self.debouncer.on_input_change(raw)

    async def refresh_trending(self) -> list[TrendRecord]:
        """Re-read the trending view and replace the snapshot."""
        self._trending = await self.aggregator.get_trending_view(self.trending_limit)
        return self.trending

    async def wait_idle(self) -> None:
        """Wait for in-flight fetches, the startup trending read and background recordings."""
        await self.orchestrator.wait_idle()
        if self._trending_task is not None:
            await self._trending_task
        await self.aggregator.drain()

    async def aclose(self) -> None:
        """Drop any pending settle, finish outstanding work and close owned resources."""
        self.debouncer.cancel()
        await self.wait_idle()
        owned, self._owned = self._owned, []
        for resource in owned:
            try:
                await resource.close()
            except Exception:
                logger.warning("Failed to close %r", resource, exc_info=True)

    async def __aenter__(self) -> "SearchSession":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
