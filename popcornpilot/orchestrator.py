"""
Fetch orchestration for settled queries.

Each settled query issues exactly one catalog request tagged with a
generation number. Only the response for the latest generation may change
the search outcome; older responses are dropped when they arrive, in any
order, and are never cancelled.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from popcornpilot.exceptions import LogicalError
from popcornpilot.logging import get_logger
from popcornpilot.protocols import CatalogGateway
from popcornpilot.trending import TrendingAggregator
from popcornpilot.types.movies import CatalogPage
from popcornpilot.types.search import Error, Idle, Loading, SearchOutcome, Success

logger = get_logger()

GENERIC_ERROR_MESSAGE = "Error fetching movies: Please try again later."

OutcomeListener = Callable[[SearchOutcome], Any]


class FetchOrchestrator:
    """
    State machine over ``SearchOutcome`` driven by settle events.

    Example:
        ```python
        orchestrator = FetchOrchestrator(client.movies, aggregator)
        orchestrator.subscribe(render)
        await orchestrator.settle("dune")
        ```
    """

    def __init__(
        self,
        movies: CatalogGateway,
        aggregator: TrendingAggregator | None = None,
        sort_by: str = "popularity.desc",
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            movies: Catalog gateway used for discover and search requests
            aggregator: Receives successful non-empty searches (optional)
            sort_by: Sort key for the empty-query discover request
        """
        self.movies = movies
        self.aggregator = aggregator
        self.sort_by = sort_by
        self._outcome: SearchOutcome = Idle()
        self._settled_query = ""
        self._generation = 0
        self._listeners: list[OutcomeListener] = []
        self._inflight: set[asyncio.Task[None]] = set()

    @property
    def outcome(self) -> SearchOutcome:
        return self._outcome

    @property
    def settled_query(self) -> str:
        return self._settled_query

    @property
    def generation(self) -> int:
        """Generation of the most recently issued request (0 before the first)."""
        return self._generation

    def subscribe(self, listener: OutcomeListener) -> Callable[[], None]:
        """
        Call ``listener`` with every new outcome.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def settle(self, query: str) -> asyncio.Task[None]:
        """
        Start the request for a settled query.

        Enters ``Loading`` before returning, whatever the current state.
        An empty query discovers popular movies, anything else searches by
        term.

        Returns:
            The task running the request; awaiting it is optional
        """
        self._generation += 1
        generation = self._generation
        self._settled_query = query

        task = asyncio.create_task(self._fetch(generation, query))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

        self._set_outcome(Loading())
        return task

    async def wait_idle(self) -> None:
        """Wait until no request is in flight."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _fetch(self, generation: int, query: str) -> None:
        try:
            page = await self._request(query)
        except LogicalError as e:
            if not self._accept(generation, query):
                return
            self._set_outcome(Error(e.message))
            return
        except Exception as e:
            if not self._accept(generation, query):
                return
            logger.error("Error fetching movies for %r: %s", query, e)
            self._set_outcome(Error(GENERIC_ERROR_MESSAGE))
            return

        if not self._accept(generation, query):
            return

        movies = tuple(page.results)
        self._set_outcome(Success(movies))

        if query and movies and self.aggregator is not None:
            self.aggregator.record_search_in_background(query, movies[0])

    async def _request(self, query: str) -> CatalogPage:
        if query:
            return await self.movies.search(query)
        return await self.movies.discover(self.sort_by)

    def _accept(self, generation: int, query: str) -> bool:
        if self.is_current(generation):
            return True
        logger.debug(
            "Discarding stale response for %r (generation %d, latest %d)",
            query,
            generation,
            self._generation,
        )
        return False

    def _set_outcome(self, outcome: SearchOutcome) -> None:
        self._outcome = outcome
        for listener in list(self._listeners):
            try:
                listener(outcome)
            except Exception:
                logger.exception("Outcome listener failed on %s", outcome.kind)
