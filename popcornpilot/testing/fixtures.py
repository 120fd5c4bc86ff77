"""
Pytest fixtures for PopcornPilot testing.

Provides common fixtures for testing code built on the search session.
"""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio

from popcornpilot.session import SearchSession
from popcornpilot.testing.mock import (
    MockMoviesClient,
    MockTrendStore,
    create_mock_movie,
    create_mock_page,
)
from popcornpilot.trending import TrendingAggregator
from popcornpilot.types.movies import CatalogPage, MovieSummary


# ============================================================================
# Mock Collaborator Fixtures
# ============================================================================


@pytest.fixture
def mock_movies() -> Generator[MockMoviesClient, None, None]:
    """
    Provide a MockMoviesClient for testing.

    Example:
        ```python
        async def test_my_feature(mock_movies):
            mock_movies.configure_search("dune", response=page)
            ...
            assert mock_movies.was_called("movies.search")
        ```
    """
    client = MockMoviesClient()
    yield client
    client.reset()


@pytest.fixture
def mock_store() -> MockTrendStore:
    """Provide an empty MockTrendStore."""
    return MockTrendStore()


@pytest.fixture
def aggregator(mock_store: MockTrendStore) -> TrendingAggregator:
    """Provide a TrendingAggregator over ``mock_store``."""
    return TrendingAggregator(mock_store)


@pytest_asyncio.fixture
async def session(
    mock_movies: MockMoviesClient, mock_store: MockTrendStore
) -> AsyncGenerator[SearchSession, None]:
    """
    Provide an unstarted SearchSession over the mock collaborators.

    Uses a 50ms quiet interval so debounce tests stay fast.
    """
    search_session = SearchSession(mock_movies, mock_store, quiet_interval=0.05)
    yield search_session
    await search_session.aclose()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_movie() -> MovieSummary:
    """Provide a sample MovieSummary."""
    return create_mock_movie(movie_id=438631, title="Dune", poster_path="/d5NXSklXo0qyIYkgV94XAgMIckC.jpg")


@pytest.fixture
def sample_movies(sample_movie: MovieSummary) -> list[MovieSummary]:
    """Provide a short result list led by ``sample_movie``."""
    return [
        sample_movie,
        create_mock_movie(movie_id=693134, title="Dune: Part Two", poster_path="/1pdfLvkbY9ohJlCjQH2CZjjYVvJ.jpg"),
        create_mock_movie(movie_id=841, title="Dune", poster_path=None, popularity=12.5),
    ]


@pytest.fixture
def sample_page(sample_movies: list[MovieSummary]) -> CatalogPage:
    """Provide a CatalogPage holding ``sample_movies``."""
    return create_mock_page(sample_movies)


@pytest.fixture
def popular_page() -> CatalogPage:
    """Provide a CatalogPage for the default discover request."""
    return create_mock_page(
        [create_mock_movie(movie_id=i, popularity=1000.0 - i) for i in range(1, 6)]
    )
