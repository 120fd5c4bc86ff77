"""Shared fixtures for the PopcornPilot test suite."""

from popcornpilot.testing.fixtures import (  # noqa: F401
    aggregator,
    mock_movies,
    mock_store,
    popular_page,
    sample_movie,
    sample_movies,
    sample_page,
    session,
)
