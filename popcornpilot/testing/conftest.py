"""
Pytest plugin for PopcornPilot testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
discovered by pytest. To use them, add this to your conftest.py:

    pytest_plugins = ["popcornpilot.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from popcornpilot.testing.fixtures import (
    aggregator,
    mock_movies,
    mock_store,
    popular_page,
    sample_movie,
    sample_movies,
    sample_page,
    session,
)

__all__ = [
    "mock_movies",
    "mock_store",
    "aggregator",
    "session",
    "sample_movie",
    "sample_movies",
    "sample_page",
    "popular_page",
]
