"""PopcornPilot testing utilities.

Provides mock collaborators and fixtures for testing code that uses a
search session.
"""

from popcornpilot.testing.mock import (
    MockCall,
    MockMoviesClient,
    MockResponse,
    MockTrendStore,
    create_mock_movie,
    create_mock_page,
)

__all__ = [
    # Mock collaborators
    "MockMoviesClient",
    "MockTrendStore",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_movie",
    "create_mock_page",
]
