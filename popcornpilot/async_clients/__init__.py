"""PopcornPilot async resource clients."""

from popcornpilot.async_clients.movies import AsyncMoviesClient

__all__ = [
    "AsyncMoviesClient",
]
