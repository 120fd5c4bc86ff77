"""
PopcornPilot async catalog client.

Provides the async interface for the TMDB movie catalog.
"""

from typing import Any

from popcornpilot.async_clients import AsyncMoviesClient
from popcornpilot.async_transport import AsyncHTTPTransport
from popcornpilot.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, Settings


class AsyncTMDBClient:
    """
    Async client for the TMDB catalog API.

    Aggregates the async resource clients over a shared transport.

    Example:
        ```python
        import asyncio
        from popcornpilot import AsyncTMDBClient

        async def main():
            async with AsyncTMDBClient(api_key="my-key") as client:
                page = await client.movies.search("dune")
                print([movie.title for movie in page.results])

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = DEFAULT_BASE_URL
    DEFAULT_TIMEOUT = DEFAULT_TIMEOUT

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the async catalog client.

        Args:
            api_key: TMDB API key (None makes every request fail with AuthenticationError)
            base_url: Base URL for API requests (default: https://api.themoviedb.org/3)
            timeout: Request timeout in seconds (default: 10.0)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
        )

        self.movies = AsyncMoviesClient(self._transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AsyncTMDBClient":
        """Create a client from loaded settings."""
        return cls(
            api_key=settings.api_key,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    @classmethod
    def from_env(cls) -> "AsyncTMDBClient":
        """
        Create a client from environment variables.

        See ``Settings.from_env`` for the variables read.

        Raises:
            ConfigurationError: If a numeric variable is malformed
        """
        return cls.from_settings(Settings.from_env())

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncTMDBClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
