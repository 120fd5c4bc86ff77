"""
Async HTTP Transport for the TMDB catalog.

Handles async HTTP communication, credential injection and error handling
using httpx async client. Requests are never retried: a failed fetch is
retried only by a new settle event.
"""

import time
from typing import Any

import httpx

from popcornpilot.exceptions import (
    AuthenticationError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    RequestRejectedError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from popcornpilot.logging import get_logger, log_http_request, log_http_response

logger = get_logger("http")


class AsyncHTTPTransport:
    """
    Async HTTP transport layer for the catalog API.

    Handles:
    - Bearer token and ``api_key`` query parameter injection
    - Bounded request timeout surfaced as a transport failure
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize async HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.themoviedb.org/3")
            api_key: TMDB API key; None sends unauthenticated requests
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout

        headers = {"accept": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        else:
            logger.warning("No catalog API key configured; requests will be rejected")

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPTransport":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Make a GET request.

        Args:
            path: API path (e.g., "/search/movie")
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            TransportError: On network failures, timeouts, HTTP errors and undecodable bodies
        """
        query: dict[str, Any] = dict(params or {})
        if self.api_key:
            query["api_key"] = self.api_key

        url = f"{self.base_url}{path}"
        log_http_request("GET", url, query)

        started = time.monotonic()
        try:
            response = await self._client.request("GET", path, params=query)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                "TIMEOUT", f"Request to {path} timed out after {self.timeout}s"
            ) from e
        except httpx.RequestError as e:
            raise NetworkError("CONNECTION_ERROR", str(e)) from e

        log_http_response(response.status_code, url, (time.monotonic() - started) * 1000)

        if response.status_code >= 400:
            raise self._parse_error_response(response)

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "INVALID_JSON", f"Response from {path} is not valid JSON", response.status_code
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                "INVALID_PAYLOAD",
                f"Response from {path} has unexpected type '{type(data).__name__}'",
                response.status_code,
            )
        return data

    def _parse_error_response(self, response: httpx.Response) -> TransportError:
        """
        Parse an error response into a typed exception.

        TMDB error bodies look like
        ``{"success": false, "status_code": 7, "status_message": "..."}``.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate TransportError subclass
        """
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        code = f"TMDB_{data['status_code']}" if "status_code" in data else f"HTTP_{status_code}"
        message = data.get("status_message") or f"HTTP {status_code}"

        if status_code == 401:
            return AuthenticationError(code, message, status_code)
        elif status_code == 404:
            return NotFoundError(code, message, status_code)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError(code, message, retry_after, status_code)
        elif status_code >= 500:
            return ServerError(code, message, status_code)
        else:
            return RequestRejectedError(code, message, status_code)
