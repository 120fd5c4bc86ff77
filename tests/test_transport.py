"""
Tests for the async HTTP transport.

Feature: catalog-gateway
"""

from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from popcornpilot.async_transport import AsyncHTTPTransport
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

BASE_URL = "https://api.themoviedb.org/3"


def _response(status_code: int, body: Any = None, headers: dict[str, str] | None = None, content: bytes | None = None) -> httpx.Response:
    request = httpx.Request("GET", f"{BASE_URL}/search/movie")
    if content is not None:
        return httpx.Response(status_code, content=content, headers=headers, request=request)
    return httpx.Response(status_code, json=body, headers=headers, request=request)


@given(status_code=st.sampled_from([400, 401, 403, 404, 409, 422, 429, 500, 502, 503]))
@settings(max_examples=50)
def test_error_statuses_map_to_transport_errors(status_code: int) -> None:
    """
    Property: every HTTP error status becomes a TransportError carrying the status.
    """
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key")

    error = transport._parse_error_response(
        _response(status_code, {"status_code": 34, "status_message": "The resource you requested could not be found."})
    )

    assert isinstance(error, TransportError)
    assert error.status_code == status_code
    assert error.code == "TMDB_34"


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [
        (401, AuthenticationError),
        (404, NotFoundError),
        (429, RateLimitedError),
        (500, ServerError),
        (503, ServerError),
        (400, RequestRejectedError),
        (422, RequestRejectedError),
    ],
)
def test_error_status_classes(status_code: int, expected: type) -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key")

    error = transport._parse_error_response(_response(status_code, {}))

    assert type(error) is expected
    assert error.code == f"HTTP_{status_code}"
    assert error.message == f"HTTP {status_code}"


def test_rate_limit_reads_retry_after() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key")

    error = transport._parse_error_response(_response(429, {}, headers={"Retry-After": "12"}))
    fallback = transport._parse_error_response(_response(429, {}, headers={"Retry-After": "soon"}))

    assert isinstance(error, RateLimitedError)
    assert error.retry_after == 12
    assert fallback.retry_after == 60


def test_error_body_that_is_not_json() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key")

    error = transport._parse_error_response(_response(502, content=b"<html>Bad Gateway</html>"))

    assert isinstance(error, ServerError)
    assert error.message == "HTTP 502"


def test_api_key_is_sent_as_bearer_token() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL + "/", api_key="test-key")

    assert transport.base_url == BASE_URL
    assert transport._client.headers["Authorization"] == "Bearer test-key"
    assert transport._client.headers["accept"] == "application/json"


def test_missing_api_key_sends_no_authorization() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key=None)

    assert "Authorization" not in transport._client.headers


@pytest.mark.asyncio
async def test_get_returns_json_and_adds_api_key_param() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key")
    request = AsyncMock(return_value=_response(200, {"results": []}))

    with patch.object(transport._client, "request", request):
        data = await transport.get("/search/movie", params={"query": "dune"})

    assert data == {"results": []}
    request.assert_awaited_once_with(
        "GET", "/search/movie", params={"query": "dune", "api_key": "test-key"}
    )
    await transport.close()


@pytest.mark.asyncio
async def test_get_without_api_key_omits_param() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key=None)
    request = AsyncMock(return_value=_response(200, {"results": []}))

    with patch.object(transport._client, "request", request):
        await transport.get("/discover/movie", params={"sort_by": "popularity.desc"})

    assert request.call_args.kwargs["params"] == {"sort_by": "popularity.desc"}
    await transport.close()


@pytest.mark.asyncio
async def test_unauthorized_response_raises_authentication_error() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key=None)
    body = {"success": False, "status_code": 7, "status_message": "Invalid API key: You must be granted a valid key."}

    with patch.object(transport._client, "request", AsyncMock(return_value=_response(401, body))):
        with pytest.raises(AuthenticationError) as exc_info:
            await transport.get("/search/movie", params={"query": "dune"})

    assert exc_info.value.code == "TMDB_7"
    assert exc_info.value.status_code == 401
    await transport.close()


@pytest.mark.asyncio
async def test_timeout_raises_request_timeout_error() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key", timeout=2.5)

    with patch.object(transport._client, "request", AsyncMock(side_effect=httpx.ReadTimeout("timed out"))):
        with pytest.raises(RequestTimeoutError) as exc_info:
            await transport.get("/search/movie")

    assert "2.5" in exc_info.value.message
    await transport.close()


@pytest.mark.asyncio
async def test_connection_failure_raises_network_error() -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key")

    with patch.object(transport._client, "request", AsyncMock(side_effect=httpx.ConnectError("connection refused"))):
        with pytest.raises(NetworkError) as exc_info:
            await transport.get("/search/movie")

    assert exc_info.value.code == "CONNECTION_ERROR"
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    await transport.close()


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [b"not json", b"[1, 2, 3]"])
async def test_unexpected_body_raises_malformed_response(content: bytes) -> None:
    transport = AsyncHTTPTransport(base_url=BASE_URL, api_key="test-key")

    with patch.object(transport._client, "request", AsyncMock(return_value=_response(200, content=content))):
        with pytest.raises(MalformedResponseError):
            await transport.get("/search/movie")

    await transport.close()
