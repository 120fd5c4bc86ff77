"""Async Movies resource client."""

from typing import TYPE_CHECKING, Any

from popcornpilot.exceptions import LogicalError, MalformedResponseError
from popcornpilot.types.movies import CatalogPage, MovieSummary

if TYPE_CHECKING:
    from popcornpilot.async_transport import AsyncHTTPTransport

DEFAULT_LOGICAL_ERROR = "Error fetching movies"


class AsyncMoviesClient:
    """Async client for movie discovery and search."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async movies client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def discover(self, sort_by: str = "popularity.desc") -> CatalogPage:
        """
        Discover movies without a search term.

        Args:
            sort_by: TMDB sort key (default: "popularity.desc")

        Returns:
            CatalogPage with the first page of results

        Raises:
            TransportError: If the catalog cannot be reached
            LogicalError: If the catalog flags the request as failed
        """
        response = await self.transport.get(
            "/discover/movie",
            params={"sort_by": sort_by},
        )
        return parse_catalog_page(response)

    async def search(self, query: str) -> CatalogPage:
        """
        Search movies by title.

        Args:
            query: Search term, sent as typed

        Returns:
            CatalogPage with the first page of results

        Raises:
            TransportError: If the catalog cannot be reached
            LogicalError: If the catalog flags the request as failed
        """
        response = await self.transport.get(
            "/search/movie",
            params={"query": query},
        )
        return parse_catalog_page(response)


def parse_catalog_page(data: dict[str, Any]) -> CatalogPage:
    """
    Convert a catalog payload into a CatalogPage.

    A payload carrying ``"response": "False"`` is a logical failure, distinct
    from transport failures.
    """
    flag = data.get("response")
    if flag is False or (isinstance(flag, str) and flag.strip().lower() == "false"):
        raise LogicalError("CATALOG_FAILURE", data.get("error") or DEFAULT_LOGICAL_ERROR)

    raw_results = data.get("results") or []
    if not isinstance(raw_results, list):
        raise MalformedResponseError(
            "INVALID_PAYLOAD",
            f"results has unexpected type '{type(raw_results).__name__}'",
        )

    try:
        results = [_parse_movie(item) for item in raw_results]
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponseError("INVALID_PAYLOAD", f"Malformed movie entry: {e}") from e

    return CatalogPage(
        results=results,
        page=data.get("page", 1),
        total_pages=data.get("total_pages", 0),
        total_results=data.get("total_results", len(results)),
    )


def _parse_movie(item: dict[str, Any]) -> MovieSummary:
    vote_average = item.get("vote_average")
    return MovieSummary(
        id=int(item["id"]),
        title=item.get("title") or item.get("original_title") or "",
        poster_path=item.get("poster_path"),
        popularity=float(item.get("popularity") or 0.0),
        release_date=item.get("release_date") or None,
        vote_average=float(vote_average) if vote_average is not None else None,
        original_language=item.get("original_language"),
    )
