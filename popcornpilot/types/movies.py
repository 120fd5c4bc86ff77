"""Catalog data models."""

from dataclasses import dataclass, field

POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"


@dataclass(frozen=True)
class MovieSummary:
    """A movie as returned by the catalog."""

    id: int
    title: str
    poster_path: str | None = None
    popularity: float = 0.0
    release_date: str | None = None
    vote_average: float | None = None
    original_language: str | None = None

    @property
    def poster_url(self) -> str | None:
        """Full poster image URL, or None when the catalog has no poster."""
        if not self.poster_path:
            return None
        return f"{POSTER_BASE_URL}{self.poster_path}"


@dataclass
class CatalogPage:
    """One page of catalog results."""

    results: list[MovieSummary] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0
    total_results: int = 0
