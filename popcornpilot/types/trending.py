"""Trending-related data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TrendRecord:
    """Search occurrences recorded for one search term."""

    search_term: str
    count: int
    movie_id: int
    poster_url: str | None
    title: str | None
    created_at: datetime
