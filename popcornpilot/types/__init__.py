"""PopcornPilot type definitions.

This module exports all data model types used by the package.
"""

from popcornpilot.types.movies import POSTER_BASE_URL, CatalogPage, MovieSummary
from popcornpilot.types.search import Error, Idle, Loading, SearchOutcome, Success
from popcornpilot.types.trending import TrendRecord

__all__ = [
    # Catalog types
    "MovieSummary",
    "CatalogPage",
    "POSTER_BASE_URL",
    # Search outcome states
    "SearchOutcome",
    "Idle",
    "Loading",
    "Success",
    "Error",
    # Trending types
    "TrendRecord",
]
