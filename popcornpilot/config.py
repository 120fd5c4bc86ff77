"""
PopcornPilot configuration.

Settings are read from environment variables. Only malformed values are
errors: a missing API key is allowed so a session can still start, and the
catalog then reports authentication failures on every request.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from popcornpilot.exceptions import ConfigurationError
from popcornpilot.logging import get_logger

logger = get_logger()

DEFAULT_BASE_URL = "https://api.themoviedb.org/3"
DEFAULT_TIMEOUT = 10.0
DEFAULT_DEBOUNCE_MS = 500
DEFAULT_TRENDING_LIMIT = 5
DEFAULT_MONGO_DB = "popcornpilot"
DEFAULT_MONGO_COLLECTION = "metrics"


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for a search session."""

    api_key: str | None = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    trending_limit: int = DEFAULT_TRENDING_LIMIT
    mongo_uri: str | None = None
    mongo_db: str = DEFAULT_MONGO_DB
    mongo_collection: str = DEFAULT_MONGO_COLLECTION

    @property
    def debounce_interval(self) -> float:
        """Debounce quiet interval in seconds."""
        return self.debounce_ms / 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Create settings from environment variables.

        Environment variables:
            TMDB_API_KEY: TMDB API key (optional; VITE_TMDB_API_KEY is also accepted)
            POPCORNPILOT_API_BASE_URL: Catalog base URL (default: https://api.themoviedb.org/3)
            POPCORNPILOT_TIMEOUT: Request timeout in seconds (default: 10)
            POPCORNPILOT_DEBOUNCE_MS: Debounce quiet interval in milliseconds (default: 500)
            POPCORNPILOT_TRENDING_LIMIT: Size of the trending view (default: 5)
            POPCORNPILOT_MONGO_URI: MongoDB URI for the trend store (optional)
            POPCORNPILOT_MONGO_DB: MongoDB database name (default: popcornpilot)
            POPCORNPILOT_MONGO_COLLECTION: MongoDB collection name (default: metrics)

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed or is out of range
        """
        env = os.environ if environ is None else environ

        api_key = env.get("TMDB_API_KEY") or env.get("VITE_TMDB_API_KEY") or None
        if api_key is None:
            logger.warning(
                "TMDB_API_KEY is not set; catalog requests will fail until it is configured"
            )

        return cls(
            api_key=api_key,
            base_url=env.get("POPCORNPILOT_API_BASE_URL", DEFAULT_BASE_URL),
            timeout=_parse_number(env, "POPCORNPILOT_TIMEOUT", float, DEFAULT_TIMEOUT),
            debounce_ms=_parse_number(env, "POPCORNPILOT_DEBOUNCE_MS", int, DEFAULT_DEBOUNCE_MS),
            trending_limit=_parse_number(
                env, "POPCORNPILOT_TRENDING_LIMIT", int, DEFAULT_TRENDING_LIMIT
            ),
            mongo_uri=env.get("POPCORNPILOT_MONGO_URI") or None,
            mongo_db=env.get("POPCORNPILOT_MONGO_DB", DEFAULT_MONGO_DB),
            mongo_collection=env.get("POPCORNPILOT_MONGO_COLLECTION", DEFAULT_MONGO_COLLECTION),
        )


def _parse_number(env, name, kind, default):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid {name}: {raw!r} is not a number") from e
    if value < 0:
        raise ConfigurationError(f"Invalid {name}: {raw!r} must not be negative")
    return value
