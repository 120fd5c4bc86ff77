"""PopcornPilot - debounced movie search with a trending view."""

from popcornpilot.async_client import AsyncTMDBClient
from popcornpilot.config import Settings
from popcornpilot.debounce import Debouncer
from popcornpilot.exceptions import (
    AggregationError,
    AuthenticationError,
    ConfigurationError,
    LogicalError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    PopcornPilotError,
    RateLimitedError,
    RequestRejectedError,
    RequestTimeoutError,
    ServerError,
    TransportError,
)
from popcornpilot.logging import configure_logging, get_logger
from popcornpilot.orchestrator import GENERIC_ERROR_MESSAGE, FetchOrchestrator
from popcornpilot.session import SearchSession
from popcornpilot.stores import InMemoryTrendStore, MongoTrendStore
from popcornpilot.trending import TrendingAggregator
from popcornpilot.types import (
    CatalogPage,
    Error,
    Idle,
    Loading,
    MovieSummary,
    SearchOutcome,
    Success,
    TrendRecord,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Session
    "SearchSession",
    "Debouncer",
    "FetchOrchestrator",
    "TrendingAggregator",
    "GENERIC_ERROR_MESSAGE",
    # Catalog client
    "AsyncTMDBClient",
    # Trend stores
    "InMemoryTrendStore",
    "MongoTrendStore",
    # Configuration
    "Settings",
    # Types
    "MovieSummary",
    "CatalogPage",
    "SearchOutcome",
    "Idle",
    "Loading",
    "Success",
    "Error",
    "TrendRecord",
    # Exceptions
    "PopcornPilotError",
    "ConfigurationError",
    "TransportError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitedError",
    "ServerError",
    "RequestRejectedError",
    "NetworkError",
    "RequestTimeoutError",
    "MalformedResponseError",
    "LogicalError",
    "AggregationError",
    # Logging
    "configure_logging",
    "get_logger",
]
