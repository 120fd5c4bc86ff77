"""Trend store implementations."""

from popcornpilot.stores.memory import InMemoryTrendStore
from popcornpilot.stores.mongo import MongoTrendStore

__all__ = [
    "InMemoryTrendStore",
    "MongoTrendStore",
]
