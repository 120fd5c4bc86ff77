"""
MongoDB trend store using Motor (async driver).

One document per search term in a collection with a unique index on
``search_term``, created on the first store call. Counting relies on MongoDB's single-document atomicity:
``$inc`` and ``$setOnInsert`` are applied in one upsert, so the counter is
never read and written back by this process.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, PyMongoError

from popcornpilot.config import Settings
from popcornpilot.exceptions import AggregationError
from popcornpilot.logging import get_logger, mask_sensitive_data
from popcornpilot.types.movies import MovieSummary
from popcornpilot.types.trending import TrendRecord

logger = get_logger("trending")

_RANKING = [("count", DESCENDING), ("created_at", ASCENDING), ("_id", ASCENDING)]


class MongoTrendStore:
    """
    Trend store backed by a MongoDB collection.

    Example:
        ```python
        store = MongoTrendStore.from_settings(settings)
        await store.upsert_increment("dune", movie)
        top = await store.list_top_trending(5)
        ```
    """

    def __init__(
        self,
        collection: AsyncIOMotorCollection,
        client: AsyncIOMotorClient | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            collection: Collection holding one document per search term
            client: Owning Motor client, closed by ``close()`` when given
        """
        self._collection = collection
        self._client = client
        self._indexes_ready = False
        self._index_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoTrendStore":
        """
        Connect to the MongoDB instance named by ``settings.mongo_uri``.

        Motor connects lazily, so an unreachable server shows up as an
        AggregationError on the first store call rather than here.
        """
        if not settings.mongo_uri:
            raise ValueError("settings.mongo_uri is required for MongoTrendStore")
        logger.info("Using MongoDB trend store at %s", mask_sensitive_data(settings.mongo_uri))
        client = AsyncIOMotorClient(
            settings.mongo_uri,
            # Fail fast; the default is 30s
            serverSelectionTimeoutMS=5000,
            tz_aware=True,
        )
        collection = client[settings.mongo_db][settings.mongo_collection]
        return cls(collection, client=client)

    async def ensure_indexes(self) -> None:
        """Create the unique term index and the ranking index."""
        try:
            await self._collection.create_index(
                [("search_term", ASCENDING)], unique=True, name="search_term_unique"
            )
            await self._collection.create_index(
                [("count", DESCENDING), ("created_at", ASCENDING)], name="trending_rank"
            )
        except PyMongoError as e:
            raise AggregationError("STORE_INDEX_FAILED", str(e)) from e
        self._indexes_ready = True

    async def _prepare(self) -> None:
        # Runs before the first read or write; retried on later calls until it succeeds
        if self._indexes_ready:
            return
        async with self._index_lock:
            if self._indexes_ready:
                return
            try:
                await self.ensure_indexes()
            except AggregationError as e:
                logger.warning("Failed to create trend store indexes: %s", e)

    async def upsert_increment(self, term: str, movie: MovieSummary) -> None:
        """
        Create the record for ``term`` with count 1, or increment its count.

        The representative movie is only written on insert, so the first
        movie seen for a term is kept.

        Raises:
            AggregationError: If the write fails
        """
        await self._prepare()
        update = {
            "$inc": {"count": 1},
            "$setOnInsert": {
                "movie_id": movie.id,
                "poster_url": movie.poster_url,
                "title": movie.title,
                "created_at": datetime.now(timezone.utc),
            },
        }

        # Two concurrent first upserts can both miss and race on the unique
        # index; the loser succeeds as a plain increment on the second try.
        for attempt in range(2):
            try:
                await self._collection.update_one({"search_term": term}, update, upsert=True)
                return
            except DuplicateKeyError as e:
                if attempt:
                    raise AggregationError("STORE_WRITE_FAILED", str(e)) from e
                logger.debug("Duplicate key on first upsert of %r, retrying as increment", term)
            except PyMongoError as e:
                raise AggregationError("STORE_WRITE_FAILED", str(e)) from e

    async def list_top_trending(self, limit: int) -> list[TrendRecord]:
        """
        Return at most ``limit`` records, highest count first.

        Ties go to the record created first.

        Raises:
            AggregationError: If the read fails
        """
        if limit <= 0:
            return []
        await self._prepare()
        try:
            cursor = self._collection.find({}).sort(_RANKING).limit(limit)
            documents = await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise AggregationError("STORE_READ_FAILED", str(e)) from e
        return [_to_record(document) for document in documents]

    async def close(self) -> None:
        """Close the owned Motor client, if any."""
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")


def _to_record(document: dict[str, Any]) -> TrendRecord:
    return TrendRecord(
        search_term=document["search_term"],
        count=int(document["count"]),
        movie_id=int(document["movie_id"]),
        poster_url=document.get("poster_url"),
        title=document.get("title"),
        created_at=document["created_at"],
    )