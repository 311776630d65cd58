"""
MongoDB async database connection using Motor.
Provides the connection manager and the document store handed to services.
"""

import logging
from datetime import datetime
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ReturnDocument

from .config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

SortSpec = Sequence[Tuple[str, int]]


def to_object_id(doc_id: str) -> Optional[ObjectId]:
    """Parse a string id, returning None when it is not a valid ObjectId."""
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError):
        return None


def _stringify(doc: Optional[dict]) -> Optional[dict]:
    if doc is not None:
        doc["_id"] = str(doc["_id"])
    return doc


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Connect to MongoDB."""
        # Datetimes come back aware and converted to the reporting zone
        cls.client = AsyncIOMotorClient(
            settings.MONGODB_URL,
            tz_aware=True,
            tzinfo=settings.tz
        )
        cls.db = cls.client[settings.DATABASE_NAME]

        # Verify connection
        await cls.client.admin.command('ping')
        logger.info("Connected to MongoDB: %s", settings.DATABASE_NAME)

        await cls._create_indexes()

    @classmethod
    async def disconnect(cls):
        """Disconnect from MongoDB."""
        if cls.client:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("Disconnected from MongoDB")

    @classmethod
    async def _create_indexes(cls):
        """Create database indexes for the dashboard's queries."""
        if cls.db is None:
            return

        await cls.db.admins.create_index("email", unique=True)

        await cls.db.queues.create_index("status")
        await cls.db.queues.create_index("joinedOn")
        await cls.db.queues.create_index("completedOn")
        await cls.db.queues.create_index("teller")

        await cls.db.logs.create_index("timestamp")
        await cls.db.reviews.create_index("time")

        logger.info("Database indexes created")


class DocumentStore:
    """
    Data-access client over a Motor database.

    Services receive a store instead of reaching for the global connection,
    so they can run against any object exposing the same coroutines.
    Returned documents always carry their ``_id`` as a string.
    """

    def __init__(self, db: AsyncIOMotorDatabase, tz=None):
        self.db = db
        self.tz = tz or settings.tz

    def now(self) -> datetime:
        return datetime.now(self.tz)

    async def find(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None
    ) -> List[dict]:
        cursor = self.db[collection].find(query or {})
        if sort:
            cursor = cursor.sort(list(sort))
        if limit:
            cursor = cursor.limit(limit)

        result = []
        async for doc in cursor:
            result.append(_stringify(doc))
        return result

    async def find_one(self, collection: str, query: Dict[str, Any]) -> Optional[dict]:
        doc = await self.db[collection].find_one(query)
        return _stringify(doc)

    async def get(self, collection: str, doc_id: str) -> Optional[dict]:
        object_id = to_object_id(doc_id)
        if object_id is None:
            return None
        return await self.find_one(collection, {"_id": object_id})

    async def get_many(self, collection: str, doc_ids: Iterable[str]) -> Dict[str, dict]:
        """Fetch several documents in one round trip, keyed by id."""
        object_ids = [oid for oid in map(to_object_id, set(doc_ids)) if oid is not None]
        if not object_ids:
            return {}
        docs = await self.find(collection, {"_id": {"$in": object_ids}})
        return {doc["_id"]: doc for doc in docs}

    async def count(self, collection: str, query: Optional[Dict[str, Any]] = None) -> int:
        return await self.db[collection].count_documents(query or {})

    async def insert(
        self,
        collection: str,
        doc: Dict[str, Any],
        timestamp_field: Optional[str] = "createdOn"
    ) -> dict:
        """Insert a document, stamping it with the current time."""
        doc = dict(doc)
        if timestamp_field:
            doc[timestamp_field] = self.now()
        result = await self.db[collection].insert_one(doc)
        doc["_id"] = str(result.inserted_id)
        return doc

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[dict]:
        """Set whole fields on a document and return the updated document."""
        object_id = to_object_id(doc_id)
        if object_id is None:
            return None
        result = await self.db[collection].find_one_and_update(
            {"_id": object_id},
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return _stringify(result)

    async def upsert(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        """Set fields on the document with ``doc_id``, creating it if missing."""
        object_id = to_object_id(doc_id)
        if object_id is None:
            raise ValueError(f"Invalid document id: {doc_id}")
        await self.db[collection].update_one({"_id": object_id}, {"$set": fields}, upsert=True)

    async def watch(
        self,
        collection: str,
        query: Optional[Dict[str, Any]] = None,
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None
    ) -> AsyncIterator[List[dict]]:
        """
        Live variant of ``find``.

        Yields the full matching set once, then again after every change to
        the collection. Requires a replica set (MongoDB change streams).
        """
        async with self.db[collection].watch() as stream:
            yield await self.find(collection, query, sort, limit)
            async for _change in stream:
                yield await self.find(collection, query, sort, limit)


# Convenience function for dependency injection
async def get_database() -> AsyncIOMotorDatabase:
    """Return the connected database, connecting lazily."""
    if Database.db is None:
        await Database.connect()
    return Database.db
