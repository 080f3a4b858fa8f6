"""MongoDB store implementation."""

import asyncio
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ReturnDocument

from restify.config import get_config

from .store import ID_FIELD, Store

# Connection options accepted from constructor kwargs
_VALID_CLIENT_PARAMS = {
    "maxPoolSize",
    "minPoolSize",
    "connectTimeoutMS",
    "socketTimeoutMS",
    "serverSelectionTimeoutMS",
    "retryWrites",
    "retryReads",
    "readPreference",
    "directConnection",
    "tz_aware",
}


def _to_object_id(id: Any) -> Any:
    """Convert an ObjectId-shaped string, leaving other identifiers as they are."""
    if isinstance(id, str) and ObjectId.is_valid(id):
        return ObjectId(id)
    return id


def _serialize(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if document is None:
        return None
    result = dict(document)
    if isinstance(result.get(ID_FIELD), ObjectId):
        result[ID_FIELD] = str(result[ID_FIELD])
    return result


class MongoStore(Store):
    """MongoDB-backed store using motor.

    The client is created lazily on first use and shared by all calls on the
    instance. pymongo errors propagate to the caller unchanged.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize MongoDB store.

        Args:
            **kwargs: ``uri``, ``db_name`` and client options passed to
                AsyncIOMotorClient
        """
        self._connection_kwargs = kwargs
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None
        self._lock: Optional[asyncio.Lock] = None

    async def initialize(self) -> None:
        """Connect eagerly and verify the server answers."""
        db = await self.get_db()
        await db.client.admin.command("ping")

    async def close(self) -> None:
        """Close the client connection."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None

    async def get_db(self) -> AsyncIOMotorDatabase:
        """Get the database handle, creating the client on first call."""
        if self._db is None:
            if self._lock is None:
                self._lock = asyncio.Lock()
            async with self._lock:
                if self._db is None:  # Double-check locking
                    config = get_config()
                    uri = self._connection_kwargs.get("uri") or config.mongodb_uri
                    db_name = (
                        self._connection_kwargs.get("db_name")
                        or config.mongodb_db_name
                    )
                    params = {
                        key: value
                        for key, value in self._connection_kwargs.items()
                        if key in _VALID_CLIENT_PARAMS
                    }
                    self._client = AsyncIOMotorClient(uri, **params)
                    self._db = self._client.get_database(db_name)

        assert self._db is not None
        return self._db

    async def _get_collection(self, collection: str) -> AsyncIOMotorCollection:
        """Get a collection handle.

        Raises:
            ValueError: If collection name is invalid
        """
        if not collection or not collection.replace("_", "").replace("-", "").isalnum():
            raise ValueError(f"Invalid collection name: {collection}")

        db = await self.get_db()
        return db[collection]

    async def insert(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        coll = await self._get_collection(collection)
        document = dict(data)
        if ID_FIELD in document:
            document[ID_FIELD] = _to_object_id(document[ID_FIELD])

        result = await coll.insert_one(document)
        document[ID_FIELD] = result.inserted_id
        return _serialize(document)  # type: ignore[return-value]

    async def find_by_id(
        self,
        collection: str,
        id: str,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        coll = await self._get_collection(collection)
        result = await coll.find_one({ID_FIELD: _to_object_id(id)}, projection or None)
        return _serialize(result)

    async def update_by_id(
        self,
        collection: str,
        id: str,
        data: Dict[str, Any],
        return_updated: bool = True,
    ) -> Optional[Dict[str, Any]]:
        changes = {k: v for k, v in data.items() if k != ID_FIELD}
        if not changes:
            # MongoDB rejects an empty $set
            return await self.find_by_id(collection, id)

        coll = await self._get_collection(collection)
        result = await coll.find_one_and_update(
            {ID_FIELD: _to_object_id(id)},
            {"$set": changes},
            return_document=(
                ReturnDocument.AFTER if return_updated else ReturnDocument.BEFORE
            ),
        )
        return _serialize(result)

    async def delete_by_id(self, collection: str, id: str) -> Dict[str, Any]:
        coll = await self._get_collection(collection)
        result = await coll.delete_one({ID_FIELD: _to_object_id(id)})
        return {"deleted_count": result.deleted_count}

    async def count(
        self, collection: str, filter: Optional[Dict[str, Any]] = None
    ) -> int:
        coll = await self._get_collection(collection)
        return int(await coll.count_documents(filter or {}))

    async def find(
        self,
        collection: str,
        filter: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, int]] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        coll = await self._get_collection(collection)
        cursor = coll.find(filter or {}, projection or None)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [_serialize(doc) async for doc in cursor]  # type: ignore[misc]
