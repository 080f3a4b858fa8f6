"""JSON file-based store implementation."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from bson import ObjectId

from .query import QueryEngine
from .store import ID_FIELD, Store


class JsonStore(Store):
    """Store keeping one JSON file per record.

    Records live in ``<base_path>/<collection>/<id>.json``. New identifiers
    are ObjectId hex strings, so the default identifier pattern applies to
    this store as well as to MongoDB.
    """

    def __init__(self, base_path: str = "restify_data") -> None:
        """Initialize JSON store.

        Args:
            base_path: Base directory for JSON files
        """
        self.base_path = Path(base_path).resolve()
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Cannot create store directory {base_path}: {e}") from e
        self._lock: Optional[asyncio.Lock] = None  # Lazy initialization

    def _get_lock(self) -> asyncio.Lock:
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    def _get_collection_path(self, collection: str) -> Path:
        """Get path for collection directory.

        Raises:
            ValueError: If collection name is invalid
            RuntimeError: If directory cannot be created
        """
        if not collection or "/" in collection or "\\" in collection:
            raise ValueError(f"Invalid collection name: {collection}")

        path = self.base_path / collection
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Cannot create collection directory {path}: {e}") from e
        return path

    def _get_file_path(self, collection: str, id: str) -> Path:
        """Get file path for a record.

        Raises:
            ValueError: If id contains invalid characters
        """
        if not id or "/" in id or "\\" in id or id.startswith("."):
            raise ValueError(f"Invalid record ID: {id}")

        return self._get_collection_path(collection) / f"{id}.json"

    def _read(self, file_path: Path) -> Optional[Dict[str, Any]]:
        if not file_path.exists():
            return None
        with open(file_path, "r", encoding="utf-8") as f:
            doc = json.load(f)
        return doc if isinstance(doc, dict) else None

    def _write(self, file_path: Path, data: Dict[str, Any]) -> None:
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise RuntimeError(f"Cannot write to file {file_path}: {e}") from e
        except (TypeError, ValueError) as e:
            raise RuntimeError(f"Cannot serialize data to JSON: {e}") from e

    async def insert(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a record, assigning an identifier when it has none.

        Raises:
            RuntimeError: If the identifier is taken or the file cannot be written
        """
        record = dict(data)
        record[ID_FIELD] = str(record.get(ID_FIELD) or ObjectId())

        file_path = self._get_file_path(collection, record[ID_FIELD])
        async with self._get_lock():
            if file_path.exists():
                raise RuntimeError(
                    f"Duplicate record ID {record[ID_FIELD]} in {collection}"
                )
            self._write(file_path, record)
        return record

    async def find_by_id(
        self,
        collection: str,
        id: str,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        file_path = self._get_file_path(collection, id)
        async with self._get_lock():
            doc = self._read(file_path)
        if doc is None:
            return None
        return QueryEngine.project(doc, projection)

    async def update_by_id(
        self,
        collection: str,
        id: str,
        data: Dict[str, Any],
        return_updated: bool = True,
    ) -> Optional[Dict[str, Any]]:
        file_path = self._get_file_path(collection, id)
        changes = {k: v for k, v in data.items() if k != ID_FIELD}

        async with self._get_lock():
            doc = self._read(file_path)
            if doc is None:
                return None
            before = dict(doc)
            doc.update(changes)
            self._write(file_path, doc)

        return doc if return_updated else before

    async def delete_by_id(self, collection: str, id: str) -> Dict[str, Any]:
        file_path = self._get_file_path(collection, id)
        async with self._get_lock():
            if not file_path.exists():
                return {"deleted_count": 0}
            file_path.unlink()
        return {"deleted_count": 1}

    async def _scan(
        self, collection: str, filter: Optional[Dict[str, Any]]
    ) -> List[Dict[str, Any]]:
        """Load matching records in file name order."""
        collection_path = self._get_collection_path(collection)

        results = []
        async with self._get_lock():
            for file_path in sorted(collection_path.glob("*.json")):
                try:
                    doc = self._read(file_path)
                except json.JSONDecodeError:
                    # Skip files that are not valid JSON
                    continue
                if doc is not None and QueryEngine.match(doc, filter):
                    results.append(doc)
        return results

    async def count(
        self, collection: str, filter: Optional[Dict[str, Any]] = None
    ) -> int:
        return len(await self._scan(collection, filter))

    async def find(
        self,
        collection: str,
        filter: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, int]] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        docs = await self._scan(collection, filter)
        end = skip + limit if limit else None
        return [QueryEngine.project(doc, projection) for doc in docs[skip:end]]
