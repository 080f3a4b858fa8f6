"""Storage capability set used by generated routes."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

ID_FIELD = "_id"


class Store(ABC):
    """Abstract base class for collection stores.

    Routes only ever talk to this interface. Implementations must support:
    - Async single-record operations keyed by identifier
    - Equality filters expressed as dicts
    - Projections expressed as ``{field: 1|0}`` dicts
    - Offset/limit scans in the store's natural order

    Records are plain dicts with their identifier under ``_id`` as a string.
    Errors from the backend are raised, never swallowed.
    """

    async def initialize(self) -> None:
        """Prepare backend resources. Default is a no-op."""

    async def close(self) -> None:
        """Release backend resources. Default is a no-op."""

    @abstractmethod
    async def insert(self, collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new record.

        Args:
            collection: Collection name
            data: Record data

        Returns:
            Persisted record including its store-assigned identifier
        """

    @abstractmethod
    async def find_by_id(
        self,
        collection: str,
        id: str,
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        """Retrieve a record by identifier.

        Args:
            collection: Collection name
            id: Record identifier
            projection: Field visibility map, empty or None for all fields

        Returns:
            Record data or None if not found
        """

    @abstractmethod
    async def update_by_id(
        self,
        collection: str,
        id: str,
        data: Dict[str, Any],
        return_updated: bool = True,
    ) -> Optional[Dict[str, Any]]:
        """Apply a partial update to a record.

        Args:
            collection: Collection name
            id: Record identifier
            data: Fields to set
            return_updated: Return the record after the update instead of before

        Returns:
            Record data or None if not found
        """

    @abstractmethod
    async def delete_by_id(self, collection: str, id: str) -> Dict[str, Any]:
        """Delete a record by identifier.

        Returns:
            Result information, ``{"deleted_count": n}``
        """

    @abstractmethod
    async def count(
        self, collection: str, filter: Optional[Dict[str, Any]] = None
    ) -> int:
        """Count records matching an equality filter (empty for all)."""

    @abstractmethod
    async def find(
        self,
        collection: str,
        filter: Optional[Dict[str, Any]] = None,
        projection: Optional[Dict[str, int]] = None,
        limit: Optional[int] = None,
        skip: int = 0,
    ) -> List[Dict[str, Any]]:
        """Find records matching a filter.

        Args:
            collection: Collection name
            filter: Equality filter (empty dict or None for all records)
            projection: Field visibility map
            limit: Maximum number of records, None for no limit
            skip: Number of matching records to skip first

        Returns:
            List of matching records
        """
