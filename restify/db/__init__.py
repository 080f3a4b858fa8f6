"""Store package for restify.

Provides the storage capability set consumed by generated routes, with
JSON file and MongoDB implementations and a registry-based factory.
"""

from .factory import (
    create_store,
    list_store_types,
    register_store_type,
    unregister_store_type,
)
from .jsonstore import JsonStore
from .mongostore import MongoStore
from .query import QueryEngine
from .store import ID_FIELD, Store

__all__ = [
    "ID_FIELD",
    "Store",
    "QueryEngine",
    "JsonStore",
    "MongoStore",
    "create_store",
    "register_store_type",
    "unregister_store_type",
    "list_store_types",
]
