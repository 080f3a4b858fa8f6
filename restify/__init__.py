"""
restify - CRUD routes for document-store models.

Given a model descriptor, restify generates seven REST routes that forward
to generic collection operations:

    POST   /{name}         insert
    GET    /{name}/{id}    find by id
    PUT    /{name}/{id}    update by id
    DELETE /{name}/{id}    delete by id
    GET    /{name}/count   count
    GET    /{name}/list    paginated scan
    GET    /{name}/find    filtered paginated scan

Main Exports:
    Routes:
        - ModelDescriptor: Shape and validation rules of a record type
        - build_routes: Generate the route descriptors of a model
        - RouteDescriptor, RouteRequest, RouteValidation

    Query helpers:
        - build_projection: ``fields`` query parameter to projection map
        - build_filter: query parameters to equality filter map

    Stores:
        - Store, JsonStore, MongoStore, create_store

    API:
        - RestifyRouter, create_app

Example:
    >>> from pydantic import BaseModel
    >>> from restify import ModelDescriptor, create_app
    >>>
    >>> class Widget(BaseModel):
    ...     title: str
    ...     price: float = 0
    >>>
    >>> app = create_app([ModelDescriptor.from_schema("widget", Widget)])
"""

__version__ = "0.1.0"

from . import exceptions
from .api import RestifyRouter, create_app
from .config import RestifyConfig, get_config, load_config
from .db import JsonStore, MongoStore, Store, create_store
from .logging_config import configure_logging
from .model import OBJECT_ID_PATTERN, ModelDescriptor
from .query import build_filter, build_projection
from .routes import RouteDescriptor, RouteRequest, RouteValidation, build_routes

__all__ = [
    "__version__",
    "exceptions",
    # Routes
    "ModelDescriptor",
    "OBJECT_ID_PATTERN",
    "RouteDescriptor",
    "RouteRequest",
    "RouteValidation",
    "build_routes",
    # Query helpers
    "build_projection",
    "build_filter",
    # Stores
    "Store",
    "JsonStore",
    "MongoStore",
    "create_store",
    # API
    "RestifyRouter",
    "create_app",
    # Configuration
    "RestifyConfig",
    "get_config",
    "load_config",
    "configure_logging",
]
