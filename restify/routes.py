"""Generation of the seven CRUD routes for a model.

``build_routes`` returns, in this order::

    POST   /{name}         create
    GET    /{name}/{id}    get by id
    PUT    /{name}/{id}    update by id
    DELETE /{name}/{id}    delete by id
    GET    /{name}/count   count matching records
    GET    /{name}/list    page through all records
    GET    /{name}/find    page through matching records

Every handler makes a single store call. A failure is written to the
injected logger and re-raised as :class:`StoreOperationError` wrapping the
original exception; nothing is retried.
"""

import logging
from dataclasses import dataclass, field
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    TypeVar,
)

from pydantic import BaseModel

from restify.db.store import Store
from restify.exceptions import StoreOperationError
from restify.model import ModelDescriptor
from restify.parameters import (
    DEFAULT_LIMIT,
    DEFAULT_OFFSET,
    filter_query_model,
    id_params_model,
    pagination_query_model,
    projection_query_model,
)
from restify.protocols import ErrorLogger
from restify.query import build_filter, build_projection

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RouteValidation:
    """Schemas a routing layer validates before calling a handler."""

    params: Optional[Type[BaseModel]] = None
    query: Optional[Type[BaseModel]] = None
    payload: Optional[Type[BaseModel]] = None


@dataclass(frozen=True)
class RouteRequest:
    """Validated inputs handed to a route handler."""

    params: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    payload: Optional[Dict[str, Any]] = None


Handler = Callable[[RouteRequest], Awaitable[Any]]


@dataclass(frozen=True)
class RouteDescriptor:
    """Binding of an HTTP method and path to a handler and its validation."""

    path: str
    method: str
    handler: Handler
    validation: RouteValidation
    description: str = ""
    tags: Tuple[str, ...] = ("api",)


async def _call_store(
    operation: str, call: Callable[[], Awaitable[T]], error_logger: ErrorLogger
) -> T:
    """Make a store call, logging and wrapping any failure."""
    try:
        return await call()
    except Exception as err:
        error_logger.error(err)
        raise StoreOperationError(err, operation=operation) from err


def _resolve_logger(error_logger: Optional[ErrorLogger]) -> ErrorLogger:
    if error_logger is None:
        return logger
    if not isinstance(error_logger, ErrorLogger):
        raise TypeError("error_logger must provide an error() method")
    return error_logger


def post_route(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> RouteDescriptor:
    """POST /name: create a record from the payload."""
    log = _resolve_logger(error_logger)

    async def post_handler(request: RouteRequest) -> Dict[str, Any]:
        data = dict(request.payload or {})
        return await _call_store(
            "insert", lambda: store.insert(model.collection, data), log
        )

    return RouteDescriptor(
        path=f"/{model.name}",
        method="POST",
        handler=post_handler,
        validation=RouteValidation(payload=model.payload_schema),
        description=f"Create new {model.title}",
    )


def get_route(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> RouteDescriptor:
    """GET /name/{id}: fetch one record, applying the ``fields`` projection."""
    log = _resolve_logger(error_logger)

    async def get_handler(request: RouteRequest) -> Optional[Dict[str, Any]]:
        projection = build_projection(model.fields, request.query.get("fields"))
        return await _call_store(
            "find_by_id",
            lambda: store.find_by_id(
                model.collection, request.params["id"], projection
            ),
            log,
        )

    return RouteDescriptor(
        path=f"/{model.name}/{{id}}",
        method="GET",
        handler=get_handler,
        validation=RouteValidation(
            params=id_params_model(model),
            query=projection_query_model(model),
        ),
        description=f"Get {model.title} instance by id",
    )


def put_route(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> RouteDescriptor:
    """PUT /name/{id}: partial update, returning the record after the update."""
    log = _resolve_logger(error_logger)

    async def put_handler(request: RouteRequest) -> Optional[Dict[str, Any]]:
        data = dict(request.payload or {})
        return await _call_store(
            "update_by_id",
            lambda: store.update_by_id(
                model.collection, request.params["id"], data, return_updated=True
            ),
            log,
        )

    return RouteDescriptor(
        path=f"/{model.name}/{{id}}",
        method="PUT",
        handler=put_handler,
        validation=RouteValidation(
            params=id_params_model(model),
            payload=model.payload_schema,
        ),
        description=f"Update {model.title} instance by id",
    )


def delete_route(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> RouteDescriptor:
    """DELETE /name/{id}: remove a record."""
    log = _resolve_logger(error_logger)

    async def delete_handler(request: RouteRequest) -> Dict[str, Any]:
        return await _call_store(
            "delete_by_id",
            lambda: store.delete_by_id(model.collection, request.params["id"]),
            log,
        )

    return RouteDescriptor(
        path=f"/{model.name}/{{id}}",
        method="DELETE",
        handler=delete_handler,
        validation=RouteValidation(params=id_params_model(model)),
        description=f"Delete {model.title} instance by id",
    )


def count_route(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> RouteDescriptor:
    """GET /name/count: count records matching the query string filter."""
    log = _resolve_logger(error_logger)

    async def count_handler(request: RouteRequest) -> int:
        query = build_filter(model.fields, request.query)
        return await _call_store(
            "count", lambda: store.count(model.collection, query), log
        )

    return RouteDescriptor(
        path=f"/{model.name}/count",
        method="GET",
        handler=count_handler,
        validation=RouteValidation(query=filter_query_model(model)),
        description=f"Return count instances in {model.title} model",
    )


def list_route(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> RouteDescriptor:
    """GET /name/list: page through the whole collection."""
    log = _resolve_logger(error_logger)

    async def list_handler(request: RouteRequest) -> List[Dict[str, Any]]:
        projection = build_projection(model.fields, request.query.get("fields"))
        return await _call_store(
            "find",
            lambda: store.find(
                model.collection,
                {},
                projection,
                limit=request.query.get("limit", DEFAULT_LIMIT),
                skip=request.query.get("offset", DEFAULT_OFFSET),
            ),
            log,
        )

    return RouteDescriptor(
        path=f"/{model.name}/list",
        method="GET",
        handler=list_handler,
        validation=RouteValidation(query=pagination_query_model(model)),
        description=f"Return list of {model.title} instances",
    )


def find_route(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> RouteDescriptor:
    """GET /name/find: page through records matching the query string filter."""
    log = _resolve_logger(error_logger)

    async def find_handler(request: RouteRequest) -> List[Dict[str, Any]]:
        query = build_filter(model.fields, request.query)
        projection = build_projection(model.fields, request.query.get("fields"))
        return await _call_store(
            "find",
            lambda: store.find(
                model.collection,
                query,
                projection,
                limit=request.query.get("limit", DEFAULT_LIMIT),
                skip=request.query.get("offset", DEFAULT_OFFSET),
            ),
            log,
        )

    return RouteDescriptor(
        path=f"/{model.name}/find",
        method="GET",
        handler=find_handler,
        validation=RouteValidation(query=filter_query_model(model, paginate=True)),
        description=f"Return list of {model.title} instances matching the query",
    )


def build_routes(
    model: ModelDescriptor, store: Store, error_logger: Optional[ErrorLogger] = None
) -> List[RouteDescriptor]:
    """Return the seven CRUD routes for a model.

    Args:
        model: Model descriptor
        store: Store the handlers call
        error_logger: Sink for failed store calls, defaults to this module's logger

    Returns:
        Route descriptors in fixed order: create, get, update, delete,
        count, list, find
    """
    return [
        post_route(model, store, error_logger),
        get_route(model, store, error_logger),
        put_route(model, store, error_logger),
        delete_route(model, store, error_logger),
        count_route(model, store, error_logger),
        list_route(model, store, error_logger),
        find_route(model, store, error_logger),
    ]


__all__ = [
    "Handler",
    "RouteDescriptor",
    "RouteRequest",
    "RouteValidation",
    "build_routes",
    "post_route",
    "get_route",
    "put_route",
    "delete_route",
    "count_route",
    "list_route",
    "find_route",
]
