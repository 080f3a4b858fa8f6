"""Mounting of route descriptors on a FastAPI router."""

import inspect
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel
from typing_extensions import Annotated

from restify.db.store import Store
from restify.model import ModelDescriptor
from restify.protocols import ErrorLogger
from restify.routes import RouteDescriptor, RouteRequest, build_routes

logger = logging.getLogger(__name__)


class BaseRouter:
    """Base router class wrapping an APIRouter."""

    def __init__(self) -> None:
        self.router = APIRouter()

    def add_route(
        self,
        path: str,
        endpoint: Any,
        methods: Optional[List[str]] = None,
        **kwargs: Any,
    ) -> None:
        """Add a route to the router.

        Args:
            path: URL path for the endpoint
            endpoint: Endpoint handler function
            methods: HTTP methods (defaults to ["GET"])
            **kwargs: Additional FastAPI route parameters
        """
        if methods is None:
            methods = ["GET"]

        self.router.add_api_route(
            path=path,
            endpoint=endpoint,
            methods=methods,
            **kwargs,
        )


def _field_pattern(model: type, name: str) -> Optional[str]:
    """Read the ``pattern`` constraint of a model field, if any."""
    for item in model.model_fields[name].metadata:  # type: ignore[attr-defined]
        pattern = getattr(item, "pattern", None)
        if pattern:
            return str(pattern)
    return None


class RestifyRouter(BaseRouter):
    """Router exposing generated model routes through FastAPI.

    Each descriptor becomes one FastAPI route whose signature is built from
    the descriptor's validation schemas, so FastAPI validates path, query
    and body before the handler runs.
    """

    def add_model(
        self,
        model: ModelDescriptor,
        store: Store,
        error_logger: Optional[ErrorLogger] = None,
        **kwargs: Any,
    ) -> List[RouteDescriptor]:
        """Generate and register the seven routes of a model.

        Static paths (``/count``, ``/list``, ``/find``) are registered before
        the ``/{id}`` paths so they are matched first.

        Args:
            model: Model descriptor
            store: Store the handlers call
            error_logger: Sink for failed store calls
            **kwargs: Additional FastAPI route parameters

        Returns:
            The generated descriptors in their canonical order
        """
        routes = build_routes(model, store, error_logger)
        for route in sorted(routes, key=lambda r: "{id}" in r.path):
            self.add_descriptor(route, **kwargs)

        logger.debug(f"Registered {len(routes)} routes for model '{model.name}'")
        return routes

    def add_descriptor(self, route: RouteDescriptor, **kwargs: Any) -> None:
        """Register a single route descriptor."""
        endpoint = self._build_endpoint(route)
        kwargs.setdefault("tags", list(route.tags))
        self.add_route(
            path=route.path,
            endpoint=endpoint,
            methods=[route.method],
            description=route.description,
            summary=route.description,
            response_model=None,
            **kwargs,
        )

    def _build_endpoint(self, route: RouteDescriptor) -> Any:
        """Create a FastAPI endpoint for a descriptor."""
        validation = route.validation
        partial = route.method == "PUT"

        param_names: List[str] = []
        sig_params = []

        if validation.params is not None:
            for name, field_info in validation.params.model_fields.items():
                param_names.append(name)
                sig_params.append(
                    inspect.Parameter(
                        name,
                        inspect.Parameter.KEYWORD_ONLY,
                        annotation=Annotated[
                            field_info.annotation,
                            Path(
                                pattern=_field_pattern(validation.params, name),
                                description=field_info.description,
                            ),
                        ],
                    )
                )

        if validation.query is not None:
            sig_params.append(
                inspect.Parameter(
                    "query",
                    inspect.Parameter.KEYWORD_ONLY,
                    annotation=Annotated[validation.query, Query()],  # type: ignore[valid-type]
                )
            )

        if validation.payload is not None:
            sig_params.append(
                inspect.Parameter(
                    "payload",
                    inspect.Parameter.KEYWORD_ONLY,
                    annotation=validation.payload,
                )
            )

        async def endpoint(**kwargs: Any) -> Any:
            query: Optional[BaseModel] = kwargs.get("query")
            payload: Optional[BaseModel] = kwargs.get("payload")

            query_values: Dict[str, Any] = {}
            if query is not None:
                query_values = query.model_dump()

            payload_values: Optional[Dict[str, Any]] = None
            if payload is not None:
                payload_values = payload.model_dump(mode="json", exclude_unset=partial)

            request = RouteRequest(
                params={name: kwargs[name] for name in param_names},
                query=query_values,
                payload=payload_values,
            )
            return await route.handler(request)

        # Expose the validated inputs to FastAPI through the signature
        endpoint.__signature__ = inspect.Signature(parameters=sig_params)  # type: ignore[attr-defined]
        endpoint.__name__ = route.handler.__name__

        return endpoint


__all__ = ["BaseRouter", "RestifyRouter"]
