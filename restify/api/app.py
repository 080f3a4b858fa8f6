"""FastAPI application assembly for restify models."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable, Optional

from fastapi import FastAPI

from restify.db.factory import create_store
from restify.db.store import Store
from restify.logging_config import configure_logging
from restify.model import ModelDescriptor
from restify.protocols import ErrorLogger

from .error_handler import install_error_handler
from .router import RestifyRouter

logger = logging.getLogger(__name__)


def create_app(
    models: Iterable[ModelDescriptor],
    store: Optional[Store] = None,
    error_logger: Optional[ErrorLogger] = None,
    prefix: str = "",
    **app_kwargs: Any,
) -> FastAPI:
    """Create a FastAPI application serving the CRUD routes of some models.

    Args:
        models: Model descriptors to expose
        store: Store shared by all routes, defaults to ``create_store()``
        error_logger: Sink for failed store calls
        prefix: Path prefix for every generated route
        **app_kwargs: Passed to ``FastAPI``

    Returns:
        Configured FastAPI application
    """
    configure_logging()

    if store is None:
        store = create_store()
    app_store = store

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app_store.initialize()
        try:
            yield
        finally:
            await app_store.close()

    app_kwargs.setdefault("title", "restify API")
    app = FastAPI(lifespan=lifespan, **app_kwargs)

    restify_router = RestifyRouter()
    for model in models:
        restify_router.add_model(model, app_store, error_logger)
        logger.info(f"Serving model '{model.name}' at {prefix}/{model.name}")

    app.include_router(restify_router.router, prefix=prefix)
    install_error_handler(app)
    return app


__all__ = ["create_app"]
