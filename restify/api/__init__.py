"""FastAPI integration for restify."""

from .app import create_app
from .error_handler import APIErrorHandler, install_error_handler
from .router import BaseRouter, RestifyRouter

__all__ = [
    "create_app",
    "APIErrorHandler",
    "install_error_handler",
    "BaseRouter",
    "RestifyRouter",
]
