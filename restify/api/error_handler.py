"""Serialization of restify errors into HTTP responses."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from restify.exceptions import RestifyError

logger = logging.getLogger(__name__)


class APIErrorHandler:
    """Turns :class:`RestifyError` into JSON error responses.

    Store failures were already written to the route's diagnostic logger,
    so they are only logged here at DEBUG level.
    """

    @staticmethod
    async def handle_exception(request: Request, exc: Exception) -> JSONResponse:
        """Build the response for a restify error.

        Args:
            request: FastAPI request object
            exc: Exception that occurred

        Returns:
            JSONResponse with error details
        """
        if not isinstance(exc, RestifyError):
            raise exc

        logger.debug(
            f"API Error [{exc.error_code}]: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "status_code": exc.status_code,
                "path": request.url.path,
                "method": request.method,
            },
        )

        response_data = await exc.to_dict()
        response_data["timestamp"] = datetime.now(timezone.utc).isoformat()
        response_data["path"] = request.url.path
        return JSONResponse(status_code=exc.status_code, content=response_data)


def install_error_handler(app: FastAPI) -> None:
    """Register the restify error handler on an application."""
    app.add_exception_handler(RestifyError, APIErrorHandler.handle_exception)


__all__ = ["APIErrorHandler", "install_error_handler"]
