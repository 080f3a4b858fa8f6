"""Logging setup for restify.

The ``restify`` logger is configured once at process start. Route handlers
receive their diagnostic sink explicitly (see :mod:`restify.protocols`); by
default that sink is the ``restify.routes`` child logger configured here.
"""

import logging
import traceback
from typing import Optional, Union

from restify.config import get_config
from restify.exceptions import RestifyError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _is_client_error(exc_value: Optional[BaseException]) -> bool:
    """Check if an exception maps to a 4xx response."""
    if isinstance(exc_value, RestifyError):
        return exc_value.status_code < 500
    return False


class KnownErrorFormatter(logging.Formatter):
    """Formatter that suppresses stack traces for client errors."""

    def formatException(self, ei):  # noqa: N802
        if not ei:
            return ""

        exc_type, exc_value, exc_tb = ei
        if _is_client_error(exc_value):
            return ""

        result = super().formatException(ei)
        if result:
            return result
        return "".join(traceback.format_exception(exc_type, exc_value, exc_tb))


class _RestifyHandler(logging.StreamHandler):
    """Marker type so repeated configuration does not stack handlers."""


def configure_logging(level: Optional[Union[str, int]] = None) -> logging.Logger:
    """Configure the ``restify`` logger.

    Safe to call more than once: the handler is installed a single time and
    later calls only adjust the level.

    Args:
        level: Level name or number; defaults to ``RESTIFY_LOG_LEVEL``

    Returns:
        The configured ``restify`` logger
    """
    if level is None:
        level = get_config().log_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("restify")
    logger.setLevel(level)

    if not any(isinstance(h, _RestifyHandler) for h in logger.handlers):
        handler = _RestifyHandler()
        handler.setFormatter(KnownErrorFormatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "KnownErrorFormatter", "LOG_FORMAT"]
