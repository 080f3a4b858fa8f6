"""Protocol definitions for restify collaborators."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ErrorLogger(Protocol):
    """Diagnostic sink handed to route handlers.

    Any object with an ``error`` method qualifies, including
    :class:`logging.Logger`.
    """

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        """Record a failed store call."""
        ...


__all__ = ["ErrorLogger"]
