"""Exception classes for restify.

All errors raised by restify derive from :class:`RestifyError`, which carries
an error code, an HTTP status code and optional details so the API layer can
serialize it without inspecting the concrete type.
"""

from typing import Any, Dict, Optional


class RestifyError(Exception):
    """Base class for restify errors."""

    default_error_code = "restify_error"
    default_status_code = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human readable error message
            error_code: Machine readable error code
            status_code: HTTP status code used when the error reaches a response
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.status_code = status_code or self.default_status_code
        self.details = details or {}

    async def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for a JSON response body."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details or None,
        }


class StoreOperationError(RestifyError):
    """A store call made by a route handler failed.

    The wrapped exception is kept verbatim in ``original``. When it exposes
    an integer ``status_code`` that status is forwarded, otherwise 500.
    """

    default_error_code = "store_operation_failed"

    def __init__(self, original: BaseException, *, operation: str = "") -> None:
        status_code = getattr(original, "status_code", None)
        if not isinstance(status_code, int):
            status_code = None
        details: Dict[str, Any] = {"error_type": type(original).__name__}
        if operation:
            details["operation"] = operation
        super().__init__(str(original), status_code=status_code, details=details)
        self.original = original
        self.operation = operation


class InvalidModelError(RestifyError):
    """A model descriptor cannot be turned into routes."""

    default_error_code = "invalid_model"


class InvalidConfigurationError(RestifyError):
    """Configuration value is missing or not supported."""

    default_error_code = "invalid_configuration"

    def __init__(
        self,
        setting: str,
        value: Any,
        reason: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.setting = setting
        self.value = value
        super().__init__(
            f"Invalid {setting} '{value}': {reason}",
            details={"setting": setting, **(details or {})},
        )


__all__ = [
    "RestifyError",
    "StoreOperationError",
    "InvalidModelError",
    "InvalidConfigurationError",
]
