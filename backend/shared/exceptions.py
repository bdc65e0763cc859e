"""
Base exception classes for the Stockline backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class StocklineError(Exception):
    """
    Base exception for all Stockline errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(StocklineError):
    """Resource not found."""

    pass


class ValidationError(StocklineError):
    """Input validation failed."""

    pass


class AuthenticationError(StocklineError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(StocklineError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(StocklineError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


def error_message(exc: BaseException) -> str:
    """
    Best human-readable message for an exception.

    Supabase/PostgREST and auth errors carry a ``message`` attribute;
    everything else falls back to ``str()``.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__
