"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class CredentialsRejectedError(AuthenticationError):
    """Raised by the in-memory auth backend when credentials are refused."""

    def __init__(self, message: str = "Invalid login credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class UserAlreadyExistsError(AuthenticationError):
    """Raised by the in-memory auth backend on duplicate sign-up."""

    def __init__(self, email: str):
        super().__init__(
            "User already registered",
            code="USER_EXISTS",
            details={"email": email},
        )


class ProfileLoadError(ExternalServiceError):
    """Raised when a profile lookup fails for a reason other than "not found"."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            f"Failed to load profile for {user_id}: {reason}",
            service="profiles",
            code="PROFILE_LOAD_FAILED",
            details={"user_id": user_id},
        )


class ProfileWriteError(ExternalServiceError):
    """Raised when a profile upsert fails."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            reason,
            service="profiles",
            code="PROFILE_WRITE_FAILED",
            details={"user_id": user_id},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when user lacks required permissions."""

    def __init__(self, required_role: str, user_role: str):
        super().__init__(
            f"Insufficient permissions. Required: {required_role}, has: {user_role}",
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )
