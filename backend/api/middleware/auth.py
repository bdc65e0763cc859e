"""
JWT Authentication middleware.

Validates Supabase JWT tokens and resolves application roles from the
caller's profile.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.auth.exceptions import InsufficientPermissionsError, ProfileLoadError
from modules.auth.interfaces import IAuthService
from modules.auth.models import UserProfile, UserRole

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    try:
        return await auth.validate_token(credentials.credentials)
    except AuthenticationError as e:
        raise AuthError(e.message)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    if credentials is None:
        return None

    try:
        return await auth.validate_token(credentials.credentials)
    except AuthenticationError:
        return None


async def get_current_admin(
    user: AuthenticatedUser = Depends(get_current_user),
    auth: IAuthService = Depends(get_auth_service),
) -> UserProfile:
    """
    Dependency that requires an authenticated user whose profile role is admin.

    Returns the admin's profile.
    """
    try:
        return await auth.require_role(user.id, UserRole.ADMIN.value)
    except InsufficientPermissionsError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    except ProfileLoadError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="User profile is temporarily unavailable",
        )


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireAdmin = Depends(get_current_admin)
