"""
Authentication service implementation.

Validates Supabase JWT tokens and enforces profile-based roles.
"""

from datetime import datetime, timezone
from typing import Optional
import jwt

from shared.config import get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAuthService, IProfileStore
from .models import UserProfile, JWTPayload
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InsufficientPermissionsError,
)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the injected
    profile store for role lookups.
    """

    def __init__(self, profiles: IProfileStore):
        self._settings = get_settings()
        self._profiles = profiles

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise InvalidTokenError("Server authentication not configured")

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )

            jwt_payload = JWTPayload(**payload)

            return AuthenticatedUser(
                id=jwt_payload.sub,
                email=jwt_payload.email or "",
                email_verified=jwt_payload.email_confirmed_at is not None,
                last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
                access_token=token,
            )

        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a user's profile by their ID.

        Raises ProfileLoadError for lookup failures other than "not found".
        """
        return self._profiles.get_profile(user_id)

    async def require_role(self, user_id: str, role: str) -> UserProfile:
        """Return the caller's profile if its role matches, else raise."""
        profile = await self.get_profile(user_id)
        user_role = profile.role if profile and profile.role else "none"
        if profile is None or profile.role != role:
            raise InsufficientPermissionsError(required_role=role, user_role=user_role)
        return profile
