"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. Both the profile store and the auth backend come in a
Supabase-backed variant and an in-memory variant for tests and local runs.
"""

from typing import Any, Callable, Optional, Protocol, runtime_checkable

from shared.models import AuthenticatedUser

from .models import UserProfile


# Listener signature used by Supabase's on_auth_state_change: (event, session)
AuthStateListener = Callable[[str, Optional[Any]], None]


@runtime_checkable
class IProfileStore(Protocol):
    """Point access to ``user_profiles`` rows keyed by principal id."""

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """
        Get a profile by principal id.

        Returns:
            UserProfile if found, None if the row does not exist

        Raises:
            ProfileLoadError: For any failure other than "not found"
        """
        ...

    def upsert_profile(self, profile: UserProfile) -> UserProfile:
        """
        Insert or replace the profile keyed by ``profile.id``.

        Raises:
            ProfileWriteError: If the write fails
        """
        ...


@runtime_checkable
class IAuthBackend(Protocol):
    """
    The slice of the hosted auth client the session bridge consumes.

    Mirrors ``supabase.Client.auth``: failures surface as exceptions
    (``supabase.AuthError`` or this module's ``AuthenticationError``
    subclasses) rather than ``{data, error}`` pairs.
    """

    def get_session(self) -> Optional[Any]:
        ...

    def set_session(self, access_token: str, refresh_token: str) -> Any:
        ...

    def on_auth_state_change(self, callback: AuthStateListener) -> Any:
        """Register a listener; the returned subscription has ``unsubscribe()``."""
        ...

    def sign_in_with_password(self, credentials: dict[str, str]) -> Any:
        ...

    def sign_up(self, credentials: dict[str, str]) -> Any:
        ...

    def sign_out(self) -> None:
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for request authentication and authorization.

    Used by the API layer to turn bearer tokens into users and to
    enforce role requirements.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def get_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get a user's profile by ID, or None if it does not exist."""
        ...

    async def require_role(self, user_id: str, role: str) -> UserProfile:
        """
        Load the profile and check its role.

        Raises:
            InsufficientPermissionsError: If the role does not match
        """
        ...
