"""
Session/profile bridge.

Mirrors the hosted auth service's session, loads the matching profile
row for every session that appears, and derives role flags from it.

One bridge serves one client: the API builds a fresh bridge (with its
own auth client) per request, and tests build one per case.
"""

import logging
from typing import Any, Optional

from supabase import AuthError

from shared.exceptions import AuthenticationError, error_message
from modules.notifications.notices import NoticeQueue

from .error_mapping import map_auth_error
from .exceptions import ProfileLoadError, ProfileWriteError
from .interfaces import IAuthBackend, IProfileStore
from .models import (
    AuthErrorInfo,
    AuthResult,
    AuthState,
    ProfileFields,
    SessionInfo,
    UserProfile,
    derive_role_flags,
)

logger = logging.getLogger(__name__)

# Hosted client errors and the in-memory backend's errors
AUTH_FAILURES = (AuthError, AuthenticationError)

PROFILE_LOAD_NOTICE = "Failed to load user profile. Please try refreshing the page."


class SessionBridge:
    """
    Bridge between the hosted auth session and in-app role flags.

    State is written only by this object's own handlers; the auth
    client invokes listeners one at a time.
    """

    def __init__(
        self,
        auth: IAuthBackend,
        profiles: IProfileStore,
        notices: Optional[NoticeQueue] = None,
    ):
        self._auth = auth
        self._profiles = profiles
        self._notices = notices if notices is not None else NoticeQueue()

        self._session: Optional[SessionInfo] = None
        self._profile: Optional[UserProfile] = None
        self._loading = True
        self._subscription: Any = None

    @property
    def state(self) -> AuthState:
        flags = derive_role_flags(self._profile, self._loading)
        return AuthState(
            session=self._session,
            profile=self._profile,
            loading=self._loading,
            is_admin=flags.is_admin,
            is_tech=flags.is_tech,
        )

    @property
    def notices(self) -> NoticeQueue:
        return self._notices

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def start(self) -> AuthState:
        """Load the current session and listen for later session changes."""
        self._subscription = self._auth.on_auth_state_change(self._on_auth_state_change)
        self._apply_session(self._auth.get_session())
        return self.state

    async def restore(self, access_token: str, refresh_token: str = "") -> AuthState:
        """
        Adopt an existing session from its tokens, then start.

        A rejected token leaves the bridge signed out rather than raising.
        """
        if self._subscription is None:
            self._subscription = self._auth.on_auth_state_change(self._on_auth_state_change)
        try:
            self._auth.set_session(access_token, refresh_token)
        except AUTH_FAILURES as e:
            logger.warning(f"Could not restore session: {error_message(e)}")
        self._apply_session(self._auth.get_session())
        return self.state

    def stop(self) -> None:
        """Stop listening for session changes."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password. Rejections are returned, not raised."""
        try:
            response = self._auth.sign_in_with_password({"email": email, "password": password})
        except AUTH_FAILURES as e:
            logger.warning(f"Sign-in failed for {email}: {error_message(e)}")
            return AuthResult(error=map_auth_error(error_message(e)))

        user = getattr(response, "user", None)
        return AuthResult(user_id=user.id if user else None)

    async def sign_up(
        self,
        email: str,
        password: str,
        fields: Optional[ProfileFields] = None,
    ) -> AuthResult:
        """
        Create the credential, then upsert its profile.

        The two steps are independent remote calls. When the profile write
        fails the credential already exists; that principal is logged and
        returned so it can be repaired.
        """
        try:
            response = self._auth.sign_up({"email": email, "password": password})
        except AUTH_FAILURES as e:
            logger.warning(f"Sign-up failed for {email}: {error_message(e)}")
            return AuthResult(error=map_auth_error(error_message(e)))

        user = getattr(response, "user", None)
        if user is None:
            return AuthResult()

        profile = (fields or ProfileFields()).to_profile(user.id, email)
        try:
            profile = self._profiles.upsert_profile(profile)
        except ProfileWriteError as e:
            logger.warning(
                f"Profile creation failed; credential {user.id} has no profile: {e.message}"
            )
            return AuthResult(
                error=AuthErrorInfo(
                    message=f"Failed to create user profile: {e.message}",
                    code="PROFILE_CREATE_FAILED",
                ),
                user_id=user.id,
            )

        # A session may already have tried (and missed) the profile
        if self._session is not None and self._session.user_id == user.id:
            self._profile = profile
            self._loading = False

        return AuthResult(user_id=user.id)

    async def sign_out(self) -> None:
        """Sign out remotely; local state is cleared even if that fails."""
        try:
            self._auth.sign_out()
        except AUTH_FAILURES as e:
            logger.error(f"Sign out error: {error_message(e)}")
        finally:
            self._session = None
            self._profile = None
            self._loading = False

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _on_auth_state_change(self, event: str, session: Optional[Any]) -> None:
        logger.debug(f"Auth state change: {event}")
        self._apply_session(session)

    def _apply_session(self, session: Optional[Any]) -> None:
        user = getattr(session, "user", None) if session is not None else None
        if user is None or not getattr(user, "id", None):
            self._session = None
            self._profile = None
            self._loading = False
            return

        self._session = SessionInfo.from_auth_session(session)
        self._load_profile(self._session.user_id)

    def _load_profile(self, user_id: str) -> None:
        try:
            self._profile = self._profiles.get_profile(user_id)
        except ProfileLoadError as e:
            logger.error(f"Failed to load user profile: {e.message}")
            self._notices.error(PROFILE_LOAD_NOTICE)
            if self._profile is not None and self._profile.id != user_id:
                self._profile = None
        finally:
            self._loading = False
