"""
In-memory auth backend.

Stands in for the hosted auth service in tests and local runs. Accounts
live in an InMemoryCredentialStore that is injected, so every container
(or test) owns its own set of users. Sessions carry real HS256 tokens
signed with the configured JWT secret, so the API's token validation
accepts them exactly like hosted-service tokens.
"""

import hashlib
import hmac
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from .exceptions import (
    CredentialsRejectedError,
    ExpiredTokenError,
    InvalidTokenError,
    UserAlreadyExistsError,
)
from .interfaces import AuthStateListener
from .models import UserProfile, UserRole
from .stores import InMemoryProfileStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemoryUser:
    id: str
    email: str


@dataclass(frozen=True)
class MemorySession:
    access_token: str
    refresh_token: str
    expires_at: int
    user: MemoryUser


@dataclass(frozen=True)
class MemoryAuthResponse:
    user: Optional[MemoryUser]
    session: Optional[MemorySession]


def _hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class InMemoryCredentialStore:
    """Email/password accounts held in memory."""

    def __init__(self) -> None:
        self._by_email: dict[str, tuple[MemoryUser, str]] = {}

    def add_user(
        self,
        email: str,
        password: str,
        user_id: Optional[str] = None,
    ) -> MemoryUser:
        key = email.strip().lower()
        if key in self._by_email:
            raise UserAlreadyExistsError(email)
        user = MemoryUser(id=user_id or str(uuid.uuid4()), email=email)
        self._by_email[key] = (user, _hash_password(password))
        return user

    def authenticate(self, email: str, password: str) -> MemoryUser:
        entry = self._by_email.get(email.strip().lower())
        if entry is None:
            raise CredentialsRejectedError()
        user, password_hash = entry
        if not hmac.compare_digest(password_hash, _hash_password(password)):
            raise CredentialsRejectedError()
        return user

    def get_user(self, user_id: str) -> Optional[MemoryUser]:
        for user, _ in self._by_email.values():
            if user.id == user_id:
                return user
        return None


class MemorySubscription:
    """Handle returned by on_auth_state_change."""

    def __init__(self, listeners: list[AuthStateListener], callback: AuthStateListener):
        self._listeners = listeners
        self.callback = callback

    def unsubscribe(self) -> None:
        if self.callback in self._listeners:
            self._listeners.remove(self.callback)


class InMemoryAuthBackend:
    """
    One client's view of the in-memory auth service.

    Like a Supabase client, each instance holds at most one current
    session and notifies its listeners synchronously on every change.
    """

    def __init__(
        self,
        credentials: InMemoryCredentialStore,
        jwt_secret: str,
        token_ttl: int = 3600,
    ):
        if not jwt_secret:
            raise RuntimeError(
                "In-memory auth backend needs SUPABASE_JWT_SECRET to sign sessions."
            )
        self._credentials = credentials
        self._secret = jwt_secret
        self._ttl = token_ttl
        self._session: Optional[MemorySession] = None
        self._listeners: list[AuthStateListener] = []

    def get_session(self) -> Optional[MemorySession]:
        if self._session is None:
            return None
        if self._session.expires_at <= int(datetime.now(timezone.utc).timestamp()):
            self._session = None
        return self._session

    def set_session(self, access_token: str, refresh_token: str) -> MemoryAuthResponse:
        try:
            payload = jwt.decode(
                access_token,
                self._secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        user = self._credentials.get_user(payload["sub"])
        if user is None:
            raise InvalidTokenError("Unknown user")

        self._session = MemorySession(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=payload["exp"],
            user=user,
        )
        self._notify("TOKEN_REFRESHED", self._session)
        return MemoryAuthResponse(user=user, session=self._session)

    def on_auth_state_change(self, callback: AuthStateListener) -> MemorySubscription:
        self._listeners.append(callback)
        return MemorySubscription(self._listeners, callback)

    def sign_in_with_password(self, credentials: dict[str, str]) -> MemoryAuthResponse:
        user = self._credentials.authenticate(credentials["email"], credentials["password"])
        self._session = self._issue_session(user)
        self._notify("SIGNED_IN", self._session)
        return MemoryAuthResponse(user=user, session=self._session)

    def sign_up(self, credentials: dict[str, str]) -> MemoryAuthResponse:
        user = self._credentials.add_user(credentials["email"], credentials["password"])
        self._session = self._issue_session(user)
        self._notify("SIGNED_IN", self._session)
        return MemoryAuthResponse(user=user, session=self._session)

    def sign_out(self) -> None:
        self._session = None
        self._notify("SIGNED_OUT", None)

    def _issue_session(self, user: MemoryUser) -> MemorySession:
        now = datetime.now(timezone.utc)
        exp = now + timedelta(seconds=self._ttl)
        payload = {
            "sub": user.id,
            "email": user.email,
            "email_confirmed_at": now.isoformat(),
            "aud": "authenticated",
            "role": "authenticated",
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
        }
        return MemorySession(
            access_token=jwt.encode(payload, self._secret, algorithm="HS256"),
            refresh_token=uuid.uuid4().hex,
            expires_at=int(exp.timestamp()),
            user=user,
        )

    def _notify(self, event: str, session: Optional[MemorySession]) -> None:
        logger.debug(f"In-memory auth event: {event}")
        for listener in list(self._listeners):
            listener(event, session)


# Demo accounts available when AUTH_BACKEND=memory
DEMO_ACCOUNTS = [
    {
        "id": "admin-1",
        "email": "admin@test.com",
        "password": "admin123",
        "role": UserRole.ADMIN.value,
        "first_name": "Admin",
        "last_name": "User",
    },
    {
        "id": "tech-1",
        "email": "tech@test.com",
        "password": "tech123",
        "role": UserRole.TECH.value,
        "first_name": "Tech",
        "last_name": "User",
    },
]


def seed_demo_accounts(
    credentials: InMemoryCredentialStore,
    profiles: InMemoryProfileStore,
) -> None:
    """Register the demo admin and technician with matching profiles."""
    for account in DEMO_ACCOUNTS:
        credentials.add_user(account["email"], account["password"], user_id=account["id"])
        profiles.upsert_profile(
            UserProfile(
                id=account["id"],
                email=account["email"],
                first_name=account["first_name"],
                last_name=account["last_name"],
                role=account["role"],
                is_active=True,
            )
        )
