"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Application roles stored on the profile row."""

    ADMIN = "admin"
    TECH = "tech"


# New sign-ups get the non-privileged role unless the caller says otherwise
DEFAULT_SIGNUP_ROLE = UserRole.TECH


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="Email confirmation time")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="Postgres role claim")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class SessionInfo(BaseModel):
    """
    Local mirror of a hosted auth session.

    Only the fields the application needs are copied; the hosted
    service remains the owner of the session.
    """

    access_token: str
    refresh_token: str = ""
    expires_at: Optional[int] = None
    user_id: str
    email: Optional[str] = None

    @classmethod
    def from_auth_session(cls, session: Any) -> "SessionInfo":
        """Build from a Supabase ``Session`` (or anything shaped like one)."""
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token or "",
            expires_at=session.expires_at,
            user_id=session.user.id,
            email=session.user.email,
        )


class UserProfile(BaseModel):
    """
    Application-level identity for a principal (``user_profiles`` row).

    ``role`` is kept as a plain string: rows written by admin tooling may
    carry values outside :class:`UserRole`, which simply grant no flags.
    """

    model_config = {"extra": "ignore"}

    id: str = Field(..., description="User ID (UUID, same as the auth principal)")
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None
    company_id: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    is_active: Optional[bool] = None


class ProfileFields(BaseModel):
    """Optional profile fields supplied by the caller at sign-up."""

    first_name: str = ""
    last_name: str = ""
    role: Optional[str] = None
    company_id: Optional[str] = None
    phone: str = ""
    specialty: str = ""

    def to_profile(self, user_id: str, email: str) -> UserProfile:
        """Build the profile row to upsert for a new principal."""
        return UserProfile(
            id=user_id,
            email=email,
            first_name=self.first_name,
            last_name=self.last_name,
            role=self.role or DEFAULT_SIGNUP_ROLE.value,
            company_id=self.company_id,
            phone=self.phone,
            specialty=self.specialty,
            is_active=True,
        )


class RoleFlags(BaseModel):
    """Coarse-grained routing flags derived from a profile's role."""

    model_config = {"frozen": True}

    is_admin: bool = False
    is_tech: bool = False


def derive_role_flags(profile: Optional[UserProfile], loading: bool) -> RoleFlags:
    """
    Derive role flags from a profile.

    Flags are withheld while loading so consumers never see a transient
    "no role" state for a user whose profile is still being fetched.
    """
    if loading or profile is None:
        return RoleFlags()
    return RoleFlags(
        is_admin=profile.role == UserRole.ADMIN.value,
        is_tech=profile.role == UserRole.TECH.value,
    )


class AuthState(BaseModel):
    """Snapshot of the session/profile bridge."""

    session: Optional[SessionInfo] = None
    profile: Optional[UserProfile] = None
    loading: bool = True
    is_admin: bool = False
    is_tech: bool = False


class AuthErrorInfo(BaseModel):
    """User-presentable authentication error."""

    message: str
    code: str


class AuthResult(BaseModel):
    """Outcome of sign-in / sign-up. Failures are results, not exceptions."""

    error: Optional[AuthErrorInfo] = None
    user_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
