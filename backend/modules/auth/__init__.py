"""
Authentication module.

Bridges the hosted auth session to in-app roles, validates JWTs and
stores profiles.

Public API:
- SessionBridge: session mirror, profile loading, role flags, sign-in/up/out
- IAuthService / IProfileStore / IAuthBackend: interfaces
- SupabaseProfileStore / InMemoryProfileStore: profile store variants
- InMemoryAuthBackend / InMemoryCredentialStore: auth backend for tests and local runs
- Models: AuthState, UserProfile, ProfileFields, AuthResult, RoleFlags, ...
- Auth exceptions
"""

from .bridge import SessionBridge
from .error_mapping import map_auth_error
from .interfaces import IAuthService, IProfileStore, IAuthBackend
from .memory import InMemoryAuthBackend, InMemoryCredentialStore, seed_demo_accounts
from .models import (
    AuthErrorInfo,
    AuthResult,
    AuthState,
    JWTPayload,
    ProfileFields,
    RoleFlags,
    SessionInfo,
    UserProfile,
    UserRole,
    derive_role_flags,
)
from .stores import SupabaseProfileStore, InMemoryProfileStore
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    CredentialsRejectedError,
    UserAlreadyExistsError,
    ProfileLoadError,
    ProfileWriteError,
    InsufficientPermissionsError,
)

__all__ = [
    # Bridge
    "SessionBridge",
    "map_auth_error",
    # Interfaces
    "IAuthService",
    "IProfileStore",
    "IAuthBackend",
    # Implementations
    "InMemoryAuthBackend",
    "InMemoryCredentialStore",
    "seed_demo_accounts",
    "SupabaseProfileStore",
    "InMemoryProfileStore",
    # Models
    "AuthErrorInfo",
    "AuthResult",
    "AuthState",
    "JWTPayload",
    "ProfileFields",
    "RoleFlags",
    "SessionInfo",
    "UserProfile",
    "UserRole",
    "derive_role_flags",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "CredentialsRejectedError",
    "UserAlreadyExistsError",
    "ProfileLoadError",
    "ProfileWriteError",
    "InsufficientPermissionsError",
]
