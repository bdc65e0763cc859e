"""
Shared infrastructure for Stockline backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base class for Supabase-backed repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import (
    NOT_FOUND_CODE,
    get_supabase_client,
    get_supabase_anon_client,
    reset_client_cache,
)
from .exceptions import (
    StocklineError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    error_message,
)
from .models import AuthenticatedUser

__all__ = [
    "Settings",
    "get_settings",
    "NOT_FOUND_CODE",
    "get_supabase_client",
    "get_supabase_anon_client",
    "reset_client_cache",
    "StocklineError",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "error_message",
    "AuthenticatedUser",
]
