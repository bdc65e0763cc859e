"""
Database client factory for Supabase.

Provides both service-role clients (for backend operations bypassing RLS)
and anon-key clients (for per-request auth sessions that respect RLS).
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

# Supabase/PostgREST error code for ".single()" matching zero rows
NOT_FOUND_CODE = "PGRST116"

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as reading company settings while evaluating low-stock alerts.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def get_supabase_anon_client() -> Client:
    """
    Get a fresh Supabase client using the anon key.

    Each call returns a new client so that its auth session is private
    to the caller (one per request for sign-in/sign-up flows).

    Returns:
        Supabase client configured with the anon key
    """
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_anon_key,
    )


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
