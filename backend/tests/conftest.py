"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from shared.config import get_settings
from shared.database import reset_client_cache


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """
    Give every test a clean configuration and service container.

    The JWT secret is pinned to TEST_JWT_SECRET and external keys are
    blanked so nothing reaches a real Supabase project or SendGrid.
    """
    monkeypatch.setenv("SUPABASE_JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("SUPABASE_URL", "")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "")
    monkeypatch.setenv("SENDGRID_API_KEY", "")
    monkeypatch.setenv("AUTH_BACKEND", "supabase")
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()


@pytest.fixture
def memory_auth(monkeypatch):
    """Switch the container to the in-memory auth backend with demo accounts."""
    monkeypatch.setenv("AUTH_BACKEND", "memory")
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def bearer():
    """Build authorization headers for an arbitrary user."""
    def _bearer(user_id: str, email: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_test_token(user_id=user_id, email=email)}"}
    return _bearer
