"""
Tests for shared models.
"""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from shared.models import AuthenticatedUser


class TestAuthenticatedUser:
    """Tests for the AuthenticatedUser model in shared."""

    def test_create_with_required_fields(self):
        """Should create user with only required fields."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
        )
        assert user.id == "user-123"
        assert user.email == "test@example.com"

    def test_default_values(self):
        """Should have correct default values."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
        )
        assert user.email_verified is False
        assert user.created_at is None
        assert user.last_sign_in is None
        assert user.access_token is None

    def test_all_fields(self):
        """Should accept all fields."""
        now = datetime.now(timezone.utc)
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            email_verified=True,
            created_at=now,
            last_sign_in=now,
        )
        assert user.email_verified is True
        assert user.created_at == now

    def test_email_validation(self):
        """Should validate email format."""
        with pytest.raises(ValidationError):
            AuthenticatedUser(
                id="user-123",
                email="not-an-email",
            )

    def test_immutability(self):
        """Should be frozen/immutable."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
        )
        with pytest.raises(ValidationError):
            user.id = "new-id"

    def test_access_token_not_serialized(self):
        """The raw token should never leak into responses or logs."""
        user = AuthenticatedUser(
            id="user-123",
            email="test@example.com",
            access_token="secret-token",
        )
        assert user.access_token == "secret-token"
        assert "access_token" not in user.model_dump()
        assert "secret-token" not in repr(user)
