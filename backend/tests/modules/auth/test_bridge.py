"""Tests for the session/profile bridge."""

import pytest
from unittest.mock import MagicMock

from modules.auth.bridge import PROFILE_LOAD_NOTICE, SessionBridge
from modules.auth.exceptions import ProfileLoadError, ProfileWriteError
from modules.auth.memory import InMemoryAuthBackend, InMemoryCredentialStore
from modules.auth.models import ProfileFields, UserProfile
from modules.auth.stores import InMemoryProfileStore
from modules.notifications.notices import NoticeLevel

SECRET = "bridge-test-secret"


@pytest.fixture
def credentials():
    store = InMemoryCredentialStore()
    store.add_user("admin@example.com", "admin123", user_id="admin-1")
    store.add_user("tech@example.com", "tech123", user_id="tech-1")
    store.add_user("orphan@example.com", "orphan123", user_id="orphan-1")
    store.add_user("viewer@example.com", "viewer123", user_id="viewer-1")
    return store


@pytest.fixture
def profiles():
    return InMemoryProfileStore([
        UserProfile(id="admin-1", email="admin@example.com", role="admin"),
        UserProfile(id="tech-1", email="tech@example.com", role="tech"),
        UserProfile(id="viewer-1", email="viewer@example.com", role="viewer"),
    ])


@pytest.fixture
def backend(credentials):
    return InMemoryAuthBackend(credentials, SECRET)


@pytest.fixture
def bridge(backend, profiles):
    return SessionBridge(backend, profiles)


class TestStartup:
    def test_initial_state_is_loading(self, bridge):
        state = bridge.state
        assert state.loading is True
        assert state.session is None
        assert not state.is_admin and not state.is_tech

    @pytest.mark.asyncio
    async def test_start_without_session(self, bridge):
        state = await bridge.start()
        assert state.loading is False
        assert state.session is None
        assert state.profile is None

    @pytest.mark.asyncio
    async def test_start_with_existing_session(self, backend, profiles):
        backend.sign_in_with_password({"email": "admin@example.com", "password": "admin123"})

        state = await SessionBridge(backend, profiles).start()

        assert state.session.user_id == "admin-1"
        assert state.is_admin is True
        assert state.loading is False

    @pytest.mark.asyncio
    async def test_restore_from_token(self, credentials, profiles, backend):
        token = backend.sign_in_with_password(
            {"email": "tech@example.com", "password": "tech123"}
        ).session.access_token

        bridge = SessionBridge(InMemoryAuthBackend(credentials, SECRET), profiles)
        state = await bridge.restore(token)

        assert state.is_tech is True
        assert state.profile.id == "tech-1"

    @pytest.mark.asyncio
    async def test_restore_with_bad_token_is_signed_out(self, bridge):
        state = await bridge.restore("garbage")
        assert state.session is None
        assert state.loading is False


class TestRoleFlags:
    @pytest.mark.asyncio
    async def test_admin_flags(self, bridge):
        await bridge.start()
        await bridge.sign_in("admin@example.com", "admin123")

        state = bridge.state
        assert state.is_admin is True
        assert state.is_tech is False

    @pytest.mark.asyncio
    async def test_tech_flags(self, bridge):
        await bridge.start()
        await bridge.sign_in("tech@example.com", "tech123")

        state = bridge.state
        assert state.is_admin is False
        assert state.is_tech is True

    @pytest.mark.asyncio
    async def test_other_role_gives_no_flags(self, bridge):
        await bridge.start()
        await bridge.sign_in("viewer@example.com", "viewer123")

        state = bridge.state
        assert state.profile.role == "viewer"
        assert not state.is_admin and not state.is_tech

    @pytest.mark.asyncio
    async def test_missing_profile_row(self, bridge):
        """A session without a profile row ends loading with no flags."""
        await bridge.start()
        await bridge.sign_in("orphan@example.com", "orphan123")

        state = bridge.state
        assert state.session.user_id == "orphan-1"
        assert state.profile is None
        assert state.loading is False
        assert not state.is_admin and not state.is_tech
        assert len(bridge.notices) == 0


class TestSignIn:
    @pytest.mark.asyncio
    async def test_success(self, bridge):
        await bridge.start()
        result = await bridge.sign_in("admin@example.com", "admin123")
        assert result.ok
        assert result.user_id == "admin-1"

    @pytest.mark.asyncio
    async def test_bad_password_is_mapped(self, bridge):
        await bridge.start()
        result = await bridge.sign_in("admin@example.com", "wrong")

        assert result.error.code == "INVALID_CREDENTIALS"
        assert result.error.message == "Invalid email or password. Please try again."
        assert bridge.state.session is None


class TestSignUp:
    @pytest.mark.asyncio
    async def test_role_defaults_to_tech(self, bridge, profiles):
        await bridge.start()
        result = await bridge.sign_up("new@example.com", "secret123")

        assert result.ok
        assert profiles.get_profile(result.user_id).role == "tech"
        state = bridge.state
        assert state.profile.id == result.user_id
        assert state.is_tech is True

    @pytest.mark.asyncio
    async def test_fields_are_stored(self, bridge, profiles):
        await bridge.start()
        result = await bridge.sign_up(
            "boss@example.com",
            "secret123",
            ProfileFields(first_name="Ada", role="admin", company_id="c-1"),
        )

        profile = profiles.get_profile(result.user_id)
        assert profile.first_name == "Ada"
        assert profile.company_id == "c-1"
        assert bridge.state.is_admin is True

    @pytest.mark.asyncio
    async def test_existing_email_is_mapped(self, bridge):
        await bridge.start()
        result = await bridge.sign_up("tech@example.com", "whatever1")
        assert result.error.code == "USER_EXISTS"

    @pytest.mark.asyncio
    async def test_profile_write_failure_keeps_principal(self, backend):
        profiles = MagicMock()
        profiles.get_profile.return_value = None
        profiles.upsert_profile.side_effect = ProfileWriteError("x", "insert blocked by policy")
        bridge = SessionBridge(backend, profiles)
        await bridge.start()

        result = await bridge.sign_up("new@example.com", "secret123")

        assert result.error.code == "PROFILE_CREATE_FAILED"
        assert result.error.message == "Failed to create user profile: insert blocked by policy"
        assert result.user_id is not None

    @pytest.mark.asyncio
    async def test_no_user_in_response(self, profiles):
        """Confirmation-required projects return no user; nothing is written."""
        backend = MagicMock()
        backend.get_session.return_value = None
        backend.sign_up.return_value = MagicMock(user=None, session=None)
        bridge = SessionBridge(backend, profiles)
        await bridge.start()

        result = await bridge.sign_up("pending@example.com", "secret123")

        assert result.ok
        assert result.user_id is None
        assert len(profiles) == 3


class TestSignOut:
    @pytest.mark.asyncio
    async def test_clears_state(self, bridge):
        await bridge.start()
        await bridge.sign_in("admin@example.com", "admin123")

        await bridge.sign_out()

        state = bridge.state
        assert state.session is None
        assert state.profile is None
        assert state.loading is False
        assert not state.is_admin

    @pytest.mark.asyncio
    async def test_clears_state_when_remote_fails(self, profiles):
        from modules.auth.exceptions import InvalidTokenError

        backend = MagicMock()
        backend.get_session.return_value = None
        backend.sign_out.side_effect = InvalidTokenError("session_not_found")
        bridge = SessionBridge(backend, profiles)
        await bridge.start()

        await bridge.sign_out()

        assert bridge.state.session is None
        assert bridge.state.loading is False


class TestProfileLoadFailure:
    @pytest.mark.asyncio
    async def test_notice_pushed_and_loading_cleared(self, backend):
        profiles = MagicMock()
        profiles.get_profile.side_effect = ProfileLoadError("admin-1", "connection reset")
        bridge = SessionBridge(backend, profiles)
        await bridge.start()

        await bridge.sign_in("admin@example.com", "admin123")

        state = bridge.state
        assert state.loading is False
        assert state.session.user_id == "admin-1"
        assert not state.is_admin
        notices = bridge.notices.drain()
        assert len(notices) == 1
        assert notices[0].level == NoticeLevel.ERROR
        assert notices[0].message == PROFILE_LOAD_NOTICE


class TestStop:
    @pytest.mark.asyncio
    async def test_stop_detaches_listener(self, backend, bridge):
        await bridge.start()
        bridge.stop()

        backend.sign_in_with_password({"email": "admin@example.com", "password": "admin123"})

        assert bridge.state.session is None
