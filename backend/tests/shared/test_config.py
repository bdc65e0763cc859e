"""Tests for shared/config.py."""

import pytest
from unittest.mock import patch
import os

from pydantic import ValidationError

from shared.config import Settings, get_settings


class TestSettings:
    def test_default_values(self):
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.app_name == "Stockline API"
        assert settings.debug is False
        assert settings.port == 8000
        assert settings.host == "0.0.0.0"
        assert settings.app_version == "0.1.0"
        assert settings.auth_backend == "supabase"
        assert settings.log_level == "INFO"

    def test_notification_defaults(self):
        """Outgoing mail should default to the system sender."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        assert settings.sendgrid_api_key == ""
        assert settings.sendgrid_api_url == "https://api.sendgrid.com/v3/mail/send"
        assert settings.sendgrid_timeout == 30.0
        assert settings.notification_from_email == "noreply@inventory-system.com"
        assert settings.notification_from_name == "Inventory System"
        assert settings.default_company_name == "Inventory Management System"

    def test_loads_from_env(self):
        """Settings should load from environment variables."""
        with patch.dict(os.environ, {"DEBUG": "true", "PORT": "9000"}):
            settings = Settings()
            assert settings.debug is True
            assert settings.port == 9000

    def test_loads_sendgrid_key_from_env(self):
        """Settings should load the SendGrid key from environment variables."""
        with patch.dict(os.environ, {"SENDGRID_API_KEY": "SG.test-key"}):
            settings = Settings()
            assert settings.sendgrid_api_key == "SG.test-key"

    def test_loads_supabase_config_from_env(self):
        """Settings should load Supabase configuration from environment variables."""
        with patch.dict(os.environ, {
            "SUPABASE_URL": "https://test.supabase.co",
            "SUPABASE_ANON_KEY": "test-anon-key",
            "SUPABASE_SERVICE_ROLE_KEY": "test-service-key",
        }):
            settings = Settings()
            assert settings.supabase_url == "https://test.supabase.co"
            assert settings.supabase_anon_key == "test-anon-key"
            assert settings.supabase_service_role_key == "test-service-key"

    def test_auth_backend_accepts_memory(self):
        with patch.dict(os.environ, {"AUTH_BACKEND": "memory"}):
            assert Settings().auth_backend == "memory"

    def test_auth_backend_rejects_unknown(self):
        with patch.dict(os.environ, {"AUTH_BACKEND": "ldap"}):
            with pytest.raises(ValidationError):
                Settings()


class TestGetSettings:
    def test_get_settings_returns_settings_instance(self):
        """get_settings should return a Settings instance."""
        get_settings.cache_clear()
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caches(self):
        """get_settings should return cached instance."""
        get_settings.cache_clear()
        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2
