"""
Centralized configuration for the Stockline backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SENDGRID_*, SUPABASE_*).
"""

from functools import lru_cache
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Stockline API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Which auth/profile backend the session bridge talks to
    auth_backend: Literal["supabase", "memory"] = "supabase"

    # SendGrid (loaded by notifications module)
    sendgrid_api_key: str = ""
    sendgrid_api_url: str = "https://api.sendgrid.com/v3/mail/send"
    sendgrid_timeout: float = 30.0  # seconds

    # Outgoing mail
    notification_from_email: str = "noreply@inventory-system.com"
    notification_from_name: str = "Inventory System"
    notification_default_recipient: str = ""
    default_company_name: str = "Inventory Management System"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
