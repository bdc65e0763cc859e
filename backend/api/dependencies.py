"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

AUTH_BACKEND selects where sessions and profiles live: the hosted
Supabase project, or in-process stores seeded with demo accounts.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.alerts.interfaces import ILowStockAlertService
    from modules.alerts.repository import AlertRepository
    from modules.auth.bridge import SessionBridge
    from modules.auth.interfaces import IAuthService, IProfileStore
    from modules.auth.memory import InMemoryCredentialStore
    from modules.inventory.interfaces import IInventoryService
    from modules.inventory.repository import InventoryRepository
    from modules.notifications.interfaces import INotificationEmitter


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container, except
    session bridges, which hold one client's session and are built per use.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._profile_store: "IProfileStore | None" = None
        self._credentials: "InMemoryCredentialStore | None" = None
        self._auth_service: "IAuthService | None" = None
        self._email_service: "INotificationEmitter | None" = None
        self._alert_repository: "AlertRepository | None" = None
        self._alert_service: "ILowStockAlertService | None" = None
        self._inventory_repository: "InventoryRepository | None" = None
        self._inventory_service: "IInventoryService | None" = None

    @property
    def uses_memory_auth(self) -> bool:
        return get_settings().auth_backend == "memory"

    @property
    def profile_store(self) -> "IProfileStore":
        """Get the profile store (service-role access for server-side lookups)."""
        if self._profile_store is None:
            if self.uses_memory_auth:
                self._init_memory_stores()
            else:
                from modules.auth.stores import SupabaseProfileStore
                from shared.database import get_supabase_client
                self._profile_store = SupabaseProfileStore(get_supabase_client())
        return self._profile_store

    @property
    def credentials(self) -> "InMemoryCredentialStore":
        """Get the in-memory credential store (AUTH_BACKEND=memory only)."""
        if self._credentials is None:
            if not self.uses_memory_auth:
                raise RuntimeError("Credential store is only available with AUTH_BACKEND=memory")
            self._init_memory_stores()
        return self._credentials

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(self.profile_store)
        return self._auth_service

    @property
    def email(self) -> "INotificationEmitter":
        """Get the email notification service instance."""
        if self._email_service is None:
            from modules.notifications.service import EmailNotificationService
            self._email_service = EmailNotificationService()
        return self._email_service

    @property
    def alert_repository(self) -> "AlertRepository":
        """Get the alert lookup repository instance."""
        if self._alert_repository is None:
            from modules.alerts.repository import AlertRepository
            from shared.database import get_supabase_client
            self._alert_repository = AlertRepository(get_supabase_client())
        return self._alert_repository

    @property
    def alerts(self) -> "ILowStockAlertService":
        """Get the low-stock alert service instance."""
        if self._alert_service is None:
            from modules.alerts.service import LowStockAlertService
            self._alert_service = LowStockAlertService(
                repository=self.alert_repository,
                emitter=self.email,
            )
        return self._alert_service

    @property
    def inventory_repository(self) -> "InventoryRepository":
        """Get the inventory repository instance."""
        if self._inventory_repository is None:
            from modules.inventory.repository import InventoryRepository
            from shared.database import get_supabase_client
            self._inventory_repository = InventoryRepository(get_supabase_client())
        return self._inventory_repository

    @property
    def inventory(self) -> "IInventoryService":
        """Get the inventory service instance."""
        if self._inventory_service is None:
            from modules.inventory.service import InventoryService
            self._inventory_service = InventoryService(self.inventory_repository)
        return self._inventory_service

    def new_session_bridge(self) -> "SessionBridge":
        """
        Build a session bridge with its own auth client.

        Hosted sessions are per client, so bridges are never shared
        between requests.
        """
        from modules.auth.bridge import SessionBridge

        if self.uses_memory_auth:
            from modules.auth.memory import InMemoryAuthBackend
            backend = InMemoryAuthBackend(self.credentials, get_settings().supabase_jwt_secret)
            return SessionBridge(backend, self.profile_store)

        from modules.auth.stores import SupabaseProfileStore
        from shared.database import get_supabase_anon_client
        client = get_supabase_anon_client()
        return SessionBridge(client.auth, SupabaseProfileStore(client))

    def _init_memory_stores(self) -> None:
        from modules.auth.memory import InMemoryCredentialStore, seed_demo_accounts
        from modules.auth.stores import InMemoryProfileStore

        self._credentials = InMemoryCredentialStore()
        profiles = InMemoryProfileStore()
        seed_demo_accounts(self._credentials, profiles)
        self._profile_store = profiles

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._profile_store = None
        self._credentials = None
        self._auth_service = None
        self._email_service = None
        self._alert_repository = None
        self._alert_service = None
        self._inventory_repository = None
        self._inventory_service = None


# Module-level container singleton
_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_email_service() -> "INotificationEmitter":
    """FastAPI dependency for the email notification service."""
    return get_container().email


def get_alert_service() -> "ILowStockAlertService":
    """FastAPI dependency for the low-stock alert service."""
    return get_container().alerts


def get_inventory_service() -> "IInventoryService":
    """FastAPI dependency for inventory service."""
    return get_container().inventory


def get_session_bridge() -> "SessionBridge":
    """FastAPI dependency for a fresh, per-request session bridge."""
    return get_container().new_session_bridge()
