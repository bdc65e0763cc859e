"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from shared.config import get_settings
from .middleware.cors import ScopedCORSMiddleware
from .routes import auth, health, users
from modules.inventory.routes import router as inventory_router
from modules.notifications.routes import router as notifications_router

logger = logging.getLogger(__name__)

EMAIL_NOTIFICATIONS_PREFIX = "/api/email-notifications"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(auth backend: {settings.auth_backend})"
    )
    if not settings.sendgrid_api_key:
        logger.warning("SENDGRID_API_KEY is not set; email notifications will fail")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Inventory session, role and low-stock notification API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS; the mail function stays open to any origin
    app.add_middleware(
        ScopedCORSMiddleware,
        open_paths=(EMAIL_NOTIFICATIONS_PREFIX,),
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(notifications_router, prefix=EMAIL_NOTIFICATIONS_PREFIX, tags=["notifications"])
    app.include_router(inventory_router, prefix="/api/inventory", tags=["inventory"])

    return app


# Application instance for uvicorn
app = create_app()
