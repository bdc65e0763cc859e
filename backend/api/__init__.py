"""
Stockline API package.

Provides the FastAPI application for session, inventory and notification endpoints.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
