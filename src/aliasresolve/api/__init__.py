"""FastAPI application and routes."""

from aliasresolve.api.app import app, create_app

__all__ = [
    "app",
    "create_app",
]
