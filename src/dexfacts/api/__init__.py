"""FastAPI application and routes."""

from dexfacts.api.app import create_app

__all__ = [
    "create_app",
]
