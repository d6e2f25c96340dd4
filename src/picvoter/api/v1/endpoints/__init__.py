# src/picvoter/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .images import router as images_router
from .system import router as system_router
from .votes import router as votes_router

__all__ = ["images_router", "system_router", "votes_router"]
