# src/picvoter/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import images_router, system_router, votes_router

__all__ = ["images_router", "system_router", "votes_router"]
