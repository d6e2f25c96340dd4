# src/picvoter/models/__init__.py
"""SQLAlchemy models for the picvoter service."""

from .image import Image

__all__ = ["Image"]
