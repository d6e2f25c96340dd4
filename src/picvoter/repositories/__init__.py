"""Data access repositories."""

from .image_repo import ImageRepository

__all__ = ["ImageRepository"]
