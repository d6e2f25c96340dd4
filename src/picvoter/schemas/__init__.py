"""Pydantic schemas for the picvoter API."""

from .image import ImageOut, ImageRef
from .vote import VoteCreate, VoteResult

__all__ = ["ImageOut", "ImageRef", "VoteCreate", "VoteResult"]
