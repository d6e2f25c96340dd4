"""Image-related Pydantic schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ImageRef(BaseModel):
    """Reference handed to clients: the id to vote on and the rendition key."""

    id: str = Field(..., description="ULID of the image record")
    hash: str = Field(..., description="Content hash; the rendition is resized/{hash}.jpg")


class ImageOut(BaseModel):
    """Full image record including vote tallies and ranking."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    filename: str
    hash: str
    upvotes: int
    downvotes: int
    sorting: float
    confidence: float
