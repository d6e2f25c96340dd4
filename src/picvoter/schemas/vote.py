"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote.

    ``value`` is range-checked by the vote service, not here, so an
    out-of-range value is reported as an invalid vote rather than a
    malformed request.
    """

    id: str = Field(..., description="ULID of the image being voted on")
    value: int | float = Field(..., description="1 for upvote, -1 for downvote")


class VoteResult(BaseModel):
    """Acknowledgement returned for an accepted vote."""

    success: bool = True
