"""Vote-related endpoints for the picvoter API."""

from fastapi import APIRouter

from picvoter.api.v1.dependencies import SessionDep
from picvoter.schemas.vote import VoteCreate, VoteResult
from picvoter.services.vote_service import apply_vote

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResult)
async def cast_vote(vote_data: VoteCreate, db: SessionDep) -> VoteResult:
    """Cast an up- or downvote on an image."""
    apply_vote(db, vote_data.id, vote_data.value)
    return VoteResult(success=True)
