"""Applying votes to image tallies."""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from picvoter.core.errors import InvalidValueError, NotFoundError, StoreError
from picvoter.models.image import Image
from picvoter.repositories.image_repo import ImageRepository
from picvoter.services.ranking import rank

UPVOTE = 1
DOWNVOTE = -1

logger = logging.getLogger(__name__)


def apply_vote(session: Session, image_id: str, value: int | float) -> Image:
    """Add one vote to an image and re-rank it.

    The counts, ``sorting`` and ``confidence`` are written by a single UPDATE
    and committed together.

    Args:
        session: Database session; committed on success, rolled back on failure.
        image_id: ULID of the image.
        value: ``1`` for an upvote, ``-1`` for a downvote.

    Returns:
        The refreshed image.

    Raises:
        InvalidValueError: If ``value`` is not the integer 1 or -1.
        NotFoundError: If no image has ``image_id``.
        StoreError: If the database read or write fails.

    Notes:
        The read and the write are not compare-and-swap guarded. Two votes
        racing on the same image can lose one increment.
    """
    # bool is an int subclass; True must not count as an upvote. Floats never count.
    if isinstance(value, bool) or not isinstance(value, int) or value not in (UPVOTE, DOWNVOTE):
        raise InvalidValueError(f"Vote value must be 1 or -1, got {value!r}")

    repo = ImageRepository(session)
    try:
        image = repo.get_by_id(image_id)
        if image is None:
            raise NotFoundError(f"Image {image_id!r} not found")

        upvotes = image.upvotes + (1 if value == UPVOTE else 0)
        downvotes = image.downvotes + (1 if value == DOWNVOTE else 0)
        ranking = rank(upvotes, downvotes)
        repo.save_tally(image_id, upvotes=upvotes, downvotes=downvotes, ranking=ranking)
        session.commit()
        session.refresh(image)
    except SQLAlchemyError as exc:
        session.rollback()
        raise StoreError(f"Failed to record vote for {image_id!r}") from exc

    logger.debug(
        "Vote %+d on %s -> up=%d down=%d sorting=%.4f confidence=%.4f",
        value,
        image_id,
        upvotes,
        downvotes,
        ranking.sorting,
        ranking.confidence,
    )
    return image
