"""Data access helpers for working with images."""
from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session
from ulid import ULID

from picvoter.models.image import Image
from picvoter.services.ranking import Ranking, rank

__all__ = ["ImageRepository", "new_image_id"]


def new_image_id() -> str:
    """Return a fresh ULID string: unique and sortable by creation time."""
    return str(ULID())


class ImageRepository:
    """Thin wrapper around database access for image entities.

    The repository never commits; callers own the transaction.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, image_id: str) -> Image | None:
        """Return an image by identifier."""
        return self.session.get(Image, image_id)

    def get_by_hash(self, content_hash: str) -> Image | None:
        """Return the image stored under a content hash."""
        result = self.session.execute(select(Image).where(Image.hash == content_hash))
        return result.scalars().first()

    def create(self, *, filename: str, content_hash: str) -> Image:
        """Insert a new image with zero votes and the neutral score.

        Args:
            filename: Original basename of the inbound file.
            content_hash: Decimal text of the content fingerprint.
        """
        ranking = rank(0, 0)
        image = Image(
            id=new_image_id(),
            filename=filename[:200],
            hash=content_hash,
            upvotes=0,
            downvotes=0,
            sorting=ranking.sorting,
            confidence=ranking.confidence,
        )
        self.session.add(image)
        self.session.flush()
        return image

    def save_tally(
        self, image_id: str, *, upvotes: int, downvotes: int, ranking: Ranking
    ) -> None:
        """Write counts and the ranking derived from them in one UPDATE."""
        self.session.execute(
            update(Image)
            .where(Image.id == image_id)
            .values(
                upvotes=upvotes,
                downvotes=downvotes,
                sorting=ranking.sorting,
                confidence=ranking.confidence,
            )
            .execution_options(synchronize_session="fetch")
        )

    def count(self) -> int:
        """Return the number of stored images."""
        return int(self.session.execute(select(func.count()).select_from(Image)).scalar_one())

    def count_eligible(self, threshold: float) -> int:
        """Return how many images are still in rotation."""
        stmt = select(func.count()).select_from(Image).where(Image.sorting >= threshold)
        return int(self.session.execute(stmt).scalar_one())

    def eligible_at(self, threshold: float, offset: int) -> Image | None:
        """Return the image at ``offset`` in ascending-confidence order."""
        stmt = (
            select(Image)
            .where(Image.sorting >= threshold)
            .order_by(Image.confidence.asc(), Image.id.asc())
            .offset(offset)
            .limit(1)
        )
        return self.session.execute(stmt).scalars().first()

    def total_votes(self) -> int:
        """Return the sum of all up- and downvotes."""
        stmt = select(
            func.coalesce(func.sum(Image.upvotes), 0) + func.coalesce(func.sum(Image.downvotes), 0)
        )
        return int(self.session.execute(stmt).scalar_one())
