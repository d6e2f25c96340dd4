# src/picvoter/models/image.py
"""SQLAlchemy model for ingested images and their vote tallies."""

from sqlalchemy import CheckConstraint, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from picvoter.db.session import Base
from picvoter.services.ranking import NEUTRAL_SORTING


class Image(Base):
    """One accepted image, keyed by a ULID and unique by content hash.

    Rows are created once by the import watcher and afterwards only touched
    by the vote processor. ``sorting`` and ``confidence`` are always written
    together with the counts they were derived from.
    """

    __tablename__ = "images"
    __table_args__ = (
        CheckConstraint("upvotes >= 0", name="ck_images_upvotes_nonnegative"),
        CheckConstraint("downvotes >= 0", name="ck_images_downvotes_nonnegative"),
        Index("ix_images_sorting", "sorting"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    # Original basename; informational only.
    filename: Mapped[str] = mapped_column(String(200), nullable=False)
    # Decimal text of the unsigned 64-bit content fingerprint.
    hash: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)

    upvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvotes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sorting: Mapped[float] = mapped_column(Float, nullable=False, default=NEUTRAL_SORTING)
    confidence: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    def __repr__(self) -> str:
        return (
            f"Image(id={self.id!r}, hash={self.hash!r}, "
            f"upvotes={self.upvotes}, downvotes={self.downvotes})"
        )
