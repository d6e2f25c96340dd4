"""Biased selection of the next image to present.

The eligible pool is ordered by ascending ``confidence``; a uniform draw is
bent by a power law so that offsets near zero (images with the least
evidence) come up far more often, while every offset stays reachable.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable

from sqlalchemy.orm import Session

from picvoter.repositories.image_repo import ImageRepository
from picvoter.schemas.image import ImageRef

DEFAULT_SHAPE = 4

logger = logging.getLogger(__name__)


def select_offset(pool_size: int, unif: float, shape: int = DEFAULT_SHAPE) -> int | None:
    """Map a uniform draw in ``[0, 1)`` onto an offset in ``[0, pool_size)``.

    Returns ``None`` for an empty pool. A draw of 0 always selects offset 0.

    Raises:
        ValueError: If ``unif`` is outside ``[0, 1)`` or the pool size is negative.
    """
    if pool_size < 0:
        raise ValueError("pool_size must be non-negative")
    if not 0.0 <= unif < 1.0:
        raise ValueError("unif must be in [0, 1)")
    if pool_size == 0:
        return None

    x = 1.0 - unif
    floor_term = 1 / 2**shape
    weight = (1 / (x + 1) ** shape - floor_term) / (1 - floor_term)
    offset = math.floor(pool_size * weight)
    return min(max(offset, 0), pool_size - 1)


class ImageSelector:
    """Draws images from the eligible pool of one session."""

    def __init__(
        self,
        session: Session,
        *,
        threshold: float,
        draw: Callable[[], float] = random.random,
        shape: int = DEFAULT_SHAPE,
    ) -> None:
        self.repo = ImageRepository(session)
        self.threshold = threshold
        self.draw = draw
        self.shape = shape

    def next_image(self) -> ImageRef | None:
        """Return one image reference, or ``None`` when the pool is empty."""
        images = self.next_images(1)
        return images[0] if images else None

    def next_images(self, count: int) -> list[ImageRef]:
        """Return up to ``count`` distinct image references.

        Each pick draws independently; an offset already taken moves to the
        next free offset, wrapping around the pool.
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        pool_size = self.repo.count_eligible(self.threshold)
        offsets: list[int] = []
        for _ in range(min(count, pool_size)):
            offset = select_offset(pool_size, self.draw(), self.shape) or 0
            while offset in offsets:
                offset = (offset + 1) % pool_size
            offsets.append(offset)

        refs: list[ImageRef] = []
        for offset in offsets:
            image = self.repo.eligible_at(self.threshold, offset)
            if image is None:
                # The pool shrank between the count and the fetch.
                logger.debug("No eligible image at offset %d", offset)
                continue
            refs.append(ImageRef(id=image.id, hash=image.hash))
        return refs
