"""Vote tallies to rank key and evidence strength."""

from __future__ import annotations

import math
from typing import NamedTuple

# One-sided 95% normal quantile.
WILSON_Z = 1.64485
NEUTRAL_SORTING = 0.5


class Ranking(NamedTuple):
    """Sort key plus the "how settled is this" metric derived from it."""

    sorting: float
    confidence: float


def wilson_lower_bound(upvotes: int, total: int, z: float = WILSON_Z) -> float:
    """Return the Wilson score interval lower bound for ``upvotes / total``."""
    phat = upvotes / total
    z2 = z * z
    centre = phat + z2 / (2 * total)
    margin = z * math.sqrt((phat * (1 - phat) + z2 / (4 * total)) / total)
    return (centre - margin) / (1 + z2 / total)


def rank(upvotes: int, downvotes: int) -> Ranking:
    """Compute ``(sorting, confidence)`` for the given vote counts.

    Unvoted images sit at the neutral 0.5. Images with only downvotes get
    ``-downvotes`` so they fall out of rotation quickly; everything else is
    ranked by the Wilson lower bound. ``confidence`` grows with both the
    distance from neutral and the number of votes, so low values mark images
    that need more votes.

    Raises:
        ValueError: If either count is negative.
    """
    if upvotes < 0 or downvotes < 0:
        raise ValueError("vote counts must be non-negative")

    total = upvotes + downvotes
    if total == 0:
        sorting = NEUTRAL_SORTING
    elif upvotes == 0:
        sorting = float(-downvotes)
    else:
        sorting = wilson_lower_bound(upvotes, total)

    confidence = abs(NEUTRAL_SORTING - sorting) * (total / 10)
    return Ranking(sorting=sorting, confidence=confidence)
