"""Tests for the ranking engine."""

from __future__ import annotations

import pytest

from picvoter.services.ranking import WILSON_Z, rank, wilson_lower_bound


def test_unvoted_image_is_neutral() -> None:
    assert rank(0, 0) == (0.5, 0)


@pytest.mark.parametrize("downvotes", [1, 2, 3, 7, 50])
def test_only_downvotes_scores_negative_count(downvotes: int) -> None:
    ranking = rank(0, downvotes)
    assert ranking.sorting == -downvotes
    assert ranking.confidence == pytest.approx((0.5 + downvotes) * downvotes / 10)


def test_single_upvote_matches_wilson_closed_form() -> None:
    # With phat == 1 the bound reduces to 1 / (1 + z^2 / n).
    ranking = rank(1, 0)
    expected = 1 / (1 + WILSON_Z**2)
    assert ranking.sorting == pytest.approx(expected)
    assert ranking.confidence == pytest.approx(abs(0.5 - expected) * 0.1)


def test_mixed_votes_use_wilson_lower_bound() -> None:
    ranking = rank(7, 3)
    assert ranking.sorting == pytest.approx(wilson_lower_bound(7, 10))
    assert 0 < ranking.sorting < 0.7
    assert ranking.confidence == pytest.approx(abs(0.5 - ranking.sorting) * 1.0)


def test_sorting_non_decreasing_in_upvotes() -> None:
    for downvotes in range(1, 12):
        scores = [rank(up, downvotes).sorting for up in range(0, 40)]
        assert scores == sorted(scores), f"not monotone for downvotes={downvotes}"


def test_sorting_non_decreasing_in_upvotes_once_voted() -> None:
    # The unvoted neutral 0.5 sits above a single upvote's lower bound.
    scores = [rank(up, 0).sorting for up in range(1, 40)]
    assert scores == sorted(scores)
    assert rank(1, 0).sorting < rank(0, 0).sorting


def test_sorting_non_increasing_in_downvotes() -> None:
    for upvotes in range(0, 12):
        scores = [rank(upvotes, down).sorting for down in range(0, 40)]
        assert scores == sorted(scores, reverse=True), f"not monotone for upvotes={upvotes}"


def test_confidence_grows_with_sample_size_at_same_ratio() -> None:
    assert rank(8, 2).confidence < rank(80, 20).confidence


def test_negative_counts_rejected() -> None:
    with pytest.raises(ValueError):
        rank(-1, 0)
    with pytest.raises(ValueError):
        rank(0, -1)
