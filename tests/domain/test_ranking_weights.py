"""Tests for ranking weight validation."""

from __future__ import annotations

import pytest

from collab_engine.domain.ranking_weights import DEFAULT_WEIGHTS, RankingWeights
from collab_engine.exceptions import InvalidRankingWeightsError


def test_default_weights() -> None:
    assert DEFAULT_WEIGHTS == RankingWeights(
        tag_overlap=40, follower_tier=30, recent_activity=20, reliability=10
    )


def test_weights_must_sum_to_hundred() -> None:
    with pytest.raises(InvalidRankingWeightsError) as exc_info:
        RankingWeights(tag_overlap=50)

    assert exc_info.value.total == 110


def test_weights_must_be_non_negative() -> None:
    with pytest.raises(InvalidRankingWeightsError):
        RankingWeights(tag_overlap=60, follower_tier=-10, recent_activity=40, reliability=10)
