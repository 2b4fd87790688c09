"""Domain model for the ranking factor weights."""

from __future__ import annotations

from dataclasses import dataclass

from ..exceptions import InvalidRankingWeightsError

MATCH_SCORE_SCALE = 100


@dataclass(frozen=True)
class RankingWeights:
    """Maximum points per ranking factor; the four always sum to 100."""

    tag_overlap: int = 40  # high priority
    follower_tier: int = 30  # medium
    recent_activity: int = 20  # low-medium
    reliability: int = 10  # low

    def __post_init__(self) -> None:
        values = (self.tag_overlap, self.follower_tier, self.recent_activity, self.reliability)
        total = sum(values)
        if any(value < 0 for value in values) or total != MATCH_SCORE_SCALE:
            raise InvalidRankingWeightsError(total)


DEFAULT_WEIGHTS = RankingWeights()
