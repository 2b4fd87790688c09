"""Domain rules for ranking collaborations and scoring reliability."""

from .models import (
    CollabCardData,
    CollabPosting,
    CollabRecord,
    Message,
    RankedCollabPosting,
    RankingBreakdown,
    ReliabilityMetrics,
    UserProfile,
)
from .ranking import explain_breakdown, rank_collabs
from .ranking_weights import DEFAULT_WEIGHTS, RankingWeights
from .reliability import calculate_reliability_metrics

__all__ = [
    "DEFAULT_WEIGHTS",
    "CollabCardData",
    "CollabPosting",
    "CollabRecord",
    "Message",
    "RankedCollabPosting",
    "RankingBreakdown",
    "RankingWeights",
    "ReliabilityMetrics",
    "UserProfile",
    "calculate_reliability_metrics",
    "explain_breakdown",
    "rank_collabs",
]
