"""Application-level orchestration over the data store and the domain rules."""

from .ranking_weights import load_ranking_weights
from .recommendations import RecommendationFeed, export_ranked_postings, load_recommendations
from .reliability import compute_reliability, update_reliability_score

__all__ = [
    "RecommendationFeed",
    "compute_reliability",
    "export_ranked_postings",
    "load_ranking_weights",
    "load_recommendations",
    "update_reliability_score",
]
