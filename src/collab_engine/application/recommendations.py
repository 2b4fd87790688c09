"""Recommendation feed for the discovery screen.

Usage example:
    >>> from collab_engine.application.recommendations import load_recommendations
    >>> from collab_engine.config import EngineConfig
    >>> store = ...  # Injected CollabDataStore from the composition root
    >>> feed = load_recommendations("user-1", store=store, config=EngineConfig())
    >>> [item.match_score for item in feed.recommended]  # best first
    [80, 64, 41]
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import pandas as pd

from ..config import EngineConfig
from ..domain.models import CollabCardData, CollabPosting, RankedCollabPosting, UserProfile
from ..domain.ranking import explain_breakdown, rank_collabs
from ..domain.ranking_weights import RankingWeights
from ..observability import get_logger
from ..protocols import CollabDataStore, FileSystem

logger = get_logger("collab_engine.application.recommendations")

EXPORT_COLUMNS = (
    "collab_id",
    "creator_id",
    "title",
    "match_score",
    "tag_overlap",
    "follower_tier",
    "recent_activity",
    "reliability",
    "created_at",
    "explanation",
    "objective",
    "description",
    "collab_type",
    "who_posts",
    "deadline",
    "deliverables",
    "required_skills",
    "tags",
)

_LIST_SEPARATOR = "; "


@dataclass(frozen=True)
class RecommendationFeed:
    """Ranked and newest-first views over the same candidate postings."""

    viewer: UserProfile | None
    recommended: tuple[RankedCollabPosting, ...] = ()
    latest: tuple[CollabPosting, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.recommended and not self.latest


def load_recommendations(
    viewer_id: str,
    *,
    store: CollabDataStore,
    config: EngineConfig,
    now: datetime | None = None,
    weights: RankingWeights | None = None,
) -> RecommendationFeed:
    """Build the recommended and latest feeds for one viewer.

    Raises:
        DataAccessError: If the store cannot be read.
    """
    viewer = store.fetch_profile(viewer_id)
    if viewer is None:
        logger.warning("Viewer %s not found; returning an empty feed", viewer_id)
        return RecommendationFeed(viewer=None)

    candidates = [
        posting
        for posting in store.fetch_pending_collabs(
            excluding_creator_id=viewer_id,
            limit=config.candidate_limit,
        )
        if posting.status == "pending" and posting.creator_id != viewer_id
    ]
    if not candidates:
        logger.info("No pending collabs for %s", viewer_id)
        return RecommendationFeed(viewer=viewer)

    creator_ids = list(dict.fromkeys(posting.creator_id for posting in candidates))
    creators = store.fetch_profiles_by_ids(creator_ids)
    missing = len(set(creator_ids) - set(creators))
    if missing:
        logger.warning("%s creator profile(s) missing; their collabs score 0", missing)

    ranked = rank_collabs(
        viewer,
        candidates,
        creators,
        now=now or datetime.now(UTC),
        weights=weights,
    )
    latest = sorted(candidates, key=lambda posting: posting.created_at, reverse=True)

    limit = config.recommendation_limit
    logger.info(
        "Ranked %s collabs for %s (showing %s)", len(ranked), viewer_id, min(limit, len(ranked))
    )
    return RecommendationFeed(
        viewer=viewer,
        recommended=tuple(ranked[:limit]),
        latest=tuple(latest[:limit]),
    )


def _card_columns(card: CollabCardData) -> dict[str, str]:
    return {
        "objective": card.objective or "",
        "description": card.description or "",
        "collab_type": card.collab_type or "",
        "who_posts": card.who_posts or "",
        "deadline": card.deadline or "",
        "deliverables": _LIST_SEPARATOR.join(card.deliverables),
        "required_skills": _LIST_SEPARATOR.join(card.required_skills),
        "tags": _LIST_SEPARATOR.join(card.tags),
    }


def ranked_postings_frame(ranked: Sequence[RankedCollabPosting]) -> pd.DataFrame:
    """Tabulate ranked postings, one row each, in rank order.

    List-valued card fields are joined with ``"; "``.
    """
    rows = [
        {
            "collab_id": item.posting.id,
            "creator_id": item.posting.creator_id,
            "title": item.posting.card_data.title or "",
            "match_score": item.match_score,
            "tag_overlap": item.breakdown.tag_overlap,
            "follower_tier": item.breakdown.follower_tier,
            "recent_activity": item.breakdown.recent_activity,
            "reliability": item.breakdown.reliability,
            "created_at": item.posting.created_at.isoformat(),
            "explanation": explain_breakdown(item.breakdown),
            **_card_columns(item.posting.card_data),
        }
        for item in ranked
    ]
    return pd.DataFrame(rows, columns=list(EXPORT_COLUMNS))


def export_ranked_postings(
    ranked: Sequence[RankedCollabPosting],
    path: Path,
    fs: FileSystem,
) -> Path:
    """Write ranked postings to CSV and return the path written."""
    fs.write_csv(ranked_postings_frame(ranked), path)
    logger.info("Exported %s ranked collabs: %s", len(ranked), path)
    return path
