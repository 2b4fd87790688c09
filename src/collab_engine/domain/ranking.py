"""Rule-based ranking of collaboration postings for one viewer.

Four independent factors, each capped at its weight, add up to a 0-100 match
score. The default weights are tag overlap 40, follower tier 30, recent
activity 20 and reliability 10.

Usage example:
    from datetime import UTC, datetime

    from collab_engine.domain.models import CollabPosting, UserProfile
    from collab_engine.domain.ranking import rank_collabs

    viewer = UserProfile(id="u1", niche_tags=("fitness",), follower_bucket="10k-50k")
    creator = UserProfile(id="u2", niche_tags=("Fitness",), follower_bucket="10k-50k")
    posting = CollabPosting(
        id="c1", creator_id="u2", status="pending", created_at=datetime.now(UTC)
    )

    ranked = rank_collabs(viewer, [posting], {"u2": creator})
    assert ranked[0].match_score == ranked[0].breakdown.total
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime

from .models import CollabPosting, RankedCollabPosting, RankingBreakdown, UserProfile
from .ranking_weights import DEFAULT_WEIGHTS, RankingWeights

# Ordered audience-size buckets → [min, max) follower counts
FOLLOWER_BUCKET_RANGES: dict[str, tuple[float, float]] = {
    "0-1k": (0, 1_000),
    "1k-10k": (1_000, 10_000),
    "10k-50k": (10_000, 50_000),
    "50k-100k": (50_000, 100_000),
    "100k+": (100_000, math.inf),
}

EXACT_MATCH_BONUS = 2
EXACT_MATCH_BONUS_CAP_RATIO = 0.2

MISSING_BUCKET_RATIO = 0.3
UNKNOWN_BUCKET_RATIO = 0.5
CLOSE_BUCKET_RATIO = 0.8
DISTANT_BUCKET_RATIO = 0.6

# (max age in days, share of the activity weight)
RECENCY_BANDS: tuple[tuple[float, float], ...] = ((1, 0.6), (7, 0.4), (30, 0.2))
RECENCY_FLOOR_RATIO = 0.1

# (completed collabs strictly above, share of the activity weight)
ACTIVITY_BANDS: tuple[tuple[int, float], ...] = ((10, 0.4), (5, 0.3), (0, 0.2))
ACTIVITY_FLOOR_RATIO = 0.1

_SECONDS_PER_DAY = 86_400


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return math.floor(value + 0.5)


def _bounded(points: float, maximum: int) -> int:
    return max(0, min(maximum, round_half_up(points)))


def score_tag_overlap(
    viewer_tags: Sequence[str],
    candidate_tags: Sequence[str],
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> int:
    """Score lenient tag overlap between the viewer and a candidate.

    A viewer tag overlaps when it contains, or is contained in, any candidate tag
    (case-insensitive). Exact matches earn a small capped bonus on top.
    """
    max_score = weights.tag_overlap
    if not viewer_tags or not candidate_tags:
        return 0

    viewer_lower = [tag.lower() for tag in viewer_tags]
    candidate_lower = [tag.lower() for tag in candidate_tags]

    overlapping = [
        tag
        for tag in viewer_lower
        if any(other in tag or tag in other for other in candidate_lower)
    ]
    ratio = len(overlapping) / max(len(viewer_lower), len(candidate_lower))
    score: float = round_half_up(ratio * max_score)

    exact = [tag for tag in viewer_lower if tag in candidate_lower]
    score += min(len(exact) * EXACT_MATCH_BONUS, max_score * EXACT_MATCH_BONUS_CAP_RATIO)

    return _bounded(score, max_score)


def score_follower_tier(
    viewer_bucket: str | None,
    creator_bucket: str | None,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> int:
    """Score audience-size compatibility between two follower buckets."""
    max_score = weights.follower_tier

    if not viewer_bucket or not creator_bucket:
        return _bounded(max_score * MISSING_BUCKET_RATIO, max_score)

    if viewer_bucket == creator_bucket:
        return max_score

    viewer_range = FOLLOWER_BUCKET_RANGES.get(viewer_bucket)
    creator_range = FOLLOWER_BUCKET_RANGES.get(creator_bucket)
    if viewer_range is None or creator_range is None:
        return _bounded(max_score * UNKNOWN_BUCKET_RATIO, max_score)

    viewer_min, viewer_max = viewer_range
    creator_min, creator_max = creator_range
    larger_max = max(viewer_max, creator_max)

    ranges_touch = viewer_min <= creator_max and viewer_max >= creator_min
    minimums_close = abs(viewer_min - creator_min) < larger_max * 0.5
    if ranges_touch or minimums_close:
        return _bounded(max_score * CLOSE_BUCKET_RATIO, max_score)

    distance = min(abs(viewer_min - creator_max), abs(creator_min - viewer_max))
    proximity = max(0.0, 1 - distance / larger_max)
    return _bounded(proximity * max_score * DISTANT_BUCKET_RATIO, max_score)


def score_recent_activity(
    created_at: datetime,
    creator_completed_collabs: int,
    *,
    now: datetime,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> int:
    """Score posting freshness plus how active the creator has been."""
    max_score = weights.recent_activity
    days_since_creation = (now - created_at).total_seconds() / _SECONDS_PER_DAY

    recency_ratio = RECENCY_FLOOR_RATIO
    for max_days, ratio in RECENCY_BANDS:
        if days_since_creation < max_days:
            recency_ratio = ratio
            break

    activity_ratio = ACTIVITY_FLOOR_RATIO
    for above, ratio in ACTIVITY_BANDS:
        if creator_completed_collabs > above:
            activity_ratio = ratio
            break

    return _bounded(max_score * recency_ratio + max_score * activity_ratio, max_score)


def score_reliability(
    creator_reliability: int,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> int:
    """Rescale a stored 0-100 reliability score onto the reliability weight."""
    max_score = weights.reliability
    return _bounded(creator_reliability / 100 * max_score, max_score)


def calculate_breakdown(
    viewer: UserProfile,
    posting: CollabPosting,
    creator: UserProfile | None,
    *,
    now: datetime,
    weights: RankingWeights = DEFAULT_WEIGHTS,
) -> RankingBreakdown:
    """Calculate all four ranking factors for one posting."""
    if creator is None:
        return RankingBreakdown()

    return RankingBreakdown(
        tag_overlap=score_tag_overlap(
            viewer.all_tags,
            creator.all_tags + posting.card_data.tags,
            weights,
        ),
        follower_tier=score_follower_tier(
            viewer.follower_bucket,
            creator.follower_bucket,
            weights,
        ),
        recent_activity=score_recent_activity(
            posting.created_at,
            creator.completed_collabs_count,
            now=now,
            weights=weights,
        ),
        reliability=score_reliability(creator.reliability_score, weights),
    )


def rank_collabs(
    viewer: UserProfile,
    candidates: Sequence[CollabPosting],
    creators_by_id: Mapping[str, UserProfile],
    *,
    now: datetime | None = None,
    weights: RankingWeights | None = None,
) -> list[RankedCollabPosting]:
    """Rank every candidate posting for a viewer, best match first.

    Candidates whose creator is missing from ``creators_by_id`` score zero but are
    kept. Equal scores keep their input order.
    """
    now = now or datetime.now(UTC)
    weights = weights or DEFAULT_WEIGHTS

    ranked = [
        RankedCollabPosting(
            posting=posting,
            breakdown=calculate_breakdown(
                viewer,
                posting,
                creators_by_id.get(posting.creator_id),
                now=now,
                weights=weights,
            ),
        )
        for posting in candidates
    ]
    # list.sort is stable, so ties keep their input order
    ranked.sort(key=lambda item: item.match_score, reverse=True)
    return ranked


def explain_breakdown(breakdown: RankingBreakdown) -> str:
    """Summarise the non-zero factors of a breakdown for display."""
    parts: list[str] = []
    if breakdown.tag_overlap > 0:
        parts.append(f"Tags: {breakdown.tag_overlap}pts")
    if breakdown.follower_tier > 0:
        parts.append(f"Follower tier: {breakdown.follower_tier}pts")
    if breakdown.recent_activity > 0:
        parts.append(f"Activity: {breakdown.recent_activity}pts")
    if breakdown.reliability > 0:
        parts.append(f"Reliability: {breakdown.reliability}pts")
    return " • ".join(parts) or "No match"
