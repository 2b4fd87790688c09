"""Typed domain records read by the ranking and reliability rules.

These are populated by the data-access layer after validation; the domain
functions only ever read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

CollabStatus = Literal["pending", "in_progress", "completed", "cancelled"]
WhoPosts = Literal["creator1", "creator2", "both"]

DEFAULT_RELIABILITY_SCORE = 50
MAX_RELIABILITY_SCORE = 100


@dataclass(frozen=True)
class UserProfile:
    """The subset of a creator profile used for matching."""

    id: str
    niche_tags: tuple[str, ...] = ()
    style_tags: tuple[str, ...] = ()
    follower_bucket: str | None = None
    reliability_score: int = DEFAULT_RELIABILITY_SCORE
    completed_collabs_count: int = 0
    avg_response_time_hours: float = 0.0
    abandoned_collabs_count: int = 0
    name: str = ""

    @property
    def all_tags(self) -> tuple[str, ...]:
        """Niche tags followed by style tags."""
        return self.niche_tags + self.style_tags


@dataclass(frozen=True)
class CollabCardData:
    """Display and ranking metadata attached to a posting."""

    title: str | None = None
    objective: str | None = None
    description: str | None = None
    deliverables: tuple[str, ...] = ()
    required_skills: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    collab_type: str | None = None
    who_posts: WhoPosts | None = None
    deadline: str | None = None


@dataclass(frozen=True)
class CollabPosting:
    """A collaboration opportunity created by one user."""

    id: str
    creator_id: str
    status: CollabStatus
    created_at: datetime
    card_data: CollabCardData = field(default_factory=CollabCardData)


@dataclass(frozen=True)
class RankingBreakdown:
    """Per-factor points for one ranked posting."""

    tag_overlap: int = 0
    follower_tier: int = 0
    recent_activity: int = 0
    reliability: int = 0

    @property
    def total(self) -> int:
        return self.tag_overlap + self.follower_tier + self.recent_activity + self.reliability


@dataclass(frozen=True)
class RankedCollabPosting:
    """A posting with its transient match score for one viewer."""

    posting: CollabPosting
    breakdown: RankingBreakdown

    @property
    def match_score(self) -> int:
        return self.breakdown.total


@dataclass(frozen=True)
class Message:
    """One chat message, reduced to what response-time scoring needs."""

    created_at: datetime
    sender_id: str
    receiver_id: str


@dataclass(frozen=True)
class CollabRecord:
    """One collaboration the user created or joined."""

    status: CollabStatus


@dataclass(frozen=True)
class ReliabilityMetrics:
    """Reputation metrics derived from message and collaboration history."""

    avg_response_time_hours: float
    completion_rate_percent: float
    abandoned_count: int
    total_score: int


NEUTRAL_RELIABILITY = ReliabilityMetrics(
    avg_response_time_hours=0.0,
    completion_rate_percent=0.0,
    abandoned_count=0,
    total_score=DEFAULT_RELIABILITY_SCORE,
)
