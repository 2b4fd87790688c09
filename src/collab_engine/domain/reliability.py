"""Reliability rules: a 0-100 reputation score from message and collab history."""

from __future__ import annotations

from collections.abc import Sequence

from .models import (
    DEFAULT_RELIABILITY_SCORE,
    MAX_RELIABILITY_SCORE,
    NEUTRAL_RELIABILITY,
    CollabRecord,
    Message,
    ReliabilityMetrics,
)
from .ranking import round_half_up

_SECONDS_PER_HOUR = 3_600

# (responded faster than hours, points)
FAST_RESPONSE_BONUSES: tuple[tuple[float, int], ...] = ((24, 20), (48, 10))
SLOW_RESPONSE_HOURS = 72
SLOW_RESPONSE_PENALTY = -10

# (completion rate at least percent, points)
COMPLETION_BONUSES: tuple[tuple[float, int], ...] = ((80, 20), (60, 10))
LOW_COMPLETION_PERCENT = 40
LOW_COMPLETION_PENALTY = -15

ABANDON_PENALTY_PER_COLLAB = -5
HIGH_ABANDON_RATE = 0.3
HIGH_ABANDON_PENALTY = -20


def average_response_time_hours(user_id: str, messages: Sequence[Message]) -> float:
    """Average hours the user takes to answer a message addressed to them.

    Only adjacent pairs count: a message received by the user immediately followed
    by one the user sent. Users with no such pairs average 0.
    """
    ordered = sorted(messages, key=lambda message: message.created_at)
    total_hours = 0.0
    responses = 0
    for previous, current in zip(ordered, ordered[1:]):
        if previous.receiver_id == user_id and current.sender_id == user_id:
            elapsed = (current.created_at - previous.created_at).total_seconds()
            total_hours += elapsed / _SECONDS_PER_HOUR
            responses += 1
    return total_hours / responses if responses > 0 else 0.0


def completion_rate_percent(collabs: Sequence[CollabRecord]) -> float:
    """Share of the user's collaborations that completed, as a percentage."""
    if not collabs:
        return 0.0
    completed = sum(1 for collab in collabs if collab.status == "completed")
    return completed / len(collabs) * 100


def count_abandoned(collabs: Sequence[CollabRecord]) -> int:
    """Number of the user's collaborations that were cancelled."""
    return sum(1 for collab in collabs if collab.status == "cancelled")


def score_response_time(avg_hours: float) -> int:
    for below_hours, points in FAST_RESPONSE_BONUSES:
        if avg_hours < below_hours:
            return points
    if avg_hours > SLOW_RESPONSE_HOURS:
        return SLOW_RESPONSE_PENALTY
    return 0


def score_completion_rate(rate_percent: float) -> int:
    for at_least, points in COMPLETION_BONUSES:
        if rate_percent >= at_least:
            return points
    if rate_percent < LOW_COMPLETION_PERCENT:
        return LOW_COMPLETION_PENALTY
    return 0


def score_abandonment(abandoned: int, total_collabs: int) -> int:
    """Linear per-collab penalty plus a flat penalty for a high abandon rate."""
    points = abandoned * ABANDON_PENALTY_PER_COLLAB
    if abandoned > total_collabs * HIGH_ABANDON_RATE:
        points += HIGH_ABANDON_PENALTY
    return points


def reliability_score(
    avg_hours: float,
    rate_percent: float,
    abandoned: int,
    total_collabs: int,
) -> int:
    """Combine the three signals onto a neutral base of 50, clamped to 0-100."""
    score = (
        DEFAULT_RELIABILITY_SCORE
        + score_response_time(avg_hours)
        + score_completion_rate(rate_percent)
        + score_abandonment(abandoned, total_collabs)
    )
    return round_half_up(max(0, min(MAX_RELIABILITY_SCORE, score)))


def calculate_reliability_metrics(
    user_id: str,
    messages: Sequence[Message],
    collabs: Sequence[CollabRecord],
) -> ReliabilityMetrics:
    """Calculate every reliability metric from already-fetched history.

    A user with no messages and no collaborations gets the neutral metrics rather
    than the fast-response bonus and low-completion penalty an empty history would
    otherwise earn.
    """
    if not messages and not collabs:
        return NEUTRAL_RELIABILITY

    avg_hours = average_response_time_hours(user_id, messages)
    rate = completion_rate_percent(collabs)
    abandoned = count_abandoned(collabs)
    return ReliabilityMetrics(
        avg_response_time_hours=avg_hours,
        completion_rate_percent=rate,
        abandoned_count=abandoned,
        total_score=reliability_score(avg_hours, rate, abandoned, len(collabs)),
    )
