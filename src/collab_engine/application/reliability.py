"""Reliability scoring against a live data store.

Usage example:
    >>> from collab_engine.application.reliability import compute_reliability
    >>> store = ...  # Injected CollabDataStore from the composition root
    >>> metrics = compute_reliability("user-1", store)
    >>> 0 <= metrics.total_score <= 100
    True

A data-store failure never escapes ``compute_reliability``: it is logged and
the neutral score (50) is returned so ranking can carry on.
"""

from __future__ import annotations

from ..domain.models import NEUTRAL_RELIABILITY, ReliabilityMetrics
from ..domain.reliability import calculate_reliability_metrics
from ..exceptions import DataAccessError
from ..observability import get_logger
from ..protocols import CollabDataStore

logger = get_logger("collab_engine.application.reliability")


def compute_reliability(user_id: str, store: CollabDataStore) -> ReliabilityMetrics:
    """Fetch a user's history and score it.

    Returns:
        The computed metrics, or the neutral metrics when the store fails.
    """
    try:
        messages = store.fetch_messages_involving(user_id)
        collabs = store.fetch_collabs_involving(user_id)
    except DataAccessError as exc:
        logger.warning("Reliability fallback for %s: %s", user_id, exc)
        return NEUTRAL_RELIABILITY

    metrics = calculate_reliability_metrics(user_id, messages, collabs)
    logger.debug(
        "Reliability for %s: score=%s (%s messages, %s collabs)",
        user_id,
        metrics.total_score,
        len(messages),
        len(collabs),
    )
    return metrics


def update_reliability_score(user_id: str, store: CollabDataStore) -> ReliabilityMetrics:
    """Recompute a user's reliability and write it back to their profile.

    A failed write is logged and otherwise ignored; the computed metrics are
    returned either way.
    """
    metrics = compute_reliability(user_id, store)
    try:
        store.persist_reliability_metrics(user_id, metrics)
    except DataAccessError as exc:
        logger.error("Failed to persist reliability for %s: %s", user_id, exc)
    else:
        logger.info("Reliability for %s updated: %s", user_id, metrics.total_score)
    return metrics
