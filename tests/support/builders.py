"""Builders for domain records and backend rows used across tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from collab_engine.domain.models import (
    CollabCardData,
    CollabPosting,
    CollabRecord,
    CollabStatus,
    Message,
    UserProfile,
)

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


def make_user(user_id: str = "viewer", **overrides: object) -> UserProfile:
    values: dict[str, object] = {"id": user_id}
    values.update(overrides)
    return UserProfile(**values)  # type: ignore[arg-type]


def make_posting(
    collab_id: str,
    creator_id: str,
    *,
    age: timedelta = timedelta(hours=2),
    status: CollabStatus = "pending",
    tags: tuple[str, ...] = (),
    title: str | None = None,
) -> CollabPosting:
    return CollabPosting(
        id=collab_id,
        creator_id=creator_id,
        status=status,
        created_at=NOW - age,
        card_data=CollabCardData(title=title, tags=tags),
    )


def make_message(sender_id: str, receiver_id: str, *, minutes: float) -> Message:
    return Message(
        created_at=NOW + timedelta(minutes=minutes),
        sender_id=sender_id,
        receiver_id=receiver_id,
    )


def make_records(**counts: int) -> list[CollabRecord]:
    """Build collab records, e.g. ``make_records(completed=7, cancelled=3)``."""
    records: list[CollabRecord] = []
    for status, count in counts.items():
        records.extend(CollabRecord(status=status) for _ in range(count))  # type: ignore[arg-type]
    return records


def user_row(user_id: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": user_id,
        "name": user_id.title(),
        "niche_tags": ["fitness"],
        "style_tags": [],
        "follower_bucket": "10k-50k",
        "reliability_score": 50,
        "completed_collabs": 0,
        "avg_response_time": 0,
        "abandoned_collabs": 0,
    }
    row.update(overrides)
    return row


def collab_row(
    collab_id: str,
    creator_id: str,
    *,
    status: str = "pending",
    created_at: str = "2025-06-01T10:00:00+00:00",
    card_data: dict[str, object] | None = None,
) -> dict[str, object]:
    return {
        "id": collab_id,
        "creator1": creator_id,
        "creator2": None,
        "status": status,
        "card_data": card_data if card_data is not None else {"title": f"Collab {collab_id}"},
        "created_at": created_at,
    }


def message_row(sender_id: str, receiver_id: str, created_at: str) -> dict[str, object]:
    return {"created_at": created_at, "sender_id": sender_id, "receiver_id": receiver_id}
