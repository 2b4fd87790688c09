"""Pydantic-based validation of inbound data-store rows.

Rows arrive as loosely typed JSON from the hosted backend or a snapshot file.
They are validated here and converted into the frozen domain records; nothing
past this module sees raw rows.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TypedDict

from pydantic import TypeAdapter, ValidationError

from ...domain.models import (
    DEFAULT_RELIABILITY_SCORE,
    MAX_RELIABILITY_SCORE,
    CollabCardData,
    CollabPosting,
    CollabRecord,
    CollabStatus,
    Message,
    UserProfile,
    WhoPosts,
)
from ...domain.ranking import round_half_up


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class UserRowInput(TypedDict, total=False):
    id: str
    name: str | None
    niche_tags: list[str] | None
    style_tags: list[str] | None
    follower_bucket: str | None
    reliability_score: float | None
    completed_collabs: int | None
    avg_response_time: float | None
    abandoned_collabs: int | None


class CollabRowInput(TypedDict, total=False):
    id: str
    creator1: str
    creator2: str | None
    status: CollabStatus
    card_data: dict[str, object] | None
    created_at: datetime


class CollabStatusRowInput(TypedDict, total=False):
    status: CollabStatus


class MessageRowInput(TypedDict, total=False):
    created_at: datetime
    sender_id: str
    receiver_id: str


class SnapshotInput(TypedDict, total=False):
    users: list[dict[str, object]]
    collabs: list[dict[str, object]]
    messages: list[dict[str, object]]


_REQUIRED_USER_FIELDS = ("id",)
_REQUIRED_COLLAB_FIELDS = ("id", "creator1", "status", "created_at")
_REQUIRED_MESSAGE_FIELDS = ("created_at", "sender_id", "receiver_id")
_WHO_POSTS: dict[str, WhoPosts] = {"creator1": "creator1", "creator2": "creator2", "both": "both"}


def validate_as[SchemaT](schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def validate_json_as[SchemaT](schema: type[SchemaT], payload: str | bytes | bytearray) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_json(payload)
    except ValidationError as exc:
        message = f"Invalid JSON payload for {schema}."
        raise IncomingDataError(message) from exc


def _require(row: Mapping[str, object], fields: tuple[str, ...], kind: str) -> None:
    missing = [name for name in fields if name not in row]
    if missing:
        raise IncomingDataError(f"{kind} row is missing: {', '.join(missing)}.")


def _as_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def _as_str_tuple(value: object) -> tuple[str, ...]:
    if value is None:
        return ()
    try:
        items = validate_as(list[object], value)
    except IncomingDataError:
        return ()
    cleaned: list[str] = []
    for item in items:
        text = str(item).strip()
        if text:
            cleaned.append(text)
    return tuple(cleaned)


def _finite(value: float | None, name: str) -> float | None:
    if value is not None and not math.isfinite(value):
        raise IncomingDataError(f"User row has a non-finite {name}: {value}.")
    return value


def _reliability_score(value: float | None) -> int:
    if value is None:
        return DEFAULT_RELIABILITY_SCORE
    return max(0, min(MAX_RELIABILITY_SCORE, round_half_up(value)))


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def parse_card_data(payload: object) -> CollabCardData:
    """Read the loosely typed card data bag, ignoring fields of the wrong shape."""
    if not isinstance(payload, dict):
        return CollabCardData()
    who_posts = _as_str(payload.get("who_posts"))
    return CollabCardData(
        title=_as_str(payload.get("title")),
        objective=_as_str(payload.get("objective")),
        description=_as_str(payload.get("description")),
        deliverables=_as_str_tuple(payload.get("deliverables")),
        required_skills=_as_str_tuple(payload.get("required_skills")),
        tags=_as_str_tuple(payload.get("tags")),
        collab_type=_as_str(payload.get("collab_type")),
        who_posts=_WHO_POSTS.get(who_posts or ""),
        deadline=_as_str(payload.get("deadline")),
    )


def parse_user_profile(payload: object) -> UserProfile:
    row = validate_as(UserRowInput, payload)
    _require(row, _REQUIRED_USER_FIELDS, "User")
    reliability = _finite(row.get("reliability_score"), "reliability_score")
    avg_response_time = _finite(row.get("avg_response_time"), "avg_response_time")
    return UserProfile(
        id=row["id"],
        name=row.get("name") or "",
        niche_tags=_as_str_tuple(row.get("niche_tags")),
        style_tags=_as_str_tuple(row.get("style_tags")),
        follower_bucket=_as_str(row.get("follower_bucket")),
        reliability_score=_reliability_score(reliability),
        completed_collabs_count=row.get("completed_collabs") or 0,
        avg_response_time_hours=avg_response_time or 0.0,
        abandoned_collabs_count=row.get("abandoned_collabs") or 0,
    )


def parse_collab_posting(payload: object) -> CollabPosting:
    row = validate_as(CollabRowInput, payload)
    _require(row, _REQUIRED_COLLAB_FIELDS, "Collab")
    return CollabPosting(
        id=row["id"],
        creator_id=row["creator1"],
        status=row["status"],
        created_at=_as_utc(row["created_at"]),
        card_data=parse_card_data(row.get("card_data")),
    )


def parse_collab_record(payload: object) -> CollabRecord:
    row = validate_as(CollabStatusRowInput, payload)
    _require(row, ("status",), "Collab")
    return CollabRecord(status=row["status"])


def parse_message(payload: object) -> Message:
    row = validate_as(MessageRowInput, payload)
    _require(row, _REQUIRED_MESSAGE_FIELDS, "Message")
    return Message(
        created_at=_as_utc(row["created_at"]),
        sender_id=row["sender_id"],
        receiver_id=row["receiver_id"],
    )


def parse_snapshot(payload: object) -> SnapshotInput:
    snapshot = validate_as(SnapshotInput, payload)
    return {
        "users": list(snapshot.get("users", [])),
        "collabs": list(snapshot.get("collabs", [])),
        "messages": list(snapshot.get("messages", [])),
    }
