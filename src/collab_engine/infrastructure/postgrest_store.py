"""Data store backed by the hosted backend's PostgREST API.

Usage example:
    from collab_engine.infrastructure import PostgrestDataStore, build_rest_client

    client = build_rest_client(base_url=url, api_key=key, timeout_seconds=15.0)
    store = PostgrestDataStore(client)
    profile = store.fetch_profile("user-1")
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import override

from ..domain.models import CollabPosting, CollabRecord, Message, ReliabilityMetrics, UserProfile
from ..protocols import CollabDataStore, RestClient
from .io.rows import (
    COLLAB_STATUS_COLUMNS,
    COLLABS_TABLE,
    MESSAGE_COLUMNS,
    MESSAGES_TABLE,
    USERS_TABLE,
    parse_rows,
    reliability_row,
)
from .io.validation import (
    parse_collab_posting,
    parse_collab_record,
    parse_message,
    parse_user_profile,
)


def _quote(value: str) -> str:
    """Quote a filter value so PostgREST reserved characters stay literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _either_column_equals(columns: tuple[str, str], value: str) -> str:
    left, right = columns
    quoted = _quote(value)
    return f"({left}.eq.{quoted},{right}.eq.{quoted})"


class PostgrestDataStore(CollabDataStore):
    """Collab data store over a ``RestClient``."""

    def __init__(self, client: RestClient) -> None:
        self.client = client

    @override
    def fetch_messages_involving(self, user_id: str) -> list[Message]:
        rows = self.client.select(
            MESSAGES_TABLE,
            {
                "select": MESSAGE_COLUMNS,
                "or": _either_column_equals(("sender_id", "receiver_id"), user_id),
                "order": "created_at.asc",
            },
        )
        return parse_rows(rows, parse_message, "fetch messages")

    @override
    def fetch_collabs_involving(self, user_id: str) -> list[CollabRecord]:
        rows = self.client.select(
            COLLABS_TABLE,
            {
                "select": COLLAB_STATUS_COLUMNS,
                "or": _either_column_equals(("creator1", "creator2"), user_id),
            },
        )
        return parse_rows(rows, parse_collab_record, "fetch collabs")

    @override
    def fetch_pending_collabs(
        self, *, excluding_creator_id: str, limit: int
    ) -> list[CollabPosting]:
        rows = self.client.select(
            COLLABS_TABLE,
            {
                "select": "*",
                "creator1": f"neq.{excluding_creator_id}",
                "status": "eq.pending",
                "order": "created_at.desc",
                "limit": str(limit),
            },
        )
        return parse_rows(rows, parse_collab_posting, "fetch pending collabs")

    @override
    def fetch_profiles_by_ids(self, ids: Iterable[str]) -> dict[str, UserProfile]:
        unique_ids = list(dict.fromkeys(ids))
        if not unique_ids:
            return {}
        id_list = ",".join(_quote(user_id) for user_id in unique_ids)
        rows = self.client.select(USERS_TABLE, {"select": "*", "id": f"in.({id_list})"})
        profiles = parse_rows(rows, parse_user_profile, "fetch profiles")
        return {profile.id: profile for profile in profiles}

    @override
    def fetch_profile(self, user_id: str) -> UserProfile | None:
        rows = self.client.select(
            USERS_TABLE,
            {"select": "*", "id": f"eq.{user_id}", "limit": "1"},
        )
        profiles = parse_rows(rows, parse_user_profile, "fetch profile")
        return profiles[0] if profiles else None

    @override
    def persist_reliability_metrics(self, user_id: str, metrics: ReliabilityMetrics) -> None:
        self.client.update(USERS_TABLE, {"id": f"eq.{user_id}"}, reliability_row(metrics))
