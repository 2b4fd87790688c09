"""Data store over a local JSON snapshot of the backend tables.

The snapshot holds the same row shapes the REST API returns::

    {"users": [...], "collabs": [...], "messages": [...]}

It is re-read on every call, so edits to the file are picked up without a
restart. Any failure reading it (missing file, bad encoding, bad JSON, bad
rows) surfaces as ``DataAccessError``.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import override

from ..domain.models import CollabPosting, CollabRecord, Message, ReliabilityMetrics, UserProfile
from ..exceptions import DataAccessError
from ..protocols import CollabDataStore, FileSystem
from .io.rows import parse_rows, reliability_row
from .io.validation import (
    SnapshotInput,
    parse_collab_posting,
    parse_collab_record,
    parse_message,
    parse_snapshot,
    parse_user_profile,
)


class SnapshotDataStore(CollabDataStore):
    """Collab data store reading and writing a JSON snapshot file."""

    def __init__(self, path: Path, fs: FileSystem) -> None:
        self.path = path
        self.fs = fs

    def _load(self, operation: str) -> SnapshotInput:
        if not self.fs.exists(self.path):
            raise DataAccessError(operation, f"snapshot not found: {self.path}")
        try:
            return parse_snapshot(self.fs.read_json(self.path))
        except (OSError, RuntimeError, ValueError) as exc:
            raise DataAccessError(operation, f"unreadable snapshot {self.path}: {exc}") from exc

    @override
    def fetch_messages_involving(self, user_id: str) -> list[Message]:
        operation = "fetch messages"
        rows = [
            row
            for row in self._load(operation)["messages"]
            if user_id in (row.get("sender_id"), row.get("receiver_id"))
        ]
        messages = parse_rows(rows, parse_message, operation)
        return sorted(messages, key=lambda message: message.created_at)

    @override
    def fetch_collabs_involving(self, user_id: str) -> list[CollabRecord]:
        operation = "fetch collabs"
        rows = [
            row
            for row in self._load(operation)["collabs"]
            if user_id in (row.get("creator1"), row.get("creator2"))
        ]
        return parse_rows(rows, parse_collab_record, operation)

    @override
    def fetch_pending_collabs(
        self, *, excluding_creator_id: str, limit: int
    ) -> list[CollabPosting]:
        operation = "fetch pending collabs"
        postings = parse_rows(self._load(operation)["collabs"], parse_collab_posting, operation)
        pending = [
            posting
            for posting in postings
            if posting.status == "pending" and posting.creator_id != excluding_creator_id
        ]
        pending.sort(key=lambda posting: posting.created_at, reverse=True)
        return pending[:limit]

    @override
    def fetch_profiles_by_ids(self, ids: Iterable[str]) -> dict[str, UserProfile]:
        operation = "fetch profiles"
        wanted = set(ids)
        if not wanted:
            return {}
        rows = [row for row in self._load(operation)["users"] if row.get("id") in wanted]
        profiles = parse_rows(rows, parse_user_profile, operation)
        return {profile.id: profile for profile in profiles}

    @override
    def fetch_profile(self, user_id: str) -> UserProfile | None:
        return self.fetch_profiles_by_ids([user_id]).get(user_id)

    @override
    def persist_reliability_metrics(self, user_id: str, metrics: ReliabilityMetrics) -> None:
        operation = "persist reliability"
        snapshot = self._load(operation)
        for row in snapshot["users"]:
            if row.get("id") == user_id:
                row.update(reliability_row(metrics))
                break
        else:
            raise DataAccessError(operation, f"user {user_id} not in snapshot")
        try:
            self.fs.write_json(dict(snapshot), self.path)
        except OSError as exc:
            raise DataAccessError(operation, str(exc)) from exc
