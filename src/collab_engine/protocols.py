"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces the engine depends on, so the
application layer can be tested against in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .domain.models import CollabPosting, CollabRecord, Message, ReliabilityMetrics, UserProfile

if TYPE_CHECKING:
    import pandas as pd


@runtime_checkable
class CollabDataStore(Protocol):
    """Read and write access to users, collabs and messages.

    Every method raises ``DataAccessError`` when the store cannot serve the
    request. No method retries.
    """

    def fetch_messages_involving(self, user_id: str) -> list[Message]:
        """Return messages the user sent or received, oldest first."""
        ...

    def fetch_collabs_involving(self, user_id: str) -> list[CollabRecord]:
        """Return every collaboration the user created or joined, any status."""
        ...

    def fetch_pending_collabs(
        self, *, excluding_creator_id: str, limit: int
    ) -> list[CollabPosting]:
        """Return the newest pending postings not created by the given user."""
        ...

    def fetch_profiles_by_ids(self, ids: Iterable[str]) -> dict[str, UserProfile]:
        """Return profiles keyed by id; unknown ids are simply absent."""
        ...

    def fetch_profile(self, user_id: str) -> UserProfile | None:
        """Return one profile, or None when it does not exist."""
        ...

    def persist_reliability_metrics(self, user_id: str, metrics: ReliabilityMetrics) -> None:
        """Write recomputed reliability metrics onto the user's profile."""
        ...


@runtime_checkable
class RestClient(Protocol):
    """Abstract table-oriented REST client (PostgREST style)."""

    def select(self, table: str, params: Mapping[str, str]) -> list[dict[str, object]]:
        """Fetch rows from a table.

        Args:
            table: Table name.
            params: Query parameters (filters, ordering, limit, select list).

        Returns:
            Decoded JSON rows.

        Raises:
            DataAccessError: On network, HTTP or decoding failures.
        """
        ...

    def update(
        self,
        table: str,
        params: Mapping[str, str],
        payload: Mapping[str, object],
    ) -> None:
        """Patch rows matching the filter params with the payload."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for snapshots, config files and exports."""

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...

    def read_json(self, path: Path) -> dict[str, object]:
        """Read JSON object file."""
        ...

    def write_json(self, data: Mapping[str, object], path: Path) -> None:
        """Write JSON file."""
        ...

    def write_csv(self, df: pd.DataFrame, path: Path) -> None:
        """Write DataFrame to CSV file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...
