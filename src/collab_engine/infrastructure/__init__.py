"""Concrete infrastructure implementations."""

from .io.filesystem import LocalFileSystem
from .io.http import RequestsRestClient, build_rest_client
from .postgrest_store import PostgrestDataStore
from .snapshot_store import SnapshotDataStore

__all__ = [
    "LocalFileSystem",
    "PostgrestDataStore",
    "RequestsRestClient",
    "SnapshotDataStore",
    "build_rest_client",
]
