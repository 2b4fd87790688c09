"""Exports for test fakes."""

from .filesystem import InMemoryFileSystem
from .http import FakeResponse, FakeSession
from .rest import FakeRestClient
from .store import InMemoryDataStore

__all__ = [
    "FakeResponse",
    "FakeRestClient",
    "FakeSession",
    "InMemoryDataStore",
    "InMemoryFileSystem",
]
