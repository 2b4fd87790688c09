"""Pytest fixtures shared by every test module.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from tests.fakes import FakeRestClient, InMemoryDataStore, InMemoryFileSystem
from tests.support.errors import NetworkIsolationError


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    Tests that need HTTP should use FakeSession or FakeRestClient.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture
def in_memory_fs() -> InMemoryFileSystem:
    """Provide an in-memory filesystem for tests."""
    return InMemoryFileSystem()


@pytest.fixture
def fake_rest_client() -> FakeRestClient:
    """Provide a fake REST client for tests."""
    return FakeRestClient()


@pytest.fixture
def in_memory_store() -> InMemoryDataStore:
    """Provide an empty in-memory data store for tests."""
    return InMemoryDataStore()
