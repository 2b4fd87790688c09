"""Test that network access is properly blocked in tests."""

import socket

import pytest

from collab_engine.infrastructure.io.http import build_rest_client
from tests.support.errors import NetworkIsolationError


class TestNetworkBlocking:
    """Verify that the network blocking fixture works."""

    def test_socket_connect_is_blocked(self) -> None:
        """Attempting to connect a socket should raise NetworkIsolationError."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            with pytest.raises(NetworkIsolationError) as exc_info:
                sock.connect(("example.com", 80))
            assert "Tests must not make network connections" in str(exc_info.value)
        finally:
            sock.close()

    def test_real_rest_client_cannot_reach_the_network(self) -> None:
        """A real REST client would connect; the blocking fixture stops it."""
        client = build_rest_client(
            base_url="https://project.example.co",
            api_key="key",
            timeout_seconds=1.0,
        )

        with pytest.raises(NetworkIsolationError):
            client.select("users", {"select": "*"})
