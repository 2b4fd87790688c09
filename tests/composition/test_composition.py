"""Tests for CLI composition root wiring."""

from __future__ import annotations

from pathlib import Path

import pytest
import typer

from collab_engine import composition
from collab_engine.config import EngineConfig
from collab_engine.exceptions import DataStoreNotConfiguredError
from collab_engine.infrastructure import (
    LocalFileSystem,
    PostgrestDataStore,
    RequestsRestClient,
    SnapshotDataStore,
)


def test_build_cli_dependencies_without_store() -> None:
    deps = composition.build_cli_dependencies(config=EngineConfig(), build_store=False)

    assert isinstance(deps.fs, LocalFileSystem)
    assert deps.store is None


def test_file_source_builds_snapshot_store() -> None:
    config = EngineConfig(data_source="file", snapshot_path="data/snapshot.json")

    deps = composition.build_cli_dependencies(config=config, build_store=True)

    assert isinstance(deps.store, SnapshotDataStore)
    assert deps.store.path == Path("data/snapshot.json")


def test_file_source_requires_snapshot_path() -> None:
    with pytest.raises(DataStoreNotConfiguredError, match="SNAPSHOT_PATH"):
        composition.build_cli_dependencies(
            config=EngineConfig(data_source="file"), build_store=True
        )


def test_api_source_reports_missing_credentials() -> None:
    config = EngineConfig(supabase_url="https://project.example.co")

    with pytest.raises(DataStoreNotConfiguredError) as exc_info:
        composition.build_cli_dependencies(config=config, build_store=True)

    assert exc_info.value.missing == ("SUPABASE_KEY",)


def test_api_source_builds_postgrest_store(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    client = RequestsRestClient(base_url="https://project.example.co")

    def fake_build_rest_client(
        *,
        base_url: str,
        api_key: str,
        timeout_seconds: float,
    ) -> RequestsRestClient:
        captured["base_url"] = base_url
        captured["api_key"] = api_key
        captured["timeout_seconds"] = timeout_seconds
        return client

    monkeypatch.setattr(composition, "build_rest_client", fake_build_rest_client)
    config = EngineConfig(
        supabase_url="https://project.example.co",
        supabase_key="key",
        supabase_timeout_seconds=9.0,
    )

    deps = composition.build_cli_dependencies(config=config, build_store=True)

    assert isinstance(deps.store, PostgrestDataStore)
    assert deps.store.client is client
    assert captured == {
        "base_url": "https://project.example.co",
        "api_key": "key",
        "timeout_seconds": 9.0,
    }


def test_module_app_is_typer_app() -> None:
    assert isinstance(composition.app, typer.Typer)
