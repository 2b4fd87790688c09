"""Tests for EngineConfig behaviour."""

from __future__ import annotations

import pytest

import collab_engine.config as config_module
from collab_engine.config import (
    DataSourceEnvVarError,
    EngineConfig,
    PositiveIntegerEnvVarError,
    PositiveNumberEnvVarError,
)


def _patch_env(monkeypatch: pytest.MonkeyPatch, env: dict[str, str]) -> None:
    def fake_getenv(key: str, default: str = "") -> str:
        return env.get(key, default)

    def fake_load_dotenv(dotenv_path: str | None = None) -> bool:
        _ = dotenv_path
        return True

    monkeypatch.setattr(config_module.os, "getenv", fake_getenv)
    monkeypatch.setattr(config_module, "load_dotenv", fake_load_dotenv)


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {})

    assert EngineConfig.from_env() == EngineConfig()


def test_from_env_reads_every_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(
        monkeypatch,
        {
            "COLLAB_DATA_SOURCE": " FILE ",
            "SUPABASE_URL": "https://project.example.co",
            "SUPABASE_KEY": " key ",
            "SUPABASE_TIMEOUT_SECONDS": "12.5",
            "SNAPSHOT_PATH": "data/snapshot.json",
            "CANDIDATE_LIMIT": "40",
            "RECOMMENDATION_LIMIT": "10",
            "RANKING_WEIGHTS_PATH": "config/weights.json",
        },
    )

    config = EngineConfig.from_env()

    assert config == EngineConfig(
        data_source="file",
        supabase_url="https://project.example.co",
        supabase_key="key",
        supabase_timeout_seconds=12.5,
        snapshot_path="data/snapshot.json",
        candidate_limit=40,
        recommendation_limit=10,
        ranking_weights_path="config/weights.json",
    )


@pytest.mark.parametrize("value", ["0", "-3", "ten", "2.5"])
def test_from_env_rejects_non_positive_limits(
    monkeypatch: pytest.MonkeyPatch, value: str
) -> None:
    _patch_env(monkeypatch, {"CANDIDATE_LIMIT": value})

    with pytest.raises(PositiveIntegerEnvVarError, match="CANDIDATE_LIMIT"):
        EngineConfig.from_env()


def test_from_env_rejects_bad_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {"SUPABASE_TIMEOUT_SECONDS": "0"})

    with pytest.raises(PositiveNumberEnvVarError):
        EngineConfig.from_env()


def test_from_env_rejects_unknown_data_source(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_env(monkeypatch, {"COLLAB_DATA_SOURCE": "postgres"})

    with pytest.raises(DataSourceEnvVarError, match="postgres"):
        EngineConfig.from_env()


def test_with_overrides_preserves_other_fields() -> None:
    base = EngineConfig(
        supabase_url="https://project.example.co",
        supabase_key="key",
        candidate_limit=100,
        recommendation_limit=50,
    )

    updated = base.with_overrides(
        data_source="file",
        snapshot_path=" data/snapshot.json ",
        recommendation_limit=5,
    )

    assert updated.data_source == "file"
    assert updated.snapshot_path == "data/snapshot.json"
    assert updated.recommendation_limit == 5
    assert updated.candidate_limit == 100
    assert updated.supabase_url == base.supabase_url
    assert updated.supabase_key == base.supabase_key


def test_with_overrides_without_values_is_identity() -> None:
    base = EngineConfig(candidate_limit=7)

    assert base.with_overrides() == base
