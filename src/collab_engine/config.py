"""Centralised, injectable configuration for the Collab Engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import EngineConfigFile

DATA_SOURCES = frozenset({"api", "file"})


class EnvVarError(ValueError):
    """Base class for invalid configuration environment variables."""


class PositiveIntegerEnvVarError(EnvVarError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class PositiveNumberEnvVarError(EnvVarError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive number.")


class DataSourceEnvVarError(EnvVarError):
    """Raised when the data source is not one of the supported values."""

    def __init__(self, value: str) -> None:
        super().__init__(f"COLLAB_DATA_SOURCE must be 'api' or 'file' (got '{value}').")


@dataclass(frozen=True)
class EngineConfig:
    """Immutable configuration for the engine and its CLI.

    Load from environment with `EngineConfig.from_env()` or construct directly for testing.
    """

    # Data source: "api" (hosted backend) or "file" (JSON snapshot)
    data_source: str = "api"
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_timeout_seconds: float = 30.0
    snapshot_path: str = ""

    # Recommendation feed
    candidate_limit: int = 100
    recommendation_limit: int = 50
    ranking_weights_path: str = ""

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            EngineConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            data_source=_parse_data_source(os.getenv("COLLAB_DATA_SOURCE", "api")),
            supabase_url=os.getenv("SUPABASE_URL", "").strip(),
            supabase_key=os.getenv("SUPABASE_KEY", "").strip(),
            supabase_timeout_seconds=_parse_positive_float(
                os.getenv("SUPABASE_TIMEOUT_SECONDS", "30"),
                env_name="SUPABASE_TIMEOUT_SECONDS",
            ),
            snapshot_path=os.getenv("SNAPSHOT_PATH", "").strip(),
            candidate_limit=_parse_positive_int(
                os.getenv("CANDIDATE_LIMIT", "100"), env_name="CANDIDATE_LIMIT"
            ),
            recommendation_limit=_parse_positive_int(
                os.getenv("RECOMMENDATION_LIMIT", "50"), env_name="RECOMMENDATION_LIMIT"
            ),
            ranking_weights_path=os.getenv("RANKING_WEIGHTS_PATH", "").strip(),
        )

    def with_overrides(
        self,
        *,
        data_source: str | None = None,
        snapshot_path: str | None = None,
        candidate_limit: int | None = None,
        recommendation_limit: int | None = None,
        ranking_weights_path: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            data_source=self.data_source
            if data_source is None
            else _parse_data_source(data_source),
            snapshot_path=self.snapshot_path if snapshot_path is None else snapshot_path.strip(),
            candidate_limit=self.candidate_limit
            if candidate_limit is None
            else candidate_limit,
            recommendation_limit=self.recommendation_limit
            if recommendation_limit is None
            else recommendation_limit,
            ranking_weights_path=self.ranking_weights_path
            if ranking_weights_path is None
            else ranking_weights_path.strip(),
        )

    def with_file_overrides(self, file_config: EngineConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            data_source=self.data_source
            if file_config.data_source is None
            else file_config.data_source,
            supabase_url=self.supabase_url
            if file_config.supabase_url is None
            else file_config.supabase_url,
            supabase_timeout_seconds=self.supabase_timeout_seconds
            if file_config.supabase_timeout_seconds is None
            else file_config.supabase_timeout_seconds,
            snapshot_path=self.snapshot_path
            if file_config.snapshot_path is None
            else file_config.snapshot_path,
            candidate_limit=self.candidate_limit
            if file_config.candidate_limit is None
            else file_config.candidate_limit,
            recommendation_limit=self.recommendation_limit
            if file_config.recommendation_limit is None
            else file_config.recommendation_limit,
            ranking_weights_path=self.ranking_weights_path
            if file_config.ranking_weights_path is None
            else file_config.ranking_weights_path,
        )


def _parse_data_source(value: str) -> str:
    source = value.strip().lower() or "api"
    if source not in DATA_SOURCES:
        raise DataSourceEnvVarError(value)
    return source


def _parse_positive_int(value: str, *, env_name: str) -> int:
    """Parse a positive integer from an environment variable."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_positive_float(value: str, *, env_name: str) -> float:
    """Parse a positive number from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if parsed <= 0:
        raise PositiveNumberEnvVarError(env_name)
    return parsed
