"""Typed parsing and validation for engine config files.

Example ``collab-engine.toml``::

    schema_version = 1

    [engine]
    data_source = "file"
    snapshot_path = "data/snapshot.json"
    recommendation_limit = 20

The backend API key is not accepted here; it comes from the environment only.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class EngineConfigFile:
    """Validated engine config values loaded from a TOML file."""

    data_source: str | None = None
    supabase_url: str | None = None
    supabase_timeout_seconds: float | None = None
    snapshot_path: str | None = None
    candidate_limit: int | None = None
    recommendation_limit: int | None = None
    ranking_weights_path: str | None = None


class _EngineSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    data_source: str | None = None
    supabase_url: str | None = None
    supabase_timeout_seconds: float | None = None
    snapshot_path: str | None = None
    candidate_limit: int | None = None
    recommendation_limit: int | None = None
    ranking_weights_path: str | None = None

    @field_validator("data_source")
    @classmethod
    def _validate_data_source(cls, value: str | None) -> str | None:
        if value is None:
            return None
        source = value.strip().lower()
        if source not in {"api", "file"}:
            raise ValueError
        return source

    @field_validator("supabase_url", "snapshot_path", "ranking_weights_path")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("candidate_limit", "recommendation_limit")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("supabase_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0:
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    engine: _EngineSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def format_validation_error(exc: ValidationError) -> str:
    """Render the first pydantic error as ``location: message``."""
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_engine_config_file(*, path: Path, fs: FileSystem) -> EngineConfigFile:
    """Load and validate an engine TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), format_validation_error(exc)) from exc

    section = model.engine
    return EngineConfigFile(
        data_source=section.data_source,
        supabase_url=section.supabase_url,
        supabase_timeout_seconds=section.supabase_timeout_seconds,
        snapshot_path=section.snapshot_path,
        candidate_limit=section.candidate_limit,
        recommendation_limit=section.recommendation_limit,
        ranking_weights_path=section.ranking_weights_path,
    )
