"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from pathlib import Path

from .cli import CliDependencies, create_app
from .config import EngineConfig
from .exceptions import DataStoreNotConfiguredError
from .infrastructure import (
    LocalFileSystem,
    PostgrestDataStore,
    SnapshotDataStore,
    build_rest_client,
)
from .protocols import CollabDataStore, FileSystem


def build_data_store(*, config: EngineConfig, fs: FileSystem) -> CollabDataStore:
    """Build the data store selected by ``config.data_source``.

    Raises:
        DataStoreNotConfiguredError: If the selected source lacks required settings.
    """
    if config.data_source == "file":
        if not config.snapshot_path:
            raise DataStoreNotConfiguredError("file", ("SNAPSHOT_PATH",))
        return SnapshotDataStore(Path(config.snapshot_path), fs)

    missing = tuple(
        name
        for name, value in (
            ("SUPABASE_URL", config.supabase_url),
            ("SUPABASE_KEY", config.supabase_key),
        )
        if not value
    )
    if missing:
        raise DataStoreNotConfiguredError("api", missing)
    client = build_rest_client(
        base_url=config.supabase_url,
        api_key=config.supabase_key,
        timeout_seconds=config.supabase_timeout_seconds,
    )
    return PostgrestDataStore(client)


def build_cli_dependencies(*, config: EngineConfig, build_store: bool) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Engine configuration (used for data-store wiring).
        build_store: Whether to construct the data store.
    """
    fs = LocalFileSystem()
    store = build_data_store(config=config, fs=fs) if build_store else None
    return CliDependencies(fs=fs, store=store)


app = create_app(build_cli_dependencies)
