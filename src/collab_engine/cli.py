"""CLI for the Collab Engine.

Commands:
- recommend: Rank pending collabs for a viewer (recommended and latest feeds)
- reliability: Compute, and optionally persist, a user's reliability score
- weights: Show the ranking weights in effect
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from . import __version__
from .application.ranking_weights import load_ranking_weights
from .application.recommendations import RecommendationFeed, export_ranked_postings
from .application.recommendations import load_recommendations as run_recommendations
from .application.reliability import compute_reliability, update_reliability_score
from .config import EngineConfig, EnvVarError
from .config_file import load_engine_config_file
from .domain.ranking import explain_breakdown
from .domain.ranking_weights import DEFAULT_WEIGHTS, RankingWeights
from .exceptions import CollabEngineError
from .observability import UnknownLogLevelError, set_log_level
from .protocols import CollabDataStore, FileSystem


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: EngineConfig, build_store: bool) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem
    store: CollabDataStore | None


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: EngineConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(
        self,
        *,
        build_store: bool,
        config: EngineConfig | None = None,
    ) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config, build_store=build_store)

    def require_store(
        self, config: EngineConfig | None = None
    ) -> tuple[FileSystem, CollabDataStore]:
        """Return the filesystem and a data store, failing if none was built."""
        deps = self.build_dependencies(build_store=True, config=config)
        if deps.store is None:
            raise StoreNotBuiltError()
        return deps.fs, deps.store


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the collab-engine entry point.")


class StoreNotBuiltError(typer.BadParameter):
    """Raised when the dependencies builder returns no data store."""

    def __init__(self) -> None:
        super().__init__("No data store was configured for this command.")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _fail(exc: Exception) -> typer.Exit:
    rprint(f"[red]✗ {escape(str(exc))}[/red]")
    return typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"collab-engine {__version__}")
        raise typer.Exit()


def _resolve_weights(
    weights_path: Path | None,
    *,
    config: EngineConfig,
    fs: FileSystem,
) -> RankingWeights:
    path = weights_path or (
        Path(config.ranking_weights_path) if config.ranking_weights_path else None
    )
    if path is None:
        return DEFAULT_WEIGHTS
    return load_ranking_weights(path=path, fs=fs)


def _recommended_table(feed: RecommendationFeed) -> Table:
    table = Table(title="Recommended collabs")
    table.add_column("#", justify="right")
    table.add_column("Collab")
    table.add_column("Title")
    table.add_column("Score", justify="right")
    table.add_column("Why")
    for rank, item in enumerate(feed.recommended, start=1):
        table.add_row(
            str(rank),
            item.posting.id,
            item.posting.card_data.title or "-",
            str(item.match_score),
            explain_breakdown(item.breakdown),
        )
    return table


def _latest_table(feed: RecommendationFeed) -> Table:
    table = Table(title="Latest collabs")
    table.add_column("Collab")
    table.add_column("Title")
    table.add_column("Creator")
    table.add_column("Posted")
    for posting in feed.latest:
        table.add_row(
            posting.id,
            posting.card_data.title or "-",
            posting.creator_id,
            posting.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    return table


def _weights_table(weights: RankingWeights) -> Table:
    table = Table(title="Ranking weights")
    table.add_column("Factor")
    table.add_column("Max points", justify="right")
    table.add_row("Tag overlap", str(weights.tag_overlap))
    table.add_row("Follower tier", str(weights.follower_tier))
    table.add_row("Recent activity", str(weights.recent_activity))
    table.add_row("Reliability", str(weights.reliability))
    return table


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Collab Engine: rank collaboration postings and score creator reliability",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file (overrides environment values)",
            ),
        ] = None,
        log_level: Annotated[
            str,
            typer.Option("--log-level", help="debug, info, warning or error"),
        ] = "info",
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        try:
            set_log_level(log_level)
            config = EngineConfig.from_env()
            if config_path is not None:
                fs = deps_builder(config=config, build_store=False).fs
                config = config.with_file_overrides(
                    load_engine_config_file(path=config_path, fs=fs)
                )
        except (CollabEngineError, EnvVarError, UnknownLogLevelError) as exc:
            raise _fail(exc) from exc
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def recommend(
        ctx: typer.Context,
        viewer_id: Annotated[str, typer.Argument(help="User id of the viewer")],
        limit: Annotated[
            int | None,
            typer.Option("--limit", "-n", min=1, help="Number of collabs to show"),
        ] = None,
        candidates: Annotated[
            int | None,
            typer.Option("--candidates", min=1, help="Number of pending collabs to rank"),
        ] = None,
        snapshot: Annotated[
            Path | None,
            typer.Option("--snapshot", help="Read from a JSON snapshot instead of the API"),
        ] = None,
        weights_path: Annotated[
            Path | None,
            typer.Option("--weights", "-w", help="JSON ranking weights file"),
        ] = None,
        export_path: Annotated[
            Path | None,
            typer.Option("--export", "-o", help="Write the ranked feed to CSV"),
        ] = None,
        latest: Annotated[
            bool,
            typer.Option("--latest", help="Also show the newest-first feed"),
        ] = False,
    ) -> None:
        """Rank pending collabs for a viewer, best match first."""
        state = _get_context(ctx)
        config = state.config.with_overrides(
            data_source="file" if snapshot is not None else None,
            snapshot_path=str(snapshot) if snapshot is not None else None,
            candidate_limit=candidates,
            recommendation_limit=limit,
        )
        try:
            fs, store = state.require_store(config)
            weights = _resolve_weights(weights_path, config=config, fs=fs)
            feed = run_recommendations(viewer_id, store=store, config=config, weights=weights)
            if feed.viewer is None:
                rprint(f"[yellow]Viewer not found:[/yellow] {viewer_id}")
                return
            if feed.is_empty:
                rprint("[yellow]No pending collabs to recommend.[/yellow]")
                return
            rprint(_recommended_table(feed))
            if latest:
                rprint(_latest_table(feed))
            if export_path is not None:
                written = export_ranked_postings(feed.recommended, export_path, fs)
                rprint(f"[green]✓ Exported:[/green] {written}")
        except CollabEngineError as exc:
            raise _fail(exc) from exc

    @app.command()
    def reliability(
        ctx: typer.Context,
        user_id: Annotated[str, typer.Argument(help="User id to score")],
        persist: Annotated[
            bool,
            typer.Option("--persist/--no-persist", help="Write the score back to the profile"),
        ] = False,
        snapshot: Annotated[
            Path | None,
            typer.Option("--snapshot", help="Read from a JSON snapshot instead of the API"),
        ] = None,
    ) -> None:
        """Compute a user's reliability score from their history."""
        state = _get_context(ctx)
        config = state.config.with_overrides(
            data_source="file" if snapshot is not None else None,
            snapshot_path=str(snapshot) if snapshot is not None else None,
        )
        try:
            _, store = state.require_store(config)
        except CollabEngineError as exc:
            raise _fail(exc) from exc

        if persist:
            metrics = update_reliability_score(user_id, store)
        else:
            metrics = compute_reliability(user_id, store)
        rprint(f"[green]✓ Reliability for {user_id}:[/green] {metrics.total_score}/100")
        rprint(f"  Avg response time: {metrics.avg_response_time_hours:.1f}h")
        rprint(f"  Completion rate: {metrics.completion_rate_percent:.0f}%")
        rprint(f"  Abandoned collabs: {metrics.abandoned_count}")

    @app.command()
    def weights(
        ctx: typer.Context,
        weights_path: Annotated[
            Path | None,
            typer.Option("--weights", "-w", help="JSON ranking weights file to validate"),
        ] = None,
    ) -> None:
        """Show the ranking weights in effect (defaults 40/30/20/10)."""
        state = _get_context(ctx)
        try:
            deps = state.build_dependencies(build_store=False)
            active = _resolve_weights(weights_path, config=state.config, fs=deps.fs)
        except CollabEngineError as exc:
            raise _fail(exc) from exc
        rprint(_weights_table(active))

    return app
