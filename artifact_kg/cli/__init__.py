"""
Command-Line Interface

CLI commands for ArtifactKG operations.

Commands:
    artifact-kg ingest    - Ingest artifact files and assemble the graph
    artifact-kg show      - Print the rows of one artifact table
    artifact-kg defaults  - Load the default artifacts (development only)
    artifact-kg status    - Show backend settings and output folder
    artifact-kg clear     - Clear the backend output folder

Usage:
    # Ingest and print a graph summary with communities
    artifact-kg ingest entities.parquet relationships.parquet communities.parquet --communities

    # Ingest, upload to the backend and write the graph as JSON
    artifact-kg ingest ./output/*.parquet --sync --output graph.json

    # Peek into a table
    artifact-kg show ./output/*.parquet --kind entity --limit 5

    # Use a config file
    artifact-kg --config ./artifact_kg.toml status
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from artifact_kg.types import ArtifactFile, IngestReport, RecordKind, SyncResult

__all__ = ["main", "app"]

app = typer.Typer(
    name="artifact-kg",
    help="Viewer pipeline for GraphRAG knowledge-graph artifacts",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def _root(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override the configured log level",
    ),
) -> None:
    """Load .env, configuration and logging for every command."""
    from artifact_kg.config import ArtifactConfig

    load_dotenv()
    config = ArtifactConfig.from_file(config_file) if config_file else ArtifactConfig()
    if log_level:
        config = config.with_overrides(log_level=log_level)

    _setup_logging(config.log_level)
    ctx.obj = config


def _read_files(paths: list[Path]) -> list[ArtifactFile]:
    return [ArtifactFile.from_path(path) for path in paths]


def _print_report(report: IngestReport) -> None:
    table = Table(title="Tables")
    table.add_column("Table", style="cyan")
    table.add_column("Rows", justify="right", style="green")
    for name, count in report.row_counts.items():
        table.add_row(name, str(count))
    console.print(table)

    if report.skipped:
        console.print(f"[yellow]Skipped (unknown file name): {escape(', '.join(report.skipped))}[/]")
    if report.warning:
        console.print(f"[yellow]{escape(report.warning)}[/]")
        for error in report.errors:
            console.print(f"  - {escape(error)}")


def _print_sync(result: SyncResult) -> None:
    style = "green" if result.ok else "red"
    console.print(f"[{style}]{escape(result.message)}[/]")


@app.command()
def ingest(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(
        ...,
        help="Parquet artifact files",
        exists=True,
        dir_okay=False,
    ),
    documents: bool = typer.Option(False, "--documents", help="Add document nodes"),
    text_units: bool = typer.Option(False, "--text-units", help="Add text unit nodes"),
    communities: bool = typer.Option(False, "--communities", help="Add community nodes"),
    covariates: bool = typer.Option(False, "--covariates", help="Add covariate nodes"),
    sync: bool = typer.Option(
        False,
        "--sync",
        help="Also upload the files to the backend and reload it",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write the assembled graph as JSON",
    ),
) -> None:
    """Ingest artifact files and assemble the graph."""

    async def _run() -> SyncResult | None:
        from artifact_kg.api.viewer import ArtifactViewer

        viewer = ArtifactViewer(ctx.obj)
        artifact_files = await asyncio.to_thread(_read_files, files)

        result = None
        if sync:
            report, result = await viewer.ingest_and_sync(artifact_files)
        else:
            report = await viewer.ingest(artifact_files)

        viewer.set_flags(
            include_documents=documents,
            include_text_units=text_units,
            include_communities=communities,
            include_covariates=covariates,
        )
        graph = viewer.graph()

        _print_report(report)
        summary = graph.summary()
        console.print(Panel(
            f"Nodes: {len(graph.nodes)}\n"
            f"Edges: {len(graph.edges)}\n\n"
            + "\n".join(f"  {key}: {count}" for key, count in sorted(summary.items())),
            title="Graph",
        ))
        console.print(f"[dim]Ingest time: {report.duration_seconds:.2f}s[/]")

        if output is not None:
            output.write_text(graph.model_dump_json(indent=2))
            console.print(f"Graph written to {output}")

        if result is not None:
            _print_sync(result)
        return result

    result = asyncio.run(_run())
    if result is not None and not result.ok:
        raise typer.Exit(code=1)


@app.command()
def show(
    ctx: typer.Context,
    files: list[Path] = typer.Argument(
        ...,
        help="Parquet artifact files",
        exists=True,
        dir_okay=False,
    ),
    kind: RecordKind = typer.Option(
        ...,
        "--kind", "-k",
        help="Which table to print",
        case_sensitive=False,
    ),
    limit: int = typer.Option(10, "--limit", "-n", help="Max rows to print"),
) -> None:
    """Print the rows of one artifact table."""

    async def _run() -> None:
        from artifact_kg.api.viewer import ArtifactViewer

        viewer = ArtifactViewer(ctx.obj)
        report = await viewer.ingest_paths(files)
        if report.warning:
            console.print(f"[yellow]{escape(report.warning)}[/]")

        rows = viewer.store.rows(kind)
        if not rows:
            console.print(f"[yellow]No {kind.table_name} loaded[/]")
            return

        columns: list[str] = []
        for row in rows:
            for key in row:
                if key not in columns:
                    columns.append(key)

        table = Table(title=f"{kind.table_name} ({len(rows)} rows)")
        for column in columns:
            table.add_column(column, overflow="fold")
        for row in rows[:limit]:
            table.add_row(*(_cell(row.get(column)) for column in columns))
        console.print(table)

    asyncio.run(_run())


def _cell(value: object) -> str:
    if value is None:
        return ""
    text = str(value)
    return escape(text if len(text) <= 60 else text[:57] + "...")


@app.command()
def defaults(
    ctx: typer.Context,
    dev: bool = typer.Option(False, "--dev", help="Force development mode"),
) -> None:
    """Discover and load the default artifacts."""
    config = ctx.obj
    if dev:
        config = config.with_overrides(environment="development")

    if not config.is_development:
        console.print("[red]Default artifacts are only loaded in development mode (use --dev)[/]")
        raise typer.Exit(code=1)

    async def _run() -> IngestReport | None:
        from artifact_kg.api.viewer import ArtifactViewer

        viewer = ArtifactViewer(config)
        return await viewer.load_defaults()

    report = asyncio.run(_run())
    if report is None:
        console.print(f"[yellow]No default parquet files found under {config.artifacts_base_url}[/]")
        return

    _print_report(report)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show backend settings and output folder contents."""

    async def _run() -> None:
        from artifact_kg.remote.sync import RemoteSyncClient

        client = RemoteSyncClient(ctx.obj)
        settings, listing = await asyncio.gather(
            client.check_settings(),
            client.check_output(),
        )

        _print_sync(settings)
        message = escape(listing.message)
        console.print(message if listing.ok else f"[red]{message}[/]")
        for name in listing.files:
            console.print(f"  - {escape(name)}")

    asyncio.run(_run())


@app.command()
def clear(ctx: typer.Context) -> None:
    """Clear the backend output folder."""

    async def _run() -> SyncResult:
        from artifact_kg.remote.sync import RemoteSyncClient

        return await RemoteSyncClient(ctx.obj).clear_output()

    result = asyncio.run(_run())
    _print_sync(result)
    if not result.ok:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the CLI."""
    app()
