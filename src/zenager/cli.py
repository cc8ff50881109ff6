"""CLI entry point for Zenager.

Runs the REST API, triggers sync cycles and manages sources and columns
against the same database the API uses.
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from zenager.board import BoardError
from zenager.config import ConfigError, Settings, get_settings
from zenager.logging import setup_logging
from zenager.registry import RegistryError
from zenager.service import BoardService
from zenager.state_store import StateStore
from zenager.sync import SyncInProgressError


def _settings(ctx: click.Context) -> Settings:
    return ctx.obj["settings"]


def _open_service(ctx: click.Context) -> BoardService:
    settings = _settings(ctx)
    setup_logging(settings.log_dir, level=settings.log_level, console=ctx.obj["verbose"])
    return BoardService.load(StateStore(settings.db_path), settings)


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="zenager")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    help="Path to zenager.yaml (./zenager.yaml is used if present)",
)
@click.option("--db", "db_path", default=None, help="SQLite database path (overrides config)")
@click.option("-v", "--verbose", is_flag=True, help="Also log to the console")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, db_path: str | None, verbose: bool) -> None:
    """Zenager - kanban board for GitHub and GitLab issues."""
    try:
        settings = get_settings(config_path)
    except ConfigError as e:
        _fail(f"Configuration error: {e}")
        return
    if db_path:
        settings.db_path = db_path
    ctx.obj = {"settings": settings, "verbose": verbose}


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Run the REST API."""
    import uvicorn  # noqa: PLC0415

    from zenager.api import create_app  # noqa: PLC0415

    settings = _settings(ctx)
    setup_logging(settings.log_dir, level=settings.log_level, console=True)
    uvicorn.run(create_app(settings), host=host, port=port)


@main.command()
@click.pass_context
def sync(ctx: click.Context) -> None:
    """Fetch all selected sources and reconcile them into the board."""
    service = _open_service(ctx)
    try:
        result = service.run_sync_cycle()
    except SyncInProgressError as e:
        _fail(f"Sync error: {e}")
        return
    finally:
        service.close()

    click.echo(
        f"Synced {len(result.synced_sources)} sources: "
        f"{result.issues_fetched} issues, {result.new_issues} new, {result.closed_issues} closed"
    )
    for failure in result.failures:
        click.echo(f"  Failed: {failure.source_id}: {failure.message}", err=True)
    if result.failures and not result.committed:
        sys.exit(1)


@main.group()
def sources() -> None:
    """Manage issue sources."""
    pass


@sources.command("list")
@click.pass_context
def list_sources(ctx: click.Context) -> None:
    """List configured sources ('*' marks selected ones)."""
    service = _open_service(ctx)
    try:
        entries = service.list_sources()
    finally:
        service.close()

    if not entries:
        click.echo("No sources configured")
        return
    for source, selected in entries:
        marker = "*" if selected else " "
        click.echo(f"{marker} {source.source_id}  ({source.display_name})")


@sources.command("add")
@click.argument("url")
@click.option(
    "--provider",
    type=click.Choice(["github", "gitlab"], case_sensitive=False),
    default=None,
    help="Tracker type (detected from the URL if omitted)",
)
@click.pass_context
def add_source(ctx: click.Context, url: str, provider: str | None) -> None:
    """Add a source from its issues page URL."""
    service = _open_service(ctx)
    try:
        added = service.add_source_url(url, provider)
    except RegistryError as e:
        _fail(f"Source error: {e}")
        return
    finally:
        service.close()
    click.echo(f"Added {added.source_id}")


@sources.command("remove")
@click.argument("source_id")
@click.option("--clear-issues", is_flag=True, help="Also clear tracker issues from the board")
@click.pass_context
def remove_source(ctx: click.Context, source_id: str, clear_issues: bool) -> None:
    """Remove a source."""
    service = _open_service(ctx)
    try:
        service.remove_source(source_id, clear_issues=clear_issues)
    except RegistryError as e:
        _fail(f"Source error: {e}")
        return
    finally:
        service.close()
    click.echo(f"Removed {source_id}")


@sources.command("select")
@click.argument("source_id")
@click.option("--off", is_flag=True, help="Deselect instead")
@click.pass_context
def select_source(ctx: click.Context, source_id: str, off: bool) -> None:
    """Select (or with --off, deselect) a source for syncing."""
    service = _open_service(ctx)
    try:
        service.set_source_selected(source_id, not off)
    except RegistryError as e:
        _fail(f"Source error: {e}")
        return
    finally:
        service.close()
    click.echo(f"{'Deselected' if off else 'Selected'} {source_id}")


@main.group()
def columns() -> None:
    """Manage board columns."""
    pass


@columns.command("list")
@click.pass_context
def list_columns(ctx: click.Context) -> None:
    """List columns in board order with their issue counts."""
    service = _open_service(ctx)
    try:
        board = service.get_columns()
        visible = set(service.visible_columns())
    finally:
        service.close()

    for column in board:
        hidden = "" if column.id in visible else " (hidden)"
        click.echo(f"{column.id}: {column.name} [{len(column.issues)}]{hidden}")


@columns.command("add")
@click.argument("name")
@click.pass_context
def add_column(ctx: click.Context, name: str) -> None:
    """Add a column; its id is derived from NAME."""
    service = _open_service(ctx)
    try:
        column = service.add_column(name)
    except BoardError as e:
        _fail(f"Board error: {e}")
        return
    finally:
        service.close()
    click.echo(f"Added column {column.id}")


@columns.command("remove")
@click.argument("column_id")
@click.pass_context
def remove_column(ctx: click.Context, column_id: str) -> None:
    """Remove a column and its issues."""
    service = _open_service(ctx)
    try:
        service.remove_column(column_id)
    except BoardError as e:
        _fail(f"Board error: {e}")
        return
    finally:
        service.close()
    click.echo(f"Removed column {column_id}")


if __name__ == "__main__":
    main()
