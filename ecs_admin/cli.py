"""
Admin CLI for managing saved world snapshots.

Provides commands to list, inspect and delete snapshots in a snapshot database.

Environment Variables:
    ECS_DB_PATH: Database path (default: ~/.ecs/worlds.db)
    ECS_LOG_LEVEL: Logging level (default: WARNING)
"""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path

import click

from ecs_common.errors import EcsError
from ecs_common.models import WorldSnapshot
from ecs_persistence.sqlite_repository import SQLiteWorldRepository


def get_db_path() -> str:
    """Get the database path from environment variable or default."""
    return os.environ.get("ECS_DB_PATH", str(Path.home() / ".ecs" / "worlds.db"))


def get_repository(db_path: str | None = None) -> SQLiteWorldRepository:
    """Get the repository instance, creating the database directory if needed."""
    path = db_path or get_db_path()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return SQLiteWorldRepository(path)


def run_async(coro):
    """Helper to run async functions in CLI commands."""
    return asyncio.run(coro)


def short_type_name(name: str) -> str:
    """Drop the module part of a "module:qualname" type name."""
    return name.rsplit(":", 1)[-1]


@click.group()
@click.option(
    "--db-path",
    default=None,
    help="Path to SQLite database file (default: ECS_DB_PATH env or ~/.ecs/worlds.db)",
)
@click.option(
    "--log-level",
    default=lambda: os.environ.get("ECS_LOG_LEVEL", "WARNING"),
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: ECS_LOG_LEVEL env or WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, db_path: str | None, log_level: str):
    """ECS Admin - Inspect and manage saved world snapshots."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db_path


@cli.group()
def snapshot():
    """Manage world snapshots."""
    pass


@snapshot.command("list")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def snapshot_list(ctx: click.Context, json_output: bool):
    """List all snapshots."""

    async def list_snapshots() -> list[WorldSnapshot]:
        repo = get_repository(ctx.obj["db_path"])
        await repo.initialize()
        try:
            return await repo.list_snapshots()
        finally:
            await repo.close()

    snapshots = run_async(list_snapshots())

    if json_output:
        click.echo(json.dumps([s.to_summary_dict() for s in snapshots], indent=2))
        return

    if not snapshots:
        click.echo("No snapshots found.")
        return

    click.echo(f"\n{'Name':<24} {'Entities':<10} {'Components':<12} {'Created':<32}")
    click.echo("-" * 80)
    for s in snapshots:
        summary = s.to_summary_dict()
        click.echo(
            f"{s.name:<24} {summary['entity_count']:<10} "
            f"{len(s.component_types):<12} {summary['created_at']:<32}"
        )
    click.echo()


@snapshot.command("show")
@click.argument("name")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def snapshot_show(ctx: click.Context, name: str, json_output: bool):
    """Show a snapshot's component types, resources and live entities."""

    async def get_snapshot() -> WorldSnapshot | None:
        repo = get_repository(ctx.obj["db_path"])
        await repo.initialize()
        try:
            return await repo.get_snapshot(name)
        finally:
            await repo.close()

    snap = run_async(get_snapshot())
    if snap is None:
        click.echo(f"Error: Snapshot not found: {name}", err=True)
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(snap.to_dict(), indent=2))
        return

    click.echo("\nSnapshot Details:")
    click.echo(f"  Name:       {snap.name}")
    click.echo(f"  Created:    {snap.created_at.isoformat()}")
    click.echo(
        "  Components: "
        + (", ".join(short_type_name(t) for t in snap.component_types) or "(none)")
    )
    click.echo(
        "  Resources:  "
        + (", ".join(short_type_name(t) for t in sorted(snap.resources)) or "(none)")
    )

    live = snap.live_entities()
    click.echo(f"\n  Entities ({len(live)} live of {len(snap.entities)} slots):")
    for record in live:
        components = ", ".join(
            f"{short_type_name(t)}={json.dumps(data)}"
            for t, data in record.components.items()
        )
        click.echo(f"    [{record.id}] mask={record.mask} {components}")
    click.echo()


@snapshot.command("delete")
@click.argument("name")
@click.pass_context
def snapshot_delete(ctx: click.Context, name: str):
    """Delete a snapshot."""

    async def delete():
        repo = get_repository(ctx.obj["db_path"])
        await repo.initialize()
        try:
            await repo.delete_snapshot(name)
        finally:
            await repo.close()

    try:
        run_async(delete())
    except EcsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"✓ Snapshot deleted: {name}")
