"""Flask CLI commands for HabitFlow."""

from __future__ import annotations

import json
from pathlib import Path

import click

from .services.analytics import derive_analytics
from .services.dates import local_today


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    from .extensions import get_snapshot_store

    @app.cli.command("habitflow-users")
    def habitflow_users() -> None:
        """List users with stored habits."""

        users = get_snapshot_store().known_users()
        if not users:
            click.echo("No stored users.")
            return
        for user in users:
            click.echo(user)

    @app.cli.command("habitflow-analytics")
    @click.option("--user", "user", required=True, help="User whose history to summarise")
    def habitflow_analytics(user: str) -> None:
        """Print analytics for a stored user as JSON."""

        snapshot = get_snapshot_store().load(user)
        summary = derive_analytics(snapshot.history, snapshot.habits, today=local_today())
        click.echo(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))

    @app.cli.command("habitflow-export")
    @click.option("--user", "user", required=True, help="User whose snapshot to export")
    @click.option(
        "--output",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Write to this file instead of stdout",
    )
    def habitflow_export(user: str, output: Path | None) -> None:
        """Export a user's snapshot as JSON."""

        snapshot = get_snapshot_store().load(user)
        document = json.dumps(
            {"user": user, "snapshot": snapshot.to_payload()}, indent=2, ensure_ascii=False
        )
        if output is None:
            click.echo(document)
            return
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document + "\n", encoding="utf-8")
        click.echo(f"Export written: {output}")
