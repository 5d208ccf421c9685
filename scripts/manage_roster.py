#!/usr/bin/env python3
"""Roster administration: CSV import and manual player edits."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated, Any

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, ensure_schema
from domain.errors import IngestionError, PlayerNotFoundError
from domain.ingestion import parse_role
from domain.pipeline import import_roster_csv
from logging_setup import configure_logging
from repositories.players import update_player

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Roster administration.",
)


@app.command("import-csv")
def import_csv(
    csv_path: Annotated[
        Path,
        typer.Argument(help="CSV file with name,role,summoner_name rows.", exists=True, dir_okay=False),
    ],
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local rosterstats postgres instance."),
    ] = DEFAULT_DB_URL,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Validate and count rows without writing players."),
    ] = False,
    log_level: Annotated[str, typer.Option("--log-level")] = "INFO",
) -> None:
    """Bulk import roster members from CSV."""
    configure_logging(log_level)
    text = csv_path.read_text(encoding="utf-8")
    if not text.strip():
        raise typer.BadParameter("CSV file is empty", param_hint="csv_path")

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    summary = import_roster_csv(session_factory=session_factory, text=text, dry_run=dry_run)
    for row_error in summary.errors:
        typer.echo(f"rejected line={row_error.line_number} reason={row_error.reason} row={row_error.line}")
    prefix = "[dry-run] " if dry_run else ""
    typer.echo(
        f"{prefix}completed inserted={summary.inserted} "
        f"skipped_existing={len(summary.skipped_existing)} "
        f"rejected={len(summary.errors)}"
    )


@app.command("edit")
def edit_player(
    player_id: Annotated[int, typer.Argument(help="Roster player id.")],
    name: Annotated[str | None, typer.Option("--name")] = None,
    role: Annotated[str | None, typer.Option("--role", help="Top, Jungle, Mid, ADC or Support.")] = None,
    summoner_name: Annotated[str | None, typer.Option("--summoner-name")] = None,
    profile_image_url: Annotated[str | None, typer.Option("--profile-image-url")] = None,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local rosterstats postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Edit a player's display fields."""
    changes: dict[str, Any] = {}
    if name is not None:
        changes["name"] = name
    if role is not None:
        try:
            changes["role"] = parse_role(role)
        except IngestionError as exc:
            raise typer.BadParameter(str(exc), param_hint="--role") from exc
    if summoner_name is not None:
        changes["summoner_name"] = summoner_name or None
    if profile_image_url is not None:
        changes["profile_image_url"] = profile_image_url or None
    if not changes:
        raise typer.BadParameter("Provide at least one field to change.")

    engine = create_db_engine(db_url)
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        try:
            player = update_player(session, player_id, changes)
            session.commit()
        except PlayerNotFoundError as exc:
            session.rollback()
            raise typer.BadParameter(str(exc), param_hint="player_id") from exc
        except Exception:
            session.rollback()
            raise

    typer.echo(
        f"updated player_id={player.id} name={player.name} "
        f"role={player.role.value} summoner_name={player.summoner_name}"
    )


if __name__ == "__main__":
    app()
