#!/usr/bin/env python3
"""Recompute cached player, champion and team statistics from stored matches."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, ensure_schema
from domain.config import load_sync_config
from domain.errors import PlayerNotFoundError
from domain.pipeline import rebuild_all_player_stats
from logging_setup import configure_logging

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Rebuild cached statistics.",
)


@app.command()
def rebuild(
    player_ids: Annotated[
        list[int] | None,
        typer.Option("--player-id", help="Player id to rebuild; repeat for several. All players when omitted."),
    ] = None,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local rosterstats postgres instance."),
    ] = DEFAULT_DB_URL,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", help="Sync settings TOML file (team name)."),
    ] = None,
    log_level: Annotated[str, typer.Option("--log-level")] = "INFO",
) -> None:
    """Recompute stats from every stored match for the selected players."""
    configure_logging(log_level)
    try:
        config = load_sync_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    try:
        rebuilt = rebuild_all_player_stats(
            session_factory=session_factory,
            player_ids=player_ids or None,
            team_name=config.stats.team_name,
            echo=typer.echo,
        )
    except PlayerNotFoundError as exc:
        raise typer.BadParameter(str(exc), param_hint="--player-id") from exc

    typer.echo(f"completed rebuilt_players={len(rebuilt)}")


if __name__ == "__main__":
    app()
