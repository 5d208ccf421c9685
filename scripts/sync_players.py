#!/usr/bin/env python3
"""Sync roster members' ranked data and match history from the Riot API."""

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
from domain.config import SyncConfig, load_sync_config
from domain.errors import RosterStatsError
from domain.pipeline import sync_player, sync_roster
from logging_setup import configure_logging
from riot.client import RiotClient, create_http_client

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Riot sync jobs.",
)

DbUrlOption = Annotated[
    str,
    typer.Option("--db-url", help="Database URL. Defaults to the local rosterstats postgres instance."),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="Sync settings TOML file. Built-in defaults when omitted."),
]
LogLevelOption = Annotated[str, typer.Option("--log-level", help="Logging level.")]


def _load_config(config_path: Path | None) -> SyncConfig:
    try:
        return load_sync_config(config_path)
    except (FileNotFoundError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config") from exc


def _api_key(config: SyncConfig) -> str:
    try:
        return config.api_key()
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("summoner")
def sync_summoner_command(
    summoner_name: Annotated[str, typer.Argument(help="Summoner name as shown in game.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Sync one summoner; creates the roster entry if it does not exist."""
    if not summoner_name.strip():
        raise typer.BadParameter("summoner name must not be empty", param_hint="summoner_name")

    configure_logging(log_level)
    config = _load_config(config_path)

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with create_http_client(_api_key(config), timeout_seconds=config.riot.timeout_seconds) as http_client:
        client = RiotClient(http_client, config.riot)
        try:
            summary = sync_player(
                session_factory=session_factory,
                client=client,
                summoner_name=summoner_name.strip(),
                config=config,
                echo=typer.echo,
            )
        except RosterStatsError as exc:
            typer.echo(f"failed summoner={summoner_name} error={exc}", err=True)
            raise typer.Exit(code=1) from exc

    stats = summary.stats
    typer.echo(
        "completed "
        f"player_id={summary.player.id} "
        f"win_rate={stats.win_rate} "
        f"avg_kda={stats.avg_kda} "
        f"avg_cs_per_min={stats.avg_cs_per_min} "
        f"champions={len(stats.champion_stats)}"
    )


@app.command("roster")
def sync_roster_command(
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_path: ConfigOption = None,
    log_level: LogLevelOption = "INFO",
) -> None:
    """Sync every linked roster member, continuing past individual failures."""
    configure_logging(log_level)
    config = _load_config(config_path)

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with create_http_client(_api_key(config), timeout_seconds=config.riot.timeout_seconds) as http_client:
        client = RiotClient(http_client, config.riot)
        results = sync_roster(
            session_factory=session_factory,
            client=client,
            config=config,
            echo=typer.echo,
        )

    failed = [result for result in results if not result.ok]
    typer.echo(f"completed players={len(results)} synced={len(results) - len(failed)} failed={len(failed)}")
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
