#!/usr/bin/env python3
"""Print team totals and a per-player summary over recent matches."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.common import Player, PlayerStats
from domain.pipeline import load_all_player_stats
from domain.stats import aggregate_team_stats
from repositories.players import list_players

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Query team and player statistics.",
)


def _format_optional(value: float | None, fmt: str) -> str:
    if value is None:
        return "-"
    return format(value, fmt)


def _render_player(index: int, player: Player, stats: PlayerStats) -> str:
    top_champion = stats.champion_stats[0].champion_name if stats.champion_stats else "-"
    return (
        f"{index:2d}. {player.name:<16} {player.role.value:<8} "
        f"tier={player.tier or '-':<12} "
        f"wr={_format_optional(stats.win_rate, '5.1f')} "
        f"kda={_format_optional(stats.avg_kda, '5.2f')} "
        f"cs/min={_format_optional(stats.avg_cs_per_min, '4.1f')} "
        f"games={len(stats.recent_matches):2d} "
        f"top_champion={top_champion}"
    )


@app.command()
def show_team_stats(
    recent_limit: Annotated[
        int,
        typer.Option("--recent-limit", help="Number of recent matches per player."),
    ] = 15,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local rosterstats postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Print roster totals followed by one line per player."""
    if recent_limit <= 0:
        raise typer.BadParameter("--recent-limit must be greater than 0")

    engine = create_db_engine(db_url)
    session_factory = create_session_factory(engine)
    with session_factory() as session:
        players = list_players(session)
        results = load_all_player_stats(session, recent_limit=recent_limit)

    if not players:
        typer.echo("No players on the roster.")
        return

    team = aggregate_team_stats(players)
    typer.echo(
        f"players={len(team.players)} total_wins={team.total_wins} "
        f"total_losses={team.total_losses} win_rate={_format_optional(team.win_rate, '.1f')}"
    )
    for index, player in enumerate(players, start=1):
        result = results[player.id]
        if not result.ok:
            typer.echo(f"{index:2d}. {player.name:<16} error={result.error}")
            continue
        typer.echo(_render_player(index, player, result.unwrap()))


if __name__ == "__main__":
    app()
