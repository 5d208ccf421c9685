"""Persistence helpers for cached player, champion and team statistics."""

from __future__ import annotations

import math
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import Session

from domain.common import ChampionStats, PlayerStats, TeamStats
from models import ChampionStatsRow, PlayerStatsRow, TeamStatsRow


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def _finite_or_none(value: float | None) -> float | None:
    if value is None or not math.isfinite(value):
        return None
    return value


def _player_stats_columns(stats: PlayerStats) -> dict[str, object]:
    return {
        "summoner_name": stats.summoner_name,
        "tier": stats.tier,
        "rank": stats.rank,
        "league_points": stats.league_points,
        "wins": stats.wins,
        "losses": stats.losses,
        "win_rate": stats.win_rate,
        "avg_kills": stats.avg_kills,
        "avg_deaths": stats.avg_deaths,
        "avg_assists": stats.avg_assists,
        "avg_kda": _finite_or_none(stats.avg_kda),
        "avg_cs_per_min": _finite_or_none(stats.avg_cs_per_min),
        "roles_played": dict(stats.roles_played),
    }


def upsert_player_stats(session: Session, player_id: int, stats: PlayerStats) -> PlayerStatsRow:
    """Replace the cached summary for one player, inserting it if missing."""
    row = session.execute(
        select(PlayerStatsRow).where(PlayerStatsRow.player_id == player_id)
    ).scalar_one_or_none()
    columns = _player_stats_columns(stats)
    if row is None:
        row = PlayerStatsRow(player_id=player_id, **columns)
        session.add(row)
    else:
        for key, value in columns.items():
            setattr(row, key, value)
        row.updated_at = _utcnow()
    session.flush()
    return row


def replace_champion_stats(
    session: Session,
    player_id: int,
    champion_stats: Sequence[ChampionStats],
) -> None:
    """Delete a player's champion rows, then insert the fresh set."""
    session.execute(delete(ChampionStatsRow).where(ChampionStatsRow.player_id == player_id))
    if not champion_stats:
        return

    payload = [
        {
            "player_id": player_id,
            "champion_id": stats.champion_id,
            "champion_name": stats.champion_name,
            "games": stats.games,
            "wins": stats.wins,
            "losses": stats.losses,
            "win_rate": stats.win_rate,
            "kills": stats.kills,
            "deaths": stats.deaths,
            "assists": stats.assists,
            "kda": stats.kda,
            "cs_per_min": stats.cs_per_min,
        }
        for stats in champion_stats
    ]
    session.execute(insert(ChampionStatsRow), payload)


def fetch_champion_stats(session: Session, player_id: int) -> list[ChampionStats]:
    statement = (
        select(ChampionStatsRow)
        .where(ChampionStatsRow.player_id == player_id)
        .order_by(ChampionStatsRow.games.desc(), ChampionStatsRow.id)
    )
    return [
        ChampionStats(
            champion_id=row.champion_id,
            champion_name=row.champion_name,
            games=row.games,
            wins=row.wins,
            losses=row.losses,
            win_rate=row.win_rate,
            kills=row.kills,
            deaths=row.deaths,
            assists=row.assists,
            kda=row.kda,
            cs_per_min=row.cs_per_min,
        )
        for row in session.execute(statement).scalars().all()
    ]


def upsert_team_stats(session: Session, team_stats: TeamStats, *, name: str = "Team") -> TeamStatsRow:
    """Update the single team_stats row, creating it on first use."""
    row = session.execute(select(TeamStatsRow).order_by(TeamStatsRow.id).limit(1)).scalar_one_or_none()
    if row is None:
        row = TeamStatsRow(name=name)
        session.add(row)
    else:
        row.updated_at = _utcnow()
    row.total_wins = team_stats.total_wins
    row.total_losses = team_stats.total_losses
    row.win_rate = team_stats.win_rate
    session.flush()
    return row


__all__ = [
    "fetch_champion_stats",
    "replace_champion_stats",
    "upsert_player_stats",
    "upsert_team_stats",
]
