"""Cached statistics tables: player_stats, champion_stats, team_stats."""

from __future__ import annotations

from typing import Any

from sqlalchemy import CheckConstraint, Float, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import JSON_DOCUMENT, TimestampMixin


class PlayerStatsRow(TimestampMixin, Base):
    """Last computed summary for one player (one row per player)."""

    __tablename__ = "player_stats"
    __table_args__ = (UniqueConstraint("player_id", name="uq_player_stats_player"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    summoner_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    tier: Mapped[str | None] = mapped_column(String(32), nullable=True)
    rank: Mapped[str | None] = mapped_column(String(8), nullable=True)
    league_points: Mapped[int | None] = mapped_column(Integer, nullable=True)
    wins: Mapped[int | None] = mapped_column(Integer, nullable=True)
    losses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    win_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_kills: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_deaths: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_assists: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_kda: Mapped[float | None] = mapped_column(Float, nullable=True)
    avg_cs_per_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    roles_played: Mapped[dict[str, Any]] = mapped_column(JSON_DOCUMENT, nullable=False, default=dict)


class ChampionStatsRow(TimestampMixin, Base):
    """Per-champion breakdown for one player, replaced wholesale on rebuild."""

    __tablename__ = "champion_stats"
    __table_args__ = (
        UniqueConstraint("player_id", "champion_id", name="uq_champion_stats_player_champion"),
        CheckConstraint("games = wins + losses", name="ck_champion_stats_games"),
        Index("idx_champion_stats_player", "player_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    champion_id: Mapped[int] = mapped_column(Integer, nullable=False)
    champion_name: Mapped[str] = mapped_column(String(64), nullable=False)
    games: Mapped[int] = mapped_column(Integer, nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False)
    losses: Mapped[int] = mapped_column(Integer, nullable=False)
    win_rate: Mapped[float] = mapped_column(Float, nullable=False)
    kills: Mapped[float] = mapped_column(Float, nullable=False)
    deaths: Mapped[float] = mapped_column(Float, nullable=False)
    assists: Mapped[float] = mapped_column(Float, nullable=False)
    kda: Mapped[float] = mapped_column(Float, nullable=False)
    cs_per_min: Mapped[float] = mapped_column(Float, nullable=False)


class TeamStatsRow(TimestampMixin, Base):
    """Roster-wide totals (a single row)."""

    __tablename__ = "team_stats"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    total_wins: Mapped[int | None] = mapped_column(Integer, nullable=True)
    total_losses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    win_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
