"""Shared types for roster statistics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Lane assignment for a roster member or a single game."""

    TOP = "Top"
    JUNGLE = "Jungle"
    MID = "Mid"
    ADC = "ADC"
    SUPPORT = "Support"


class MatchResult(str, Enum):
    """Outcome of one completed game from the player's side."""

    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class Match:
    """One completed game for one player, as ingested."""

    id: int
    game_id: str
    timestamp: int
    champion: str
    champion_id: int
    result: MatchResult
    kills: int
    deaths: int
    assists: int
    kda: float
    cs: int
    cs_per_min: float
    vision: int
    gold: int
    duration: int
    role: Role | None = None

    @property
    def won(self) -> bool:
        return self.result == MatchResult.WIN


@dataclass(frozen=True)
class Player:
    """Roster member with optional ranked metadata from solo queue."""

    id: int
    name: str
    role: Role
    summoner_name: str | None = None
    summoner_id: str | None = None
    profile_icon_id: int | None = None
    tier: str | None = None
    rank: str | None = None
    league_points: int | None = None
    wins: int | None = None
    losses: int | None = None

    @property
    def is_linked(self) -> bool:
        return bool(self.summoner_name)


@dataclass(frozen=True)
class ChampionStats:
    """Per-champion breakdown for one player's matches."""

    champion_id: int
    champion_name: str
    games: int
    wins: int
    losses: int
    win_rate: float
    kills: float
    deaths: float
    assists: float
    kda: float
    cs_per_min: float


@dataclass(frozen=True)
class PlayerStats:
    """Recomputed summary view for one player."""

    summoner_name: str | None
    tier: str | None = None
    rank: str | None = None
    league_points: int | None = None
    wins: int | None = None
    losses: int | None = None
    win_rate: float | None = None
    avg_kills: float | None = None
    avg_deaths: float | None = None
    avg_assists: float | None = None
    avg_kda: float | None = None
    avg_cs_per_min: float | None = None
    recent_matches: tuple[Match, ...] = ()
    champion_stats: tuple[ChampionStats, ...] = ()
    roles_played: tuple[tuple[str, int], ...] = ()


@dataclass(frozen=True)
class TeamStats:
    """Roster-wide totals built from each player's ranked record."""

    players: tuple[Player, ...]
    total_wins: int
    total_losses: int
    win_rate: float | None = None


__all__ = [
    "ChampionStats",
    "Match",
    "MatchResult",
    "Player",
    "PlayerStats",
    "Role",
    "TeamStats",
]
