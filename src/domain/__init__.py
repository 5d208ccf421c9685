"""Roster statistics domain modules."""

from domain.common import ChampionStats, Match, MatchResult, Player, PlayerStats, Role, TeamStats

__all__ = [
    "ChampionStats",
    "Match",
    "MatchResult",
    "Player",
    "PlayerStats",
    "Role",
    "TeamStats",
]
