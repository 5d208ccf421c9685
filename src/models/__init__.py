"""ORM models."""

from models.base import Base
from models.match import MatchRow
from models.player import PlayerRow
from models.stats import ChampionStatsRow, PlayerStatsRow, TeamStatsRow

__all__ = [
    "Base",
    "ChampionStatsRow",
    "MatchRow",
    "PlayerRow",
    "PlayerStatsRow",
    "TeamStatsRow",
]
