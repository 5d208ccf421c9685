"""Database repository helpers."""

from repositories.matches import fetch_all_matches, fetch_recent_matches, upsert_match
from repositories.players import (
    find_player_by_summoner_name,
    get_player,
    insert_roster_entries,
    list_players,
    update_player,
    upsert_ranked_snapshot,
)
from repositories.stats import (
    fetch_champion_stats,
    replace_champion_stats,
    upsert_player_stats,
    upsert_team_stats,
)

__all__ = [
    "fetch_all_matches",
    "fetch_champion_stats",
    "fetch_recent_matches",
    "find_player_by_summoner_name",
    "get_player",
    "insert_roster_entries",
    "list_players",
    "replace_champion_stats",
    "update_player",
    "upsert_match",
    "upsert_player_stats",
    "upsert_ranked_snapshot",
    "upsert_team_stats",
]
