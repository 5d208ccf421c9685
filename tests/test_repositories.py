"""Persistence tests against a throwaway SQLite database."""

from __future__ import annotations

import pytest
from sqlalchemy import func, select

from domain.common import MatchResult, PlayerStats, Role
from domain.errors import PlayerNotFoundError
from domain.ingestion import IngestedMatch, RankedSnapshot, RosterEntry
from domain.stats import aggregate_player_stats, aggregate_team_stats
from models import ChampionStatsRow, MatchRow, PlayerRow, PlayerStatsRow, TeamStatsRow
from repositories.matches import fetch_all_matches, fetch_recent_matches, upsert_match
from repositories.players import (
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


def _snapshot(**overrides) -> RankedSnapshot:
    fields = {
        "summoner_name": "Faker",
        "summoner_id": "sid-faker",
        "puuid": "puuid-faker",
        "profile_icon_id": 6,
        "tier": "CHALLENGER",
        "rank": "I",
        "league_points": 1200,
        "wins": 180,
        "losses": 105,
    }
    fields.update(overrides)
    return RankedSnapshot(**fields)


def _ingested(game_id: str, *, timestamp: int, champion_id: int = 103, kills: int = 5) -> IngestedMatch:
    return IngestedMatch(
        game_id=game_id,
        timestamp=timestamp,
        champion="Ahri",
        champion_id=champion_id,
        result=MatchResult.WIN,
        kills=kills,
        deaths=2,
        assists=7,
        kda=6.0,
        cs=200,
        cs_per_min=8.0,
        vision=25,
        gold=12_000,
        duration=25,
        role=Role.MID,
    )


def test_ranked_snapshot_creates_then_updates_player(session) -> None:
    created = upsert_ranked_snapshot(session, _snapshot())
    updated = upsert_ranked_snapshot(session, _snapshot(league_points=1250, wins=181))
    session.commit()

    assert created.id == updated.id
    player = get_player(session, created.id)
    assert player.name == "Faker"
    assert player.role == Role.MID
    assert player.league_points == 1250
    assert player.wins == 181
    assert session.scalar(select(func.count(PlayerRow.id))) == 1


def test_get_missing_player_raises(session) -> None:
    with pytest.raises(PlayerNotFoundError, match="player_id=42"):
        get_player(session, 42)


def test_roster_entries_skip_existing_summoners(session) -> None:
    upsert_ranked_snapshot(session, _snapshot(summoner_name="Faker#KR1"))

    summary = insert_roster_entries(
        session,
        [
            RosterEntry(name="Faker", role=Role.MID, summoner_name="Faker#KR1"),
            RosterEntry(name="TheShy", role=Role.TOP, summoner_name="TheShy#KR1"),
            RosterEntry(name="TheShy again", role=Role.TOP, summoner_name="TheShy#KR1"),
        ],
    )
    session.commit()

    assert summary.inserted == 1
    assert summary.skipped_existing == ("Faker#KR1", "TheShy#KR1")
    assert [player.summoner_name for player in list_players(session)] == ["Faker#KR1", "TheShy#KR1"]


def test_update_player_changes_editable_fields(session) -> None:
    row = upsert_ranked_snapshot(session, _snapshot())

    player = update_player(session, row.id, {"name": "Lee Sang-hyeok", "role": Role.MID})

    assert player.name == "Lee Sang-hyeok"
    with pytest.raises(ValueError, match="cannot be edited"):
        update_player(session, row.id, {"summoner_id": "other"})
    with pytest.raises(ValueError):
        update_player(session, row.id, {"role": "Bot"})


def test_match_upsert_is_keyed_by_player_and_game(session) -> None:
    player_id = upsert_ranked_snapshot(session, _snapshot()).id
    other_id = upsert_ranked_snapshot(session, _snapshot(summoner_name="Keria", summoner_id="sid-keria")).id

    assert upsert_match(session, player_id, _ingested("EUW1_1", timestamp=1_000, kills=5)) is True
    assert upsert_match(session, player_id, _ingested("EUW1_1", timestamp=1_000, kills=9)) is False
    assert upsert_match(session, other_id, _ingested("EUW1_1", timestamp=1_000)) is True
    session.commit()

    matches = fetch_all_matches(session, player_id)
    assert len(matches) == 1
    assert matches[0].kills == 9
    assert matches[0].role == Role.MID
    assert session.scalar(select(func.count(MatchRow.id))) == 2


def test_recent_matches_are_most_recent_first_and_limited(session) -> None:
    player_id = upsert_ranked_snapshot(session, _snapshot()).id
    for index, timestamp in enumerate([3_000, 1_000, 5_000, 2_000, 4_000], start=1):
        upsert_match(session, player_id, _ingested(f"EUW1_{index}", timestamp=timestamp))
    session.commit()

    recent = fetch_recent_matches(session, player_id, limit=3)

    assert [match.timestamp for match in recent] == [5_000, 4_000, 3_000]
    with pytest.raises(ValueError, match="limit must be greater than 0"):
        fetch_recent_matches(session, player_id, limit=0)


def test_player_stats_upsert_keeps_one_row(session) -> None:
    player_id = upsert_ranked_snapshot(session, _snapshot()).id
    player = get_player(session, player_id)

    upsert_player_stats(session, player_id, aggregate_player_stats(player, []))
    upsert_ranked_snapshot(session, _snapshot())
    upsert_match(session, player_id, _ingested("EUW1_1", timestamp=1_000))
    stats = aggregate_player_stats(player, fetch_all_matches(session, player_id))
    upsert_player_stats(session, player_id, stats)
    session.commit()

    rows = session.execute(select(PlayerStatsRow)).scalars().all()
    assert len(rows) == 1
    assert rows[0].avg_kills == pytest.approx(5.0)
    assert rows[0].win_rate == pytest.approx(63.2)
    assert rows[0].roles_played == {"Mid": 1}


def test_non_finite_averages_are_stored_as_null(session) -> None:
    player_id = upsert_ranked_snapshot(session, _snapshot()).id
    stats = PlayerStats(summoner_name="Faker", avg_kda=5.0, avg_cs_per_min=float("inf"))

    row = upsert_player_stats(session, player_id, stats)

    assert row.avg_cs_per_min is None
    assert row.avg_kda == pytest.approx(5.0)


def test_champion_stats_are_replaced_per_player(session) -> None:
    player_id = upsert_ranked_snapshot(session, _snapshot()).id
    player = get_player(session, player_id)
    upsert_match(session, player_id, _ingested("EUW1_1", timestamp=1_000, champion_id=103))
    upsert_match(session, player_id, _ingested("EUW1_2", timestamp=2_000, champion_id=238))
    upsert_match(session, player_id, _ingested("EUW1_3", timestamp=3_000, champion_id=238))

    first = aggregate_player_stats(player, fetch_all_matches(session, player_id))
    replace_champion_stats(session, player_id, first.champion_stats)
    replace_champion_stats(session, player_id, first.champion_stats)
    session.commit()

    stored = fetch_champion_stats(session, player_id)
    assert [stats.champion_id for stats in stored] == [238, 103]
    assert stored == list(first.champion_stats)
    assert session.scalar(select(func.count(ChampionStatsRow.id))) == 2

    replace_champion_stats(session, player_id, [])
    assert fetch_champion_stats(session, player_id) == []


def test_team_stats_row_is_created_once(session) -> None:
    upsert_ranked_snapshot(session, _snapshot())
    upsert_team_stats(session, aggregate_team_stats(list_players(session)), name="T1")
    upsert_ranked_snapshot(session, _snapshot(summoner_name="Keria", summoner_id="k", wins=20, losses=15))
    upsert_team_stats(session, aggregate_team_stats(list_players(session)), name="ignored")
    session.commit()

    rows = session.execute(select(TeamStatsRow)).scalars().all()
    assert len(rows) == 1
    assert rows[0].name == "T1"
    assert rows[0].total_wins == 200
    assert rows[0].total_losses == 120
    assert rows[0].win_rate == pytest.approx(62.5)
