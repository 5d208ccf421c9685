"""Unit tests for Riot payload and roster CSV ingestion."""

from __future__ import annotations

from typing import Any

import pytest

from domain.common import MatchResult, Role
from domain.errors import IngestionError
from domain.ingestion import (
    map_riot_position,
    match_from_riot_payload,
    parse_role,
    parse_roster_csv,
    ranked_snapshot,
    solo_queue_entry,
)


def _participant(**overrides: Any) -> dict[str, Any]:
    participant: dict[str, Any] = {
        "championName": "Ahri",
        "championId": 103,
        "win": True,
        "kills": 8,
        "deaths": 2,
        "assists": 10,
        "totalMinionsKilled": 210,
        "neutralMinionsKilled": 12,
        "visionScore": 31,
        "goldEarned": 13_250,
        "individualPosition": "MIDDLE",
    }
    participant.update(overrides)
    return participant


def _match_payload(
    *,
    puuid: str = "puuid-faker",
    game_duration: int | None = 1_800,
    participant: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "metadata": {
            "matchId": "EUW1_6543210",
            "participants": ["puuid-other", puuid],
        },
        "info": {
            "gameCreation": 1_700_000_000_000,
            "gameDuration": game_duration,
            "participants": [_participant(championName="Zed", championId=238), participant or _participant()],
        },
    }


def test_match_payload_is_mapped_to_ingested_match() -> None:
    match = match_from_riot_payload(_match_payload(), "puuid-faker")

    assert match is not None
    assert match.game_id == "EUW1_6543210"
    assert match.timestamp == 1_700_000_000_000
    assert match.champion == "Ahri"
    assert match.champion_id == 103
    assert match.result == MatchResult.WIN
    assert match.cs == 222
    assert match.duration == 30
    assert match.cs_per_min == pytest.approx(7.4)
    assert match.kda == pytest.approx(9.0)
    assert match.vision == 31
    assert match.gold == 13_250
    assert match.role == Role.MID


def test_duration_is_rounded_to_whole_minutes() -> None:
    match = match_from_riot_payload(_match_payload(game_duration=1_775), "puuid-faker")

    assert match is not None
    assert match.duration == 30
    assert match.cs_per_min == pytest.approx(222 / (1_775 / 60))


def test_loss_with_zero_deaths_and_missing_neutral_minions() -> None:
    participant = _participant(win=False, deaths=0, kills=3, assists=4, neutralMinionsKilled=None)

    match = match_from_riot_payload(_match_payload(participant=participant), "puuid-faker")

    assert match is not None
    assert match.result == MatchResult.LOSS
    assert match.kda == pytest.approx(7.0)
    assert match.cs == 210


def test_missing_participant_returns_none() -> None:
    assert match_from_riot_payload(_match_payload(), "puuid-unknown") is None


@pytest.mark.parametrize("game_duration", [0, None])
def test_zero_duration_match_is_rejected(game_duration: int | None) -> None:
    with pytest.raises(IngestionError, match="gameDuration"):
        match_from_riot_payload(_match_payload(game_duration=game_duration), "puuid-faker")


@pytest.mark.parametrize(
    ("position", "expected"),
    [
        ("TOP", Role.TOP),
        ("JUNGLE", Role.JUNGLE),
        ("MIDDLE", Role.MID),
        ("BOTTOM", Role.ADC),
        ("UTILITY", Role.SUPPORT),
        ("Invalid", None),
        (None, None),
    ],
)
def test_riot_positions_map_to_roles(position: str | None, expected: Role | None) -> None:
    assert map_riot_position(position) == expected


def test_solo_queue_entry_is_selected() -> None:
    entries = [
        {"queueType": "RANKED_FLEX_SR", "tier": "GOLD"},
        {"queueType": "RANKED_SOLO_5x5", "tier": "CHALLENGER"},
    ]

    assert solo_queue_entry(entries)["tier"] == "CHALLENGER"
    assert solo_queue_entry([{"queueType": "RANKED_FLEX_SR"}]) == {}


def test_ranked_snapshot_defaults_for_unranked_summoner() -> None:
    snapshot = ranked_snapshot({"id": "sid", "name": "Keria", "puuid": "p", "profileIconId": 4822}, [])

    assert snapshot.summoner_name == "Keria"
    assert snapshot.tier is None
    assert snapshot.rank is None
    assert snapshot.league_points == 0
    assert snapshot.wins == 0
    assert snapshot.losses == 0


def test_ranked_snapshot_requires_summoner_identity() -> None:
    with pytest.raises(IngestionError, match="'id'"):
        ranked_snapshot({"name": "Keria"}, [])


def test_parse_role_is_case_insensitive() -> None:
    assert parse_role("adc") == Role.ADC
    assert parse_role(" Support ") == Role.SUPPORT
    with pytest.raises(IngestionError, match="Unknown role"):
        parse_role("Bot")


def test_roster_csv_with_header() -> None:
    text = """
name,role,summoner_name
TheShy,Top,TheShy#KR1

Faker,Mid,Faker#KR1
""".strip()

    parsed = parse_roster_csv(text)

    assert parsed.errors == ()
    assert [(entry.name, entry.role, entry.summoner_name) for entry in parsed.entries] == [
        ("TheShy", Role.TOP, "TheShy#KR1"),
        ("Faker", Role.MID, "Faker#KR1"),
    ]


def test_roster_csv_reports_bad_rows_and_keeps_good_ones() -> None:
    text = "Canyon,Jungle,Canyon#KR1\nRuler,Bot,Ruler#KR1\nKeria,Support\n,Mid,Nameless#KR1\n"

    parsed = parse_roster_csv(text)

    assert [entry.name for entry in parsed.entries] == ["Canyon"]
    assert [error.line_number for error in parsed.errors] == [2, 3, 4]
    assert "Unknown role" in parsed.errors[0].reason
    assert "expected 3 columns" in parsed.errors[1].reason
    assert "required" in parsed.errors[2].reason


def test_half_minute_duration_rounds_up() -> None:
    match = match_from_riot_payload(_match_payload(game_duration=1_470), "puuid-faker")

    assert match is not None
    assert match.duration == 25
    assert match.cs_per_min == pytest.approx(222 / 24.5)


@pytest.mark.parametrize("game_duration", [20, 29])
def test_remake_shorter_than_half_a_minute_is_rejected(game_duration: int) -> None:
    with pytest.raises(IngestionError, match="under one minute"):
        match_from_riot_payload(_match_payload(game_duration=game_duration), "puuid-faker")


def test_thirty_second_match_counts_as_one_minute() -> None:
    match = match_from_riot_payload(_match_payload(game_duration=30), "puuid-faker")

    assert match is not None
    assert match.duration == 1


def test_missing_champion_id_raises_ingestion_error() -> None:
    participant = _participant()
    del participant["championId"]

    with pytest.raises(IngestionError, match="championId"):
        match_from_riot_payload(_match_payload(participant=participant), "puuid-faker")


def test_non_numeric_counts_raise_ingestion_error() -> None:
    participant = _participant(kills=None)

    with pytest.raises(IngestionError, match="malformed participant row"):
        match_from_riot_payload(_match_payload(participant=participant), "puuid-faker")


def test_malformed_league_entry_raises_ingestion_error() -> None:
    entries = [{"queueType": "RANKED_SOLO_5x5", "tier": "GOLD", "wins": "many"}]

    with pytest.raises(IngestionError, match="malformed"):
        ranked_snapshot({"id": "sid", "name": "Keria"}, entries)
