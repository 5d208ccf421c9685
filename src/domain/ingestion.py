"""Turn raw Riot payloads and roster CSV text into domain records."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from domain.common import MatchResult, Role
from domain.errors import IngestionError
from domain.stats import round_half_up

SOLO_QUEUE_TYPE = "RANKED_SOLO_5x5"

_RIOT_POSITION_TO_ROLE = {
    "TOP": Role.TOP,
    "JUNGLE": Role.JUNGLE,
    "MIDDLE": Role.MID,
    "BOTTOM": Role.ADC,
    "UTILITY": Role.SUPPORT,
}

_ROSTER_HEADER = ("name", "role", "summoner_name")


@dataclass(frozen=True)
class IngestedMatch:
    """Match fields extracted from a match-v5 payload, before persistence."""

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


@dataclass(frozen=True)
class RankedSnapshot:
    """Summoner identity plus solo-queue standing."""

    summoner_name: str
    summoner_id: str
    puuid: str | None
    profile_icon_id: int | None
    tier: str | None
    rank: str | None
    league_points: int
    wins: int
    losses: int


@dataclass(frozen=True)
class RosterEntry:
    name: str
    role: Role
    summoner_name: str


@dataclass(frozen=True)
class RosterRowError:
    line_number: int
    line: str
    reason: str


@dataclass(frozen=True)
class RosterImport:
    entries: tuple[RosterEntry, ...]
    errors: tuple[RosterRowError, ...]


def map_riot_position(position: str | None) -> Role | None:
    """Map Riot's ``individualPosition`` to a roster role."""
    if position is None:
        return None
    return _RIOT_POSITION_TO_ROLE.get(position)


def parse_role(value: str) -> Role:
    normalized = value.strip().lower()
    for role in Role:
        if role.value.lower() == normalized:
            return role
    available = ", ".join(role.value for role in Role)
    raise IngestionError(f"Unknown role '{value}'. Expected one of: {available}")


def calculate_match_kda(kills: int, deaths: int, assists: int) -> float:
    if deaths == 0:
        return float(kills + assists)
    return (kills + assists) / deaths


def match_from_riot_payload(payload: dict[str, Any], puuid: str) -> IngestedMatch | None:
    """Extract one player's row from a match-v5 payload.

    Returns None when ``puuid`` did not take part in the match. Matches whose
    duration rounds to zero minutes are rejected so per-minute rates stay
    finite. Malformed payloads raise ``IngestionError``.
    """
    try:
        metadata = payload.get("metadata") or {}
        info = payload.get("info") or {}
        participants: Sequence[str] = metadata.get("participants") or ()
    except AttributeError as exc:
        raise IngestionError("match payload is not a JSON object") from exc
    try:
        participant_index = list(participants).index(puuid)
    except ValueError:
        return None
    except TypeError as exc:
        raise IngestionError("match payload has malformed metadata.participants") from exc

    game_id = metadata.get("matchId")
    if not game_id:
        raise IngestionError("match payload is missing metadata.matchId")

    try:
        return _ingest_participant(str(game_id), info, info["participants"][participant_index])
    except (KeyError, IndexError) as exc:
        raise IngestionError(f"match {game_id} is missing field {exc.args[0]!r}") from exc
    except (TypeError, ValueError, AttributeError) as exc:
        raise IngestionError(f"match {game_id} has a malformed participant row: {exc}") from exc


def _ingest_participant(game_id: str, info: dict[str, Any], participant: dict[str, Any]) -> IngestedMatch:
    game_duration_seconds = info.get("gameDuration") or 0
    if game_duration_seconds <= 0:
        raise IngestionError(f"match {game_id} has non-positive gameDuration={game_duration_seconds!r}")
    duration_minutes = game_duration_seconds / 60
    # Half-up: 24.5 minutes is stored as 25.
    duration = int(round_half_up(duration_minutes, 0))
    if duration == 0:
        raise IngestionError(f"match {game_id} gameDuration={game_duration_seconds!r} is under one minute")

    kills = int(participant.get("kills", 0))
    deaths = int(participant.get("deaths", 0))
    assists = int(participant.get("assists", 0))
    cs = int(participant.get("totalMinionsKilled", 0)) + int(
        participant.get("neutralMinionsKilled") or 0
    )

    return IngestedMatch(
        game_id=game_id,
        timestamp=int(info.get("gameCreation", 0)),
        champion=str(participant.get("championName", "")),
        champion_id=int(participant["championId"]),
        result=MatchResult.WIN if participant.get("win") else MatchResult.LOSS,
        kills=kills,
        deaths=deaths,
        assists=assists,
        kda=calculate_match_kda(kills, deaths, assists),
        cs=cs,
        cs_per_min=cs / duration_minutes,
        vision=int(participant.get("visionScore", 0)),
        gold=int(participant.get("goldEarned", 0)),
        duration=duration,
        role=map_riot_position(participant.get("individualPosition")),
    )


def solo_queue_entry(entries: Sequence[dict[str, Any]]) -> dict[str, Any]:
    """Pick the solo-queue league entry, or an empty mapping when unranked."""
    for entry in entries:
        if entry.get("queueType") == SOLO_QUEUE_TYPE:
            return entry
    return {}


def ranked_snapshot(summoner: dict[str, Any], league_entries: Sequence[dict[str, Any]]) -> RankedSnapshot:
    try:
        summoner_name = str(summoner["name"])
        summoner_id = str(summoner["id"])
    except KeyError as exc:
        raise IngestionError(f"summoner payload is missing {exc.args[0]!r}") from exc
    except TypeError as exc:
        raise IngestionError("summoner payload is not a JSON object") from exc

    try:
        solo_queue = solo_queue_entry(league_entries)
        return RankedSnapshot(
            summoner_name=summoner_name,
            summoner_id=summoner_id,
            puuid=summoner.get("puuid"),
            profile_icon_id=summoner.get("profileIconId"),
            tier=solo_queue.get("tier") or None,
            rank=solo_queue.get("rank") or None,
            league_points=int(solo_queue.get("leaguePoints") or 0),
            wins=int(solo_queue.get("wins") or 0),
            losses=int(solo_queue.get("losses") or 0),
        )
    except (TypeError, ValueError, AttributeError) as exc:
        raise IngestionError(f"league entries for {summoner_name!r} are malformed: {exc}") from exc


def parse_roster_csv(text: str) -> RosterImport:
    """Parse ``name,role,summoner_name`` rows; the header row is optional.

    Bad rows are reported individually and do not stop the import.
    """
    entries: list[RosterEntry] = []
    errors: list[RosterRowError] = []

    reader = csv.reader(io.StringIO(text.strip()))
    for line_number, row in enumerate(reader, start=1):
        cells = [cell.strip() for cell in row]
        if not any(cells):
            continue
        line = ",".join(cells)
        if line_number == 1 and tuple(cell.lower() for cell in cells) == _ROSTER_HEADER:
            continue
        if len(cells) != len(_ROSTER_HEADER):
            errors.append(
                RosterRowError(
                    line_number=line_number,
                    line=line,
                    reason=f"expected {len(_ROSTER_HEADER)} columns, got {len(cells)}",
                )
            )
            continue

        name, role_value, summoner_name = cells
        if not name or not summoner_name:
            errors.append(
                RosterRowError(line_number=line_number, line=line, reason="name and summoner_name are required")
            )
            continue
        try:
            role = parse_role(role_value)
        except IngestionError as exc:
            errors.append(RosterRowError(line_number=line_number, line=line, reason=str(exc)))
            continue

        entries.append(RosterEntry(name=name, role=role, summoner_name=summoner_name))

    return RosterImport(entries=tuple(entries), errors=tuple(errors))


__all__ = [
    "IngestedMatch",
    "RankedSnapshot",
    "RosterEntry",
    "RosterImport",
    "RosterRowError",
    "SOLO_QUEUE_TYPE",
    "calculate_match_kda",
    "map_riot_position",
    "match_from_riot_payload",
    "parse_role",
    "parse_roster_csv",
    "ranked_snapshot",
    "solo_queue_entry",
]
