"""Persistence helpers for roster members."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.common import Player, Role
from domain.errors import PlayerNotFoundError
from domain.ingestion import RankedSnapshot, RosterEntry
from models import PlayerRow

DEFAULT_SYNCED_ROLE = Role.MID

_EDITABLE_FIELDS = frozenset(
    {
        "name",
        "role",
        "summoner_name",
        "profile_image_url",
        "tier",
        "rank",
        "league_points",
        "wins",
        "losses",
    }
)


@dataclass(frozen=True)
class RosterInsertSummary:
    inserted: int
    skipped_existing: tuple[str, ...]


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def row_to_player(row: PlayerRow) -> Player:
    return Player(
        id=row.id,
        name=row.name,
        role=Role(row.role),
        summoner_name=row.summoner_name,
        summoner_id=row.summoner_id,
        profile_icon_id=row.profile_icon_id,
        tier=row.tier,
        rank=row.rank,
        league_points=row.league_points,
        wins=row.wins,
        losses=row.losses,
    )


def get_player_row(session: Session, player_id: int) -> PlayerRow:
    row = session.get(PlayerRow, player_id)
    if row is None:
        raise PlayerNotFoundError(player_id)
    return row


def get_player(session: Session, player_id: int) -> Player:
    return row_to_player(get_player_row(session, player_id))


def list_players(session: Session) -> list[Player]:
    """All roster members ordered by id."""
    rows = session.execute(select(PlayerRow).order_by(PlayerRow.id)).scalars().all()
    return [row_to_player(row) for row in rows]


def find_player_by_summoner_name(session: Session, summoner_name: str) -> PlayerRow | None:
    statement = select(PlayerRow).where(PlayerRow.summoner_name == summoner_name).order_by(PlayerRow.id)
    return session.execute(statement).scalars().first()


def upsert_ranked_snapshot(session: Session, snapshot: RankedSnapshot) -> PlayerRow:
    """Create or update the player matching the snapshot's summoner name.

    New players default their display name to the summoner name.
    """
    row = find_player_by_summoner_name(session, snapshot.summoner_name)
    if row is None:
        row = PlayerRow(
            name=snapshot.summoner_name,
            role=DEFAULT_SYNCED_ROLE.value,
            summoner_name=snapshot.summoner_name,
        )
        session.add(row)

    row.summoner_id = snapshot.summoner_id
    row.profile_icon_id = snapshot.profile_icon_id
    row.tier = snapshot.tier
    row.rank = snapshot.rank
    row.league_points = snapshot.league_points
    row.wins = snapshot.wins
    row.losses = snapshot.losses
    row.updated_at = _utcnow()
    session.flush()
    return row


def insert_roster_entries(session: Session, entries: Sequence[RosterEntry]) -> RosterInsertSummary:
    """Insert CSV roster rows, skipping summoner names already on the roster."""
    inserted = 0
    skipped: list[str] = []
    seen: set[str] = set()
    for entry in entries:
        if entry.summoner_name in seen or find_player_by_summoner_name(session, entry.summoner_name):
            skipped.append(entry.summoner_name)
            continue
        session.add(
            PlayerRow(
                name=entry.name,
                role=entry.role.value,
                summoner_name=entry.summoner_name,
            )
        )
        seen.add(entry.summoner_name)
        inserted += 1
    session.flush()
    return RosterInsertSummary(inserted=inserted, skipped_existing=tuple(skipped))


def update_player(session: Session, player_id: int, changes: dict[str, Any]) -> Player:
    """Apply admin edits to one player."""
    unknown = sorted(set(changes) - _EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Fields cannot be edited: {unknown}")

    row = get_player_row(session, player_id)
    for key, value in changes.items():
        if key == "role":
            value = Role(value).value
        setattr(row, key, value)
    row.updated_at = _utcnow()
    session.flush()
    return row_to_player(row)


__all__ = [
    "RosterInsertSummary",
    "find_player_by_summoner_name",
    "get_player",
    "get_player_row",
    "insert_roster_entries",
    "list_players",
    "row_to_player",
    "update_player",
    "upsert_ranked_snapshot",
]
