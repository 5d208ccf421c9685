"""Persistence helpers for ingested matches."""

from __future__ import annotations

from dataclasses import asdict
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from domain.common import Match, MatchResult, Role
from domain.ingestion import IngestedMatch
from models import MatchRow

DEFAULT_RECENT_MATCH_LIMIT = 15


def row_to_match(row: MatchRow) -> Match:
    return Match(
        id=row.id,
        game_id=row.game_id,
        timestamp=row.timestamp,
        champion=row.champion,
        champion_id=row.champion_id,
        result=MatchResult(row.result),
        kills=row.kills,
        deaths=row.deaths,
        assists=row.assists,
        kda=row.kda,
        cs=row.cs,
        cs_per_min=row.cs_per_min,
        vision=row.vision,
        gold=row.gold,
        duration=row.duration,
        role=None if row.role is None else Role(row.role),
    )


def _ingested_to_columns(match: IngestedMatch) -> dict[str, object]:
    payload = asdict(match)
    payload["result"] = match.result.value
    payload["role"] = None if match.role is None else match.role.value
    return payload


def upsert_match(session: Session, player_id: int, match: IngestedMatch) -> bool:
    """Insert or refresh one match keyed by (player_id, game_id).

    Returns True when a new row was inserted.
    """
    statement = select(MatchRow).where(
        MatchRow.player_id == player_id,
        MatchRow.game_id == match.game_id,
    )
    row = session.execute(statement).scalar_one_or_none()
    columns = _ingested_to_columns(match)

    inserted = row is None
    if row is None:
        row = MatchRow(player_id=player_id, **columns)
        session.add(row)
    else:
        for key, value in columns.items():
            setattr(row, key, value)
        row.updated_at = datetime.now(UTC).replace(tzinfo=None)
    session.flush()
    return inserted


def fetch_recent_matches(
    session: Session,
    player_id: int,
    *,
    limit: int = DEFAULT_RECENT_MATCH_LIMIT,
) -> list[Match]:
    """Most-recent-first matches for one player."""
    if limit <= 0:
        raise ValueError("limit must be greater than 0")

    statement = (
        select(MatchRow)
        .where(MatchRow.player_id == player_id)
        .order_by(MatchRow.timestamp.desc(), MatchRow.id.desc())
        .limit(limit)
    )
    return [row_to_match(row) for row in session.execute(statement).scalars().all()]


def fetch_all_matches(session: Session, player_id: int) -> list[Match]:
    statement = (
        select(MatchRow)
        .where(MatchRow.player_id == player_id)
        .order_by(MatchRow.timestamp.desc(), MatchRow.id.desc())
    )
    return [row_to_match(row) for row in session.execute(statement).scalars().all()]


__all__ = [
    "DEFAULT_RECENT_MATCH_LIMIT",
    "fetch_all_matches",
    "fetch_recent_matches",
    "row_to_match",
    "upsert_match",
]
