"""Sync, import and rebuild flows tying Riot, storage and aggregation together."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.common import Player, PlayerStats, TeamStats
from domain.config import SyncConfig, default_sync_config
from domain.errors import (
    IngestionError,
    MissingExternalLinkError,
    RosterStatsError,
    SummonerNotOnRosterError,
)
from domain.ingestion import RosterRowError, match_from_riot_payload, parse_roster_csv, ranked_snapshot
from domain.result import FetchResult
from domain.stats import aggregate_player_stats, aggregate_team_stats
from repositories.matches import fetch_all_matches, fetch_recent_matches, upsert_match
from repositories.players import (
    find_player_by_summoner_name,
    get_player,
    insert_roster_entries,
    list_players,
    row_to_player,
    upsert_ranked_snapshot,
)
from repositories.stats import replace_champion_stats, upsert_player_stats, upsert_team_stats
from riot.client import RiotClient

logger = logging.getLogger(__name__)

_RECOVERABLE_ERRORS = (RosterStatsError, SQLAlchemyError)


@dataclass(frozen=True)
class MatchSyncSummary:
    """Outcome of one match-history sync."""

    player_id: int
    total: int
    processed: int
    inserted: int
    updated: int
    skipped: int


@dataclass(frozen=True)
class PlayerSyncSummary:
    player: Player
    matches: MatchSyncSummary
    stats: PlayerStats


@dataclass(frozen=True)
class RosterImportSummary:
    inserted: int
    skipped_existing: tuple[str, ...]
    errors: tuple[RosterRowError, ...]


def sync_summoner(
    session: Session,
    client: RiotClient,
    summoner_name: str,
    *,
    region: str | None = None,
) -> Player:
    """Refresh one summoner's identity and solo-queue record on the roster."""
    summoner = client.get_summoner_by_name(summoner_name, region=region)
    summoner_id = summoner.get("id")
    if not summoner_id:
        raise IngestionError(f"summoner payload for {summoner_name!r} is missing 'id'")
    league_entries = client.get_league_entries(str(summoner_id), region=region)
    row = upsert_ranked_snapshot(session, ranked_snapshot(summoner, league_entries))
    logger.info(
        "synced summoner=%s player_id=%s tier=%s rank=%s",
        row.summoner_name,
        row.id,
        row.tier,
        row.rank,
    )
    return row_to_player(row)


def _fetch_match_payloads(
    client: RiotClient,
    match_ids: Sequence[str],
    *,
    max_workers: int,
) -> list[FetchResult[dict[str, Any]]]:
    def fetch(match_id: str) -> FetchResult[dict[str, Any]]:
        try:
            return FetchResult.success(client.get_match(match_id), key=match_id)
        except RosterStatsError as exc:
            return FetchResult.failure(exc, key=match_id)

    if not match_ids:
        return []
    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(match_ids)))) as executor:
        return list(executor.map(fetch, match_ids))


def sync_match_history(
    session: Session,
    client: RiotClient,
    summoner_name: str,
    *,
    region: str | None = None,
    match_count: int | None = None,
    team_name: str = "Team",
    max_workers: int = 5,
) -> MatchSyncSummary:
    """Ingest recent matches for a rostered summoner, then rebuild cached stats.

    A match that cannot be fetched or parsed is logged and skipped.
    """
    summoner = client.get_summoner_by_name(summoner_name, region=region)
    canonical_name = str(summoner.get("name", summoner_name))
    player_row = find_player_by_summoner_name(session, canonical_name)
    if player_row is None:
        raise SummonerNotOnRosterError(canonical_name)

    puuid = summoner.get("puuid")
    if not puuid:
        raise IngestionError(f"summoner payload for {canonical_name!r} is missing puuid")

    match_ids = client.get_match_ids(str(puuid), count=match_count)
    logger.info("found matches=%s summoner=%s", len(match_ids), canonical_name)

    inserted = 0
    updated = 0
    skipped = 0
    for fetched in _fetch_match_payloads(client, match_ids, max_workers=max_workers):
        if not fetched.ok:
            logger.error("skipping match=%s: %s", fetched.key, fetched.error)
            skipped += 1
            continue

        try:
            match = match_from_riot_payload(fetched.unwrap(), str(puuid))
        except IngestionError as exc:
            logger.error("skipping match=%s: %s", fetched.key, exc)
            skipped += 1
            continue
        if match is None:
            logger.error("summoner=%s not found in match=%s", canonical_name, fetched.key)
            skipped += 1
            continue

        if upsert_match(session, player_row.id, match):
            inserted += 1
        else:
            updated += 1

    rebuild_player_stats(session, player_row.id, team_name=team_name)

    return MatchSyncSummary(
        player_id=player_row.id,
        total=len(match_ids),
        processed=inserted + updated,
        inserted=inserted,
        updated=updated,
        skipped=skipped,
    )


def refresh_team_stats(session: Session, *, team_name: str = "Team") -> TeamStats:
    """Recompute roster totals and store them in the team_stats row."""
    team_stats = aggregate_team_stats(list_players(session))
    upsert_team_stats(session, team_stats, name=team_name)
    return team_stats


def rebuild_player_stats(session: Session, player_id: int, *, team_name: str = "Team") -> PlayerStats:
    """Recompute one player's cached summary from every stored match."""
    player = get_player(session, player_id)
    stats = aggregate_player_stats(player, fetch_all_matches(session, player_id))
    upsert_player_stats(session, player_id, stats)
    replace_champion_stats(session, player_id, stats.champion_stats)
    refresh_team_stats(session, team_name=team_name)
    return stats


def load_player_stats(session: Session, player_id: int, *, recent_limit: int = 15) -> FetchResult[PlayerStats]:
    """Summary over the player's most recent matches, for display."""
    try:
        player = get_player(session, player_id)
        matches = fetch_recent_matches(session, player_id, limit=recent_limit)
    except _RECOVERABLE_ERRORS as exc:
        logger.error("failed to load stats for player_id=%s: %s", player_id, exc)
        return FetchResult.failure(exc, key=player_id)
    return FetchResult.success(aggregate_player_stats(player, matches), key=player_id)


def load_all_player_stats(session: Session, *, recent_limit: int = 15) -> dict[int, FetchResult[PlayerStats]]:
    return {
        player.id: load_player_stats(session, player.id, recent_limit=recent_limit)
        for player in list_players(session)
    }


def sync_player(
    *,
    session_factory,
    client: RiotClient,
    summoner_name: str,
    config: SyncConfig | None = None,
    echo: Callable[[str], None] | None = None,
) -> PlayerSyncSummary:
    """Sync ranked data and match history for one summoner in one transaction."""
    config = config or default_sync_config()

    with session_factory() as session:
        try:
            player = sync_summoner(session, client, summoner_name, region=config.riot.region)
            matches = sync_match_history(
                session,
                client,
                player.summoner_name or summoner_name,
                region=config.riot.region,
                match_count=config.riot.match_count,
                team_name=config.stats.team_name,
            )
            session.commit()
        except Exception:
            session.rollback()
            raise

        stats = load_player_stats(
            session,
            player.id,
            recent_limit=config.stats.recent_match_limit,
        ).unwrap()

    if echo is not None:
        echo(
            "synced "
            f"summoner={player.summoner_name} "
            f"player_id={player.id} "
            f"matches_total={matches.total} "
            f"processed={matches.processed} "
            f"inserted={matches.inserted} "
            f"updated={matches.updated} "
            f"skipped={matches.skipped}"
        )
    return PlayerSyncSummary(player=player, matches=matches, stats=stats)


def sync_roster(
    *,
    session_factory,
    client: RiotClient,
    config: SyncConfig | None = None,
    echo: Callable[[str], None] | None = None,
) -> list[FetchResult[PlayerSyncSummary]]:
    """Sync every roster member; one player's failure never stops the rest."""
    with session_factory() as session:
        players = list_players(session)

    results: list[FetchResult[PlayerSyncSummary]] = []
    for player in players:
        if not player.is_linked:
            error = MissingExternalLinkError(player.id)
            logger.warning("skipping player_id=%s: %s", player.id, error)
            results.append(FetchResult.failure(error, key=player.id))
            continue
        try:
            summary = sync_player(
                session_factory=session_factory,
                client=client,
                summoner_name=str(player.summoner_name),
                config=config,
                echo=echo,
            )
        except _RECOVERABLE_ERRORS as exc:
            logger.error("sync failed for player_id=%s summoner=%s: %s", player.id, player.summoner_name, exc)
            if echo is not None:
                echo(f"failed player_id={player.id} summoner={player.summoner_name} error={exc}")
            results.append(FetchResult.failure(exc, key=player.id))
            continue
        results.append(FetchResult.success(summary, key=player.id))
    return results


def rebuild_all_player_stats(
    *,
    session_factory,
    player_ids: Sequence[int] | None = None,
    team_name: str = "Team",
    echo: Callable[[str], None] | None = None,
) -> dict[int, PlayerStats]:
    """Recompute cached stats for the given players (all when None)."""
    rebuilt: dict[int, PlayerStats] = {}
    with session_factory() as session:
        try:
            target_ids = list(player_ids) if player_ids is not None else [p.id for p in list_players(session)]
            for player_id in target_ids:
                stats = rebuild_player_stats(session, player_id, team_name=team_name)
                rebuilt[player_id] = stats
                if echo is not None:
                    echo(
                        f"rebuilt player_id={player_id} "
                        f"champions={len(stats.champion_stats)} "
                        f"avg_kda={stats.avg_kda} "
                        f"win_rate={stats.win_rate}"
                    )
            session.commit()
        except Exception:
            session.rollback()
            raise
    return rebuilt


def import_roster_csv(
    *,
    session_factory,
    text: str,
    dry_run: bool = False,
) -> RosterImportSummary:
    """Import ``name,role,summoner_name`` rows; bad rows are reported, not fatal."""
    parsed = parse_roster_csv(text)
    for row_error in parsed.errors:
        logger.warning("roster line=%s rejected: %s", row_error.line_number, row_error.reason)

    with session_factory() as session:
        try:
            result = insert_roster_entries(session, parsed.entries)
            if dry_run:
                session.rollback()
            else:
                session.commit()
        except Exception:
            session.rollback()
            raise

    return RosterImportSummary(
        inserted=result.inserted,
        skipped_existing=result.skipped_existing,
        errors=parsed.errors,
    )


__all__ = [
    "MatchSyncSummary",
    "PlayerSyncSummary",
    "RosterImportSummary",
    "import_roster_csv",
    "load_all_player_stats",
    "load_player_stats",
    "rebuild_all_player_stats",
    "rebuild_player_stats",
    "refresh_team_stats",
    "sync_match_history",
    "sync_player",
    "sync_roster",
    "sync_summoner",
]
