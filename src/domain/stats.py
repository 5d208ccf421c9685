"""Match aggregation into player, champion and team summaries."""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from domain.common import ChampionStats, Match, Player, PlayerStats, TeamStats


def round_half_up(value: float, digits: int) -> float:
    """Round the exact binary value half-up to ``digits`` decimals.

    Non-finite values pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(10) ** -digits
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


def calculate_kda(kills: float, deaths: float, assists: float) -> float:
    """KDA rounded to two decimals; zero deaths count as a deathless ratio."""
    if deaths > 0:
        return round_half_up((kills + assists) / deaths, 2)
    return round_half_up(kills + assists, 2)


def calculate_win_rate(wins: int | None, losses: int | None) -> float | None:
    """Percentage from carried totals; either total being falsy yields None."""
    if not (wins and losses):
        return None
    return round_half_up(wins / (wins + losses) * 100, 1)


@dataclass
class _ChampionAccumulator:
    champion_id: int
    champion_name: str
    games: int = 0
    wins: int = 0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    cs_per_min_total: float = 0.0

    def add(self, match: Match) -> None:
        self.games += 1
        if match.won:
            self.wins += 1
        self.kills += match.kills
        self.deaths += match.deaths
        self.assists += match.assists
        self.cs_per_min_total += match.cs_per_min

    def finalize(self) -> ChampionStats:
        kills = round_half_up(self.kills / self.games, 1)
        deaths = round_half_up(self.deaths / self.games, 1)
        assists = round_half_up(self.assists / self.games, 1)
        return ChampionStats(
            champion_id=self.champion_id,
            champion_name=self.champion_name,
            games=self.games,
            wins=self.wins,
            losses=self.games - self.wins,
            win_rate=round_half_up(self.wins / self.games * 100, 1),
            kills=kills,
            deaths=deaths,
            assists=assists,
            kda=calculate_kda(kills, deaths, assists),
            # Mean of per-match rates, not total cs over total minutes.
            cs_per_min=round_half_up(self.cs_per_min_total / self.games, 1),
        )


def aggregate_champion_stats(matches: Iterable[Match]) -> list[ChampionStats]:
    """Group matches by champion, most-played first.

    Champions with the same number of games keep the order in which they
    were first seen.
    """
    accumulators: dict[int, _ChampionAccumulator] = {}
    for match in matches:
        accumulator = accumulators.get(match.champion_id)
        if accumulator is None:
            accumulator = _ChampionAccumulator(
                champion_id=match.champion_id,
                champion_name=match.champion,
            )
            accumulators[match.champion_id] = accumulator
        accumulator.add(match)

    champion_stats = [accumulator.finalize() for accumulator in accumulators.values()]
    champion_stats.sort(key=lambda stats: stats.games, reverse=True)
    return champion_stats


def count_roles_played(matches: Iterable[Match]) -> dict[str, int]:
    """Number of matches per role; matches without a role are ignored."""
    roles: dict[str, int] = {}
    for match in matches:
        if match.role is None:
            continue
        roles[match.role.value] = roles.get(match.role.value, 0) + 1
    return roles


def aggregate_player_stats(player: Player, matches: Sequence[Match]) -> PlayerStats:
    """Summarize ``matches`` for ``player``.

    Win rate always comes from the player's ranked totals, never from the
    sampled matches. ``matches`` is expected most-recent-first and already
    limited; it is carried through unchanged as ``recent_matches``.
    """
    win_rate = calculate_win_rate(player.wins, player.losses)
    if not matches:
        return PlayerStats(
            summoner_name=player.summoner_name,
            tier=player.tier,
            rank=player.rank,
            league_points=player.league_points,
            wins=player.wins,
            losses=player.losses,
            win_rate=win_rate,
        )

    total_matches = len(matches)
    total_kills = sum(match.kills for match in matches)
    total_deaths = sum(match.deaths for match in matches)
    total_assists = sum(match.assists for match in matches)
    total_cs = sum(match.cs for match in matches)
    total_duration = sum(match.duration for match in matches)

    avg_kills = round_half_up(total_kills / total_matches, 1)
    avg_deaths = round_half_up(total_deaths / total_matches, 1)
    avg_assists = round_half_up(total_assists / total_matches, 1)

    return PlayerStats(
        summoner_name=player.summoner_name,
        tier=player.tier,
        rank=player.rank,
        league_points=player.league_points,
        wins=player.wins,
        losses=player.losses,
        win_rate=win_rate,
        avg_kills=avg_kills,
        avg_deaths=avg_deaths,
        avg_assists=avg_assists,
        avg_kda=calculate_kda(avg_kills, avg_deaths, avg_assists),
        avg_cs_per_min=round_half_up(_ratio(total_cs, total_duration), 1),
        recent_matches=tuple(matches),
        champion_stats=tuple(aggregate_champion_stats(matches)),
        roles_played=tuple(count_roles_played(matches).items()),
    )


def aggregate_team_stats(players: Sequence[Player]) -> TeamStats:
    """Sum ranked totals across the roster."""
    total_wins = sum(player.wins or 0 for player in players)
    total_losses = sum(player.losses or 0 for player in players)
    total_games = total_wins + total_losses
    win_rate = round_half_up(total_wins / total_games * 100, 1) if total_games > 0 else None
    return TeamStats(
        players=tuple(players),
        total_wins=total_wins,
        total_losses=total_losses,
        win_rate=win_rate,
    )


__all__ = [
    "aggregate_champion_stats",
    "aggregate_player_stats",
    "aggregate_team_stats",
    "calculate_kda",
    "calculate_win_rate",
    "count_roles_played",
    "round_half_up",
]
