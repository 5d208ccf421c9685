"""Exception hierarchy for roster sync and statistics."""

from __future__ import annotations


class RosterStatsError(Exception):
    """Base class for errors raised by this package."""


class IngestionError(RosterStatsError):
    """A raw record could not be turned into a domain object."""


class PlayerNotFoundError(RosterStatsError):
    def __init__(self, player_id: int) -> None:
        super().__init__(f"player_id={player_id} not found")
        self.player_id = player_id


class MissingExternalLinkError(RosterStatsError):
    """Player has no summoner name, so it cannot be synced from Riot."""

    def __init__(self, player_id: int) -> None:
        super().__init__(f"player_id={player_id} has no summoner_name")
        self.player_id = player_id


class SummonerNotOnRosterError(RosterStatsError):
    def __init__(self, summoner_name: str) -> None:
        super().__init__(f"summoner_name={summoner_name!r} is not on the roster")
        self.summoner_name = summoner_name


class RiotApiError(RosterStatsError):
    """Non-success response from the Riot API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{message}: {status_code}")
        self.status_code = status_code


__all__ = [
    "IngestionError",
    "MissingExternalLinkError",
    "PlayerNotFoundError",
    "RiotApiError",
    "RosterStatsError",
    "SummonerNotOnRosterError",
]
