"""Thin Riot API client over an injected httpx client."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from domain.config import RiotSettings, platform_route_for
from domain.errors import RiotApiError

logger = logging.getLogger(__name__)


def create_http_client(api_key: str, *, timeout_seconds: float = 10.0) -> httpx.Client:
    """Create an httpx client that sends the Riot token on every request."""
    return httpx.Client(
        timeout=timeout_seconds,
        headers={"X-Riot-Token": api_key},
    )


class RiotClient:
    """Summoner, league and match-v5 lookups.

    Every non-2xx response raises ``RiotApiError``; callers choose whether to
    skip the item or abort.
    """

    def __init__(self, http_client: httpx.Client, settings: RiotSettings) -> None:
        self.http_client = http_client
        self.settings = settings

    def _platform_url(self, region: str | None) -> str:
        route = platform_route_for(region) if region else self.settings.platform_route
        return f"https://{route}.api.riotgames.com"

    def _regional_url(self) -> str:
        return f"https://{self.settings.regional_route}.api.riotgames.com"

    def _get_json(
        self,
        url: str,
        expected: type,
        *,
        failure_message: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = self.http_client.get(url, params=params)
        except httpx.HTTPError as exc:
            raise RiotApiError(0, f"{failure_message} ({exc.__class__.__name__})") from exc

        if not response.is_success:
            logger.warning("riot request failed status=%s url=%s", response.status_code, url)
            raise RiotApiError(response.status_code, f"{failure_message} {response.reason_phrase}".strip())

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("riot response is not JSON status=%s url=%s", response.status_code, url)
            raise RiotApiError(response.status_code, f"{failure_message} (invalid JSON body)") from exc
        if not isinstance(payload, expected):
            raise RiotApiError(response.status_code, f"{failure_message} (expected JSON {expected.__name__})")
        return payload

    def get_summoner_by_name(self, summoner_name: str, *, region: str | None = None) -> dict[str, Any]:
        url = (
            f"{self._platform_url(region)}/lol/summoner/v4/summoners/by-name/"
            f"{quote(summoner_name, safe='')}"
        )
        return self._get_json(url, dict, failure_message="Failed to fetch summoner data")

    def get_league_entries(self, summoner_id: str, *, region: str | None = None) -> list[dict[str, Any]]:
        url = f"{self._platform_url(region)}/lol/league/v4/entries/by-summoner/{summoner_id}"
        return self._get_json(url, list, failure_message="Failed to fetch league data")

    def get_match_ids(self, puuid: str, *, count: int | None = None) -> list[str]:
        url = f"{self._regional_url()}/lol/match/v5/matches/by-puuid/{puuid}/ids"
        params = {"start": 0, "count": count or self.settings.match_count}
        match_ids = self._get_json(url, list, failure_message="Failed to fetch match IDs", params=params)
        return [str(match_id) for match_id in match_ids]

    def get_match(self, match_id: str) -> dict[str, Any]:
        url = f"{self._regional_url()}/lol/match/v5/matches/{match_id}"
        return self._get_json(url, dict, failure_message=f"Failed to fetch match {match_id}")


__all__ = ["RiotClient", "create_http_client"]
