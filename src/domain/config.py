"""Load sync settings from a TOML file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
import tomllib

PLATFORM_ROUTES = {
    "EUW": "euw1",
    "EUNE": "eun1",
    "NA": "na1",
    "KR": "kr",
}
DEFAULT_REGION = "EUW"


@dataclass(frozen=True)
class RiotSettings:
    region: str = DEFAULT_REGION
    regional_route: str = "europe"
    match_count: int = 15
    timeout_seconds: float = 10.0
    api_key_env: str = "RIOT_API_KEY"

    @property
    def platform_route(self) -> str:
        return platform_route_for(self.region)


@dataclass(frozen=True)
class StatsSettings:
    recent_match_limit: int = 15
    team_name: str = "Team"


@dataclass(frozen=True)
class SyncConfig:
    """Settings for Riot sync and stats rebuilds."""

    file_path: Path | None
    riot: RiotSettings
    stats: StatsSettings

    def api_key(self) -> str:
        """Read the API key from the configured environment variable."""
        value = os.environ.get(self.riot.api_key_env, "").strip()
        if not value:
            raise ValueError(f"Environment variable {self.riot.api_key_env} is not set")
        return value


def platform_route_for(region: str) -> str:
    """Platform host prefix for a region code; unknown regions fall back to EUW."""
    return PLATFORM_ROUTES.get(region.upper(), PLATFORM_ROUTES[DEFAULT_REGION])


def default_sync_config() -> SyncConfig:
    return SyncConfig(file_path=None, riot=RiotSettings(), stats=StatsSettings())


def load_sync_config(file_path: Path | None) -> SyncConfig:
    """Load and validate a sync config file; None yields the defaults."""
    if file_path is None:
        return default_sync_config()
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")
    if not file_path.is_file():
        raise ValueError(f"Config path is not a file: {file_path}")

    with file_path.open("rb") as file:
        raw = tomllib.load(file)
    return _parse_sync_config(raw, file_path)


def _parse_sync_config(raw: dict[str, Any], file_path: Path) -> SyncConfig:
    riot_raw = raw.get("riot", {})
    stats_raw = raw.get("stats", {})

    region = str(riot_raw.get("region", DEFAULT_REGION)).strip().upper()
    if not region:
        raise ValueError(f"{file_path}: [riot].region must not be empty")

    riot = RiotSettings(
        region=region,
        regional_route=str(riot_raw.get("regional_route", "europe")).strip(),
        match_count=int(riot_raw.get("match_count", 15)),
        timeout_seconds=float(riot_raw.get("timeout_seconds", 10.0)),
        api_key_env=str(riot_raw.get("api_key_env", "RIOT_API_KEY")).strip(),
    )
    stats = StatsSettings(
        recent_match_limit=int(stats_raw.get("recent_match_limit", 15)),
        team_name=str(stats_raw.get("team_name", "Team")).strip(),
    )
    _validate(file_path=file_path, riot=riot, stats=stats)

    return SyncConfig(file_path=file_path, riot=riot, stats=stats)


def _validate(*, file_path: Path, riot: RiotSettings, stats: StatsSettings) -> None:
    if not riot.regional_route:
        raise ValueError(f"{file_path}: [riot].regional_route must not be empty")
    if riot.match_count <= 0 or riot.match_count > 100:
        raise ValueError(f"{file_path}: [riot].match_count must be between 1 and 100")
    if riot.timeout_seconds <= 0.0:
        raise ValueError(f"{file_path}: [riot].timeout_seconds must be > 0")
    if not riot.api_key_env:
        raise ValueError(f"{file_path}: [riot].api_key_env must not be empty")
    if stats.recent_match_limit <= 0:
        raise ValueError(f"{file_path}: [stats].recent_match_limit must be > 0")
    if not stats.team_name:
        raise ValueError(f"{file_path}: [stats].team_name must not be empty")


__all__ = [
    "PLATFORM_ROUTES",
    "RiotSettings",
    "StatsSettings",
    "SyncConfig",
    "default_sync_config",
    "load_sync_config",
    "platform_route_for",
]
