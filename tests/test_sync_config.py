"""Tests for sync settings TOML loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.config import load_sync_config, platform_route_for


def test_missing_path_returns_defaults() -> None:
    config = load_sync_config(None)

    assert config.file_path is None
    assert config.riot.region == "EUW"
    assert config.riot.platform_route == "euw1"
    assert config.riot.regional_route == "europe"
    assert config.riot.match_count == 15
    assert config.stats.recent_match_limit == 15
    assert config.stats.team_name == "Team"


def test_values_are_read_from_file(tmp_path: Path) -> None:
    config_path = tmp_path / "sync.toml"
    config_path.write_text(
        """
[riot]
region = "kr"
regional_route = "asia"
match_count = 20
timeout_seconds = 5.0
api_key_env = "ROSTER_RIOT_KEY"

[stats]
recent_match_limit = 10
team_name = "T1"
""".strip()
    )

    config = load_sync_config(config_path)

    assert config.file_path == config_path
    assert config.riot.region == "KR"
    assert config.riot.platform_route == "kr"
    assert config.riot.regional_route == "asia"
    assert config.riot.match_count == 20
    assert config.riot.timeout_seconds == pytest.approx(5.0)
    assert config.stats.recent_match_limit == 10
    assert config.stats.team_name == "T1"


def test_empty_sections_use_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.toml"
    config_path.write_text("[riot]\n\n[stats]\n")

    config = load_sync_config(config_path)

    assert config.riot.match_count == 15
    assert config.stats.recent_match_limit == 15


def test_unknown_region_falls_back_to_euw() -> None:
    assert platform_route_for("EUNE") == "eun1"
    assert platform_route_for("na") == "na1"
    assert platform_route_for("OCE") == "euw1"


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_sync_config(tmp_path / "missing.toml")


def test_invalid_match_count_raises_validation_error(tmp_path: Path) -> None:
    config_path = tmp_path / "invalid.toml"
    config_path.write_text("[riot]\nmatch_count = 0\n")

    with pytest.raises(ValueError, match=r"match_count must be between 1 and 100"):
        load_sync_config(config_path)


def test_invalid_recent_match_limit_raises_validation_error(tmp_path: Path) -> None:
    config_path = tmp_path / "invalid_limit.toml"
    config_path.write_text("[stats]\nrecent_match_limit = -1\n")

    with pytest.raises(ValueError, match=r"recent_match_limit must be > 0"):
        load_sync_config(config_path)


def test_api_key_is_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    config = load_sync_config(None)

    monkeypatch.delenv("RIOT_API_KEY", raising=False)
    with pytest.raises(ValueError, match="RIOT_API_KEY is not set"):
        config.api_key()

    monkeypatch.setenv("RIOT_API_KEY", "RGAPI-test")
    assert config.api_key() == "RGAPI-test"
