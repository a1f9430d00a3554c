from pathlib import Path

import pytest

from icetracker.config import LeagueConfig, load_config, resolve_db_path


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ICETRACKER_LEAGUE_ID", "42")
    monkeypatch.setenv("ICETRACKER_SLEEPER_URL", "http://localhost:9000/v1/")
    monkeypatch.setenv("ICETRACKER_CACHE_SECONDS", "60")
    monkeypatch.setenv("ICETRACKER_TIMEOUT", "2.5")

    config = LeagueConfig.from_env()

    assert config.league_id == "42"
    assert config.sleeper_url == "http://localhost:9000/v1"
    assert config.directory_cache_seconds == 60
    assert config.request_timeout == pytest.approx(2.5)
    assert config.grace_weeks == 1


def test_invalid_numbers_fall_back_to_defaults(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ICETRACKER_CACHE_SECONDS", "soon")
    monkeypatch.setenv("ICETRACKER_TIMEOUT", "-3")

    config = LeagueConfig.from_env("7")

    assert config.directory_cache_seconds == 300
    assert config.request_timeout == pytest.approx(0.1)


def test_missing_league_id_raises(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("ICETRACKER_LEAGUE_ID", raising=False)

    with pytest.raises(ValueError):
        LeagueConfig.from_env()


def test_load_config_db_path_override(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("ICETRACKER_DB_PATH", str(tmp_path / "env.sqlite"))

    assert resolve_db_path() == str(tmp_path / "env.sqlite")
    assert load_config("9").db_path == str(tmp_path / "env.sqlite")
    assert load_config("9", db_path=tmp_path / "cli.sqlite").db_path == tmp_path / "cli.sqlite"
