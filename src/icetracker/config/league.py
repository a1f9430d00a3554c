"""League configuration passed explicitly into the sync engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path


logger = logging.getLogger(__name__)

_LEAGUE_ID_ENV = "ICETRACKER_LEAGUE_ID"
_DB_PATH_ENV = "ICETRACKER_DB_PATH"
_SLEEPER_URL_ENV = "ICETRACKER_SLEEPER_URL"
_CACHE_SECONDS_ENV = "ICETRACKER_CACHE_SECONDS"
_TIMEOUT_ENV = "ICETRACKER_TIMEOUT"

DEFAULT_SLEEPER_URL = "https://api.sleeper.app/v1"
DEFAULT_DB_PATH = Path("data") / "icetracker.sqlite"
_CACHE_SECONDS_DEFAULT = 300
_TIMEOUT_DEFAULT = 10.0


def _env_float(name: str, default: float, *, clamp_min: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def resolve_db_path(db_path: Path | str | None = None) -> Path | str:
    if db_path is not None:
        return db_path
    return os.getenv(_DB_PATH_ENV) or DEFAULT_DB_PATH


@dataclass(frozen=True)
class LeagueConfig:
    league_id: str
    db_path: Path | str = DEFAULT_DB_PATH
    sleeper_url: str = DEFAULT_SLEEPER_URL
    directory_cache_seconds: int = _CACHE_SECONDS_DEFAULT
    request_timeout: float = _TIMEOUT_DEFAULT
    empty_slot_id: str = "0"
    grace_weeks: int = 1

    @classmethod
    def from_env(cls, league_id: str | None = None) -> "LeagueConfig":
        """Build a config from ``ICETRACKER_*`` variables, explicit arguments winning."""

        resolved_league = league_id or os.getenv(_LEAGUE_ID_ENV)
        if not resolved_league:
            raise ValueError(f"League id is required (pass it or set {_LEAGUE_ID_ENV})")
        return cls(
            league_id=resolved_league,
            db_path=resolve_db_path(),
            sleeper_url=os.getenv(_SLEEPER_URL_ENV, DEFAULT_SLEEPER_URL).rstrip("/"),
            directory_cache_seconds=_env_int(_CACHE_SECONDS_ENV, _CACHE_SECONDS_DEFAULT, min_value=0),
            request_timeout=_env_float(_TIMEOUT_ENV, _TIMEOUT_DEFAULT, clamp_min=0.1),
        )

    def with_db_path(self, db_path: Path | str) -> "LeagueConfig":
        return replace(self, db_path=db_path)


def load_config(league_id: str | None = None, *, db_path: Path | str | None = None) -> LeagueConfig:
    config = LeagueConfig.from_env(league_id)
    if db_path is not None:
        config = config.with_db_path(db_path)
    return config
