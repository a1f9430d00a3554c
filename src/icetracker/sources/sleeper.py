"""Sleeper REST API adapter."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import httpx
from pydantic import ValidationError

from icetracker.config import LeagueConfig
from icetracker.errors import UpstreamPointerUnavailable

from .base import LineupEntry, OwnerEntry, PeriodPointer, PlayerInfo, RosterEntry, WeeklyLineups


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FreshnessPolicy:
    """How stale a cached response may be; ``max_age`` of 0 always refetches."""

    max_age: float = 0.0

    @classmethod
    def cache_for(cls, seconds: float) -> "FreshnessPolicy":
        return cls(max_age=max(0.0, float(seconds)))

    @property
    def always_fresh(self) -> bool:
        return self.max_age <= 0


ALWAYS_FRESH = FreshnessPolicy()


class SleeperFetchError(Exception):
    pass


class SleeperSource:
    """Read-only view of one Sleeper league."""

    def __init__(
        self,
        config: LeagueConfig,
        *,
        client: httpx.Client | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=config.sleeper_url, timeout=config.request_timeout)
        self._clock = clock
        self._cache: Dict[str, Tuple[float, Any]] = {}
        self._directory_policy = FreshnessPolicy.cache_for(config.directory_cache_seconds)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SleeperSource":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Transport
    # ------------------------------------------------------------------ #
    def _fetch(self, path: str, policy: FreshnessPolicy) -> Any:
        now = self._clock()
        if not policy.always_fresh:
            cached = self._cache.get(path)
            if cached is not None and now - cached[0] <= policy.max_age:
                return cached[1]
        try:
            resp = self._client.get(path)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPError as exc:
            raise SleeperFetchError(f"GET {path} failed: {exc}") from exc
        except ValueError as exc:
            raise SleeperFetchError(f"GET {path} returned invalid JSON: {exc}") from exc
        if not policy.always_fresh:
            self._cache[path] = (now, payload)
        return payload

    def _league_path(self, suffix: str) -> str:
        return f"/league/{self.config.league_id}/{suffix}"

    # ------------------------------------------------------------------ #
    # ResultSource
    # ------------------------------------------------------------------ #
    def get_current_pointer(self) -> PeriodPointer:
        try:
            payload = self._fetch("/state/nfl", ALWAYS_FRESH)
            if not isinstance(payload, dict):
                raise SleeperFetchError("NFL state payload is not an object")
            return PeriodPointer(
                week=int(payload["week"]),
                season=str(payload["season"]),
                season_type=payload.get("season_type"),
            )
        except (SleeperFetchError, KeyError, TypeError, ValueError, ValidationError) as exc:
            raise UpstreamPointerUnavailable(f"Could not fetch NFL state: {exc}") from exc

    def get_owner_directory(self) -> List[OwnerEntry]:
        payload = self._fetch_directory(self._league_path("users"), default=[])
        owners: List[OwnerEntry] = []
        for raw in payload if isinstance(payload, list) else []:
            if not isinstance(raw, dict) or raw.get("user_id") is None:
                continue
            metadata = raw.get("metadata") or {}
            owners.append(
                OwnerEntry(
                    owner_id=str(raw["user_id"]),
                    display_name=raw.get("display_name"),
                    team_name_override=metadata.get("team_name") if isinstance(metadata, dict) else None,
                )
            )
        return owners

    def get_roster_directory(self) -> List[RosterEntry]:
        payload = self._fetch_directory(self._league_path("rosters"), default=[])
        rosters: List[RosterEntry] = []
        for raw in payload if isinstance(payload, list) else []:
            if not isinstance(raw, dict) or raw.get("roster_id") is None:
                continue
            owner = raw.get("owner_id")
            rosters.append(RosterEntry(roster_id=int(raw["roster_id"]), owner_id=str(owner) if owner else None))
        return rosters

    def get_player_directory(self) -> Mapping[str, PlayerInfo]:
        payload = self._fetch_directory("/players/nfl", default={})
        players: Dict[str, PlayerInfo] = {}
        if not isinstance(payload, dict):
            return players
        for player_id, raw in payload.items():
            if not isinstance(raw, dict):
                continue
            players[str(player_id)] = PlayerInfo(
                first_name=raw.get("first_name"),
                last_name=raw.get("last_name"),
                position=raw.get("position"),
                team=raw.get("team"),
            )
        return players

    def get_weekly_lineups(self, week: int) -> WeeklyLineups:
        try:
            payload = self._fetch(self._league_path(f"matchups/{week}"), ALWAYS_FRESH)
        except SleeperFetchError as exc:
            return WeeklyLineups.failed(week, str(exc))
        if payload is None:
            return WeeklyLineups.empty(week)
        if not isinstance(payload, list):
            return WeeklyLineups.failed(week, "matchups payload is not a list")
        entries: List[LineupEntry] = []
        for index, raw in enumerate(payload):
            try:
                entries.append(LineupEntry.model_validate(_normalize_matchup(raw)))
            except (TypeError, ValueError) as exc:
                logger.warning("Week %d: skipping malformed matchup entry %d: %s", week, index, exc)
        if payload and not entries:
            return WeeklyLineups.failed(week, "every matchup entry was malformed")
        return WeeklyLineups.ok(week, entries)

    def _fetch_directory(self, path: str, *, default: Any) -> Any:
        try:
            return self._fetch(path, self._directory_policy)
        except SleeperFetchError as exc:
            logger.warning("Directory fetch failed, names will fall back to placeholders: %s", exc)
            return default


def _score_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _normalize_matchup(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeError(f"expected an object, got {type(raw).__name__}")
    starters = raw.get("starters") or []
    points: Optional[List[Any]] = raw.get("starters_points")
    return {
        "roster_id": raw.get("roster_id"),
        "starters": [str(player_id) for player_id in starters],
        "starters_points": [_score_or_none(value) for value in points] if points is not None else None,
    }
