"""Detect zero/negative starter scores and record them as principal penalties."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from icetracker.models import PRINCIPAL
from icetracker.persistence import LedgerStore
from icetracker.sources import LineupEntry, PlayerInfo, ResultSource
from icetracker.sources.base import WeeklyState


logger = logging.getLogger(__name__)

EMPTY_SLOT_ID = "0"


def team_label(roster_id: int, roster_team_map: Mapping[int, str]) -> str:
    return roster_team_map.get(roster_id) or f"Team {roster_id}"


def resolve_player_name(player_id: str, players: Mapping[str, PlayerInfo]) -> str:
    info = players.get(player_id)
    if info is not None and info.display_name:
        return info.display_name
    return f"Player {player_id}"


def qualifying_starters(entry: LineupEntry, *, empty_slot_id: str = EMPTY_SLOT_ID) -> list[tuple[str, float]]:
    """Return ``(player_id, score)`` for every starter that scored ``<= 0``.

    Entries without ``starters_points`` yield nothing, and unscored slots
    (``None``) are ignored. When the two lists disagree in length only the
    shared prefix is considered.
    """

    if entry.starters_points is None:
        return []
    hits: list[tuple[str, float]] = []
    for player_id, score in zip(entry.starters, entry.starters_points):
        if score is None or score > 0:
            continue
        if player_id == empty_slot_id:
            continue
        hits.append((player_id, score))
    return hits


@dataclass
class WeekScan:
    week: int
    state: WeeklyState
    created: int = 0


class PenaltyDetector:
    def __init__(
        self,
        source: ResultSource,
        store: LedgerStore,
        players: Mapping[str, PlayerInfo],
        *,
        empty_slot_id: str = EMPTY_SLOT_ID,
    ):
        self.source = source
        self.store = store
        self.players = players
        self.empty_slot_id = empty_slot_id

    def detect(self, week: int, season: str, roster_team_map: Mapping[int, str]) -> int:
        return self.scan_week(week, season, roster_team_map).created

    def scan_week(self, week: int, season: str, roster_team_map: Mapping[int, str]) -> WeekScan:
        lineups = self.source.get_weekly_lineups(week)
        if lineups.state == "FAILED":
            logger.warning("Skipping week %d: %s", week, lineups.error)
            return WeekScan(week=week, state=lineups.state)
        if not lineups.has_data:
            logger.info("No lineup data for week %d yet", week)
            return WeekScan(week=week, state=lineups.state)

        created = 0
        for entry in lineups.entries:
            for player_id, score in qualifying_starters(entry, empty_slot_id=self.empty_slot_id):
                player_name = resolve_player_name(player_id, self.players)
                existing = self.store.find_principal(
                    roster_id=entry.roster_id,
                    week_incurred=week,
                    player_name=player_name,
                    season=season,
                )
                if existing is not None:
                    continue
                team_name = team_label(entry.roster_id, roster_team_map)
                self.store.insert_penalty(
                    roster_id=entry.roster_id,
                    team_name=team_name,
                    player_name=player_name,
                    week_incurred=week,
                    score=score,
                    kind=PRINCIPAL,
                    season=season,
                )
                logger.info(
                    "Ice: %s started %s in week %d (%.2f pts)",
                    team_name,
                    player_name,
                    week,
                    score,
                )
                created += 1
        return WeekScan(week=week, state=lineups.state, created=created)
