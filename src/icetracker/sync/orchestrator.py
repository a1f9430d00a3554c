"""Resumable sync run: detect new ices, then reconcile interest."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List

from icetracker.config import LeagueConfig
from icetracker.persistence import LedgerStore
from icetracker.sources import OwnerEntry, ResultSource, RosterEntry

from .detector import PenaltyDetector
from .interest import InterestCalculator


logger = logging.getLogger("uvicorn.error")
logger.setLevel(logging.INFO)

FIRST_WEEK = 1


@dataclass
class SyncSummary:
    scanned_from: int
    scanned_to: int
    principals_created: int
    interest_created: int
    period: int
    season: str
    skipped_weeks: List[int] = field(default_factory=list)

    def as_dict(self) -> dict:
        return asdict(self)


def build_roster_team_map(rosters: Iterable[RosterEntry], owners: Iterable[OwnerEntry]) -> Dict[int, str]:
    """Map roster ids to team names: owner's team name, then display name, then ``Team {id}``."""

    owners_by_id = {owner.owner_id: owner for owner in owners}
    mapping: Dict[int, str] = {}
    for roster in rosters:
        owner = owners_by_id.get(roster.owner_id) if roster.owner_id else None
        name = None
        if owner is not None:
            name = owner.team_name_override or owner.display_name
        mapping[roster.roster_id] = name or f"Team {roster.roster_id}"
    return mapping


def scan_start_week(current_week: int, last_week: int) -> int:
    # Re-scan the last recorded week to pick up stat corrections.
    if current_week == FIRST_WEEK:
        return FIRST_WEEK
    return max(FIRST_WEEK, last_week)


class SyncOrchestrator:
    def __init__(self, config: LeagueConfig, source: ResultSource, store: LedgerStore):
        self.config = config
        self.source = source
        self.store = store

    def run(self) -> SyncSummary:
        """Run one sync pass.

        Raises ``UpstreamPointerUnavailable`` when the current week cannot be
        fetched. Weekly fetch failures are skipped and retried next run.
        """

        pointer = self.source.get_current_pointer()
        current_week = pointer.week
        season = pointer.season

        last_week = self.store.max_week_incurred(season)
        start_week = scan_start_week(current_week, last_week)
        logger.info(
            "Sync league %s season %s: scanning weeks %d-%d (last recorded week %d)",
            self.config.league_id,
            season,
            start_week,
            current_week,
            last_week,
        )

        owners = self.source.get_owner_directory()
        rosters = self.source.get_roster_directory()
        players = self.source.get_player_directory()
        roster_team_map = build_roster_team_map(rosters, owners)

        detector = PenaltyDetector(
            self.source,
            self.store,
            players,
            empty_slot_id=self.config.empty_slot_id,
        )
        principals_created = 0
        skipped_weeks: List[int] = []
        for week in range(start_week, current_week + 1):
            scan = detector.scan_week(week, season, roster_team_map)
            if scan.state != "OK":
                skipped_weeks.append(week)
            principals_created += scan.created

        calculator = InterestCalculator(self.store, grace_weeks=self.config.grace_weeks)
        interest_created = calculator.reconcile(current_week, season)

        logger.info(
            "Sync complete: %d new ices, %d interest added, skipped weeks %s",
            principals_created,
            interest_created,
            skipped_weeks or "none",
        )
        return SyncSummary(
            scanned_from=start_week,
            scanned_to=current_week,
            principals_created=principals_created,
            interest_created=interest_created,
            period=current_week,
            season=season,
            skipped_weeks=skipped_weeks,
        )
