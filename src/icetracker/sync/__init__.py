"""Sync engine reconciling Sleeper results against the ice ledger."""

from .detector import PenaltyDetector, WeekScan, qualifying_starters, resolve_player_name
from .interest import InterestCalculator, target_interest
from .orchestrator import SyncOrchestrator, SyncSummary, build_roster_team_map, scan_start_week

__all__ = [
    "InterestCalculator",
    "PenaltyDetector",
    "SyncOrchestrator",
    "SyncSummary",
    "WeekScan",
    "build_roster_team_map",
    "qualifying_starters",
    "resolve_player_name",
    "scan_start_week",
    "target_interest",
]
