"""Upstream result sources feeding the sync engine."""

from .base import (
    LineupEntry,
    OwnerEntry,
    PeriodPointer,
    PlayerInfo,
    ResultSource,
    RosterEntry,
    WeeklyLineups,
)
from .sleeper import ALWAYS_FRESH, FreshnessPolicy, SleeperFetchError, SleeperSource

__all__ = [
    "ALWAYS_FRESH",
    "FreshnessPolicy",
    "LineupEntry",
    "OwnerEntry",
    "PeriodPointer",
    "PlayerInfo",
    "ResultSource",
    "RosterEntry",
    "SleeperFetchError",
    "SleeperSource",
    "WeeklyLineups",
]
