"""Exception types raised by the sync engine and its collaborators."""

from __future__ import annotations


class IceTrackerError(Exception):
    """Base class for errors raised by icetracker."""


class UpstreamUnavailable(IceTrackerError):
    """Sleeper could not supply the data a sync asked for."""


class UpstreamPointerUnavailable(UpstreamUnavailable):
    """The current week/season pointer could not be fetched; the run cannot proceed."""


class UpstreamWeeklyDataUnavailable(UpstreamUnavailable):
    """One week's lineups could not be fetched; the week is retried on the next run."""

    def __init__(self, week: int, message: str):
        super().__init__(f"Week {week} lineups unavailable: {message}")
        self.week = week
        self.message = message


class StoreWriteFailure(IceTrackerError):
    """A ledger insert or update did not reach the database."""


class PenaltyLocked(IceTrackerError):
    """A principal cannot be completed while its team still owes interest."""
