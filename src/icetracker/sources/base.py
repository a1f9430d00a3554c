"""Data-source port consumed by the sync engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Mapping, Optional, Protocol

from pydantic import BaseModel, Field

from icetracker.errors import UpstreamWeeklyDataUnavailable


class PeriodPointer(BaseModel):
    week: int = Field(..., ge=0)
    season: str
    season_type: Optional[str] = None


class OwnerEntry(BaseModel):
    owner_id: str
    display_name: Optional[str] = None
    team_name_override: Optional[str] = None


class RosterEntry(BaseModel):
    roster_id: int
    owner_id: Optional[str] = None


class PlayerInfo(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None
    team: Optional[str] = None

    @property
    def display_name(self) -> str | None:
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) if parts else None


class LineupEntry(BaseModel):
    roster_id: int
    starters: List[str] = Field(default_factory=list)
    starters_points: Optional[List[Optional[float]]] = None


WeeklyState = Literal["OK", "EMPTY", "FAILED"]


@dataclass
class WeeklyLineups:
    """Outcome of one week's lineup fetch.

    ``EMPTY`` means upstream answered with nothing to scan; ``FAILED`` carries
    the error so callers can log it and leave the week for the next run.
    """

    week: int
    state: WeeklyState
    entries: List[LineupEntry] = field(default_factory=list)
    error: Optional[UpstreamWeeklyDataUnavailable] = None

    @classmethod
    def ok(cls, week: int, entries: List[LineupEntry]) -> "WeeklyLineups":
        if not entries:
            return cls.empty(week)
        return cls(week=week, state="OK", entries=entries)

    @classmethod
    def empty(cls, week: int) -> "WeeklyLineups":
        return cls(week=week, state="EMPTY")

    @classmethod
    def failed(cls, week: int, message: str) -> "WeeklyLineups":
        return cls(week=week, state="FAILED", error=UpstreamWeeklyDataUnavailable(week, message))

    @property
    def has_data(self) -> bool:
        return self.state == "OK"


class ResultSource(Protocol):
    def get_current_pointer(self) -> PeriodPointer:
        ...

    def get_owner_directory(self) -> List[OwnerEntry]:
        ...

    def get_roster_directory(self) -> List[RosterEntry]:
        ...

    def get_player_directory(self) -> Mapping[str, PlayerInfo]:
        ...

    def get_weekly_lineups(self, week: int) -> WeeklyLineups:
        ...
