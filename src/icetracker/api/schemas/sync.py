from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from icetracker.sync import SyncSummary


class SyncResponse(BaseModel):
    message: str
    principals_created: int
    interest_created: int
    period_scanned: int
    season: str
    scan_start_week: int
    scanned_to: int
    skipped_weeks: List[int] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, summary: SyncSummary, *, message: str) -> "SyncResponse":
        return cls(
            message=message,
            principals_created=summary.principals_created,
            interest_created=summary.interest_created,
            period_scanned=summary.period,
            season=summary.season,
            scan_start_week=summary.scanned_from,
            scanned_to=summary.scanned_to,
            skipped_weeks=list(summary.skipped_weeks),
        )
