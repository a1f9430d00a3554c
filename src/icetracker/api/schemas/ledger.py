from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from icetracker.models import PenaltyKind, PenaltyRecord, PenaltyStatus


class PenaltyResponse(BaseModel):
    id: int
    roster_id: int
    team_name: str
    player_name: str
    week_incurred: int
    score: float
    type: PenaltyKind
    parent_id: int | None
    status: PenaltyStatus
    season: str
    proof_url: str | None = None
    created_at: datetime
    completed_at: datetime | None = None

    @classmethod
    def from_record(cls, record: PenaltyRecord) -> "PenaltyResponse":
        return cls(
            id=record.id,
            roster_id=record.roster_id,
            team_name=record.team_name,
            player_name=record.player_name,
            week_incurred=record.week_incurred,
            score=record.score,
            type=record.kind,
            parent_id=record.parent_id,
            status=record.status,
            season=record.season,
            proof_url=record.proof_url,
            created_at=record.created_at,
            completed_at=record.completed_at,
        )


class CompletionRequest(BaseModel):
    proof_url: str | None = None


class LeaderboardEntryResponse(BaseModel):
    team_name: str
    count: int
