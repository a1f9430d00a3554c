"""Canonical penalty ledger record."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


PenaltyKind = Literal["PRINCIPAL", "INTEREST"]
PenaltyStatus = Literal["PENDING", "COMPLETE"]

PRINCIPAL: PenaltyKind = "PRINCIPAL"
INTEREST: PenaltyKind = "INTEREST"
PENDING: PenaltyStatus = "PENDING"
COMPLETE: PenaltyStatus = "COMPLETE"

INTEREST_PLAYER_NAME = "INTEREST PENALTY"


class PenaltyRecord(BaseModel):
    """One row of the ice ledger, either a principal or an interest unit."""

    id: int
    roster_id: int
    team_name: str
    player_name: str
    week_incurred: int = Field(..., ge=1)
    score: float = Field(..., le=0.0)
    kind: PenaltyKind
    parent_id: Optional[int] = None
    status: PenaltyStatus = PENDING
    season: str
    proof_url: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_parent(self) -> "PenaltyRecord":
        if self.kind == PRINCIPAL and self.parent_id is not None:
            raise ValueError("principal penalties cannot reference a parent")
        if self.kind == INTEREST and self.parent_id is None:
            raise ValueError("interest penalties require a parent_id")
        return self

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING
