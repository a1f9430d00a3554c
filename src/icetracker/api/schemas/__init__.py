"""Pydantic models for API I/O."""

from .ledger import CompletionRequest, LeaderboardEntryResponse, PenaltyResponse
from .sync import SyncResponse

__all__ = [
    "CompletionRequest",
    "LeaderboardEntryResponse",
    "PenaltyResponse",
    "SyncResponse",
]
