"""Domain models shared across the store, sync engine and API layers."""

from .penalty import (
    COMPLETE,
    INTEREST,
    INTEREST_PLAYER_NAME,
    PENDING,
    PRINCIPAL,
    PenaltyKind,
    PenaltyRecord,
    PenaltyStatus,
)

__all__ = [
    "COMPLETE",
    "INTEREST",
    "INTEREST_PLAYER_NAME",
    "PENDING",
    "PRINCIPAL",
    "PenaltyKind",
    "PenaltyRecord",
    "PenaltyStatus",
]
