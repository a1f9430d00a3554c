from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from icetracker.models import PenaltyRecord


def _payload(**overrides):
    payload = {
        "id": 1,
        "roster_id": 10,
        "team_name": "Team 10",
        "player_name": "Player 4046",
        "week_incurred": 1,
        "score": 0.0,
        "kind": "PRINCIPAL",
        "season": "2025",
        "created_at": datetime.now(timezone.utc),
    }
    payload.update(overrides)
    return payload


def test_penalty_record_is_frozen():
    record = PenaltyRecord(**_payload())

    assert record.is_pending
    with pytest.raises((TypeError, ValidationError)):
        record.status = "COMPLETE"  # type: ignore[misc]


def test_interest_requires_parent():
    with pytest.raises(ValidationError):
        PenaltyRecord(**_payload(kind="INTEREST"))

    record = PenaltyRecord(**_payload(kind="INTEREST", parent_id=1, player_name="INTEREST PENALTY"))
    assert record.parent_id == 1


def test_principal_rejects_positive_score_and_parent():
    with pytest.raises(ValidationError):
        PenaltyRecord(**_payload(score=0.01))
    with pytest.raises(ValidationError):
        PenaltyRecord(**_payload(parent_id=3))
