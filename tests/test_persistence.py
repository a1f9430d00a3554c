from pathlib import Path

import pytest

from icetracker.errors import PenaltyLocked, StoreWriteFailure
from icetracker.models import COMPLETE, INTEREST, PENDING, PRINCIPAL
from icetracker.persistence import LedgerStore


def _store(tmp_path: Path) -> LedgerStore:
    return LedgerStore(tmp_path / "ledger.sqlite")


def _principal(store: LedgerStore, **overrides):
    values = {
        "roster_id": 10,
        "team_name": "Gridiron Geeks",
        "player_name": "Joe Kicker",
        "week_incurred": 2,
        "score": 0.0,
        "kind": PRINCIPAL,
        "season": "2025",
    }
    values.update(overrides)
    return store.insert_penalty(**values)


def test_insert_and_find_principal(tmp_path: Path):
    store = _store(tmp_path)
    record = _principal(store, score=-1.5)

    assert record.id > 0
    assert record.status == PENDING
    assert record.parent_id is None
    assert record.completed_at is None

    found = store.find_principal(roster_id=10, week_incurred=2, player_name="Joe Kicker", season="2025")
    assert found is not None
    assert found.id == record.id
    assert found.score == pytest.approx(-1.5)

    assert store.find_principal(roster_id=10, week_incurred=2, player_name="Joe Kicker", season="2024") is None
    assert store.find_principal(roster_id=11, week_incurred=2, player_name="Joe Kicker", season="2025") is None


def test_max_week_incurred_is_season_scoped(tmp_path: Path):
    store = _store(tmp_path)
    assert store.max_week_incurred("2025") == 0

    _principal(store, week_incurred=3)
    _principal(store, week_incurred=7, player_name="Other Guy")
    _principal(store, week_incurred=15, season="2024")

    assert store.max_week_incurred("2025") == 7
    assert store.max_week_incurred("2024") == 15


def test_interest_requires_principal_parent_in_same_season(tmp_path: Path):
    store = _store(tmp_path)
    principal = _principal(store)

    interest = store.insert_penalty(
        roster_id=10,
        team_name="Gridiron Geeks",
        player_name="INTEREST PENALTY",
        week_incurred=2,
        score=0,
        kind=INTEREST,
        season="2025",
        parent_id=principal.id,
    )
    assert interest.parent_id == principal.id
    assert store.count_interest(principal.id) == 1

    with pytest.raises(StoreWriteFailure):
        store.insert_penalty(
            roster_id=10,
            team_name="Gridiron Geeks",
            player_name="INTEREST PENALTY",
            week_incurred=2,
            score=0,
            kind=INTEREST,
            season="2024",
            parent_id=principal.id,
        )
    with pytest.raises(StoreWriteFailure):
        store.insert_penalty(
            roster_id=10,
            team_name="Gridiron Geeks",
            player_name="INTEREST PENALTY",
            week_incurred=2,
            score=0,
            kind=INTEREST,
            season="2025",
            parent_id=interest.id,
        )
    assert store.count_interest(principal.id) == 1


def test_mark_complete_and_undo(tmp_path: Path):
    store = _store(tmp_path)
    principal = _principal(store)

    completed = store.mark_complete(principal.id, proof_url="https://example.com/proof.jpg")
    assert completed.status == COMPLETE
    assert completed.completed_at is not None
    assert completed.proof_url == "https://example.com/proof.jpg"
    assert store.list_pending_principals("2025") == []

    reverted = store.mark_pending(principal.id)
    assert reverted.status == PENDING
    assert reverted.completed_at is None
    assert [record.id for record in store.list_pending_principals("2025")] == [principal.id]

    with pytest.raises(KeyError):
        store.mark_complete(9999)


def test_list_penalties_filters(tmp_path: Path):
    store = _store(tmp_path)
    first = _principal(store, week_incurred=4)
    _principal(store, week_incurred=1, roster_id=3, player_name="Bench Warmer")
    _principal(store, week_incurred=2, season="2024")
    store.mark_complete(first.id)

    pending = store.list_penalties(status=PENDING, season="2025")
    assert [record.player_name for record in pending] == ["Bench Warmer"]

    season_rows = store.list_penalties(season="2025")
    assert [record.week_incurred for record in season_rows] == [1, 4]

    assert len(store.list_penalties(roster_id=3)) == 1
    assert len(store.list_penalties(limit=1)) == 1


def test_leaderboard_counts_completed_entries(tmp_path: Path):
    store = _store(tmp_path)
    a1 = _principal(store, team_name="Alpha", player_name="A1")
    a2 = _principal(store, team_name="Alpha", player_name="A2")
    b1 = _principal(store, team_name="Bravo", player_name="B1")
    _principal(store, team_name="Charlie", player_name="C1")
    for record in (a1, a2, b1):
        store.mark_complete(record.id)

    board = store.leaderboard("2025")
    assert [(entry.team_name, entry.count) for entry in board] == [("Alpha", 2), ("Bravo", 1)]
    assert store.leaderboard("2024") == []


def test_explicit_path_wins_over_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("ICETRACKER_DB_PATH", str(tmp_path / "env.sqlite"))

    store = LedgerStore(tmp_path / "explicit.sqlite")
    _principal(store)

    assert store.db_path == tmp_path / "explicit.sqlite"
    assert not (tmp_path / "env.sqlite").exists()


def test_principal_locked_while_team_owes_interest(tmp_path: Path):
    store = _store(tmp_path)
    principal = _principal(store, week_incurred=1)
    other_week = _principal(store, week_incurred=3, player_name="Second Ice")
    interest = store.insert_penalty(
        roster_id=10,
        team_name="Gridiron Geeks",
        player_name="INTEREST PENALTY",
        week_incurred=1,
        score=0,
        kind=INTEREST,
        season="2025",
        parent_id=principal.id,
    )
    _principal(store, roster_id=11, team_name="Other Team", player_name="Free Agent")

    with pytest.raises(PenaltyLocked):
        store.mark_complete(principal.id)
    with pytest.raises(PenaltyLocked):
        store.mark_complete(other_week.id)
    assert store.get_penalty(principal.id).status == PENDING

    other_team = store.list_penalties(roster_id=11)[0]
    assert store.mark_complete(other_team.id).status == COMPLETE

    store.mark_complete(interest.id)
    assert store.count_pending_interest(roster_id=10, season="2025") == 0
    assert store.mark_complete(principal.id).status == COMPLETE
