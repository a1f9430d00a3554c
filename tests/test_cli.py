from pathlib import Path

import pytest

from icetracker.cli import main
from icetracker.models import PRINCIPAL
from icetracker.persistence import LedgerStore


def _seed(db_path: Path) -> None:
    store = LedgerStore(db_path)
    record = store.insert_penalty(
        roster_id=2,
        team_name="Bench Mob",
        player_name="Joe Kicker",
        week_incurred=4,
        score=-1.0,
        kind=PRINCIPAL,
        season="2025",
    )
    store.insert_penalty(
        roster_id=2,
        team_name="Bench Mob",
        player_name="Late Scratch",
        week_incurred=5,
        score=0.0,
        kind=PRINCIPAL,
        season="2025",
    )
    store.mark_complete(record.id)


def test_ledger_prints_pending_entries(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    db_path = tmp_path / "ledger.sqlite"
    _seed(db_path)

    assert main(["--db", str(db_path), "ledger", "--season", "2025"]) == 0

    out = capsys.readouterr().out
    assert "Late Scratch (0)" in out
    assert "Joe Kicker" not in out


def test_leaderboard_prints_ranks(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    db_path = tmp_path / "ledger.sqlite"
    _seed(db_path)

    assert main(["--db", str(db_path), "leaderboard", "--season", "2025"]) == 0
    assert capsys.readouterr().out.strip() == "1. Bench Mob 1"

    assert main(["--db", str(db_path), "leaderboard", "--season", "2019"]) == 0
    assert "No completed ices for 2019 yet." in capsys.readouterr().out


def test_sync_requires_league_id(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.delenv("ICETRACKER_LEAGUE_ID", raising=False)

    assert main(["--db", str(tmp_path / "ledger.sqlite"), "sync"]) == 2


def test_db_flag_wins_over_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    cli_db = tmp_path / "cli.sqlite"
    env_db = tmp_path / "env.sqlite"
    _seed(cli_db)
    monkeypatch.setenv("ICETRACKER_DB_PATH", str(env_db))

    assert main(["--db", str(cli_db), "leaderboard", "--season", "2025"]) == 0

    assert capsys.readouterr().out.strip() == "1. Bench Mob 1"
    assert not env_db.exists()
