"""Persistence layer for the ice penalty ledger."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from icetracker.errors import PenaltyLocked, StoreWriteFailure
from icetracker.models import (
    COMPLETE,
    INTEREST,
    PENDING,
    PRINCIPAL,
    PenaltyKind,
    PenaltyRecord,
    PenaltyStatus,
)


@dataclass
class LeaderboardEntry:
    team_name: str
    count: int


class LedgerStore:
    """SQLite-backed store for penalty records."""

    def __init__(self, db_path: Path | str):
        self._use_uri = False
        if isinstance(db_path, str) and db_path.startswith("file:"):
            self.db_path: Path | str = db_path
            self._use_uri = True
        else:
            self.db_path = Path(db_path)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        else:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS ice_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                roster_id INTEGER NOT NULL,
                team_name TEXT NOT NULL,
                player_name TEXT NOT NULL,
                week_incurred INTEGER NOT NULL,
                score REAL NOT NULL,
                type TEXT NOT NULL,
                parent_id INTEGER REFERENCES ice_log(id),
                status TEXT NOT NULL,
                season TEXT NOT NULL,
                proof_url TEXT,
                created_at TEXT NOT NULL,
                completed_at TEXT
            )
            """
        )
        conn.execute(
            "CREATE INDEX IF NOT EXISTS ice_log_season_type_status ON ice_log (season, type, status)"
        )
        conn.execute("CREATE INDEX IF NOT EXISTS ice_log_parent ON ice_log (parent_id)")
        conn.commit()

    def insert_penalty(
        self,
        *,
        roster_id: int,
        team_name: str,
        player_name: str,
        week_incurred: int,
        score: float,
        kind: PenaltyKind,
        season: str,
        parent_id: Optional[int] = None,
        created_at: Optional[datetime] = None,
    ) -> PenaltyRecord:
        created_at = created_at or datetime.now(timezone.utc)
        try:
            with self._connect() as conn:
                if kind == INTEREST:
                    parent = conn.execute(
                        "SELECT season, type FROM ice_log WHERE id = ?",
                        (parent_id,),
                    ).fetchone()
                    if parent is None or parent["type"] != PRINCIPAL or parent["season"] != season:
                        raise StoreWriteFailure(
                            f"Interest parent {parent_id} is not a principal in season {season}"
                        )
                cursor = conn.execute(
                    """
                    INSERT INTO ice_log (
                        roster_id, team_name, player_name, week_incurred, score,
                        type, parent_id, status, season, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        roster_id,
                        team_name,
                        player_name,
                        week_incurred,
                        score,
                        kind,
                        parent_id,
                        PENDING,
                        season,
                        created_at.isoformat(),
                    ),
                )
                penalty_id = cursor.lastrowid
                conn.commit()
        except sqlite3.Error as exc:
            raise StoreWriteFailure(f"Failed to insert {kind} penalty: {exc}") from exc
        record = self.get_penalty(int(penalty_id))
        if record is None:  # pragma: no cover
            raise StoreWriteFailure(f"Penalty {penalty_id} not found after insert")
        return record

    def get_penalty(self, penalty_id: int) -> Optional[PenaltyRecord]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM ice_log WHERE id = ?", (penalty_id,)).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def find_principal(
        self,
        *,
        roster_id: int,
        week_incurred: int,
        player_name: str,
        season: str,
    ) -> Optional[PenaltyRecord]:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT * FROM ice_log
                WHERE roster_id = ? AND week_incurred = ? AND player_name = ?
                    AND type = ? AND season = ?
                ORDER BY id LIMIT 1
                """,
                (roster_id, week_incurred, player_name, PRINCIPAL, season),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    def max_week_incurred(self, season: str) -> int:
        """Return the latest recorded week for ``season``, or 0 when the ledger is empty."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT week_incurred FROM ice_log WHERE season = ? ORDER BY week_incurred DESC LIMIT 1",
                (season,),
            ).fetchone()
        return int(row["week_incurred"]) if row else 0

    def list_pending_principals(self, season: str) -> List[PenaltyRecord]:
        return self.list_penalties(status=PENDING, season=season, kind=PRINCIPAL)

    def count_interest(self, parent_id: int) -> int:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS total FROM ice_log WHERE parent_id = ? AND type = ?",
                (parent_id, INTEREST),
            ).fetchone()
        return int(row["total"])

    def count_pending_interest(self, *, roster_id: int, season: str) -> int:
        with self._connect() as conn:
            row = conn.execute(
                """
                SELECT COUNT(*) AS total FROM ice_log
                WHERE roster_id = ? AND season = ? AND type = ? AND status = ?
                """,
                (roster_id, season, INTEREST, PENDING),
            ).fetchone()
        return int(row["total"])

    def list_penalties(
        self,
        *,
        status: PenaltyStatus | None = None,
        season: str | None = None,
        kind: PenaltyKind | None = None,
        roster_id: int | None = None,
        limit: int | None = None,
    ) -> List[PenaltyRecord]:
        query = "SELECT * FROM ice_log"
        conditions: list[str] = []
        params: list[str | int] = []
        if status:
            conditions.append("status = ?")
            params.append(status)
        if season:
            conditions.append("season = ?")
            params.append(season)
        if kind:
            conditions.append("type = ?")
            params.append(kind)
        if roster_id is not None:
            conditions.append("roster_id = ?")
            params.append(roster_id)
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY week_incurred ASC, id ASC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)
        with self._connect() as conn:
            rows = conn.execute(query, tuple(params)).fetchall()
        return [self._row_to_record(row) for row in rows]

    def mark_complete(self, penalty_id: int, *, proof_url: str | None = None) -> PenaltyRecord:
        """Flip a penalty to COMPLETE. Used by the proof-upload flow, never by sync.

        A team clears its interest first: completing a principal while the
        same roster has pending interest in that season raises ``PenaltyLocked``.
        """

        existing = self.get_penalty(penalty_id)
        if existing is not None and existing.kind == PRINCIPAL and existing.is_pending:
            owed = self.count_pending_interest(roster_id=existing.roster_id, season=existing.season)
            if owed:
                raise PenaltyLocked(
                    f"{existing.team_name} must clear {owed} interest ice(s) before completing penalty {penalty_id}"
                )
        return self._set_status(penalty_id, COMPLETE, proof_url=proof_url)

    def mark_pending(self, penalty_id: int) -> PenaltyRecord:
        """Undo a completion, clearing ``completed_at``."""

        return self._set_status(penalty_id, PENDING)

    def leaderboard(self, season: str) -> List[LeaderboardEntry]:
        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT team_name, COUNT(*) AS total FROM ice_log
                WHERE status = ? AND season = ?
                GROUP BY team_name
                ORDER BY total DESC, team_name ASC
                """,
                (COMPLETE, season),
            ).fetchall()
        return [LeaderboardEntry(team_name=row["team_name"], count=int(row["total"])) for row in rows]

    def _set_status(
        self,
        penalty_id: int,
        status: PenaltyStatus,
        *,
        proof_url: str | None = None,
    ) -> PenaltyRecord:
        existing = self.get_penalty(penalty_id)
        if existing is None:
            raise KeyError(f"Penalty {penalty_id} not found")
        completed_at = datetime.now(timezone.utc).isoformat() if status == COMPLETE else None
        updated_proof = proof_url if proof_url is not None else existing.proof_url
        try:
            with self._connect() as conn:
                conn.execute(
                    "UPDATE ice_log SET status = ?, completed_at = ?, proof_url = ? WHERE id = ?",
                    (status, completed_at, updated_proof, penalty_id),
                )
                conn.commit()
        except sqlite3.Error as exc:
            raise StoreWriteFailure(f"Failed to update penalty {penalty_id}: {exc}") from exc
        updated = self.get_penalty(penalty_id)
        if updated is None:  # pragma: no cover
            raise KeyError(f"Penalty {penalty_id} not found after update")
        return updated

    def _row_to_record(self, row: sqlite3.Row) -> PenaltyRecord:
        def _parse_ts(value: Optional[str]) -> Optional[datetime]:
            return datetime.fromisoformat(value) if value else None

        return PenaltyRecord(
            id=row["id"],
            roster_id=row["roster_id"],
            team_name=row["team_name"],
            player_name=row["player_name"],
            week_incurred=row["week_incurred"],
            score=row["score"],
            kind=row["type"],
            parent_id=row["parent_id"],
            status=row["status"],
            season=row["season"],
            proof_url=row["proof_url"],
            created_at=datetime.fromisoformat(row["created_at"]),
            completed_at=_parse_ts(row["completed_at"]),
        )
