"""REST API for the ice tracker."""

from __future__ import annotations

from fastapi import Body, FastAPI, HTTPException, Query

from icetracker.api.schemas import (
    CompletionRequest,
    LeaderboardEntryResponse,
    PenaltyResponse,
    SyncResponse,
)
from icetracker.config import LeagueConfig
from icetracker.errors import IceTrackerError, PenaltyLocked
from icetracker.models import COMPLETE, INTEREST, PENDING, PRINCIPAL
from icetracker.persistence import LedgerStore
from icetracker.sources import ResultSource, SleeperSource
from icetracker.sync import SyncOrchestrator


_STATUS_CHOICES = {PENDING, COMPLETE}
_KIND_CHOICES = {PRINCIPAL, INTEREST}


def _normalize_choice(value: str | None, choices: set[str], label: str) -> str | None:
    if value is None or value == "":
        return None
    normalized = value.strip().upper()
    if normalized not in choices:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {label} {value!r}; expected one of {sorted(choices)}",
        )
    return normalized


def create_app(
    config: LeagueConfig | None = None,
    *,
    store: LedgerStore | None = None,
    source: ResultSource | None = None,
) -> FastAPI:
    config = config or LeagueConfig.from_env()
    store = store or LedgerStore(config.db_path)
    source = source or SleeperSource(config)
    orchestrator = SyncOrchestrator(config, source, store)

    app = FastAPI(title="icetracker API", version="0.1.0")
    app.state.config = config
    app.state.store = store
    app.state.source = source

    def _run_sync(message: str) -> SyncResponse:
        try:
            summary = orchestrator.run()
        except IceTrackerError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return SyncResponse.from_summary(summary, message=message)

    def _fetch_penalty_or_404(penalty_id: int):
        record = store.get_penalty(penalty_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Penalty not found")
        return record

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/sync", response_model=SyncResponse)
    def force_sync():
        return _run_sync("Sync Complete")

    @app.get("/sync", response_model=SyncResponse)
    def scheduled_sync():
        return _run_sync("Scheduled Sync Complete")

    @app.get("/penalties", response_model=list[PenaltyResponse])
    def list_penalties(
        status: str | None = None,
        season: str | None = None,
        kind: str | None = None,
        roster_id: int | None = None,
        limit: int | None = Query(default=None, ge=1, le=1000),
    ):
        records = store.list_penalties(
            status=_normalize_choice(status, _STATUS_CHOICES, "status"),
            season=season or None,
            kind=_normalize_choice(kind, _KIND_CHOICES, "kind"),
            roster_id=roster_id,
            limit=limit,
        )
        return [PenaltyResponse.from_record(record) for record in records]

    @app.get("/penalties/{penalty_id}", response_model=PenaltyResponse)
    def get_penalty(penalty_id: int):
        return PenaltyResponse.from_record(_fetch_penalty_or_404(penalty_id))

    @app.post("/penalties/{penalty_id}/complete", response_model=PenaltyResponse)
    def complete_penalty(penalty_id: int, payload: CompletionRequest | None = Body(default=None)):
        _fetch_penalty_or_404(penalty_id)
        proof_url = payload.proof_url if payload else None
        try:
            record = store.mark_complete(penalty_id, proof_url=proof_url)
        except PenaltyLocked as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except IceTrackerError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return PenaltyResponse.from_record(record)

    @app.post("/penalties/{penalty_id}/undo", response_model=PenaltyResponse)
    def undo_penalty(penalty_id: int):
        _fetch_penalty_or_404(penalty_id)
        try:
            record = store.mark_pending(penalty_id)
        except IceTrackerError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return PenaltyResponse.from_record(record)

    @app.get("/leaderboard", response_model=list[LeaderboardEntryResponse])
    def leaderboard(season: str = Query(..., min_length=1)):
        return [
            LeaderboardEntryResponse(team_name=entry.team_name, count=entry.count)
            for entry in store.leaderboard(season)
        ]

    return app
