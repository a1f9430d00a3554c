"""Command-line interface for syncing and inspecting the ice ledger."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from icetracker.api import create_app
from icetracker.config import load_config, resolve_db_path
from icetracker.errors import IceTrackerError
from icetracker.models import COMPLETE, PENDING
from icetracker.persistence import LedgerStore
from icetracker.sources import SleeperSource
from icetracker.sync import SyncOrchestrator


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Track ices owed by a Sleeper fantasy league")
    parser.add_argument("--league-id", default=None, help="Sleeper league ID (defaults to ICETRACKER_LEAGUE_ID)")
    parser.add_argument("--db", type=Path, default=None, help="Path to the ledger SQLite database")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log sync progress to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("sync", help="Scan new weeks and reconcile interest")

    ledger = sub.add_parser("ledger", help="Print ledger entries")
    ledger.add_argument("--season", default=None, help="Season label (e.g., 2025)")
    ledger.add_argument(
        "--status",
        choices=[PENDING, COMPLETE],
        default=PENDING,
        help="Which entries to print",
    )

    serve = sub.add_parser("serve", help="Run the REST API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    board = sub.add_parser("leaderboard", help="Print completed ices per team")
    board.add_argument("--season", required=True, help="Season label (e.g., 2025)")
    return parser.parse_args(argv)


def _run_sync(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.league_id, db_path=args.db)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    store = LedgerStore(config.db_path)
    with SleeperSource(config) as source:
        try:
            summary = SyncOrchestrator(config, source, store).run()
        except IceTrackerError as exc:
            print(f"Sync failed: {exc}", file=sys.stderr)
            return 1
    print(json.dumps(summary.as_dict(), indent=2))
    if summary.skipped_weeks:
        weeks = ", ".join(str(week) for week in summary.skipped_weeks)
        print(f"Weeks without data (will be retried): {weeks}", file=sys.stderr)
    return 0


def _serve(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.league_id, db_path=args.db)
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0


def _print_ledger(store: LedgerStore, args: argparse.Namespace) -> int:
    records = store.list_penalties(status=args.status, season=args.season)
    if not records:
        print("No ices found.")
        return 0
    for record in records:
        label = "interest" if record.kind == "INTEREST" else f"{record.player_name} ({record.score:g})"
        print(f"#{record.id} wk{record.week_incurred} {record.team_name}: {label}")
    return 0


def _print_leaderboard(store: LedgerStore, args: argparse.Namespace) -> int:
    entries = store.leaderboard(args.season)
    if not entries:
        print(f"No completed ices for {args.season} yet.")
        return 0
    for rank, entry in enumerate(entries, start=1):
        print(f"{rank}. {entry.team_name} {entry.count}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    if args.command == "sync":
        return _run_sync(args)
    if args.command == "serve":
        return _serve(args)

    store = LedgerStore(resolve_db_path(args.db))
    if args.command == "ledger":
        return _print_ledger(store, args)
    return _print_leaderboard(store, args)


if __name__ == "__main__":
    sys.exit(main())
