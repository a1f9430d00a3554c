"""Lightweight REST client for the icetracker API."""

from __future__ import annotations

import argparse
import json

import httpx


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the icetracker REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--sync", action="store_true", help="Force a sync before anything else")
    parser.add_argument("--season", default=None, help="Season filter for ledger and leaderboard")
    parser.add_argument("--status", default="PENDING", help="Ledger status filter (PENDING or COMPLETE)")
    parser.add_argument("--leaderboard", action="store_true", help="Print the season leaderboard and exit")
    parser.add_argument("--complete", metavar="PENALTY_ID", type=int, help="Mark a penalty complete")
    parser.add_argument("--proof-url", default=None, help="Proof URL recorded with --complete")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        if args.sync:
            resp = client.post("/sync")
            if resp.status_code >= 500:
                raise SystemExit(f"sync failed: {resp.json().get('detail')}")
            resp.raise_for_status()
            print("Sync:", json.dumps(resp.json(), indent=2))

        if args.complete is not None:
            resp = client.post(f"/penalties/{args.complete}/complete", json={"proof_url": args.proof_url})
            if resp.status_code == 404:
                raise SystemExit(f"penalty {args.complete} not found")
            if resp.status_code == 409:
                raise SystemExit(resp.json().get("detail"))
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
            return

        if args.leaderboard:
            if not args.season:
                raise SystemExit("--season is required with --leaderboard")
            resp = client.get("/leaderboard", params={"season": args.season})
            resp.raise_for_status()
            for rank, entry in enumerate(resp.json(), start=1):
                print(f"{rank}. {entry['team_name']} {entry['count']}")
            return

        params = {"status": args.status}
        if args.season:
            params["season"] = args.season
        resp = client.get("/penalties", params=params)
        resp.raise_for_status()
        payload = resp.json()
        print(f"Received {len(payload)} ledger entries")
        for entry in payload:
            print(f"#{entry['id']} wk{entry['week_incurred']} {entry['team_name']}: {entry['player_name']}")


if __name__ == "__main__":
    main()
