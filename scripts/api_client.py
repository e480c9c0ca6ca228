"""Lightweight REST client for the flagroster API."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

import httpx


def build_values(raw: str) -> dict[str, str]:
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid stats JSON: {exc}") from exc


def main() -> None:
    parser = argparse.ArgumentParser(description="Interact with the flagroster REST API")
    parser.add_argument("base_url", help="Base URL of the API, e.g. http://localhost:8000")
    parser.add_argument("--list-players", action="store_true", help="List players and exit")
    parser.add_argument("--age-group", help="Age group filter for --list-players")
    parser.add_argument("--profile", metavar="PLAYER_ID", help="Fetch a player's per-role profile")
    parser.add_argument("--rank", metavar="ROLE", help="Fetch the leaderboard for a role")
    parser.add_argument("--sort-key", help="Sort column for --rank")
    parser.add_argument("--asc", action="store_true", help="Ascending order for --rank")
    parser.add_argument("--set-stats", nargs=2, metavar=("PLAYER_ID", "ROLE"), help="Update one role's stats")
    parser.add_argument("--stats", default="", help="JSON object of stat values for --set-stats")
    parser.add_argument("--commentary", metavar="PLAYER_ID", help="Request AI commentary and wait for it")
    parser.add_argument("--attach", nargs=2, metavar=("SESSION_ID", "FILE"), help="Attach a file to a training session")
    args = parser.parse_args()

    with httpx.Client(base_url=args.base_url) as client:
        if args.list_players:
            params = {"age_group": args.age_group} if args.age_group else None
            resp = client.get("/players", params=params)
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.profile:
            resp = client.get(f"/players/{args.profile}/profile")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.profile} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.rank:
            params = {"direction": "asc" if args.asc else "desc"}
            if args.sort_key:
                params["sort_key"] = args.sort_key
            resp = client.get(f"/rankings/{args.rank}", params=params)
            if resp.status_code == 400:
                raise SystemExit(resp.json().get("detail", "bad request"))
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.set_stats:
            player_id, role = args.set_stats
            resp = client.patch(
                f"/players/{player_id}/stats/{role}",
                json={"values": build_values(args.stats)},
            )
            if resp.status_code in (400, 404):
                raise SystemExit(resp.json().get("detail", "request failed"))
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))
        if args.commentary:
            resp = client.post(f"/players/{args.commentary}/commentary")
            if resp.status_code == 404:
                raise SystemExit(f"player {args.commentary} not found")
            if resp.status_code != 409:
                resp.raise_for_status()
            for _ in range(30):
                status = client.get(f"/players/{args.commentary}/commentary").json()
                if status["status"] != "pending":
                    print(status.get("commentary") or "")
                    break
                time.sleep(1)
            else:
                print("Commentary still pending")
        if args.attach:
            session_id, file_arg = args.attach
            path = Path(file_arg)
            files = {"upload": (path.name, path.read_bytes(), "application/octet-stream")}
            resp = client.post(f"/training/{session_id}/files", files=files)
            if resp.status_code == 404:
                raise SystemExit(f"training session {session_id} not found")
            resp.raise_for_status()
            print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    main()
