"""Command-line interface for browsing the roster and leaderboards."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from flagroster.config import AgeGroup, ROLE_ORDER, classify, parse_role
from flagroster.config_loader import load_settings
from flagroster.metrics import highlight_tiles, radar_profile
from flagroster.persistence import BlobStore, RosterStore
from flagroster.ranking import SortState, build_leaderboard, default_sort
from flagroster.roster import RosterService
from flagroster.seed import default_seed_players


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Flag football roster and stat tracker")
    parser.add_argument("--db", type=Path, default=None, help="SQLite file (overrides FLAGROSTER_DB_PATH)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    players = sub.add_parser("players", help="List players")
    players.add_argument(
        "--age-group",
        choices=[group.value for group in AgeGroup],
        default=None,
        help="Only show one age group",
    )

    show = sub.add_parser("show", help="Show one player's stats and radar values")
    show.add_argument("player_id")
    show.add_argument("--json", action="store_true", help="Print the stored record as JSON")

    rank = sub.add_parser("rank", help="Leaderboard for one role")
    rank.add_argument("role", help=f"One of: {', '.join(role.value for role in ROLE_ORDER)}")
    rank.add_argument("--sort-key", default=None, help="Stat column to sort by (default: first column)")
    rank.add_argument("--asc", action="store_true", help="Sort ascending instead of descending")

    serve = sub.add_parser("serve", help="Run the REST API with uvicorn")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    seed = sub.add_parser("seed", help="Write the demonstration roster to the store")
    seed.add_argument("--force", action="store_true", help="Overwrite an existing roster")
    return parser.parse_args(argv)


def _print_players(roster: RosterService, age_group: Optional[str]) -> None:
    group = AgeGroup(age_group) if age_group else None
    players = roster.list_players(group)
    if not players:
        print("No players")
        return
    for player in players:
        roles = "/".join(role.value for role in player.roles)
        print(f"{player.player_id:>12}  #{player.number:<3} {player.name:<24} {player.age_group.value:<4} {roles}")


def _print_player(roster: RosterService, player_id: str, as_json: bool) -> None:
    player = roster.get(player_id)
    if as_json:
        print(json.dumps(player.model_dump(mode="json"), indent=2))
        return
    print(f"{player.name} #{player.number} ({player.age_group.value})")
    for role in player.roles:
        line = player.stats[role]
        print(f"\n[{role.value}] {classify(role).value}")
        for field, value in zip(line.stat_fields(), line.values()):
            print(f"  {field.label:<22} {value}")
        tiles = ", ".join(
            f"{tile.label} {tile.value}" + (f" ({tile.sub_label})" if tile.sub_label else "")
            for tile in highlight_tiles(line)
        )
        print(f"  highlights: {tiles}")
        radar = ", ".join(f"{axis.label} {axis.value:.1f}" for axis in radar_profile(line))
        print(f"  radar: {radar}")
    if player.commentary:
        print(f"\nCoach commentary:\n{player.commentary}")


def _print_rank(roster: RosterService, role_value: str, sort_key: Optional[str], ascending: bool) -> None:
    role = parse_role(role_value)
    sort = SortState(key=sort_key or default_sort(role).key, direction="asc" if ascending else "desc")
    board = build_leaderboard(roster.players, role, sort)
    header = " ".join(f"{column.label:>14}" for column in board.columns)
    print(f"{'#':>3} {'Player':<24} {header}")
    for position, entry in enumerate(board.entries, start=1):
        values = " ".join(f"{value:>14}" for value in entry.stats.values())
        print(f"{position:>3} {entry.player.name:<24} {values}")
    if not board.entries:
        print(f"No players hold {role.value}")


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    if args.db is not None:
        settings = replace(settings, db_path=args.db)
    if args.command == "serve":
        import uvicorn

        from flagroster.api import create_app

        uvicorn.run(create_app(settings), host=args.host, port=args.port)
        return

    store = RosterStore(BlobStore(settings.db_path))

    if args.command == "seed":
        if store.load() is not None and not args.force:
            raise SystemExit("A roster is already stored; pass --force to overwrite it")
        players = default_seed_players()
        store.save(players)
        print(f"Wrote {len(players)} players to {settings.db_path}")
        return

    roster = RosterService.bootstrap(store)
    try:
        if args.command == "players":
            _print_players(roster, args.age_group)
        elif args.command == "show":
            _print_player(roster, args.player_id, args.json)
        elif args.command == "rank":
            _print_rank(roster, args.role, args.sort_key, args.asc)
    except KeyError as exc:
        raise SystemExit(str(exc.args[0]) if exc.args else "Not found") from exc
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
