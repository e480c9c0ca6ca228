import json

import pytest

from flagroster.cli import main
from flagroster.persistence import BlobStore, RosterStore


def _run(tmp_path, *args: str) -> None:
    main(["--db", str(tmp_path / "cli.sqlite"), *args])


def test_players_lists_seed_roster(tmp_path, capsys):
    _run(tmp_path, "players")
    out = capsys.readouterr().out

    assert "Leo Carter" in out
    assert "QB/S" in out
    assert len(out.strip().splitlines()) == 5


def test_players_filters_by_age_group(tmp_path, capsys):
    _run(tmp_path, "players", "--age-group", "U8")
    lines = capsys.readouterr().out.strip().splitlines()

    assert len(lines) == 1
    assert "Noah Kim" in lines[0]


def test_show_prints_tiles_and_radar(tmp_path, capsys):
    _run(tmp_path, "show", "2")
    out = capsys.readouterr().out

    assert out.startswith("Maya Brooks #88 (U10)")
    assert "Catch % 75.0% (45/60)" in out
    assert "radar: Catch Efficiency 75.0" in out


def test_show_json(tmp_path, capsys):
    _run(tmp_path, "show", "3", "--json")
    record = json.loads(capsys.readouterr().out)

    assert record["roles"] == ["LB"]
    assert record["stats"]["LB"]["sacks_made"] == 5


def test_show_unknown_player_exits(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        _run(tmp_path, "show", "nobody")
    assert "nobody" in str(excinfo.value)


def test_rank_orders_rows(tmp_path, capsys):
    _run(tmp_path, "rank", "cb", "--sort-key", "interceptions_caught")
    rows = capsys.readouterr().out.strip().splitlines()[1:]

    assert "Noah Kim" in rows[0]
    assert "Maya Brooks" in rows[1]


def test_rank_unknown_role_exits(tmp_path):
    with pytest.raises(SystemExit):
        _run(tmp_path, "rank", "kicker")


def test_seed_writes_once(tmp_path, capsys):
    _run(tmp_path, "seed")
    assert "Wrote 5 players" in capsys.readouterr().out
    assert len(RosterStore(BlobStore(tmp_path / "cli.sqlite")).load()) == 5

    with pytest.raises(SystemExit):
        _run(tmp_path, "seed")
    _run(tmp_path, "seed", "--force")
