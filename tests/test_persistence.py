import json
import logging
import sqlite3

from flagroster.models import new_session
from flagroster.persistence import (
    ROSTER_KEY,
    TRAINING_KEY,
    BlobStore,
    RosterStore,
    TrainingStore,
)
from flagroster.roster import RosterService
from flagroster.seed import default_seed_players


def _blobs(tmp_path) -> BlobStore:
    return BlobStore(tmp_path / "store.sqlite")


def test_empty_store_loads_nothing(tmp_path):
    blobs = _blobs(tmp_path)

    assert RosterStore(blobs).load() is None
    assert TrainingStore(blobs).load() == []


def test_roster_round_trip_is_a_fixed_point(tmp_path):
    store = RosterStore(_blobs(tmp_path))
    players = default_seed_players()

    store.save(players)
    first = store.blobs.get(ROSTER_KEY).payload
    loaded = store.load()
    store.save(loaded)

    assert loaded == players
    assert store.blobs.get(ROSTER_KEY).payload == first
    assert json.loads(first)[0]["stats"]["QB"]["category"] == "passer"


def test_corrupt_blob_falls_back_to_seed(tmp_path, caplog):
    blobs = _blobs(tmp_path)
    blobs.put(ROSTER_KEY, "{not json")

    with caplog.at_level(logging.WARNING):
        assert RosterStore(blobs).load() is None
    assert "unreadable" in caplog.text

    roster = RosterService.bootstrap(RosterStore(blobs))
    assert [p.player_id for p in roster.players] == ["1", "2", "3", "4", "5"]


def test_incompatible_blob_is_ignored(tmp_path):
    blobs = _blobs(tmp_path)
    blobs.put(ROSTER_KEY, json.dumps([{"player_id": "x", "name": "X", "roles": ["QB"], "stats": {}}]))

    assert RosterStore(blobs).load() is None


def test_empty_list_is_a_valid_roster(tmp_path):
    store = RosterStore(_blobs(tmp_path))
    store.save([])

    assert store.load() == []
    assert RosterService.bootstrap(store).players == ()


def test_put_replaces_whole_value(tmp_path):
    blobs = _blobs(tmp_path)
    blobs.put("k", "one")
    blobs.put("k", "two")

    assert blobs.get("k").payload == "two"
    blobs.delete("k")
    assert blobs.get("k") is None


def test_training_store_uses_its_own_key(tmp_path):
    blobs = _blobs(tmp_path)
    sessions = [new_session("Route running", "Slants and outs")]

    TrainingStore(blobs).save(sessions)

    assert TrainingStore(blobs).load() == sessions
    assert blobs.get(ROSTER_KEY) is None
    assert blobs.get(TRAINING_KEY) is not None

    blobs.put(TRAINING_KEY, "[{}]")
    assert TrainingStore(blobs).load() == []


def test_every_operation_closes_its_connection(tmp_path, monkeypatch):
    opened = []
    real_connect = sqlite3.connect

    class TrackedConnection(sqlite3.Connection):
        closed = False

        def close(self):
            self.closed = True
            super().close()

    def tracking_connect(*args, **kwargs):
        conn = real_connect(*args, factory=TrackedConnection, **kwargs)
        opened.append(conn)
        return conn

    monkeypatch.setattr(sqlite3, "connect", tracking_connect)

    blobs = _blobs(tmp_path)
    for index in range(20):
        blobs.put("counter", str(index))
    assert blobs.get("counter").payload == "19"
    blobs.delete("counter")

    assert len(opened) == 23
    assert all(conn.closed for conn in opened)
