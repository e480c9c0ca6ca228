"""Persistence layer: versioned JSON blobs in a single SQLite table."""

from __future__ import annotations

import json
import logging
import sqlite3
import tempfile
from contextlib import closing, contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional

from pydantic import TypeAdapter, ValidationError

from flagroster.models import Player, TrainingSession


logger = logging.getLogger(__name__)

ROSTER_KEY = "players_v2"
TRAINING_KEY = "training_v1"

_PLAYERS = TypeAdapter(List[Player])
_SESSIONS = TypeAdapter(List[TrainingSession])

_SCHEMA = """
CREATE TABLE IF NOT EXISTS blobs (
    key TEXT PRIMARY KEY,
    payload TEXT NOT NULL,
    updated_at TEXT NOT NULL
)
"""

_UPSERT = """
INSERT INTO blobs (key, payload, updated_at) VALUES (?, ?, ?)
ON CONFLICT(key) DO UPDATE SET payload = excluded.payload, updated_at = excluded.updated_at
"""


@dataclass
class BlobRecord:
    key: str
    payload: str
    updated_at: datetime


class BlobStore:
    """Opaque key/value store; every write replaces the whole value for a key.

    ``db_path`` may be a filesystem path or a ``file:`` URI. An unusable path
    falls back to a file under the system temp directory.
    """

    def __init__(self, db_path: Path | str):
        self._use_uri = isinstance(db_path, str) and db_path.startswith("file:")
        self.db_path: Path | str = db_path if self._use_uri else Path(db_path)
        with self._session() as conn:
            conn.execute(_SCHEMA)

    def _open(self) -> sqlite3.Connection:
        if not isinstance(self.db_path, Path):
            return sqlite3.connect(self.db_path, uri=self._use_uri)
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            return sqlite3.connect(self.db_path)
        except (OSError, sqlite3.OperationalError) as exc:
            fallback = Path(tempfile.gettempdir()) / "flagroster-runtime" / "flagroster.sqlite"
            logger.warning("Cannot open %s (%s); using %s instead", self.db_path, exc, fallback)
            fallback.parent.mkdir(parents=True, exist_ok=True)
            self.db_path = fallback
            conn = sqlite3.connect(fallback)
            conn.execute(_SCHEMA)
            return conn

    @contextmanager
    def _session(self) -> Iterator[sqlite3.Connection]:
        """One connection per operation: committed on success, always closed."""

        with closing(self._open()) as conn:
            conn.row_factory = sqlite3.Row
            with conn:
                yield conn

    def get(self, key: str) -> Optional[BlobRecord]:
        with self._session() as conn:
            row = conn.execute("SELECT key, payload, updated_at FROM blobs WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return BlobRecord(
            key=row["key"],
            payload=row["payload"],
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def put(self, key: str, payload: str) -> None:
        with self._session() as conn:
            conn.execute(_UPSERT, (key, payload, datetime.now(timezone.utc).isoformat()))

    def delete(self, key: str) -> None:
        with self._session() as conn:
            conn.execute("DELETE FROM blobs WHERE key = ?", (key,))


def _read_json(store: BlobStore, key: str) -> Any:
    try:
        record = store.get(key)
    except sqlite3.DatabaseError as exc:
        logger.warning("Unable to read %s from %s: %s", key, store.db_path, exc)
        return None
    if record is None:
        return None
    try:
        return json.loads(record.payload)
    except json.JSONDecodeError as exc:
        logger.warning("Ignoring unreadable %s blob: %s", key, exc)
        return None


class RosterStore:
    """Load/save of the whole player collection under a versioned key."""

    def __init__(self, blobs: BlobStore, key: str = ROSTER_KEY):
        self.blobs = blobs
        self.key = key

    def load(self) -> Optional[List[Player]]:
        """Stored players, or None when nothing usable is stored."""

        data = _read_json(self.blobs, self.key)
        if data is None:
            return None
        try:
            return _PLAYERS.validate_python(data)
        except ValidationError as exc:
            logger.warning("Ignoring incompatible %s blob (%d errors)", self.key, exc.error_count())
            return None

    def save(self, players: Iterable[Player]) -> None:
        players = list(players)
        payload = _PLAYERS.dump_json(players).decode("utf-8")
        self.blobs.put(self.key, payload)
        logger.info("Saved %d players to %s", len(players), self.key)


class TrainingStore:
    """Load/save of training sessions; independent key and schema."""

    def __init__(self, blobs: BlobStore, key: str = TRAINING_KEY):
        self.blobs = blobs
        self.key = key

    def load(self) -> List[TrainingSession]:
        data = _read_json(self.blobs, self.key)
        if data is None:
            return []
        try:
            return _SESSIONS.validate_python(data)
        except ValidationError as exc:
            logger.warning("Ignoring incompatible %s blob (%d errors)", self.key, exc.error_count())
            return []

    def save(self, sessions: Iterable[TrainingSession]) -> None:
        sessions = list(sessions)
        self.blobs.put(self.key, _SESSIONS.dump_json(sessions).decode("utf-8"))
        logger.info("Saved %d training sessions to %s", len(sessions), self.key)


__all__ = [
    "BlobRecord",
    "BlobStore",
    "ROSTER_KEY",
    "RosterStore",
    "TRAINING_KEY",
    "TrainingStore",
]
