"""State owners for the roster and the training log.

Both services keep the current collection in memory and write the whole
collection back to their store after every change, so a reader of the store
always sees either the previous or the next snapshot.
"""

from __future__ import annotations

import base64
import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple
from uuid import uuid4

from flagroster.commentary import CommentaryUpdate
from flagroster.config import AgeGroup, Role
from flagroster.models import (
    Player,
    TrainingFile,
    TrainingSession,
    classify_file_kind,
    new_player,
    new_session,
    size_label,
)
from flagroster.persistence import RosterStore, TrainingStore
from flagroster.seed import SeedProvider, default_seed_players


logger = logging.getLogger(__name__)


class RosterService:
    def __init__(self, store: RosterStore, players: Sequence[Player] = ()):
        self.store = store
        self._players: List[Player] = list(players)

    @classmethod
    def bootstrap(cls, store: RosterStore, seed: SeedProvider = default_seed_players) -> "RosterService":
        """Hydrate from the store, or from ``seed`` when nothing usable is stored."""

        players = store.load()
        if players is None:
            players = seed()
            logger.info("No stored roster under %s; starting from %d seed players", store.key, len(players))
        return cls(store, players)

    @property
    def players(self) -> Tuple[Player, ...]:
        return tuple(self._players)

    def list_players(self, age_group: Optional[AgeGroup] = None) -> List[Player]:
        if age_group is None:
            return list(self._players)
        return [player for player in self._players if player.age_group == age_group]

    def get(self, player_id: str) -> Player:
        for player in self._players:
            if player.player_id == player_id:
                return player
        raise KeyError(f"Player {player_id} not found")

    def _index(self, player_id: str) -> int:
        for index, player in enumerate(self._players):
            if player.player_id == player_id:
                return index
        raise KeyError(f"Player {player_id} not found")

    def _commit(self, players: List[Player]) -> None:
        # Store first: a failed write leaves the in-memory roster as it was.
        self.store.save(players)
        self._players = players

    def add(self, player: Player) -> Player:
        if not player.name.strip():
            raise ValueError("Player name is required")
        if any(existing.player_id == player.player_id for existing in self._players):
            raise ValueError(f"Player {player.player_id} already exists")
        self._commit([*self._players, player])
        return player

    def create(
        self,
        *,
        name: str,
        number: int = 0,
        age_group: AgeGroup = AgeGroup.U10,
        avatar: str = "",
        roles: Sequence[Role] = (),
    ) -> Player:
        player = new_player(name=name.strip(), number=number, age_group=age_group, avatar=avatar)
        if roles:
            player = player.with_roles(roles)
        return self.add(player)

    def replace(self, player: Player) -> Player:
        index = self._index(player.player_id)
        self._commit([*self._players[:index], player, *self._players[index + 1:]])
        return player

    def update(self, player_id: str, change: Callable[[Player], Player]) -> Player:
        """Apply ``change`` to one player and persist; errors leave the roster untouched."""

        updated = change(self.get(player_id))
        return self.replace(updated)

    def delete(self, player_id: str) -> None:
        index = self._index(player_id)
        self._commit([*self._players[:index], *self._players[index + 1:]])

    def add_role(self, player_id: str, role: Role) -> Player:
        return self.update(player_id, lambda player: player.with_role_added(role))

    def remove_role(self, player_id: str, role: Role) -> Player:
        return self.update(player_id, lambda player: player.with_role_removed(role))

    def set_stats(self, player_id: str, role: Role, values: Mapping[str, Any]) -> Player:
        return self.update(player_id, lambda player: player.with_stats(role, values))

    def update_profile(self, player_id: str, **profile: Any) -> Player:
        if profile.get("name") is not None and not str(profile["name"]).strip():
            raise ValueError("Player name is required")
        return self.update(player_id, lambda player: player.with_profile(**profile))

    def apply_commentary(self, update: CommentaryUpdate) -> Optional[Player]:
        """Replace one player's commentary; a vanished player drops the update."""

        try:
            index = self._index(update.player_id)
        except KeyError:
            logger.info("Dropping commentary for removed player %s", update.player_id)
            return None
        updated = self._players[index].with_commentary(update.text)
        self._commit([*self._players[:index], updated, *self._players[index + 1:]])
        return updated


class TrainingLog:
    def __init__(self, store: TrainingStore, sessions: Sequence[TrainingSession] = ()):
        self.store = store
        self._sessions: List[TrainingSession] = list(sessions)

    @classmethod
    def bootstrap(cls, store: TrainingStore) -> "TrainingLog":
        return cls(store, store.load())

    @property
    def sessions(self) -> Tuple[TrainingSession, ...]:
        return tuple(self._sessions)

    def get(self, session_id: str) -> TrainingSession:
        for session in self._sessions:
            if session.session_id == session_id:
                return session
        raise KeyError(f"Training session {session_id} not found")

    def _commit(self, sessions: List[TrainingSession]) -> None:
        self.store.save(sessions)
        self._sessions = sessions

    def _swap(self, updated: TrainingSession) -> TrainingSession:
        self._commit([updated if s.session_id == updated.session_id else s for s in self._sessions])
        return updated

    def create(self, title: str, description: str = "") -> TrainingSession:
        session = new_session(title, description)
        self._commit([session, *self._sessions])
        return session

    def delete(self, session_id: str) -> None:
        self.get(session_id)
        self._commit([s for s in self._sessions if s.session_id != session_id])

    def attach(
        self,
        session_id: str,
        *,
        filename: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> TrainingFile:
        session = self.get(session_id)
        mime = content_type or "application/octet-stream"
        attachment = TrainingFile(
            file_id=uuid4().hex,
            name=filename,
            kind=classify_file_kind(content_type, filename),
            data=f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}",
            size=size_label(len(content)),
        )
        self._swap(session.with_file(attachment))
        return attachment

    def remove_file(self, session_id: str, file_id: str) -> TrainingSession:
        session = self.get(session_id)
        if not any(f.file_id == file_id for f in session.files):
            raise KeyError(f"File {file_id} not found in session {session_id}")
        return self._swap(session.without_file(file_id))
