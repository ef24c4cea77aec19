"""In-memory room registry.

Maps room id -> current GameState. Nothing is persisted: restarting the
process drops every room. Transitions for one room are serialized by a
per-room lock; different rooms never block each other.
"""

from __future__ import annotations

import logging
import random
import string
import threading
from typing import Dict, List, Optional, Tuple

from unolite.engine import (
    Action,
    EngineError,
    GameState,
    RuleVariant,
    create_empty_game,
    reduce,
)

logger = logging.getLogger(__name__)

ROOM_ID_ALPHABET = string.ascii_uppercase + string.digits
ROOM_ID_LENGTH = 4


class RoomNotFound(KeyError):
    """No room with that id."""


class RoomRegistry:
    """Keyed store of room states with per-room mutual exclusion."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._rooms: Dict[str, GameState] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()  # protects the two dicts above
        self._last_room: Dict[str, str] = {}

    def _new_room_id(self) -> str:
        while True:
            room_id = "".join(self._rng.choice(ROOM_ID_ALPHABET) for _ in range(ROOM_ID_LENGTH))
            if room_id not in self._rooms:
                return room_id

    def create_room(self, variant: RuleVariant = RuleVariant.LITE) -> str:
        """Create an empty room with a short random id and return the id."""
        with self._guard:
            room_id = self._new_room_id()
            self._rooms[room_id] = create_empty_game(room_id, variant)
            self._locks[room_id] = threading.Lock()
        logger.info("Room %s created (%s)", room_id, variant.value)
        return room_id

    def get(self, room_id: str) -> Optional[GameState]:
        with self._guard:
            return self._rooms.get(room_id)

    def require(self, room_id: str) -> GameState:
        state = self.get(room_id)
        if state is None:
            raise RoomNotFound(room_id)
        return state

    def _lock_for(self, room_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(room_id)
        if lock is None:
            raise RoomNotFound(room_id)
        return lock

    def apply(self, room_id: str, action: Action) -> GameState | EngineError:
        """Reduce `action` against the room's state and store the result.

        On an EngineError the stored state is left as it was.
        """
        return self.transition(room_id, action)[1]

    def transition(self, room_id: str, action: Action) -> Tuple[GameState, GameState | EngineError]:
        """Like `apply`, but also return the state the action was reduced against."""
        with self._lock_for(room_id):
            state = self.require(room_id)
            outcome = reduce(state, action, rng=self._rng)
            if isinstance(outcome, EngineError):
                logger.debug("Room %s rejected %r: %s", room_id, action, outcome)
                return state, outcome
            with self._guard:
                if room_id not in self._rooms:
                    raise RoomNotFound(room_id)
                self._rooms[room_id] = outcome
        if outcome.winner_id is not None and state.winner_id is None:
            logger.info("Room %s finished, winner %s", room_id, outcome.winner_id)
        return state, outcome

    def remove_room(self, room_id: str) -> GameState:
        """Tear a room down and return its last state."""
        with self._guard:
            state = self._rooms.pop(room_id, None)
            self._locks.pop(room_id, None)
            if state is None:
                raise RoomNotFound(room_id)
            for user_id, last in list(self._last_room.items()):
                if last == room_id:
                    del self._last_room[user_id]
        logger.info("Room %s removed", room_id)
        return state

    def set_last_room(self, user_id: str, room_id: str) -> None:
        with self._guard:
            self._last_room[user_id] = room_id

    def last_room(self, user_id: str) -> Optional[str]:
        with self._guard:
            return self._last_room.get(user_id)

    def rooms_for_user(self, user_id: str) -> List[str]:
        with self._guard:
            return [
                room_id
                for room_id, state in self._rooms.items()
                if state.player_by_user(user_id) is not None
            ]

    def __len__(self) -> int:
        with self._guard:
            return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        with self._guard:
            return room_id in self._rooms
