"""Engine error codes and the result type returned by rule functions."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable failure codes. The chat layer maps them to user text."""

    BAD_PHASE = "bad_phase"
    NEED_PLAYERS = "need_players"
    ROOM_FULL = "room_full"
    TURN = "turn"
    PENDING_DRAW = "pending_draw"
    PENDING_SKIP = "pending_skip"
    BAD_INDEX = "bad_index"
    ILLEGAL_MOVE = "illegal_move"
    HAS_PLAYABLE = "has_playable"
    ALREADY_DRAWN = "already_drawn"
    MUST_DRAW_FIRST = "must_draw_first"
    BAD_COLOR = "bad_color"


@dataclass(frozen=True)
class EngineError:
    """A rejected action. Returned, not raised; the prior state is left untouched."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


def is_error(outcome: Any) -> bool:
    """Return True when a rule function or the reducer rejected the action."""
    return isinstance(outcome, EngineError)


class DeckExhausted(RuntimeError):
    """No card left in either pile. Only reachable if card conservation is broken."""
