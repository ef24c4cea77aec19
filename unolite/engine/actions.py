"""Actions accepted by the reducer."""

from dataclasses import dataclass
from typing import Union

from unolite.engine.card import Color
from unolite.engine.game_state import RuleVariant


@dataclass(frozen=True)
class CreateGame:
    """Action: reset the room to an empty game."""

    room_id: str
    variant: RuleVariant = RuleVariant.LITE


@dataclass(frozen=True)
class JoinGame:
    """Action: take the first free seat."""

    user_id: str
    display_name: str


@dataclass(frozen=True)
class StartGame:
    """Action: deal and flip the opener."""


@dataclass(frozen=True)
class PlayCard:
    """Action: play the card at `hand_index` of the acting player's hand."""

    user_id: str
    hand_index: int


@dataclass(frozen=True)
class DrawCard:
    """Action: draw one card, or the whole pending penalty."""

    user_id: str


@dataclass(frozen=True)
class PassTurn:
    """Action: end the turn without playing."""

    user_id: str


@dataclass(frozen=True)
class ChooseColor:
    """Action: pick the active color after a Wild."""

    user_id: str
    color: Color


Action = Union[CreateGame, JoinGame, StartGame, PlayCard, DrawCard, PassTurn, ChooseColor]
