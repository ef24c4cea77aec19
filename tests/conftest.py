"""Pytest fixtures for UNO Lite tests."""

import random
from dataclasses import replace
from typing import Callable, Optional, Sequence

import pytest

from unolite.engine import (
    Card,
    Color,
    GameState,
    JoinGame,
    Phase,
    Player,
    RuleVariant,
    create_empty_game,
    reduce,
)

ALICE = "alice"
BOB = "bob"

FILLER = ("yellow_1", "yellow_2", "green_3", "green_4", "blue_6", "blue_7", "yellow_8", "green_9")


def parse_card(spec: str) -> Card:
    """'red_5' -> Card(RED, '5'), 'blue_draw_two' -> Card(BLUE, 'draw_two'), 'wild' -> wild."""
    if spec == "wild":
        return Card(color=None, value="wild")
    color, value = spec.split("_", 1)
    return Card(color=Color(color), value=value)


@pytest.fixture
def card() -> Callable[[str], Card]:
    return parse_card


@pytest.fixture
def ready_state() -> Callable[..., GameState]:
    """Factory for a room with alice (p0) and bob (p1) seated, not started."""

    def make(variant: RuleVariant = RuleVariant.LITE, room_id: str = "ABCD") -> GameState:
        state = create_empty_game(room_id, variant)
        state = reduce(state, JoinGame(user_id=ALICE, display_name="Alice"))
        state = reduce(state, JoinGame(user_id=BOB, display_name="Bob"))
        assert state.phase == Phase.READY_TO_START
        return state

    return make


@pytest.fixture
def game() -> Callable[..., GameState]:
    """Factory for an in-progress state with hand-picked cards.

    Hands, top card and draw pile are card specs ('red_5', 'wild', ...). The
    current color defaults to the top card's color.
    """

    def make(
        hand0: Sequence[str],
        hand1: Sequence[str],
        top: str = "red_5",
        draw: Sequence[str] = FILLER,
        variant: RuleVariant = RuleVariant.LITE,
        current: int = 0,
        color: Optional[Color] = None,
        **overrides,
    ) -> GameState:
        top_card = parse_card(top)
        state = GameState(
            id="ABCD",
            variant=variant,
            phase=Phase.IN_PROGRESS,
            players=(
                Player(id="p0", user_id=ALICE, display_name="Alice",
                       hand=tuple(parse_card(c) for c in hand0)),
                Player(id="p1", user_id=BOB, display_name="Bob",
                       hand=tuple(parse_card(c) for c in hand1)),
            ),
            draw_pile=tuple(parse_card(c) for c in draw),
            discard_pile=(top_card,),
            current_player_index=current,
            current_color=color or top_card.color,
        )
        return replace(state, **overrides) if overrides else state

    return make


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
