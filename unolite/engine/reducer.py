"""Single entry point that applies an action to a room state."""

import random
from typing import Optional

from unolite.engine.actions import (
    Action,
    ChooseColor,
    CreateGame,
    DrawCard,
    JoinGame,
    PassTurn,
    PlayCard,
    StartGame,
)
from unolite.engine.errors import EngineError
from unolite.engine.game_state import GameState, Phase
from unolite.engine.rules import (
    Outcome,
    advance_turn,
    choose_color,
    create_empty_game,
    draw,
    join_game,
    pass_turn,
    play_card,
    start_game,
)


def reduce(state: GameState, action: Action, rng: Optional[random.Random] = None) -> Outcome:
    """Apply `action` and return the next state, or the EngineError that rejected it.

    Plays and color choices end the turn here; draw never ends it and pass
    ends it itself.
    """
    if isinstance(action, CreateGame):
        return create_empty_game(action.room_id, action.variant)
    if isinstance(action, JoinGame):
        return join_game(state, action.user_id, action.display_name)
    if isinstance(action, StartGame):
        return start_game(state, rng=rng)
    if isinstance(action, PlayCard):
        after = play_card(state, action.user_id, action.hand_index)
        if isinstance(after, EngineError):
            return after
        if after.phase in (Phase.AWAITING_COLOR_CHOICE, Phase.FINISHED):
            return after
        return advance_turn(after)
    if isinstance(action, ChooseColor):
        after = choose_color(state, action.user_id, action.color)
        if isinstance(after, EngineError):
            return after
        return advance_turn(after)
    if isinstance(action, DrawCard):
        return draw(state, action.user_id, rng=rng)
    if isinstance(action, PassTurn):
        return pass_turn(state, action.user_id)
    raise TypeError(f"Unknown action: {action!r}")
