"""UNO Lite rules: legality, state transitions and legal-action listing.

Every transition takes the current state and returns either a new state or an
EngineError. Inputs are never modified, so a rejected action leaves the caller
holding exactly the state it had.
"""

import random
from dataclasses import replace
from typing import List, Optional, Tuple, Union

from unolite.engine.actions import Action, ChooseColor, DrawCard, PassTurn, PlayCard
from unolite.engine.card import Card, Color
from unolite.engine.deck import create_deck, draw_one
from unolite.engine.errors import EngineError, ErrorCode
from unolite.engine.game_state import GameState, Phase, Player, RuleVariant

HAND_SIZE = 7

Outcome = Union[GameState, EngineError]


def _fail(code: ErrorCode, message: str) -> EngineError:
    return EngineError(code=code, message=message)


def _log(state: GameState, event: str) -> Tuple[str, ...]:
    return state.history + (event,)


def _with_player(state: GameState, index: int, player: Player) -> Tuple[Optional[Player], ...]:
    players = list(state.players)
    players[index] = player
    return tuple(players)


def _acting_player(
    state: GameState, user_id: str, phase: Phase = Phase.IN_PROGRESS
) -> Union[Player, EngineError]:
    """Check phase and turn ownership, returning the current player."""
    if state.phase != phase:
        return _fail(ErrorCode.BAD_PHASE, f"Action not allowed in phase {state.phase.value}")
    player = state.current_player()
    if player is None or player.user_id != user_id:
        return _fail(ErrorCode.TURN, "Not your turn")
    return player


def create_empty_game(room_id: str, variant: RuleVariant = RuleVariant.LITE) -> GameState:
    """Create a room that is waiting for two players."""
    return GameState(id=room_id, variant=variant)


def join_game(state: GameState, user_id: str, display_name: str) -> Outcome:
    """Seat a user in the first empty slot."""
    if state.phase not in (Phase.WAITING_FOR_PLAYERS, Phase.READY_TO_START):
        return _fail(ErrorCode.BAD_PHASE, "Cannot join now")
    try:
        slot = state.players.index(None)
    except ValueError:
        return _fail(ErrorCode.ROOM_FULL, "Room is full")

    player = Player(id=f"p{slot}", user_id=user_id, display_name=display_name)
    players = _with_player(state, slot, player)
    full = all(p is not None for p in players)
    return replace(
        state,
        players=players,
        phase=Phase.READY_TO_START if full else Phase.WAITING_FOR_PLAYERS,
        history=_log(state, f"{player.id} joined"),
    )


def start_game(state: GameState, rng: Optional[random.Random] = None) -> Outcome:
    """Deal 7 cards each (one at a time, slot 0 first) and flip a non-wild opener.

    A wild flipped as opener stays on the discard pile and flipping continues,
    so several cards may be consumed before the opener shows up.
    """
    if state.phase != Phase.READY_TO_START:
        return _fail(ErrorCode.BAD_PHASE, "Not ready to start")
    if state.players[0] is None or state.players[1] is None:
        return _fail(ErrorCode.NEED_PLAYERS, "Two players required")

    draw: Tuple[Card, ...] = tuple(create_deck(state.variant, rng=rng))
    discard: Tuple[Card, ...] = ()
    hands: List[List[Card]] = [[], []]
    for _ in range(HAND_SIZE):
        for i in range(2):
            card, draw, discard = draw_one(draw, discard, rng=rng)
            hands[i].append(card)

    while True:
        opener, draw, discard = draw_one(draw, discard, rng=rng)
        discard = discard + (opener,)
        if not opener.is_wild:
            break

    players = tuple(
        replace(p, hand=tuple(hand)) for p, hand in zip(state.players, hands)
    )
    return replace(
        state,
        phase=Phase.IN_PROGRESS,
        players=players,
        draw_pile=draw,
        discard_pile=discard,
        current_player_index=0,
        current_color=opener.color,
        pending_draw_count=0,
        pending_skip=False,
        has_drawn_this_turn=False,
        winner_id=None,
        history=_log(state, f"game started, opener {opener}"),
    )


def is_playable(card: Card, current_color: Optional[Color], top: Optional[Card]) -> bool:
    """Check if a card can be played on the current discard pile."""
    # Wild can always be played
    if card.is_wild:
        return True
    if top is None:
        return False
    # Match by color
    if current_color is not None and card.color == current_color:
        return True
    if top.color is not None and card.color == top.color:
        return True
    # Match by value (number on number, action on same action)
    if card.kind == top.kind and card.value == top.value:
        return True
    return False


def has_playable_card(state: GameState, player: Player) -> bool:
    top = state.top_discard()
    return any(is_playable(c, state.current_color, top) for c in player.hand)


def play_card(state: GameState, user_id: str, hand_index: int) -> Outcome:
    """Play the card at `hand_index`. The reducer advances the turn afterwards."""
    player = _acting_player(state, user_id)
    if isinstance(player, EngineError):
        return player
    if state.pending_draw_count > 0:
        return _fail(ErrorCode.PENDING_DRAW, "You must draw first")
    if state.pending_skip:
        return _fail(ErrorCode.PENDING_SKIP, "Your turn is skipped")
    if not 0 <= hand_index < len(player.hand):
        return _fail(ErrorCode.BAD_INDEX, f"No card at index {hand_index}")
    card = player.hand[hand_index]
    if not is_playable(card, state.current_color, state.top_discard()):
        return _fail(ErrorCode.ILLEGAL_MOVE, f"{card} cannot be played")

    hand = player.hand[:hand_index] + player.hand[hand_index + 1:]
    players = _with_player(state, state.current_player_index, replace(player, hand=hand))
    discard = state.discard_pile + (card,)

    if not hand:
        return replace(
            state,
            players=players,
            discard_pile=discard,
            current_color=card.color,
            pending_draw_count=0,
            pending_skip=False,
            phase=Phase.FINISHED,
            winner_id=player.id,
            history=_log(state, f"{player.id} played {card} and WON!"),
        )

    phase = state.phase
    pending_draw = 0
    pending_skip = False
    if card.value in ("skip", "reverse"):
        # Two players: Reverse has nobody to reverse past, so it skips.
        pending_skip = True
    elif card.value == "draw_two":
        pending_draw = 2
        pending_skip = True
    elif card.is_wild:
        phase = Phase.AWAITING_COLOR_CHOICE

    return replace(
        state,
        players=players,
        discard_pile=discard,
        current_color=card.color,
        pending_draw_count=pending_draw,
        pending_skip=pending_skip,
        phase=phase,
        history=_log(state, f"{player.id} played {card}"),
    )


def choose_color(state: GameState, user_id: str, color: Union[Color, str]) -> Outcome:
    """Set the active color after a Wild. The reducer advances the turn afterwards."""
    player = _acting_player(state, user_id, phase=Phase.AWAITING_COLOR_CHOICE)
    if isinstance(player, EngineError):
        return player
    try:
        color = Color(color)
    except ValueError:
        return _fail(ErrorCode.BAD_COLOR, f"Unknown color: {color}")
    return replace(
        state,
        phase=Phase.IN_PROGRESS,
        current_color=color,
        history=_log(state, f"{player.id} chose {color.value}"),
    )


def _draw_error(state: GameState, player: Player) -> Optional[EngineError]:
    if state.variant == RuleVariant.LITE:
        if state.has_drawn_this_turn:
            return _fail(ErrorCode.ALREADY_DRAWN, "Already drew a card this turn")
        if has_playable_card(state, player):
            return _fail(ErrorCode.HAS_PLAYABLE, "You have a playable card in hand")
    elif state.pending_draw_count == 0:
        if state.pending_skip:
            return _fail(ErrorCode.PENDING_SKIP, "Your turn is skipped")
        if state.has_drawn_this_turn:
            return _fail(ErrorCode.ALREADY_DRAWN, "Already drew a card this turn")
    return None


def draw(state: GameState, user_id: str, rng: Optional[random.Random] = None) -> Outcome:
    """Draw one card, or every card of a pending penalty. Never ends the turn."""
    player = _acting_player(state, user_id)
    if isinstance(player, EngineError):
        return player
    error = _draw_error(state, player)
    if error is not None:
        return error

    count = max(1, state.pending_draw_count)
    draw_pile, discard = state.draw_pile, state.discard_pile
    drawn: List[Card] = []
    for _ in range(count):
        card, draw_pile, discard = draw_one(draw_pile, discard, rng=rng)
        drawn.append(card)

    players = _with_player(
        state, state.current_player_index, replace(player, hand=player.hand + tuple(drawn))
    )
    if state.pending_draw_count > 0:
        event = f"{player.id} drew {count} cards (penalty)"
    else:
        event = f"{player.id} drew a card"
    return replace(
        state,
        players=players,
        draw_pile=draw_pile,
        discard_pile=discard,
        pending_draw_count=0,
        has_drawn_this_turn=True,
        history=_log(state, event),
    )


def _pass_error(state: GameState) -> Optional[EngineError]:
    if state.variant == RuleVariant.LITE:
        if not state.has_drawn_this_turn:
            return _fail(ErrorCode.MUST_DRAW_FIRST, "You must draw before passing")
    elif state.pending_draw_count > 0:
        return _fail(ErrorCode.PENDING_DRAW, "You must draw first")
    return None


def advance_turn(state: GameState) -> GameState:
    """End the current turn and hand play to the other player.

    A pending skip with no penalty attached nullifies the upcoming turn at once,
    so play comes straight back. With a penalty attached the skip stays set:
    the penalized player draws, cannot play, and passes.
    """
    next_index = 1 - state.current_player_index
    pending_skip = state.pending_skip
    if pending_skip and state.pending_draw_count == 0:
        next_index = 1 - next_index
        pending_skip = False
    return replace(
        state,
        current_player_index=next_index,
        pending_skip=pending_skip,
        has_drawn_this_turn=False,
    )


def pass_turn(state: GameState, user_id: str) -> Outcome:
    """End the turn without playing. A skipped player passing serves the skip."""
    player = _acting_player(state, user_id)
    if isinstance(player, EngineError):
        return player
    error = _pass_error(state)
    if error is not None:
        return error
    passed = replace(
        state,
        pending_skip=False,
        history=_log(state, f"{player.id} passed"),
    )
    return advance_turn(passed)


def get_legal_actions(state: GameState, user_id: str) -> List[Action]:
    """Return every action the engine would accept from `user_id` right now."""
    player = state.current_player()
    if player is None or player.user_id != user_id:
        return []

    if state.phase == Phase.AWAITING_COLOR_CHOICE:
        return [ChooseColor(user_id=user_id, color=color) for color in Color]
    if state.phase != Phase.IN_PROGRESS:
        return []

    actions: List[Action] = []
    if state.pending_draw_count == 0 and not state.pending_skip:
        top = state.top_discard()
        for i, card in enumerate(player.hand):
            if is_playable(card, state.current_color, top):
                actions.append(PlayCard(user_id=user_id, hand_index=i))
    if _draw_error(state, player) is None:
        actions.append(DrawCard(user_id=user_id))
    if _pass_error(state) is None:
        actions.append(PassTurn(user_id=user_id))
    return actions
