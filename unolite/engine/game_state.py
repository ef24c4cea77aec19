"""Game state for UNO Lite."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from unolite.engine.card import Card, Color


class RuleVariant(str, Enum):
    """Ruleset a room is played with.

    LITE: numbers 1-9 only; draw once when stuck, then pass.
    CLASSIC: adds 0, Skip, Reverse, Draw Two and Wild with a color-choice step.
    """

    LITE = "lite"
    CLASSIC = "classic"


class Phase(str, Enum):
    """Room lifecycle phases."""

    WAITING_FOR_PLAYERS = "waiting_for_players"
    READY_TO_START = "ready_to_start"
    IN_PROGRESS = "in_progress"
    AWAITING_COLOR_CHOICE = "awaiting_color_choice"
    FINISHED = "finished"


@dataclass(frozen=True)
class Player:
    """A seated player. `id` is the slot id ("p0"/"p1"), `user_id` is opaque."""

    id: str
    user_id: str
    display_name: str
    hand: Tuple[Card, ...] = ()


@dataclass(frozen=True)
class GameState:
    """Immutable UNO Lite room state."""

    id: str
    variant: RuleVariant = RuleVariant.LITE
    phase: Phase = Phase.WAITING_FOR_PLAYERS
    players: Tuple[Optional[Player], Optional[Player]] = (None, None)
    draw_pile: Tuple[Card, ...] = ()  # front is drawn first
    discard_pile: Tuple[Card, ...] = ()  # top is last
    current_player_index: int = 0
    current_color: Optional[Color] = None
    pending_draw_count: int = 0
    pending_skip: bool = False
    has_drawn_this_turn: bool = False
    winner_id: Optional[str] = None
    history: Tuple[str, ...] = field(default_factory=tuple)  # Log of events

    def top_discard(self) -> Optional[Card]:
        """Return the top card on the discard pile."""
        return self.discard_pile[-1] if self.discard_pile else None

    def current_player(self) -> Optional[Player]:
        return self.players[self.current_player_index]

    def player_by_user(self, user_id: str) -> Optional[Player]:
        """Seat held by `user_id`, preferring the seat to move when it holds both."""
        current = self.current_player()
        if current is not None and current.user_id == user_id:
            return current
        for player in self.players:
            if player is not None and player.user_id == user_id:
                return player
        return None

    def total_cards(self) -> int:
        """Cards across both piles and both hands; constant once the game started."""
        in_hands = sum(len(p.hand) for p in self.players if p is not None)
        return len(self.draw_pile) + len(self.discard_pile) + in_hands


@dataclass
class PlayerView:
    """Filtered game state visible to a single player.

    Contains only that player's hand and public info.
    """

    room_id: str
    variant: RuleVariant
    phase: Phase
    my_hand: List[Card]
    top_discard: Optional[Card]
    current_color: Optional[Color]
    current_player: Optional[str]
    pending_draw_count: int
    pending_skip: bool
    has_drawn_this_turn: bool
    winner_id: Optional[str]
    num_cards_per_player: Dict[str, int]  # player_id -> count
    draw_pile_size: int
    history: List[str]  # Recent game events

    @classmethod
    def from_state(cls, state: GameState, player_id: str) -> "PlayerView":
        """Create a player view from full game state, hiding the other player's hand."""
        num_cards = {p.id: len(p.hand) for p in state.players if p is not None}
        me = next((p for p in state.players if p is not None and p.id == player_id), None)
        current = state.current_player()
        return cls(
            room_id=state.id,
            variant=state.variant,
            phase=state.phase,
            my_hand=list(me.hand) if me else [],
            top_discard=state.top_discard(),
            current_color=state.current_color,
            current_player=current.id if current else None,
            pending_draw_count=state.pending_draw_count,
            pending_skip=state.pending_skip,
            has_drawn_this_turn=state.has_drawn_this_turn,
            winner_id=state.winner_id,
            num_cards_per_player=num_cards,
            draw_pile_size=len(state.draw_pile),
            history=list(state.history[-10:]),  # Last 10 events
        )
