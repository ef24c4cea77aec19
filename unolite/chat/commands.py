"""Chat command handler.

Turns "/command args" text from a user into engine actions against the room
registry and returns the replies to send. The handler knows nothing about the
messaging transport: every Reply names the user it is addressed to, and the
caller delivers it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from unolite.chat.render import error_text, render_hand, render_state, render_winner
from unolite.engine import (
    ChooseColor,
    Color,
    DrawCard,
    EngineError,
    ErrorCode,
    GameState,
    JoinGame,
    PassTurn,
    Phase,
    PlayCard,
    RuleVariant,
    StartGame,
)
from unolite.session import RoomNotFound, RoomRegistry

logger = logging.getLogger(__name__)

COLOR_NAMES = "red|yellow|green|blue"

HELP_TEXT = "\n".join([
    "UNO Lite - commands (the room id can be left out once you are in a room):",
    "",
    "/new [lite|classic] - create a new room",
    "/join <ROOM_ID> - join a room",
    "/startgame [ROOM_ID] - start the game (requires 2 players)",
    "/endgame [ROOM_ID] - terminate the game and close the room",
    "/state [ROOM_ID] - show game state",
    "/hand [ROOM_ID] - show your hand",
    "/play [ROOM_ID] <INDEX> - play card by index",
    "/draw [ROOM_ID] - draw a card (or your penalty)",
    "/pass [ROOM_ID] - end your turn",
    f"/color [ROOM_ID] <{COLOR_NAMES}> - choose the color after a Wild",
    "/rules - show the rules",
])

RULES_TEXT = "\n".join([
    "UNO Lite rules:",
    "- 2 players. First to empty their hand wins.",
    "- Lite deck: 2x 1-9 in each color (🔴 🟡 🟢 🔵).",
    "- Classic deck adds 0, Skip, Reverse, Draw2 and Wild.",
    "- 7 cards each. The top card goes to the discard pile.",
    "- Match the color OR the number/symbol of the top card.",
    "- Lite: if you can't play, draw one card, then play it or /pass.",
    "- Classic: Skip and Reverse skip the opponent, Draw2 makes them draw 2",
    "  and lose their turn, Wild lets you pick the next color.",
    "- When the deck runs out the discard pile (except the top card) is reshuffled.",
])


@dataclass(frozen=True)
class Reply:
    """A message for one user."""

    user_id: str
    text: str


class ChatBot:
    """Dispatches chat commands to the room registry."""

    def __init__(
        self,
        registry: Optional[RoomRegistry] = None,
        default_variant: RuleVariant = RuleVariant.LITE,
    ):
        self.registry = registry or RoomRegistry()
        self.default_variant = default_variant
        self._commands: Dict[str, Callable[[str, str, List[str]], List[Reply]]] = {
            "help": self._help,
            "start": self._help,
            "rules": self._rules,
            "new": self._new,
            "join": self._join,
            "startgame": self._startgame,
            "endgame": self._endgame,
            "state": self._state,
            "hand": self._hand,
            "play": self._play,
            "draw": self._draw,
            "pass": self._pass,
            "color": self._color,
        }

    def handle(self, user_id: str, display_name: str, text: str) -> List[Reply]:
        """Handle one incoming message and return the replies to deliver."""
        parts = text.strip().split()
        if not parts or not parts[0].startswith("/"):
            return [Reply(user_id, "Send /help to see the commands.")]
        command = parts[0][1:].split("@", 1)[0].lower()
        handler = self._commands.get(command)
        if handler is None:
            return [Reply(user_id, f"Unknown command /{command}. Send /help.")]
        try:
            return handler(user_id, display_name, parts[1:])
        except RoomNotFound as e:
            return [Reply(user_id, f"Room {e.args[0]} not found. Create one with /new.")]

    # Helpers

    def _split_room(self, user_id: str, args: List[str], trailing: int) -> Tuple[Optional[str], List[str]]:
        """Split off an explicit room id, falling back to the user's last room.

        `trailing` is how many positional arguments follow the room id.
        """
        if len(args) > trailing:
            return args[0].upper(), args[1:]
        return self.registry.last_room(user_id), args

    def _both(self, state: GameState, text: str) -> List[Reply]:
        return [Reply(p.user_id, text) for p in state.players if p is not None]

    def _turn_notice(self, state: GameState) -> List[Reply]:
        if state.phase == Phase.FINISHED:
            return self._both(state, f"{render_winner(state)}\n{render_state(state)}")
        current = state.current_player()
        name = current.display_name if current else "?"
        return self._both(state, f"It's {name}'s turn now.\n{render_state(state)}")

    def _usage(self, user_id: str, usage: str) -> List[Reply]:
        return [Reply(user_id, f"Usage: {usage}")]

    def _error(self, user_id: str, error: EngineError) -> List[Reply]:
        return [Reply(user_id, error_text(error))]

    # Commands

    def _help(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        return [Reply(user_id, HELP_TEXT)]

    def _rules(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        return [Reply(user_id, RULES_TEXT)]

    def _new(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        variant = self.default_variant
        if args:
            try:
                variant = RuleVariant(args[0].lower())
            except ValueError:
                return self._usage(user_id, "/new [lite|classic]")
        room_id = self.registry.create_room(variant)
        self.registry.set_last_room(user_id, room_id)
        return [Reply(user_id, f"Room {room_id} created ({variant.value}). Share with a friend and /join {room_id}")]

    def _join(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        if not args:
            return self._usage(user_id, "/join <ROOM_ID>")
        room_id = args[0].upper()
        outcome = self.registry.apply(room_id, JoinGame(user_id=user_id, display_name=display_name))
        if isinstance(outcome, EngineError):
            return self._error(user_id, outcome)
        self.registry.set_last_room(user_id, room_id)
        if outcome.phase != Phase.READY_TO_START:
            return [Reply(user_id, f"Joined room {room_id}. Waiting for another player...")]
        replies = [Reply(user_id, f"Joined room {room_id}. Both players present.")]
        replies.extend(self._both(
            outcome,
            f"Player joined: {display_name}. Room {room_id} is ready. Use /startgame {room_id}.",
        ))
        return replies

    def _startgame(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, _ = self._split_room(user_id, args, 0)
        if room_id is None:
            return self._usage(user_id, "/startgame <ROOM_ID>")
        outcome = self.registry.apply(room_id, StartGame())
        if isinstance(outcome, EngineError):
            if outcome.code in (ErrorCode.BAD_PHASE, ErrorCode.NEED_PLAYERS):
                state = self.registry.require(room_id)
                if state.phase in (Phase.WAITING_FOR_PLAYERS, Phase.READY_TO_START):
                    joined = sum(1 for p in state.players if p is not None)
                    return [Reply(user_id, "\n".join([
                        "Game isn't ready yet. Two players must join this room.",
                        f"Share the room ID: {room_id}",
                        f"Current: {joined}/2 joined.",
                        f"When both joined, run /startgame {room_id}.",
                    ]))]
            return self._error(user_id, outcome)
        self.registry.set_last_room(user_id, room_id)
        return self._turn_notice(outcome)

    def _endgame(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, _ = self._split_room(user_id, args, 0)
        if room_id is None:
            return self._usage(user_id, "/endgame <ROOM_ID>")
        state = self.registry.require(room_id)
        if state.player_by_user(user_id) is None:
            return [Reply(user_id, "Only players in this room can end the game.")]
        self.registry.remove_room(room_id)
        logger.info("Room %s ended by %s", room_id, user_id)
        return self._both(state, f"Room {room_id} was closed by {display_name}.")

    def _state(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, _ = self._split_room(user_id, args, 0)
        if room_id is None:
            return self._usage(user_id, "/state <ROOM_ID>")
        return [Reply(user_id, render_state(self.registry.require(room_id)))]

    def _hand(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, _ = self._split_room(user_id, args, 0)
        if room_id is None:
            return self._usage(user_id, "/hand <ROOM_ID>")
        player = self.registry.require(room_id).player_by_user(user_id)
        if player is None:
            return [Reply(user_id, "You are not in this room.")]
        return [Reply(user_id, render_hand(player))]

    def _play(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, rest = self._split_room(user_id, args, 1)
        if room_id is None or len(rest) != 1:
            return self._usage(user_id, "/play <ROOM_ID> <INDEX>")
        try:
            index = int(rest[0])
        except ValueError:
            return [Reply(user_id, "INDEX must be a number.")]
        outcome = self.registry.apply(room_id, PlayCard(user_id=user_id, hand_index=index))
        if isinstance(outcome, EngineError):
            return self._error(user_id, outcome)
        if outcome.phase == Phase.AWAITING_COLOR_CHOICE:
            return [Reply(user_id, f"Choose color: /color {room_id} <{COLOR_NAMES}>")]
        return self._turn_notice(outcome)

    def _draw(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, _ = self._split_room(user_id, args, 0)
        if room_id is None:
            return self._usage(user_id, "/draw <ROOM_ID>")
        before, outcome = self.registry.transition(room_id, DrawCard(user_id=user_id))
        if isinstance(outcome, EngineError):
            return self._error(user_id, outcome)
        player = outcome.current_player()
        drawn = len(player.hand) - len(before.current_player().hand)
        text = f"You drew {drawn} card{'s' if drawn != 1 else ''}. Play one or /pass.\n{render_hand(player)}"
        return [Reply(user_id, text)]

    def _pass(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, _ = self._split_room(user_id, args, 0)
        if room_id is None:
            return self._usage(user_id, "/pass <ROOM_ID>")
        outcome = self.registry.apply(room_id, PassTurn(user_id=user_id))
        if isinstance(outcome, EngineError):
            return self._error(user_id, outcome)
        return self._turn_notice(outcome)

    def _color(self, user_id: str, display_name: str, args: List[str]) -> List[Reply]:
        room_id, rest = self._split_room(user_id, args, 1)
        if room_id is None or len(rest) != 1:
            return self._usage(user_id, f"/color <ROOM_ID> <{COLOR_NAMES}>")
        try:
            color = Color(rest[0].lower())
        except ValueError:
            return [Reply(user_id, f"Invalid color. Use {COLOR_NAMES}.")]
        outcome = self.registry.apply(room_id, ChooseColor(user_id=user_id, color=color))
        if isinstance(outcome, EngineError):
            return self._error(user_id, outcome)
        return self._turn_notice(outcome)
