"""Plain-text rendering of room state for chat replies."""

from typing import Optional

from unolite.engine import Card, Color, EngineError, ErrorCode, GameState, Phase, Player

COLOR_EMOJI = {
    Color.RED: "🔴",
    Color.YELLOW: "🟡",
    Color.GREEN: "🟢",
    Color.BLUE: "🔵",
}

ACTION_LABELS = {
    "skip": "Skip",
    "reverse": "Reverse",
    "draw_two": "Draw2",
}

ERROR_TEXT = {
    ErrorCode.BAD_PHASE: "That is not possible right now.",
    ErrorCode.NEED_PLAYERS: "Two players must join before the game can start.",
    ErrorCode.ROOM_FULL: "This room is already full.",
    ErrorCode.TURN: "It is another player's turn.",
    ErrorCode.PENDING_DRAW: "You have to draw your penalty cards first (/draw).",
    ErrorCode.PENDING_SKIP: "Your turn is skipped. Use /pass.",
    ErrorCode.BAD_INDEX: "There is no card with that number in your hand.",
    ErrorCode.ILLEGAL_MOVE: "That card does not match the color or value on top.",
    ErrorCode.HAS_PLAYABLE: "You have a playable card, play it instead of drawing.",
    ErrorCode.ALREADY_DRAWN: "You already drew this turn. Play the card or /pass.",
    ErrorCode.MUST_DRAW_FIRST: "You have to /draw before you can pass.",
    ErrorCode.BAD_COLOR: "Unknown color. Use red, yellow, green or blue.",
}


def render_card_short(card: Optional[Card]) -> str:
    """Compact single-token card label, e.g. 🔴5, 🟡Skip, ⬛Wild."""
    if card is None:
        return "-"
    if card.is_wild:
        return "⬛Wild"
    label = ACTION_LABELS.get(card.value, card.value)
    return f"{COLOR_EMOJI[card.color]}{label}"


def render_color(color: Optional[Color]) -> str:
    if color is None:
        return "?"
    return f"{COLOR_EMOJI[color]} {color.value}"


def render_state(state: GameState) -> str:
    """Public view of a room: phase, top card, color, hand sizes and turn."""
    lines = [f"Room {state.id} ({state.variant.value}) - phase: {state.phase.value}"]
    names = []
    for i, player in enumerate(state.players):
        if player is None:
            names.append(f"P{i}=(empty)")
        else:
            names.append(f"P{i}={player.display_name} [{len(player.hand)}]")
    lines.append("Players: " + "  ".join(names))
    if state.phase in (Phase.WAITING_FOR_PLAYERS, Phase.READY_TO_START):
        return "\n".join(lines)

    lines.append(
        f"Top: {render_card_short(state.top_discard())}  "
        f"Color: {render_color(state.current_color)}  Deck: {len(state.draw_pile)}"
    )
    if state.phase == Phase.FINISHED:
        lines.append(render_winner(state))
        return "\n".join(lines)

    current = state.current_player()
    turn = f"Turn: {current.display_name if current else '?'}"
    if state.phase == Phase.AWAITING_COLOR_CHOICE:
        turn += " (choosing a color)"
    if state.pending_draw_count:
        turn += f" (+{state.pending_draw_count})"
    if state.pending_skip:
        turn += " (skipped)"
    lines.append(turn)
    return "\n".join(lines)


def render_hand(player: Player) -> str:
    """Numbered hand listing; the numbers are what /play expects."""
    if not player.hand:
        return "(empty hand)"
    return "\n".join(f"{i}: {render_card_short(card)}" for i, card in enumerate(player.hand))


def render_winner(state: GameState) -> str:
    winner = next(
        (p for p in state.players if p is not None and p.id == state.winner_id), None
    )
    if winner is None:
        return "Game over."
    return f"Game over. Winner: {winner.display_name}!"


def error_text(error: EngineError) -> str:
    return ERROR_TEXT.get(error.code, error.message)
