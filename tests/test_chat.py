"""Tests for the chat command handler and text rendering."""

import random
from dataclasses import replace

import pytest
from unolite.chat import ChatBot, Reply, render_card_short, render_hand, render_state
from unolite.chat.render import ERROR_TEXT, error_text
from unolite.engine import (
    Card,
    Color,
    DrawCard,
    EngineError,
    ErrorCode,
    Phase,
    PlayCard,
    RuleVariant,
    get_legal_actions,
)
from unolite.session import RoomRegistry


@pytest.fixture
def bot() -> ChatBot:
    return ChatBot(RoomRegistry(rng=random.Random(3)))


def open_room(bot: ChatBot, variant: str = "") -> str:
    bot.handle("alice", "Alice", f"/new {variant}".strip())
    return bot.registry.last_room("alice")


def seated_room(bot: ChatBot) -> str:
    room_id = open_room(bot)
    bot.handle("alice", "Alice", f"/join {room_id}")
    bot.handle("bob", "Bob", f"/join {room_id}")
    return room_id


def test_help_and_unknown_commands(bot) -> None:
    assert "/play" in bot.handle("alice", "Alice", "/help")[0].text
    assert "UNO Lite rules" in bot.handle("alice", "Alice", "/rules")[0].text
    assert bot.handle("alice", "Alice", "/dance") == [Reply("alice", "Unknown command /dance. Send /help.")]
    assert bot.handle("alice", "Alice", "hello")[0].text == "Send /help to see the commands."
    assert "/play" in bot.handle("alice", "Alice", "/help@UnoLiteBot")[0].text


def test_new_room(bot) -> None:
    replies = bot.handle("alice", "Alice", "/new")
    room_id = bot.registry.last_room("alice")
    assert replies == [Reply("alice", f"Room {room_id} created (lite). Share with a friend and /join {room_id}")]

    bot.handle("alice", "Alice", "/new classic")
    classic = bot.registry.last_room("alice")
    assert bot.registry.get(classic).variant == RuleVariant.CLASSIC
    assert bot.handle("alice", "Alice", "/new turbo")[0].text.startswith("Usage:")


def test_join_flow_notifies_both(bot) -> None:
    room_id = open_room(bot)
    first = bot.handle("alice", "Alice", f"/join {room_id.lower()}")
    assert first == [Reply("alice", f"Joined room {room_id}. Waiting for another player...")]

    second = bot.handle("bob", "Bob", f"/join {room_id}")
    assert [r.user_id for r in second] == ["bob", "alice", "bob"]
    assert f"Room {room_id} is ready" in second[1].text

    third = bot.handle("carol", "Carol", f"/join {room_id}")
    assert third == [Reply("carol", ERROR_TEXT[ErrorCode.ROOM_FULL])]
    assert bot.handle("carol", "Carol", "/join")[0].text == "Usage: /join <ROOM_ID>"
    assert bot.handle("carol", "Carol", "/join ZZZZ")[0].text.startswith("Room ZZZZ not found")


def test_startgame_before_second_player(bot) -> None:
    room_id = open_room(bot)
    bot.handle("alice", "Alice", f"/join {room_id}")
    text = bot.handle("alice", "Alice", "/startgame")[0].text
    assert "Game isn't ready yet" in text
    assert "Current: 1/2 joined." in text


def test_startgame_and_turn_commands(bot) -> None:
    room_id = seated_room(bot)
    replies = bot.handle("alice", "Alice", "/startgame")
    assert [r.user_id for r in replies] == ["alice", "bob"]
    assert replies[0].text.startswith("It's Alice's turn now.")

    hand = bot.handle("alice", "Alice", "/hand")[0].text
    assert len(hand.splitlines()) == 7
    assert hand.startswith("0: ")

    assert bot.handle("bob", "Bob", "/play 0")[0].text == ERROR_TEXT[ErrorCode.TURN]
    assert bot.handle("alice", "Alice", "/play 99")[0].text == ERROR_TEXT[ErrorCode.BAD_INDEX]
    assert bot.handle("alice", "Alice", "/play x")[0].text == "INDEX must be a number."
    assert bot.handle("alice", "Alice", "/play")[0].text.startswith("Usage:")
    assert bot.handle("carol", "Carol", f"/hand {room_id}")[0].text == "You are not in this room."
    assert f"Room {room_id}" in bot.handle("carol", "Carol", f"/state {room_id}")[0].text

    state = bot.registry.get(room_id)
    legal = get_legal_actions(state, "alice")
    if isinstance(legal[0], PlayCard):
        played = bot.handle("alice", "Alice", f"/play {room_id} {legal[0].hand_index}")
        assert [r.user_id for r in played] == ["alice", "bob"]
        assert "It's Bob's turn now." in played[0].text
    else:
        assert legal == [DrawCard(user_id="alice")]
        drawn = bot.handle("alice", "Alice", "/draw")
        assert drawn[0].text.startswith("You drew 1 card.")
        assert bot.registry.get(room_id).has_drawn_this_turn


def test_draw_blocked_when_playable(bot) -> None:
    room_id = seated_room(bot)
    bot.handle("alice", "Alice", "/startgame")
    state = bot.registry.get(room_id)
    if isinstance(get_legal_actions(state, "alice")[0], PlayCard):
        assert bot.handle("alice", "Alice", "/draw")[0].text == ERROR_TEXT[ErrorCode.HAS_PLAYABLE]
    else:
        assert bot.handle("alice", "Alice", "/pass")[0].text == ERROR_TEXT[ErrorCode.MUST_DRAW_FIRST]


def test_color_command_validation(bot) -> None:
    room_id = seated_room(bot)
    assert bot.handle("alice", "Alice", "/color purple")[0].text.startswith("Invalid color")
    assert bot.handle("alice", "Alice", f"/color {room_id} red")[0].text == ERROR_TEXT[ErrorCode.BAD_PHASE]


def test_endgame(bot) -> None:
    room_id = seated_room(bot)
    assert bot.handle("carol", "Carol", "/endgame")[0].text.startswith("Usage:")
    assert bot.handle("carol", "Carol", f"/endgame {room_id}")[0].text.startswith("Only players")

    replies = bot.handle("bob", "Bob", "/endgame")
    assert [r.user_id for r in replies] == ["alice", "bob"]
    assert replies[0].text == f"Room {room_id} was closed by Bob."
    assert room_id not in bot.registry
    assert bot.handle("alice", "Alice", f"/state {room_id}")[0].text.startswith(f"Room {room_id} not found")


def test_render_helpers(game) -> None:
    assert render_card_short(Card(Color.RED, "5")) == "🔴5"
    assert render_card_short(Card(Color.YELLOW, "skip")) == "🟡Skip"
    assert render_card_short(Card(Color.BLUE, "draw_two")) == "🔵Draw2"
    assert render_card_short(Card(None, "wild")) == "⬛Wild"

    state = game(["red_2", "blue_3"], ["green_1"], top="red_5", pending_draw_count=2)
    assert render_hand(state.players[0]) == "0: 🔴2\n1: 🔵3"
    text = render_state(state)
    assert "Top: 🔴5" in text
    assert "Turn: Alice (+2)" in text


def test_every_error_code_has_text() -> None:
    for code in ErrorCode:
        assert error_text(EngineError(code, "dev message")) == ERROR_TEXT[code]


def test_finished_game_is_announced(game) -> None:
    registry = RoomRegistry(rng=random.Random(0))
    bot = ChatBot(registry)
    room_id = registry.create_room()
    # Seed the room with a state where alice is one card from winning.
    state = game(["red_1"], ["green_3"], top="red_5")
    registry._rooms[room_id] = replace(state, id=room_id)
    registry.set_last_room("alice", room_id)

    replies = bot.handle("alice", "Alice", "/play 0")
    assert [r.user_id for r in replies] == ["alice", "bob"]
    assert replies[0].text.startswith("Game over. Winner: Alice!")
    assert registry.get(room_id).phase == Phase.FINISHED


def test_penalty_draw_reports_card_count(game) -> None:
    registry = RoomRegistry(rng=random.Random(0))
    bot = ChatBot(registry)
    room_id = registry.create_room()
    state = game(
        ["green_1"], ["blue_3", "yellow_8"], top="red_draw_two",
        variant=RuleVariant.CLASSIC, current=1, pending_draw_count=2, pending_skip=True,
    )
    registry._rooms[room_id] = replace(state, id=room_id)
    registry.set_last_room("bob", room_id)

    replies = bot.handle("bob", "Bob", "/draw")
    assert replies[0].text.startswith("You drew 2 cards.")
    assert len(registry.get(room_id).players[1].hand) == 4


def test_one_account_can_take_both_seats(bot) -> None:
    room_id = open_room(bot)
    bot.handle("alice", "Alice", f"/join {room_id}")
    replies = bot.handle("alice", "Alice", f"/join {room_id}")
    assert f"Room {room_id} is ready" in replies[1].text
    assert bot.registry.get(room_id).phase == Phase.READY_TO_START
    assert bot.handle("alice", "Alice", f"/join {room_id}")[0].text == ERROR_TEXT[ErrorCode.ROOM_FULL]
