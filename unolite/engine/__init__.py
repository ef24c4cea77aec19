"""Game engine for UNO Lite."""

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
from unolite.engine.card import Card, Color
from unolite.engine.deck import create_deck, deck_size, draw_one, shuffle
from unolite.engine.errors import DeckExhausted, EngineError, ErrorCode, is_error
from unolite.engine.game_state import GameState, Phase, Player, PlayerView, RuleVariant
from unolite.engine.reducer import reduce
from unolite.engine.rules import (
    advance_turn,
    choose_color,
    create_empty_game,
    draw,
    get_legal_actions,
    is_playable,
    join_game,
    pass_turn,
    play_card,
    start_game,
)

__all__ = [
    "Card",
    "Color",
    "create_deck",
    "deck_size",
    "draw_one",
    "shuffle",
    "DeckExhausted",
    "EngineError",
    "ErrorCode",
    "is_error",
    "GameState",
    "Phase",
    "Player",
    "PlayerView",
    "RuleVariant",
    "Action",
    "CreateGame",
    "JoinGame",
    "StartGame",
    "PlayCard",
    "DrawCard",
    "PassTurn",
    "ChooseColor",
    "reduce",
    "advance_turn",
    "choose_color",
    "create_empty_game",
    "draw",
    "get_legal_actions",
    "is_playable",
    "join_game",
    "pass_turn",
    "play_card",
    "start_game",
]
