"""Chat command surface and text rendering."""

from unolite.chat.commands import ChatBot, Reply
from unolite.chat.render import error_text, render_card_short, render_hand, render_state

__all__ = [
    "ChatBot",
    "Reply",
    "error_text",
    "render_card_short",
    "render_hand",
    "render_state",
]
