"""Agent that asks an OpenAI-compatible chat model to pick a legal action."""

import logging
import os
import re
from typing import Optional, Sequence

from openai import OpenAI

from unolite.engine import (
    Action,
    Card,
    ChooseColor,
    DrawCard,
    PassTurn,
    PlayCard,
    PlayerView,
    RuleVariant,
)

logger = logging.getLogger(__name__)

# provider -> (base url, api key env var)
PROVIDERS = {
    "openrouter": ("https://openrouter.ai/api/v1", "OPENROUTER_API_KEY"),
    "groq": ("https://api.groq.com/openai/v1", "GROQ_API_KEY"),
    "ollama": ("http://localhost:11434/v1", None),
    "huggingface": ("https://router.huggingface.co/v1", "HUGGINGFACE_API_KEY"),
}

MAX_ATTEMPTS = 3

RULES = {
    RuleVariant.LITE: (
        "Match the top card by color or number. If nothing matches you must DRAW "
        "one card, then play it or PASS."
    ),
    RuleVariant.CLASSIC: (
        "Match the top card by color or value. Wild matches anything and you pick "
        "the next color. Skip and Reverse cost the opponent a turn. Draw Two makes "
        "them draw 2 and lose a turn."
    ),
}


def describe_action(action: Action, hand: Sequence[Card]) -> str:
    """One-line label for an action, resolving hand indexes to cards."""
    if isinstance(action, PlayCard):
        card = hand[action.hand_index] if 0 <= action.hand_index < len(hand) else "?"
        return f"PLAY {card}"
    if isinstance(action, DrawCard):
        return "DRAW"
    if isinstance(action, PassTurn):
        return "PASS"
    if isinstance(action, ChooseColor):
        return f"CHOOSE COLOR {action.color.value}"
    return repr(action)


def build_prompt(view: PlayerView, actions: Sequence[Action], player_id: str) -> str:
    opponents = ", ".join(
        f"{pid} has {n}" for pid, n in view.num_cards_per_player.items() if pid != player_id
    )
    color = view.current_color.value if view.current_color else "not chosen yet"
    lines = [
        "You are playing two-player UNO. Empty your hand first to win.",
        RULES[view.variant],
        "",
        f"Your hand: {' '.join(str(c) for c in view.my_hand) or '(empty)'}",
        f"Top card: {view.top_discard or 'none'}, active color: {color}",
        f"Opponent cards: {opponents}. Draw pile: {view.draw_pile_size}",
        f"Penalty cards owed: {view.pending_draw_count}",
        "Recent events:",
        *(f"- {event}" for event in view.history or ["none"]),
        "",
        "Legal actions:",
        *(f"{i}: {describe_action(a, view.my_hand)}" for i, a in enumerate(actions)),
        "",
        'Answer with JSON only, for example {"action_index": 0}.',
    ]
    return "\n".join(lines)


def _parse_action_response(response: str, actions: Sequence[Action]) -> Optional[Action]:
    """Pull an action out of a model reply.

    Looks for an `action_index` key, then a DRAW / PASS keyword, then any
    bare number. Out-of-range indexes are ignored.
    """
    match = re.search(r"action_index['\"]?\s*:\s*(\d+)", response, re.IGNORECASE)
    candidates = [int(match.group(1))] if match else []

    upper = response.upper()
    for keyword, kind in (("DRAW", DrawCard), ("PASS", PassTurn)):
        if keyword in upper:
            candidates.extend(i for i, a in enumerate(actions) if isinstance(a, kind))

    candidates.extend(int(n) for n in re.findall(r"\b\d+\b", response))
    for idx in candidates:
        if 0 <= idx < len(actions):
            return actions[idx]
    return None


class LLMAgent:
    """Agent that uses an LLM to choose actions."""

    def __init__(
        self,
        provider: str = "openrouter",
        model: str = "openai/gpt-4o-mini",
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        client: Optional[OpenAI] = None,
    ):
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown provider: {provider}")
        base_url, key_var = PROVIDERS[provider]
        if provider == "ollama":
            base_url = os.environ.get("OLLAMA_BASE_URL", base_url)
            key = "ollama"
        else:
            key = api_key or os.environ.get(key_var)
        if client is None and not key:
            raise ValueError(f"API key required for {provider}. Set {key_var} or pass api_key.")

        self._client = client or OpenAI(api_key=key, base_url=base_url)
        self._model = model
        self._provider = provider
        self._timeout = timeout

    @property
    def name(self) -> str:
        return f"llm-{self._model}"

    def get_action(
        self,
        player_view: PlayerView,
        legal_actions: list[Action],
        player_id: str,
    ) -> Action | None:
        if not legal_actions:
            return None
        if len(legal_actions) == 1:
            return legal_actions[0]

        kwargs = {
            "model": self._model,
            "messages": [{"role": "user", "content": build_prompt(player_view, legal_actions, player_id)}],
            "timeout": self._timeout,
        }
        if "gpt-" in self._model or self._provider == "groq":
            kwargs["response_format"] = {"type": "json_object"}

        for attempt in range(1, MAX_ATTEMPTS + 1):
            try:
                resp = self._client.chat.completions.create(**kwargs)
            except Exception as e:
                logger.warning("%s: attempt %d failed: %s: %s", self.name, attempt, type(e).__name__, e)
                continue
            content = resp.choices[0].message.content or ""
            action = _parse_action_response(content, legal_actions)
            if action is not None:
                return action
            logger.warning("%s: attempt %d gave no usable action: %r", self.name, attempt, content)

        logger.warning("%s: giving up, falling back to draw/pass", self.name)
        for kind in (DrawCard, PassTurn):
            for a in legal_actions:
                if isinstance(a, kind):
                    return a
        return legal_actions[0]
