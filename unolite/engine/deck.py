"""Deck creation, shuffling and drawing."""

import random
from typing import List, Optional, Sequence, Tuple

from unolite.engine.card import ACTION_VALUES, Card, Color, WILD
from unolite.engine.errors import DeckExhausted
from unolite.engine.game_state import RuleVariant

LITE_DECK_SIZE = 72
CLASSIC_DECK_SIZE = 104


def _rng(rng: Optional[random.Random], seed: Optional[int] = None) -> random.Random:
    if rng is not None:
        return rng
    return random.Random(seed)


def deck_size(variant: RuleVariant) -> int:
    return LITE_DECK_SIZE if variant == RuleVariant.LITE else CLASSIC_DECK_SIZE


def create_deck(
    variant: RuleVariant = RuleVariant.LITE,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> List[Card]:
    """Create a shuffled deck for the given ruleset.

    - LITE: 2 x (1-9) per color, no zeros, no actions, no wilds: 72 cards
    - CLASSIC: per color one 0, two each of 1-9, Skip, Reverse, Draw Two
      (25 cards), plus 4 Wild: 104 cards
    """
    cards: List[Card] = []

    for color in Color:
        if variant == RuleVariant.CLASSIC:
            cards.append(Card(color=color, value="0"))
        for n in range(1, 10):
            cards.append(Card(color=color, value=str(n)))
            cards.append(Card(color=color, value=str(n)))
        if variant == RuleVariant.CLASSIC:
            for value in ACTION_VALUES:
                cards.append(Card(color=color, value=value))
                cards.append(Card(color=color, value=value))

    if variant == RuleVariant.CLASSIC:
        for _ in range(4):
            cards.append(Card(color=None, value=WILD))

    return shuffle(cards, rng=_rng(rng, seed))


def shuffle(cards: Sequence[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Return a new uniformly shuffled list (Fisher-Yates via random.shuffle)."""
    shuffled = list(cards)
    _rng(rng).shuffle(shuffled)
    return shuffled


def draw_one(
    draw_pile: Sequence[Card],
    discard_pile: Sequence[Card],
    rng: Optional[random.Random] = None,
) -> Tuple[Card, Tuple[Card, ...], Tuple[Card, ...]]:
    """Take the front card of the draw pile.

    When the draw pile is empty, everything under the discard top is shuffled
    into a fresh draw pile and the top card stays where it is.

    Returns:
        (card, new_draw_pile, new_discard_pile)

    Raises:
        DeckExhausted: both piles together hold no drawable card.
    """
    draw = tuple(draw_pile)
    discard = tuple(discard_pile)
    if not draw:
        if len(discard) <= 1:
            raise DeckExhausted("No cards to draw")
        draw = tuple(shuffle(discard[:-1], rng=rng))
        discard = discard[-1:]
    return draw[0], draw[1:], discard
