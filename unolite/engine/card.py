"""Card and Color types for UNO Lite."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Color(str, Enum):
    """Card colors."""

    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    BLUE = "blue"


NUMBER_VALUES = ("0", "1", "2", "3", "4", "5", "6", "7", "8", "9")
ACTION_VALUES = ("skip", "reverse", "draw_two")
WILD = "wild"

CARD_VALUES = NUMBER_VALUES + ACTION_VALUES + (WILD,)


@dataclass(frozen=True)
class Card:
    """An UNO Lite card.

    For number/action cards: color is set, value is "0"-"9", "skip", "reverse", "draw_two".
    For the wild card: color is None, value is "wild".
    """

    color: Optional[Color]
    value: str

    def __post_init__(self) -> None:
        if self.value not in CARD_VALUES:
            raise ValueError(f"Invalid card value: {self.value}")
        if self.value == WILD and self.color is not None:
            raise ValueError("Wild cards must have color=None")
        if self.value != WILD and self.color is None:
            raise ValueError("Non-wild cards must have a color")

    @property
    def kind(self) -> str:
        """One of "number", "action" or "wild"."""
        if self.value in NUMBER_VALUES:
            return "number"
        if self.value in ACTION_VALUES:
            return "action"
        return "wild"

    @property
    def is_wild(self) -> bool:
        return self.value == WILD

    def __str__(self) -> str:
        if self.color is None:
            return self.value
        return f"{self.color.value}_{self.value}"
