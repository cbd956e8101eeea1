"""Cards of the Spanish-suited truco deck and the deck they are drawn from."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Mapping

# Power value (0 = weakest, 9 = strongest) to the number printed on the card.
_NUMBER_BY_VALUE = {
    0: 4,
    1: 5,
    2: 6,
    3: 7,
    4: 9,
    5: 8,
    6: 10,
    7: 1,
    8: 2,
    9: 3,
}

CARD_VALUES = range(10)


class Suit(IntEnum):
    """Card suits; the numeric value is also the suit's strength as a trump."""

    DIAMONDS = 1
    SPADES = 2
    HEARTS = 3
    CLUBS = 4


@dataclass(frozen=True)
class Card:
    """A card identified by its power value (0..9) and suit."""

    value: int
    suit: Suit

    def number(self) -> int:
        """Return the number printed on the card."""
        try:
            return _NUMBER_BY_VALUE[self.value]
        except KeyError:
            raise ValueError(f"card value out of range: {self.value}") from None

    def to_dict(self) -> dict[str, int]:
        """Return the card as a JSON-ready mapping."""
        return {"value": self.value, "suit": int(self.suit)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Card:
        """Build a card from a mapping holding ``value`` and ``suit``."""
        return cls(int(data["value"]), Suit(int(data["suit"])))


class Deck:
    """A full 40-card deck from which cards are drawn at random."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._cards: list[Card] = []
        self.reset()

    def __len__(self) -> int:
        return len(self._cards)

    def pop(self) -> Card:
        """Remove and return a randomly chosen card."""
        if not self._cards:
            raise IndexError("attempted to draw a card from an empty deck")
        return self._cards.pop(self._rng.randrange(len(self._cards)))

    def push(self, card: Card) -> None:
        """Put a card back into the deck."""
        self._cards.append(card)

    def reset(self) -> None:
        """Refill the deck with all forty cards."""
        self._cards = [
            Card(value, suit)
            for value in CARD_VALUES
            for suit in (Suit.CLUBS, Suit.SPADES, Suit.DIAMONDS, Suit.HEARTS)
        ]