"""A player and the cards in their hand."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .cards import Card


@dataclass
class Player:
    """A seat at the table holding up to three cards."""

    player_id: int
    name: str
    hand: list[Card] = field(default_factory=list)

    def pop_card(self, index: int) -> Card:
        """Remove and return the card at ``index`` in the hand."""
        return self.hand.pop(index)

    def set_hand(self, cards: Iterable[Card]) -> None:
        """Replace the hand with the given cards."""
        self.hand = list(cards)

    def clear_hand(self) -> None:
        """Drop every card from the hand."""
        self.hand.clear()