"""The table where the cards of a turn are played and compared."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .cards import Card

logger = logging.getLogger(__name__)

MAX_PLAYED_CARDS = 4
NO_PLAYER = -1


@dataclass
class PlayedCard:
    """A card put on the table by a player, face up or covered."""

    player_id: int
    card: Card
    is_covered: bool


@dataclass
class Table:
    """Holds the cards of the current turn and the trump (manilha) value."""

    played_cards: list[PlayedCard] = field(default_factory=list)
    _manilha_value: int = field(default=-1, repr=False)
    _played_count: int = field(default=0, repr=False)

    def place_card(self, card: Card, player_id: int, is_covered: bool) -> None:
        """Put a card on the table; ignored once four cards have been played."""
        if self._played_count >= MAX_PLAYED_CARDS:
            return
        self.played_cards.append(PlayedCard(player_id, card, is_covered))
        self._played_count += 1

    def set_table_card(self, card: Card) -> None:
        """Turn up the card that decides which value is the manilha."""
        self._manilha_value = (card.value + 1) % 10

    def _actual_value(self, played: PlayedCard) -> int:
        base = played.card.value
        if self._manilha_value == -1:
            return base
        if played.is_covered:
            return -1
        if base == self._manilha_value:
            return base + 10 * int(played.card.suit)
        return base

    def calculate_winner(self) -> int:
        """Return the id of the player with the strongest card, or -1 on a tie."""
        if not self.played_cards:
            raise ValueError("no cards have been played")
        first = self.played_cards[0]
        winning_card = first
        winner_id = first.player_id
        for played in self.played_cards[1:]:
            new_value = self._actual_value(played)
            old_value = self._actual_value(winning_card)
            if new_value > old_value:
                winning_card = played
                winner_id = played.player_id
            elif new_value == old_value:
                winner_id = NO_PLAYER
        logger.debug(
            "turn winner %d with %d of suit %d",
            winner_id,
            winning_card.card.value,
            int(winning_card.card.suit),
        )
        self._played_count = 0
        return winner_id

    def clear(self) -> None:
        """Remove every card from the table."""
        self.played_cards.clear()
        self._played_count = 0