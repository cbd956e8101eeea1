"""Card face descriptions and the image paths used to draw them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

DEFAULT_TEXTURE_PATH = "../../../../TrucoGame/resources/images/cards/"
CARD_BACK_TEXTURE_PATH = "../../../../TrucoGame/resources/images/cards/cardBack.png"
IMAGE_EXTENSION = ".png"


class CardRank(IntEnum):
    """Ranks as printed on a card; BACK stands for a face-down card."""

    BACK = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    JACK = 8
    QUEEN = 9
    KING = 10


class CardSuit(IntEnum):
    """Suits of the drawn cards."""

    DIAMONDS = 1
    SPADES = 2
    HEARTS = 3
    CLUBS = 4


class CardIndex(IntEnum):
    """Position of a card within a hand."""

    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


@dataclass(frozen=True)
class CardFace:
    """What a card shows: its rank and suit, and where it sits in a hand."""

    rank: CardRank
    suit: CardSuit
    index: CardIndex = CardIndex.LEFT


_RANK_NAMES = {
    CardRank.BACK: "cardBack",
    CardRank.ACE: "ace",
    CardRank.JACK: "jack",
    CardRank.QUEEN: "queen",
    CardRank.KING: "king",
}


def _rank_name(rank: CardRank) -> str:
    return _RANK_NAMES.get(rank, str(int(rank)))


def find_texture_path(face: CardFace) -> str:
    """Return the image path for a card face."""
    if face.rank == CardRank.BACK:
        return CARD_BACK_TEXTURE_PATH
    return f"{DEFAULT_TEXTURE_PATH}{face.suit.name.lower()}/{_rank_name(face.rank)}{IMAGE_EXTENSION}"


def text_position_in_button(
    x: float, y: float, width: float, height: float, text_width: float, text_height: float
) -> tuple[float, float]:
    """Return the top-left position that centres a text inside a button."""
    text_x = x + (width - text_width) / 2
    text_y = y + (height - text_height) / 2 - 0.2 * text_height
    return text_x, text_y