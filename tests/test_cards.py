import random

import pytest

from truco.cards import CARD_VALUES, Card, Deck, Suit


def test_new_deck_holds_forty_distinct_cards():
    deck = Deck(random.Random(1))
    drawn = [deck.pop() for _ in range(len(deck))]
    assert len(drawn) == 40
    assert len(set(drawn)) == len(drawn)
    assert set(drawn) == {Card(v, s) for v in CARD_VALUES for s in Suit}


def test_pop_removes_card_from_deck():
    deck = Deck(random.Random(2))
    before = len(deck)
    card = deck.pop()
    assert len(deck) == before - 1
    remaining = [deck.pop() for _ in range(len(deck))]
    assert card not in remaining


def test_pop_on_empty_deck_raises():
    deck = Deck(random.Random(3))
    while len(deck):
        deck.pop()
    with pytest.raises(IndexError):
        deck.pop()


def test_push_adds_card():
    deck = Deck(random.Random(4))
    card = deck.pop()
    size = len(deck)
    deck.push(card)
    assert len(deck) == size + 1


def test_reset_restores_full_deck():
    deck = Deck(random.Random(5))
    full = len(deck)
    for _ in range(7):
        deck.pop()
    deck.reset()
    assert len(deck) == full


def test_same_seed_draws_same_sequence():
    a = Deck(random.Random(42))
    b = Deck(random.Random(42))
    assert [a.pop() for _ in range(10)] == [b.pop() for _ in range(10)]


def test_number_pins_values_from_the_card_table():
    assert Card(7, Suit.CLUBS).number() == 1
    assert Card(4, Suit.HEARTS).number() == 9


def test_numbers_are_distinct_across_values():
    numbers = [Card(v, Suit.SPADES).number() for v in CARD_VALUES]
    assert len(set(numbers)) == len(numbers)


def test_number_out_of_range_raises():
    with pytest.raises(ValueError):
        Card(10, Suit.CLUBS).number()


def test_to_dict_uses_suit_number():
    assert Card(7, Suit.HEARTS).to_dict() == {"value": 7, "suit": int(Suit.HEARTS)}


@pytest.mark.parametrize("suit", list(Suit))
@pytest.mark.parametrize("value", list(CARD_VALUES))
def test_dict_round_trip(value, suit):
    card = Card(value, suit)
    assert Card.from_dict(card.to_dict()) == card


def test_from_dict_missing_key_raises():
    with pytest.raises(KeyError):
        Card.from_dict({"value": 3})


def test_from_dict_invalid_suit_raises():
    with pytest.raises(ValueError):
        Card.from_dict({"value": 3, "suit": 9})