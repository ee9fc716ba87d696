"""Pytest fixtures for the Blackout engine tests."""

import pytest
from random import Random

from blackout.blackjack import BlackjackGame
from blackout.borderland import BorderlandGame
from blackout.cards import Card, Deck, blackjack_value, borderland_value, ninety_nine_value
from blackout.ninety_nine import NinetyNineGame


class IdentityRandom:
    """Random source that makes Fisher-Yates leave the order untouched."""

    def randint(self, a, b):
        return b


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def identity_rng():
    """Random source producing the identity permutation."""
    return IdentityRandom()


@pytest.fixture
def make_deck():
    """Factory building a stacked deck from codes like 'KS', '10H'."""

    def _make(*codes, rank_value=borderland_value):
        return Deck(
            Card.from_string(code, rank_value, deck_index=i)
            for i, code in enumerate(codes)
        )

    return _make


@pytest.fixture
def names():
    """Three player names."""
    return ["Alice", "Bob", "Chloe"]


@pytest.fixture
def borderland(names, rng):
    """A Borderland game on a shuffled deck."""
    return BorderlandGame(names, rng=rng)


@pytest.fixture
def blackjack(names, rng):
    """A blackjack game on a shuffled 6-deck shoe."""
    return BlackjackGame(names, rng=rng)


@pytest.fixture
def ninety_nine(names, rng):
    """A 99 game on a shuffled deck."""
    return NinetyNineGame(names, rng=rng)


@pytest.fixture
def bj_card():
    """Factory for blackjack-valued cards."""

    def _card(code):
        return Card.from_string(code, blackjack_value)

    return _card


@pytest.fixture
def nn_card():
    """Factory for 99-valued cards."""

    def _card(code):
        return Card.from_string(code, ninety_nine_value)

    return _card
