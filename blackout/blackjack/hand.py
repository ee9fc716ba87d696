"""Hand evaluation for blackjack."""

from dataclasses import dataclass
from typing import Iterable, Iterator

from blackout.cards import Card, Rank

BLACKJACK = 21


def card_points(card: Card) -> int:
    """Point value of a card with the ace counted high."""
    if card.rank == Rank.ACE:
        return 11
    if card.rank.is_face:
        return 10
    return card.rank.pip


@dataclass(frozen=True)
class BlackjackHand:
    """
    A blackjack hand. Every field is derived from ``cards``.

    Build with ``calculate_hand_value`` and grow with ``with_card``.
    """

    cards: tuple[Card, ...] = ()
    value: int = 0
    is_soft: bool = False
    is_blackjack: bool = False
    is_busted: bool = False

    def with_card(self, card: Card) -> "BlackjackHand":
        """Return a new hand including ``card``."""
        return calculate_hand_value((*self.cards, card))

    @property
    def num_cards(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = " ".join(str(card) for card in self.cards)
        value_str = f"({self.value})"
        if self.is_soft:
            value_str = f"(soft {self.value})"
        if self.is_blackjack:
            value_str = "(BLACKJACK)"
        if self.is_busted:
            value_str = "(BUST)"
        return f"{cards_str} {value_str}"


def calculate_hand_value(cards: Iterable[Card]) -> BlackjackHand:
    """
    Value a hand with soft-ace handling.

    Aces start at 11 and drop to 1, one at a time, while the total is over 21.
    The hand is soft when an ace is still counted as 11 afterwards.
    """
    cards = tuple(cards)
    value = 0
    aces = 0

    for card in cards:
        if card.rank == Rank.ACE:
            aces += 1
        value += card_points(card)

    # Reduce aces from 11 to 1 as needed
    while value > BLACKJACK and aces > 0:
        value -= 10
        aces -= 1

    return BlackjackHand(
        cards=cards,
        value=value,
        is_soft=aces > 0 and value <= BLACKJACK,
        is_blackjack=len(cards) == 2 and value == BLACKJACK,
        is_busted=value > BLACKJACK,
    )


EMPTY_HAND = BlackjackHand()
