"""Card and Deck primitives shared by every game."""

from dataclasses import dataclass
from enum import Enum
from random import Random
from typing import Callable, Iterable, Iterator, Protocol, Sequence

from blackout.errors import EmptyDeckError


class RandomSource(Protocol):
    """Anything able to pick an integer in [a, b]. ``random.Random`` qualifies."""

    def randint(self, a: int, b: int) -> int: ...


class Suit(Enum):
    """Card suits."""

    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    def __str__(self) -> str:
        symbols = {
            Suit.CLUBS: "♣",
            Suit.DIAMONDS: "♦",
            Suit.HEARTS: "♥",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Hearts and diamonds are red."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks from Ace to King."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def is_ace(self) -> bool:
        """Check if this rank is an Ace."""
        return self == Rank.ACE

    @property
    def is_face(self) -> bool:
        """Check if this rank is a Jack, Queen or King."""
        return self in (Rank.JACK, Rank.QUEEN, Rank.KING)

    @property
    def pip(self) -> int:
        """Numeric face for 2-10, 1 for Ace, 11/12/13 for J/Q/K."""
        if self.is_ace:
            return 1
        if self.is_face:
            return {Rank.JACK: 11, Rank.QUEEN: 12, Rank.KING: 13}[self]
        return int(self.value)


class Unit(Enum):
    """Penalty unit carried by a card."""

    SIPS = "sips"
    SHOT = "shot"

    def __str__(self) -> str:
        return self.value


# Rank -> value strategies. Each game brings its own.
RankValue = Callable[[Rank], int]


def borderland_value(rank: Rank) -> int:
    """A=1, 2-10 face value, J/Q/K=10."""
    if rank.is_face:
        return 10
    return rank.pip


def blackjack_value(rank: Rank) -> int:
    """A=11, 2-10 face value, J/Q/K=10."""
    if rank.is_ace:
        return 11
    if rank.is_face:
        return 10
    return rank.pip


def pip_value(rank: Rank) -> int:
    """A=1, 2-10 face value, J=11, Q=12, K=13."""
    return rank.pip


# 99 keeps the plain pips; its special effects are applied by the engine
ninety_nine_value = pip_value


def unit_for(rank: Rank) -> Unit:
    """Aces are worth a shot, everything else is counted in sips."""
    return Unit.SHOT if rank.is_ace else Unit.SIPS


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    id: str
    suit: Suit
    rank: Rank
    value: int
    unit: Unit

    def __post_init__(self) -> None:
        if self.unit != unit_for(self.rank):
            raise ValueError(
                f"Card {self.id}: unit must be {unit_for(self.rank)} for rank {self.rank}"
            )

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name}, value={self.value})"

    @property
    def is_ace(self) -> bool:
        """Check if this card is an Ace."""
        return self.rank.is_ace

    @classmethod
    def build(
        cls,
        rank: Rank,
        suit: Suit,
        rank_value: RankValue = borderland_value,
        deck_index: int = 0,
    ) -> "Card":
        """Create a card with its id, value and unit derived from rank and suit."""
        return cls(
            id=f"{suit.value}-{rank.value}-{deck_index}",
            suit=suit,
            rank=rank,
            value=rank_value(rank),
            unit=unit_for(rank),
        )

    @classmethod
    def from_string(
        cls,
        s: str,
        rank_value: RankValue = borderland_value,
        deck_index: int = 0,
    ) -> "Card":
        """Create a card from a string like 'KS', '10h', 'A♠'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {rank.value: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls.build(rank_map[rank_str], suit_map[suit_str], rank_value, deck_index)


def create_deck(num_decks: int = 1, rank_value: RankValue = borderland_value) -> list[Card]:
    """
    Build ``52 * num_decks`` cards in suit/rank order.

    Args:
        num_decks: Number of 52-card decks to combine
        rank_value: Game-specific rank -> value mapping

    Returns:
        Ordered list of cards; ids are unique per (suit, rank, deck index)
    """
    if num_decks < 1:
        raise ValueError("A deck needs at least 1 pack of cards")

    return [
        Card.build(rank, suit, rank_value, deck_index)
        for deck_index in range(num_decks)
        for suit in Suit
        for rank in Rank
    ]


def shuffle(cards: Iterable[Card], rng: RandomSource | None = None) -> list[Card]:
    """Return a Fisher-Yates permutation of ``cards``."""
    rng = rng or Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def draw_top(cards: Sequence[Card]) -> tuple[Card, list[Card]]:
    """Take the front card, returning it with the remaining cards."""
    if not cards:
        raise EmptyDeckError("Cannot draw from empty deck")
    return cards[0], list(cards[1:])


class Deck:
    """An ordered pile of cards consumed from the front."""

    def __init__(self, cards: Iterable[Card] = ()) -> None:
        self._cards: list[Card] = list(cards)

    @classmethod
    def standard(
        cls,
        num_decks: int = 1,
        rank_value: RankValue = borderland_value,
        rng: RandomSource | None = None,
    ) -> "Deck":
        """Create a freshly shuffled deck of ``num_decks`` packs."""
        return cls(shuffle(create_deck(num_decks, rank_value), rng))

    def shuffle(self, rng: RandomSource | None = None) -> None:
        """Shuffle the remaining cards."""
        self._cards = shuffle(self._cards, rng)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise EmptyDeckError("Cannot draw from empty deck")
        return self._cards.pop(0)

    def peek(self) -> Card | None:
        """Return the top card without drawing it."""
        return self._cards[0] if self._cards else None

    def extend(self, cards: Iterable[Card]) -> None:
        """Put cards at the bottom of the deck."""
        self._cards.extend(cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def is_empty(self) -> bool:
        return not self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)
