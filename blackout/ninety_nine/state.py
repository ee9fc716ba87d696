"""99 phases, rules and card effects."""

from dataclasses import dataclass, field
from enum import Enum, auto

from blackout.cards import Card, Rank
from blackout.penalty import PenaltyResult


class NinetyNinePhase(Enum):
    """99 state machine states."""

    PLAYING = auto()
    ENDED = auto()

    def __str__(self) -> str:
        return self.name.title()


class CardEffect(Enum):
    """What playing a rank does to the running total."""

    REVERSE = auto()        # 4: direction flips, adds nothing
    PASS = auto()           # 9: adds nothing
    MINUS_TEN = auto()      # 10
    SET_TO_LIMIT = auto()   # K: total jumps straight to the limit
    ACE_CHOICE = auto()     # A: 1 or 11, chosen by the player
    PLUS_TEN = auto()       # J, Q
    FACE_VALUE = auto()     # 2-3, 5-8


_EFFECTS: dict[Rank, CardEffect] = {
    Rank.FOUR: CardEffect.REVERSE,
    Rank.NINE: CardEffect.PASS,
    Rank.TEN: CardEffect.MINUS_TEN,
    Rank.KING: CardEffect.SET_TO_LIMIT,
    Rank.ACE: CardEffect.ACE_CHOICE,
    Rank.JACK: CardEffect.PLUS_TEN,
    Rank.QUEEN: CardEffect.PLUS_TEN,
}

ACE_VALUES = (1, 11)


def effect_for(rank: Rank) -> CardEffect:
    """Classify a rank for the 99 game."""
    return _EFFECTS.get(rank, CardEffect.FACE_VALUE)


def card_value(card: Card, ace_value: int = 1) -> int:
    """
    Amount a card adds to the total.

    Reverse, pass and king contribute 0 here; the king's reset is applied
    separately.
    """
    effect = effect_for(card.rank)
    if effect in (CardEffect.REVERSE, CardEffect.PASS, CardEffect.SET_TO_LIMIT):
        return 0
    if effect == CardEffect.MINUS_TEN:
        return -10
    if effect == CardEffect.PLUS_TEN:
        return 10
    if effect == CardEffect.ACE_CHOICE:
        if ace_value not in ACE_VALUES:
            raise ValueError(f"Ace value must be 1 or 11, got {ace_value}")
        return ace_value
    return card.rank.pip


@dataclass(frozen=True)
class NinetyNineRules:
    """Table rules for 99."""

    limit: int = 99
    starting_lives: int = 3
    hand_size: int = 3

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise ValueError("limit must be positive")
        if self.starting_lives < 1:
            raise ValueError("starting_lives must be at least 1")
        if not 1 <= self.hand_size <= 6:
            raise ValueError("hand_size must be between 1 and 6")

    def would_exceed(self, total: int, card: Card, ace_value: int = 1) -> bool:
        """A king never busts; anything else busts when it takes the total past the limit."""
        if effect_for(card.rank) == CardEffect.SET_TO_LIMIT:
            return False
        return total + card_value(card, ace_value) > self.limit


@dataclass
class NinetyNinePlayer:
    """Player holding a hand in the 99 game."""

    id: str
    name: str
    hand: list[Card] = field(default_factory=list)
    lives: int = 3
    is_out: bool = False


@dataclass(frozen=True)
class PlayResult:
    """
    Outcome of ``play_card``.

    Attributes:
        legal: False when the card would have taken the total past the limit
        card: The card the player tried to play
        total: Running total after the play
        penalty: Drink owed by the player on an illegal play
        eliminated: The player lost their last life
        game_over: One or no active player remains
    """

    legal: bool
    card: Card
    total: int
    penalty: PenaltyResult | None = None
    eliminated: bool = False
    game_over: bool = False
