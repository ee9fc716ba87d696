"""Borderland phases, suit rules and contest state."""

from dataclasses import dataclass
from enum import Enum, auto

from blackout.cards import Card, Suit
from blackout.players import Player


class BorderlandPhase(Enum):
    """
    Borderland state machine states.

    Flow: IDLE → CARD_DRAWN → [CONTEST] → RESOLVED → IDLE, ENDED once the deck runs out.
    """

    IDLE = auto()
    CARD_DRAWN = auto()
    CONTEST = auto()
    RESOLVED = auto()
    ENDED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class RuleKind(Enum):
    """Rule attached to a suit. The wording is owned by the content layer."""

    GUESS = "guess"
    ACTION = "action"
    QUESTION = "question"
    DARE = "dare"


SUIT_RULES: dict[Suit, RuleKind] = {
    Suit.CLUBS: RuleKind.GUESS,
    Suit.DIAMONDS: RuleKind.ACTION,
    Suit.HEARTS: RuleKind.QUESTION,
    Suit.SPADES: RuleKind.DARE,
}

# Contest multipliers by level
CONTEST_MULTIPLIERS: dict[int, int] = {0: 1, 1: 1, 2: 2, 3: 4}
MAX_CONTEST_LEVEL = 3


def rule_for(card: Card) -> RuleKind:
    """Rule kind associated with the card's suit."""
    return SUIT_RULES[card.suit]


def requires_reveal(card: Card) -> bool:
    """Clubs are drawn face down for the guessing rule."""
    return rule_for(card) == RuleKind.GUESS


@dataclass
class ContestState:
    """Current state of a contest (duel)."""

    active: bool = False
    level: int = 0
    base_card: Card | None = None
    challenger: Player | None = None

    @property
    def multiplier(self) -> int:
        return CONTEST_MULTIPLIERS[self.level]

    @property
    def can_escalate(self) -> bool:
        return self.active and self.level < MAX_CONTEST_LEVEL

    def clear(self) -> None:
        self.active = False
        self.level = 0
        self.base_card = None
        self.challenger = None
