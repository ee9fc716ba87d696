"""Blackjack phases and per-seat state."""

from dataclasses import dataclass, field
from enum import Enum, auto

from blackout.blackjack.hand import EMPTY_HAND, BlackjackHand
from blackout.penalty import PenaltyResult


class BlackjackPhase(Enum):
    """
    Blackjack state machine states.

    Flow: BETTING → DEALING → PLAYER_TURN → DEALER_TURN → RESULT → BETTING
    """

    BETTING = auto()
    DEALING = auto()
    PLAYER_TURN = auto()
    DEALER_TURN = auto()
    RESULT = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Outcome(Enum):
    """Round outcome for one player against the dealer."""

    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    BLACKJACK = "blackjack"


@dataclass
class BlackjackPlayer:
    """A seat at the table. Everything but id and name resets each round."""

    id: str
    name: str
    hand: BlackjackHand = EMPTY_HAND
    bet: int = 0
    is_standing: bool = False
    has_doubled: bool = False
    outcome: Outcome | None = None
    penalty: PenaltyResult | None = None

    def reset(self) -> None:
        self.hand = EMPTY_HAND
        self.bet = 0
        self.is_standing = False
        self.has_doubled = False
        self.outcome = None
        self.penalty = None


@dataclass
class Dealer:
    """The dealer's hand; the second card stays hidden until revealed."""

    hand: BlackjackHand = EMPTY_HAND
    is_revealed: bool = False

    def reset(self) -> None:
        self.hand = EMPTY_HAND
        self.is_revealed = False


@dataclass(frozen=True)
class Settlement:
    """Result of one player's round."""

    player_id: str
    outcome: Outcome
    penalty: PenaltyResult


@dataclass
class RoundSummary:
    """All settlements of a round plus the dealer's final hand."""

    dealer_hand: BlackjackHand
    settlements: list[Settlement] = field(default_factory=list)

    def for_player(self, player_id: str) -> Settlement | None:
        for settlement in self.settlements:
            if settlement.player_id == player_id:
                return settlement
        return None
