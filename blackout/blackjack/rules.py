"""Blackjack table rules."""

from dataclasses import dataclass


@dataclass(frozen=True)
class BlackjackRules:
    """
    Drinking-blackjack table rules.

    Bets are counted in sips.
    """

    # Shoe configuration
    num_decks: int = 6
    reshuffle_threshold: int = 52  # Fresh shoe below this many cards

    # Betting limits (sips)
    min_bet: int = 1
    max_bet: int = 10

    # Dealer draws while below this value; soft and hard 17 are treated alike
    dealer_stand_value: int = 17

    # A natural hands out the bet times this
    blackjack_multiplier: int = 3

    def __post_init__(self) -> None:
        """Validate rule combinations."""
        if self.num_decks < 1 or self.num_decks > 8:
            raise ValueError("num_decks must be between 1 and 8")
        if self.min_bet < 1:
            raise ValueError("min_bet must be at least 1")
        if self.max_bet < self.min_bet:
            raise ValueError("max_bet must not be below min_bet")
        if self.blackjack_multiplier < 1:
            raise ValueError("blackjack_multiplier must be at least 1")
        if self.reshuffle_threshold < 0:
            raise ValueError("reshuffle_threshold cannot be negative")

    def clamp_bet(self, amount: int) -> int:
        """Bring a bet into [min_bet, max_bet]."""
        return max(self.min_bet, min(self.max_bet, amount))

    @classmethod
    def house(cls) -> "BlackjackRules":
        """Default party rules: 6-deck shoe, 1-10 sips."""
        return cls()

    @classmethod
    def single_deck(cls) -> "BlackjackRules":
        """Single deck, reshuffled once half of it is gone."""
        return cls(num_decks=1, reshuffle_threshold=26)

    @classmethod
    def high_stakes(cls) -> "BlackjackRules":
        """Bigger bets for braver tables."""
        return cls(min_bet=2, max_bet=20)
