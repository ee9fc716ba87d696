"""Drinking blackjack."""

from blackout.blackjack.hand import BlackjackHand, calculate_hand_value
from blackout.blackjack.rules import BlackjackRules
from blackout.blackjack.state import (
    BlackjackPhase,
    BlackjackPlayer,
    Dealer,
    Outcome,
    RoundSummary,
    Settlement,
)
from blackout.blackjack.engine import BlackjackGame, settle

__all__ = [
    "BlackjackGame",
    "BlackjackHand",
    "BlackjackPhase",
    "BlackjackPlayer",
    "BlackjackRules",
    "Dealer",
    "Outcome",
    "RoundSummary",
    "Settlement",
    "calculate_hand_value",
    "settle",
]
