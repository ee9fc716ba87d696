"""Borderland rule-card game."""

from blackout.borderland.state import (
    CONTEST_MULTIPLIERS,
    SUIT_RULES,
    BorderlandPhase,
    ContestState,
    RuleKind,
    requires_reveal,
    rule_for,
)
from blackout.borderland.engine import BorderlandGame, calculate_penalty, contest_multiplier

__all__ = [
    "CONTEST_MULTIPLIERS",
    "SUIT_RULES",
    "BorderlandGame",
    "BorderlandPhase",
    "ContestState",
    "RuleKind",
    "calculate_penalty",
    "contest_multiplier",
    "requires_reveal",
    "rule_for",
]
