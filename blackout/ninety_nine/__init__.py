"""The 99 counting game."""

from blackout.ninety_nine.state import (
    CardEffect,
    NinetyNinePhase,
    NinetyNinePlayer,
    NinetyNineRules,
    PlayResult,
    card_value,
    effect_for,
)
from blackout.ninety_nine.engine import NinetyNineGame

__all__ = [
    "CardEffect",
    "NinetyNineGame",
    "NinetyNinePhase",
    "NinetyNinePlayer",
    "NinetyNineRules",
    "PlayResult",
    "card_value",
    "effect_for",
]
