"""Blackout party-game engines - 100% UI-agnostic."""

from blackout.cards import Card, Deck, Rank, Suit, Unit, create_deck, draw_top, shuffle
from blackout.errors import BlackoutError, EmptyDeckError, InvalidOperationError
from blackout.penalty import PenaltyKind, PenaltyResult
from blackout.players import Player, Roster, create_players

__all__ = [
    "BlackoutError",
    "Card",
    "Deck",
    "EmptyDeckError",
    "InvalidOperationError",
    "PenaltyKind",
    "PenaltyResult",
    "Player",
    "Rank",
    "Roster",
    "Suit",
    "Unit",
    "create_deck",
    "create_players",
    "draw_top",
    "shuffle",
]
