"""Pydantic snapshots of engine state for the presentation layer."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from blackout.cards import Card
from blackout.penalty import PenaltyResult


class CardSchema(BaseModel):
    """Card representation."""

    id: str
    suit: str
    rank: str
    value: int
    unit: Literal["sips", "shot"]

    @classmethod
    def from_card(cls, card: Card) -> "CardSchema":
        return cls(
            id=card.id,
            suit=card.suit.value,
            rank=card.rank.value,
            value=card.value,
            unit=card.unit.value,
        )


class PlayerSchema(BaseModel):
    """Generic player record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    active: bool = True


class PenaltySchema(BaseModel):
    """Penalty owed or handed out."""

    amount: int
    unit: Literal["sips", "shot"]
    kind: Literal["drink", "give"]
    recipient: str | None = None
    displayable: bool = True
    display_text: str

    @classmethod
    def from_result(cls, result: PenaltyResult) -> "PenaltySchema":
        return cls(
            amount=result.amount,
            unit=result.unit.value,
            kind=result.kind.value,
            recipient=result.recipient,
            displayable=result.displayable,
            display_text=result.display_text,
        )


# Borderland
class ContestSchema(BaseModel):
    """Contest (duel) state."""

    active: bool
    level: int = Field(..., ge=0, le=3)
    base_card: CardSchema | None = None
    challenger_id: str | None = None


class BorderlandSnapshot(BaseModel):
    """Borderland table state. A face-down card is not disclosed."""

    phase: str
    players: list[PlayerSchema]
    current_player_index: int
    current_card: CardSchema | None
    has_current_card: bool
    is_card_revealed: bool
    rule: str | None
    contest: ContestSchema
    pending_penalty: PenaltySchema | None = None
    last_penalty: PenaltySchema | None = None
    cards_remaining: int


# Blackjack
class BlackjackHandSchema(BaseModel):
    """Hand representation."""

    cards: list[CardSchema]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_busted: bool


class BlackjackPlayerSchema(BaseModel):
    """Seat at the blackjack table."""

    id: str
    name: str
    hand: BlackjackHandSchema
    bet: int
    is_standing: bool
    has_doubled: bool
    outcome: Literal["win", "lose", "push", "blackjack"] | None = None
    penalty: PenaltySchema | None = None


class BlackjackSnapshot(BaseModel):
    """Blackjack table state. The hole card stays hidden until revealed."""

    phase: str
    players: list[BlackjackPlayerSchema]
    current_player_index: int
    dealer_cards: list[CardSchema]
    dealer_value: int | None
    dealer_revealed: bool
    min_bet: int
    max_bet: int
    cards_remaining: int
    can_hit: bool
    can_double_down: bool


# 99
class NinetyNinePlayerSchema(BaseModel):
    """Player in the 99 game."""

    id: str
    name: str
    hand: list[CardSchema]
    lives: int = Field(..., ge=0)
    is_out: bool


class NinetyNineSnapshot(BaseModel):
    """99 table state."""

    phase: str
    players: list[NinetyNinePlayerSchema]
    current_player_index: int
    current_total: int = Field(..., ge=0)
    direction: Literal[1, -1]
    last_played_card: CardSchema | None
    loser_id: str | None
    cards_remaining: int
    discard_count: int


# Horse race
class HorseBetSchema(BaseModel):
    """A sip bet on a horse."""

    player_id: str
    player_name: str
    horse: str
    amount: int


class HorseRaceSnapshot(BaseModel):
    """Race track state."""

    phase: str
    bets: list[HorseBetSchema]
    positions: dict[str, int]
    finish_position: int
    current_card: CardSchema | None
    winner: str | None
    cards_remaining: int


# Palm tree
class PalmTreeSlotSchema(BaseModel):
    """One card of the circle; face-down cards are not disclosed."""

    position: int
    is_drawn: bool
    card: CardSchema | None = None


class PalmTreeSnapshot(BaseModel):
    """Palm tree layout state."""

    phase: str
    circle: list[PalmTreeSlotSchema]
    trunk_card: CardSchema | None
    is_trunk_revealed: bool
    last_action: PenaltySchema | None
