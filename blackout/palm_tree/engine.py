"""Palm tree reveal game: a circle of face-down cards around a trunk card."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random

from blackout.base import GameEngine
from blackout.cards import Card, Deck, RandomSource, Unit, pip_value
from blackout.events import EventType
from blackout.penalty import PenaltyKind, PenaltyResult
from blackout.schemas import CardSchema, PalmTreeSlotSchema, PalmTreeSnapshot, PenaltySchema

MIN_CIRCLE_CARDS = 6
MAX_CIRCLE_CARDS = 12
TRUNK_MULTIPLIER = 2


class PalmTreePhase(Enum):
    """
    Palm tree states.

    Flow: PLAYING → TRUNK → ENDED
    """

    PLAYING = auto()
    TRUNK = auto()
    ENDED = auto()


@dataclass
class CircleSlot:
    """A card in the circle."""

    position: int
    card: Card
    is_drawn: bool = False


def is_red(card: Card) -> bool:
    """Red cards make you drink, black cards let you give."""
    return card.suit.is_red


def action_for(card: Card, multiplier: int = 1) -> PenaltyResult:
    kind = PenaltyKind.DRINK if is_red(card) else PenaltyKind.GIVE
    return PenaltyResult(amount=card.value * multiplier, unit=Unit.SIPS, kind=kind)


class PalmTreeGame(GameEngine):
    """Draw the circle cards in any order, then reveal the trunk for double stakes."""

    NAME = "palm_tree"
    PHASES = PalmTreePhase
    INITIAL = "playing"
    TRANSITIONS = [
        {"trigger": "circle_done", "source": "playing", "dest": "trunk"},
        {"trigger": "trunk_done", "source": "trunk", "dest": "ended"},
        {"trigger": "restart", "source": "*", "dest": "playing"},
    ]

    def __init__(
        self,
        card_count: int = 10,
        rng: RandomSource | None = None,
        deck: Deck | None = None,
    ) -> None:
        self.card_count = min(max(card_count, MIN_CIRCLE_CARDS), MAX_CIRCLE_CARDS)
        self._rng = rng or Random()
        super().__init__()
        self._layout(deck)

    def _layout(self, deck: Deck | None = None) -> None:
        deck = deck if deck is not None else Deck.standard(1, pip_value, self._rng)
        self.circle = [CircleSlot(position=i, card=deck.draw()) for i in range(self.card_count)]
        self.trunk_card = deck.draw()
        self.is_trunk_revealed = False
        self.current_card: Card | None = None
        self.drawn_cards: list[Card] = []
        self.last_action: PenaltyResult | None = None

    @property
    def remaining_circle_cards(self) -> int:
        return sum(1 for slot in self.circle if not slot.is_drawn)

    def draw_circle_card(self, position: int) -> PenaltyResult:
        """Turn over the circle card at ``position``."""
        self._require(PalmTreePhase.PLAYING, action="draw a circle card")
        slot = next((s for s in self.circle if s.position == position and not s.is_drawn), None)
        if slot is None:
            self._reject(f"No face-down card at position {position}")

        slot.is_drawn = True
        self.current_card = slot.card
        self.drawn_cards.append(slot.card)
        self.last_action = action_for(slot.card)
        self.events.emit_new(
            EventType.CARD_DRAWN,
            card=str(slot.card),
            position=position,
            action=self.last_action.kind.value,
            amount=self.last_action.amount,
        )

        if self.remaining_circle_cards == 0:
            self.circle_done()
        return self.last_action

    def reveal_trunk(self) -> PenaltyResult:
        """Reveal the trunk card; its stake is doubled."""
        self._require(PalmTreePhase.TRUNK, action="reveal the trunk")
        self.is_trunk_revealed = True
        self.current_card = self.trunk_card
        self.last_action = action_for(self.trunk_card, TRUNK_MULTIPLIER)
        self.events.emit_new(
            EventType.TRUNK_REVEALED,
            card=str(self.trunk_card),
            action=self.last_action.kind.value,
            amount=self.last_action.amount,
        )
        self.events.emit_new(EventType.GAME_ENDED)
        self.trunk_done()
        return self.last_action

    def reset_game(self) -> None:
        self.restart()
        self._layout()

    def snapshot(self) -> PalmTreeSnapshot:
        return PalmTreeSnapshot(
            phase=self.state.name.lower(),
            circle=[
                PalmTreeSlotSchema(
                    position=slot.position,
                    is_drawn=slot.is_drawn,
                    card=CardSchema.from_card(slot.card) if slot.is_drawn else None,
                )
                for slot in self.circle
            ],
            trunk_card=CardSchema.from_card(self.trunk_card) if self.is_trunk_revealed else None,
            is_trunk_revealed=self.is_trunk_revealed,
            last_action=PenaltySchema.from_result(self.last_action) if self.last_action else None,
        )
