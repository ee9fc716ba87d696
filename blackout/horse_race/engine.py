"""Horse race betting game: the four aces race, one step per drawn card of their suit."""

from dataclasses import dataclass
from enum import Enum, auto
from random import Random

from blackout.base import GameEngine
from blackout.cards import Card, Deck, RandomSource, Suit, Unit, borderland_value, create_deck, shuffle
from blackout.events import EventType
from blackout.penalty import PenaltyKind, PenaltyResult
from blackout.schemas import CardSchema, HorseBetSchema, HorseRaceSnapshot


class HorseRacePhase(Enum):
    """
    Horse race states.

    Flow: BETTING → RACING → RESULT
    """

    BETTING = auto()
    RACING = auto()
    RESULT = auto()


@dataclass(frozen=True)
class HorseBet:
    """Sips wagered by a player on one horse."""

    player_id: str
    player_name: str
    horse: Suit
    amount: int


def race_deck(rng: RandomSource | None = None) -> Deck:
    """A shuffled single deck without aces."""
    cards = [c for c in create_deck(1, borderland_value) if not c.is_ace]
    return Deck(shuffle(cards, rng))


class HorseRaceGame(GameEngine):
    """Players bet on a suit; the first horse to the finish wins."""

    NAME = "horse_race"
    PHASES = HorseRacePhase
    INITIAL = "betting"
    TRANSITIONS = [
        {"trigger": "start_running", "source": "betting", "dest": "racing"},
        {"trigger": "cross_line", "source": "racing", "dest": "result"},
        {"trigger": "restart", "source": "*", "dest": "betting"},
    ]

    def __init__(
        self,
        finish_position: int = 7,
        rng: RandomSource | None = None,
        deck: Deck | None = None,
    ) -> None:
        if finish_position < 1:
            raise ValueError("finish_position must be at least 1")
        self.finish_position = finish_position
        self._rng = rng or Random()
        super().__init__()
        self._setup(deck)

    def _setup(self, deck: Deck | None = None) -> None:
        self.deck = deck if deck is not None else race_deck(self._rng)
        self.bets: list[HorseBet] = []
        self.positions: dict[Suit, int] = {suit: 0 for suit in Suit}
        self.current_card: Card | None = None
        self.drawn_cards: list[Card] = []
        self.winner: Suit | None = None

    def place_bet(self, player_id: str, player_name: str, horse: Suit, amount: int) -> HorseBet:
        """Bet on a horse, replacing any earlier bet by the same player."""
        self._require(HorseRacePhase.BETTING, action="bet")
        if amount < 1:
            self._reject(f"Bet must be at least 1, got {amount}")

        bet = HorseBet(player_id, player_name, horse, amount)
        self.bets = [b for b in self.bets if b.player_id != player_id]
        self.bets.append(bet)
        self.events.emit_new(EventType.BET_PLACED, player=player_name, horse=horse.value, amount=amount)
        return bet

    def remove_bet(self, player_id: str) -> None:
        self._require(HorseRacePhase.BETTING, action="remove a bet")
        self.bets = [b for b in self.bets if b.player_id != player_id]
        self.events.emit_new(EventType.BET_REMOVED, player_id=player_id)

    def start_race(self) -> None:
        """Close the betting; at least one bet is needed."""
        self._require(HorseRacePhase.BETTING, action="start the race")
        if not self.bets:
            self._reject("Cannot start a race without bets")
        self.events.emit_new(EventType.RACE_STARTED, bets=len(self.bets))
        self.start_running()

    def draw_next_card(self) -> Card | None:
        """
        Advance the horse matching the drawn card's suit.

        Returns:
            The drawn card, or None when the deck ran out (race over, no winner)
        """
        self._require(HorseRacePhase.RACING, action="draw a card")
        if self.deck.is_empty:
            self.events.emit_new(EventType.DECK_EXHAUSTED)
            self.cross_line()
            return None

        card = self.deck.draw()
        self.current_card = card
        self.drawn_cards.append(card)
        self.positions[card.suit] += 1
        self.events.emit_new(
            EventType.HORSE_ADVANCED,
            horse=card.suit.value,
            position=self.positions[card.suit],
        )

        if self.positions[card.suit] >= self.finish_position:
            self.winner = card.suit
            self.events.emit_new(EventType.RACE_WON, horse=card.suit.value)
            self.cross_line()
        return card

    def horse_position(self, horse: Suit) -> int:
        return self.positions[horse]

    def calculate_results(self) -> list[PenaltyResult]:
        """Winning bettors hand out their sips, everybody else drinks theirs."""
        if self.winner is None:
            return []
        return [
            PenaltyResult(
                amount=bet.amount,
                unit=Unit.SIPS,
                kind=PenaltyKind.GIVE if bet.horse == self.winner else PenaltyKind.DRINK,
                recipient=bet.player_id,
            )
            for bet in self.bets
        ]

    def reset_game(self) -> None:
        self.restart()
        self._setup()

    def snapshot(self) -> HorseRaceSnapshot:
        return HorseRaceSnapshot(
            phase=self.state.name.lower(),
            bets=[
                HorseBetSchema(
                    player_id=b.player_id,
                    player_name=b.player_name,
                    horse=b.horse.value,
                    amount=b.amount,
                )
                for b in self.bets
            ],
            positions={suit.value: pos for suit, pos in self.positions.items()},
            finish_position=self.finish_position,
            current_card=CardSchema.from_card(self.current_card) if self.current_card else None,
            winner=self.winner.value if self.winner else None,
            cards_remaining=self.deck.cards_remaining,
        )
