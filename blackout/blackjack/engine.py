"""Blackjack game engine with state machine."""

from random import Random
from typing import Sequence

from blackout.base import GameEngine
from blackout.blackjack.hand import BlackjackHand
from blackout.blackjack.rules import BlackjackRules
from blackout.blackjack.state import (
    BlackjackPhase,
    BlackjackPlayer,
    Dealer,
    Outcome,
    RoundSummary,
    Settlement,
)
from blackout.cards import Card, Deck, RandomSource, Unit, blackjack_value
from blackout.events import EventType
from blackout.penalty import PenaltyKind, PenaltyResult
from blackout.players import validate_roster
from blackout.schemas import (
    BlackjackHandSchema,
    BlackjackPlayerSchema,
    BlackjackSnapshot,
    CardSchema,
    PenaltySchema,
)


def settle(player_hand: BlackjackHand, dealer_hand: BlackjackHand) -> Outcome:
    """
    Compare a player's hand to the dealer's.

    Checked in order: player bust, player natural against a non-natural,
    dealer bust, then plain totals.
    """
    if player_hand.is_busted:
        return Outcome.LOSE
    if player_hand.is_blackjack and not dealer_hand.is_blackjack:
        return Outcome.BLACKJACK
    if dealer_hand.is_busted:
        return Outcome.WIN
    if player_hand.value > dealer_hand.value:
        return Outcome.WIN
    if player_hand.value < dealer_hand.value:
        return Outcome.LOSE
    return Outcome.PUSH


class BlackjackGame(GameEngine):
    """
    Multi-player drinking blackjack using a state machine.

    Players bet sips against a dealer. The engine is synchronous: standing
    with the last player runs the dealer and settles the round immediately
    unless ``auto_dealer`` is off, in which case the caller invokes
    ``play_dealer_turn`` itself.
    """

    NAME = "blackjack"
    PHASES = BlackjackPhase
    INITIAL = "betting"
    TRANSITIONS = [
        {"trigger": "begin_deal", "source": "betting", "dest": "dealing"},
        {"trigger": "finish_deal", "source": "dealing", "dest": "player_turn"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "players_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "result"},
        {"trigger": "reopen_betting", "source": "result", "dest": "betting"},
        {"trigger": "restart", "source": "*", "dest": "betting"},
    ]

    def __init__(
        self,
        player_names: Sequence[str],
        rules: BlackjackRules | None = None,
        rng: RandomSource | None = None,
        deck: Deck | None = None,
        auto_dealer: bool = True,
    ) -> None:
        """
        Initialize a new blackjack game.

        Args:
            player_names: 2-8 display names
            rules: Table rules (uses defaults if not provided)
            rng: Random source for reproducible shuffles
            deck: Pre-arranged shoe, mainly for tests
            auto_dealer: Play the dealer as soon as every player stands
        """
        self.rules = rules or BlackjackRules()
        self._rng = rng or Random()
        self.auto_dealer = auto_dealer
        self.players: list[BlackjackPlayer] = [
            BlackjackPlayer(id=f"player-{index}", name=name)
            for index, name in enumerate(validate_roster(player_names))
        ]
        self.dealer = Dealer()
        self.deck = deck if deck is not None else self._fresh_shoe()
        self.current_player_index = 0
        self.last_summary: RoundSummary | None = None
        super().__init__()

    def _fresh_shoe(self) -> Deck:
        return Deck.standard(self.rules.num_decks, blackjack_value, self._rng)

    @property
    def current_player(self) -> BlackjackPlayer | None:
        """The player whose turn it is, if any."""
        if self.state != BlackjackPhase.PLAYER_TURN:
            return None
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def cards_remaining(self) -> int:
        return self.deck.cards_remaining

    @property
    def dealer_up_card(self) -> Card | None:
        """The dealer's face-up card."""
        return self.dealer.hand.cards[0] if self.dealer.hand.cards else None

    @property
    def can_hit(self) -> bool:
        """Check if the current player may take a card."""
        player = self.current_player
        return player is not None and not player.is_standing and not player.hand.is_busted

    @property
    def can_double_down(self) -> bool:
        """Check if the current player may double."""
        player = self.current_player
        return (
            player is not None
            and not player.is_standing
            and player.hand.num_cards == 2
            and not player.has_doubled
        )

    def place_bet(self, player_id: str, amount: int) -> int:
        """
        Set a player's bet for the coming round.

        Returns:
            The bet after clamping to the table limits
        """
        self._require(BlackjackPhase.BETTING, action="bet")
        player = self._find_player(player_id)
        player.bet = self.rules.clamp_bet(amount)
        self.events.emit_new(EventType.BET_PLACED, player=player.name, amount=player.bet)
        return player.bet

    def start_dealing(self) -> None:
        """Deal two cards to each player in seat order, then two to the dealer."""
        self._require(BlackjackPhase.BETTING, action="deal")
        self.begin_deal()

        for player in self.players:
            if player.bet == 0:
                player.bet = self.rules.min_bet
            for _ in range(2):
                self._deal_to_player(player)

        for face_up in (True, False):
            card = self._draw()
            self.dealer.hand = self.dealer.hand.with_card(card)
            self.events.emit_new(
                EventType.CARD_DEALT,
                card=str(card) if face_up else "??",
                hand="dealer",
            )

        for player in self.players:
            if player.hand.is_blackjack:
                self.events.emit_new(EventType.PLAYER_BLACKJACK, player=player.name)

        self.current_player_index = 0
        self.events.emit_new(EventType.ROUND_STARTED)
        self.finish_deal()

    def hit(self) -> BlackjackHand:
        """Current player takes another card; busting ends their turn."""
        self._require(BlackjackPhase.PLAYER_TURN, action="hit")
        player = self.current_player
        if player is None or not self.can_hit:
            self._reject("Current player cannot hit")

        card = self._deal_to_player(player)
        self.events.emit_new(EventType.PLAYER_HIT, player=player.name, card=str(card), hand_value=player.hand.value)

        if player.hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, player=player.name, hand_value=player.hand.value)
            self._finish_current_player()
        else:
            self.player_action()
        return player.hand

    def stand(self) -> None:
        """Current player keeps their hand."""
        self._require(BlackjackPhase.PLAYER_TURN, action="stand")
        player = self.current_player
        if player is None:
            self._reject("No current player")

        self.events.emit_new(EventType.PLAYER_STAND, player=player.name, hand_value=player.hand.value)
        self._finish_current_player()

    def double_down(self) -> BlackjackHand:
        """Double the bet, take exactly one card and stand."""
        self._require(BlackjackPhase.PLAYER_TURN, action="double down")
        player = self.current_player
        if player is None or not self.can_double_down:
            self._reject("Can only double on a two-card hand, once")

        player.bet *= 2
        player.has_doubled = True
        card = self._deal_to_player(player)
        self.events.emit_new(
            EventType.PLAYER_DOUBLE,
            player=player.name,
            card=str(card),
            hand_value=player.hand.value,
            new_bet=player.bet,
        )
        if player.hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, player=player.name, hand_value=player.hand.value)

        self._finish_current_player()
        return player.hand

    def play_dealer_turn(self) -> RoundSummary:
        """
        Reveal the hole card and draw while below the stand value.

        The dealer does not draw when every player has busted. Soft 17
        stands like hard 17.
        """
        self._require(BlackjackPhase.DEALER_TURN, action="play the dealer")

        self.dealer.is_revealed = True
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            cards=[str(c) for c in self.dealer.hand.cards],
            hand_value=self.dealer.hand.value,
        )

        if not all(p.hand.is_busted for p in self.players):
            while self.dealer.hand.value < self.rules.dealer_stand_value:
                card = self._draw()
                self.dealer.hand = self.dealer.hand.with_card(card)
                self.events.emit_new(EventType.DEALER_HITS, card=str(card), hand_value=self.dealer.hand.value)

            if self.dealer.hand.is_busted:
                self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer.hand.value)
            else:
                self.events.emit_new(EventType.DEALER_STANDS, hand_value=self.dealer.hand.value)

        self.dealer_done()
        return self.determine_winners()

    def determine_winners(self) -> RoundSummary:
        """Settle every player against the dealer's final hand."""
        self._require(BlackjackPhase.RESULT, action="determine winners")

        summary = RoundSummary(dealer_hand=self.dealer.hand)
        for player in self.players:
            outcome = settle(player.hand, self.dealer.hand)
            penalty = self._penalty_for(player, outcome)
            player.outcome = outcome
            player.penalty = penalty
            summary.settlements.append(Settlement(player.id, outcome, penalty))

            event_type = {
                Outcome.WIN: EventType.PLAYER_WINS,
                Outcome.BLACKJACK: EventType.PLAYER_WINS,
                Outcome.LOSE: EventType.PLAYER_LOSES,
                Outcome.PUSH: EventType.PUSH,
            }[outcome]
            self.events.emit_new(event_type, player=player.name, outcome=outcome.value, amount=penalty.amount)

        self.last_summary = summary
        self.events.emit_new(EventType.ROUND_ENDED, dealer_value=self.dealer.hand.value)
        return summary

    def new_round(self) -> None:
        """Back to betting; a low shoe is replaced by a fresh one."""
        self._require(BlackjackPhase.RESULT, action="start a new round")

        if self.deck.cards_remaining < self.rules.reshuffle_threshold:
            self.deck = self._fresh_shoe()
            self.events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=self.deck.cards_remaining)

        self._clear_table()
        self.reopen_betting()

    def reset_game(self) -> None:
        """Same players, fresh shoe, back to betting."""
        self.deck = self._fresh_shoe()
        self._clear_table()
        self.last_summary = None
        self.restart()

    def snapshot(self) -> BlackjackSnapshot:
        """State needed by a screen to render or resume the table."""
        dealer_cards = list(self.dealer.hand.cards)
        if not self.dealer.is_revealed:
            dealer_cards = dealer_cards[:1]
        return BlackjackSnapshot(
            phase=self.state.name.lower(),
            players=[self._player_schema(p) for p in self.players],
            current_player_index=self.current_player_index,
            dealer_cards=[CardSchema.from_card(c) for c in dealer_cards],
            dealer_value=self.dealer.hand.value if self.dealer.is_revealed else None,
            dealer_revealed=self.dealer.is_revealed,
            min_bet=self.rules.min_bet,
            max_bet=self.rules.max_bet,
            cards_remaining=self.cards_remaining,
            can_hit=self.can_hit,
            can_double_down=self.can_double_down,
        )

    def _penalty_for(self, player: BlackjackPlayer, outcome: Outcome) -> PenaltyResult:
        if outcome == Outcome.LOSE:
            return PenaltyResult(player.bet, Unit.SIPS, PenaltyKind.DRINK, player.id)
        if outcome == Outcome.WIN:
            return PenaltyResult(player.bet, Unit.SIPS, PenaltyKind.GIVE, player.id)
        if outcome == Outcome.BLACKJACK:
            amount = player.bet * self.rules.blackjack_multiplier
            return PenaltyResult(amount, Unit.SIPS, PenaltyKind.GIVE, player.id)
        return PenaltyResult(0, Unit.SIPS, PenaltyKind.DRINK, player.id, displayable=False)

    def _finish_current_player(self) -> None:
        """Mark the current player standing and move on, or hand over to the dealer."""
        self.players[self.current_player_index].is_standing = True

        next_index = self.current_player_index + 1
        while next_index < len(self.players) and self.players[next_index].is_standing:
            next_index += 1

        if next_index < len(self.players):
            self.current_player_index = next_index
            self.events.emit_new(EventType.TURN_ADVANCED, player=self.players[next_index].name)
            self.player_action()
            return

        self.players_done()
        if self.auto_dealer:
            self.play_dealer_turn()

    def _deal_to_player(self, player: BlackjackPlayer) -> Card:
        card = self._draw()
        player.hand = player.hand.with_card(card)
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card),
            hand=player.name,
            hand_value=player.hand.value,
        )
        return card

    def _draw(self) -> Card:
        """Draw from the shoe, bringing in a fresh shoe when it runs dry."""
        if self.deck.is_empty:
            self.deck = self._fresh_shoe()
            self.events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=self.deck.cards_remaining)
        return self.deck.draw()

    def _clear_table(self) -> None:
        for player in self.players:
            player.reset()
        self.dealer.reset()
        self.current_player_index = 0

    def _find_player(self, player_id: str) -> BlackjackPlayer:
        for player in self.players:
            if player.id == player_id:
                return player
        self._reject(f"Unknown player: {player_id}")

    @staticmethod
    def _player_schema(player: BlackjackPlayer) -> BlackjackPlayerSchema:
        hand = player.hand
        return BlackjackPlayerSchema(
            id=player.id,
            name=player.name,
            hand=BlackjackHandSchema(
                cards=[CardSchema.from_card(c) for c in hand.cards],
                value=hand.value,
                is_soft=hand.is_soft,
                is_blackjack=hand.is_blackjack,
                is_busted=hand.is_busted,
            ),
            bet=player.bet,
            is_standing=player.is_standing,
            has_doubled=player.has_doubled,
            outcome=player.outcome.value if player.outcome else None,
            penalty=PenaltySchema.from_result(player.penalty) if player.penalty else None,
        )
