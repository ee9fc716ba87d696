"""Borderland rule-card game engine with contest escalation."""

from random import Random
from typing import Sequence

from blackout.base import GameEngine
from blackout.borderland.state import (
    CONTEST_MULTIPLIERS,
    MAX_CONTEST_LEVEL,
    BorderlandPhase,
    ContestState,
    RuleKind,
    requires_reveal,
    rule_for,
)
from blackout.cards import Card, Deck, RandomSource, Unit, borderland_value
from blackout.events import EventType
from blackout.penalty import PenaltyKind, PenaltyResult
from blackout.players import Player, create_players
from blackout.schemas import BorderlandSnapshot, CardSchema, ContestSchema, PenaltySchema, PlayerSchema


def contest_multiplier(level: int) -> int:
    """Multiplier for a contest level (0-3)."""
    if level not in CONTEST_MULTIPLIERS:
        raise ValueError(f"Contest level must be between 0 and {MAX_CONTEST_LEVEL}, got {level}")
    return CONTEST_MULTIPLIERS[level]


def calculate_penalty(value: int, level: int, unit: Unit) -> PenaltyResult:
    """
    Compute the penalty for a contested card.

    The multiplier is applied to the card value whatever the unit, so an Ace
    contested at level 2 costs 2 shots.
    """
    return PenaltyResult(amount=value * contest_multiplier(level), unit=unit)


class BorderlandGame(GameEngine):
    """
    Borderland engine: draw a card, apply its suit rule, optionally contest it.

    Pure game logic; the drink itself is applied by the caller from the
    returned PenaltyResult.
    """

    NAME = "borderland"
    PHASES = BorderlandPhase
    INITIAL = "idle"
    TRANSITIONS = [
        {"trigger": "take_card", "source": ["idle", "card_drawn", "resolved"], "dest": "card_drawn"},
        {"trigger": "exhaust", "source": ["idle", "card_drawn", "resolved"], "dest": "ended"},
        {"trigger": "open_contest", "source": ["card_drawn", "resolved"], "dest": "contest"},
        {"trigger": "raise_stakes", "source": "contest", "dest": "contest"},
        {"trigger": "settle_contest", "source": "contest", "dest": "resolved"},
        {"trigger": "drop_contest", "source": "contest", "dest": "card_drawn"},
        {"trigger": "pass_turn", "source": ["idle", "card_drawn", "contest", "resolved"], "dest": "idle"},
        {"trigger": "restart", "source": "*", "dest": "idle"},
    ]

    def __init__(
        self,
        player_names: Sequence[str],
        num_decks: int = 1,
        rng: RandomSource | None = None,
        deck: Deck | None = None,
    ) -> None:
        """
        Initialize a new Borderland game.

        Args:
            player_names: 2-8 display names
            num_decks: Number of packs shuffled together
            rng: Random source for shuffling
            deck: Pre-arranged deck, mainly for tests
        """
        self._rng = rng or Random()
        self._num_decks = num_decks
        self.players: list[Player] = create_players(player_names)
        self.deck = deck if deck is not None else self._fresh_deck()
        self.discard_pile: list[Card] = []
        self.current_player_index = 0
        self.current_card: Card | None = None
        self.is_card_revealed = False
        self.contest = ContestState()
        self.last_penalty: PenaltyResult | None = None
        super().__init__()
        self.events.emit_new(EventType.GAME_STARTED, players=[p.name for p in self.players])

    def _fresh_deck(self) -> Deck:
        return Deck.standard(self._num_decks, borderland_value, self._rng)

    @property
    def current_player(self) -> Player | None:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def active_players(self) -> list[Player]:
        return [p for p in self.players if p.active]

    @property
    def cards_remaining(self) -> int:
        return self.deck.cards_remaining

    @property
    def current_rule(self) -> RuleKind | None:
        """Rule kind of the card on the table."""
        return rule_for(self.current_card) if self.current_card else None

    @property
    def current_penalty(self) -> PenaltyResult | None:
        """What the contest would cost if accepted now."""
        if not self.contest.active or self.contest.base_card is None:
            return None
        card = self.contest.base_card
        return calculate_penalty(card.value, self.contest.level, card.unit)

    def draw_card(self) -> Card | None:
        """
        Draw the next card for the current player.

        Returns:
            The drawn card, or None when the deck is exhausted (game ends)
        """
        self._require(
            BorderlandPhase.IDLE,
            BorderlandPhase.CARD_DRAWN,
            BorderlandPhase.RESOLVED,
            action="draw a card",
        )
        if self.current_player is None or not self.current_player.active:
            self._reject("Current player is sitting out")

        self._discard_current()
        self.contest.clear()
        self.last_penalty = None

        if self.deck.is_empty:
            self.events.emit_new(EventType.DECK_EXHAUSTED)
            self.events.emit_new(EventType.GAME_ENDED, reason="deck_exhausted")
            self.exhaust()
            return None

        card = self.deck.draw()
        self.current_card = card
        self.is_card_revealed = not requires_reveal(card)
        self.events.emit_new(
            EventType.CARD_DRAWN,
            card=str(card) if self.is_card_revealed else "??",
            rule=rule_for(card).value,
            cards_remaining=self.deck.cards_remaining,
        )
        self.take_card()
        return card

    def reveal_card(self) -> Card:
        """Turn a face-down card face up."""
        if self.current_card is None:
            self._reject("No card to reveal")
        if not self.is_card_revealed:
            self.is_card_revealed = True
            self.events.emit_new(EventType.CARD_REVEALED, card=str(self.current_card))
        return self.current_card

    def start_contest(self, challenger: Player) -> ContestState:
        """Contest the current card at level 1."""
        if self.current_card is None or self.contest.active:
            self._reject("A contest needs a drawn card and no contest in progress")
        self._require(BorderlandPhase.CARD_DRAWN, BorderlandPhase.RESOLVED, action="start a contest")
        self._check_seated(challenger)

        self.contest.active = True
        self.contest.level = 1
        self.contest.base_card = self.current_card
        self.contest.challenger = challenger
        self.last_penalty = None
        self.events.emit_new(
            EventType.CONTEST_STARTED,
            challenger=challenger.name,
            card=str(self.current_card),
        )
        self.open_contest()
        return self.contest

    def escalate_contest(self, next_challenger: Player) -> ContestState:
        """Raise the stakes one level; the new challenger takes over."""
        self._require(BorderlandPhase.CONTEST, action="escalate a contest")
        if not self.contest.can_escalate:
            self._reject(f"Contest is already at level {MAX_CONTEST_LEVEL}")
        self._check_seated(next_challenger)

        self.contest.level += 1
        self.contest.challenger = next_challenger
        self.events.emit_new(
            EventType.CONTEST_ESCALATED,
            level=self.contest.level,
            multiplier=self.contest.multiplier,
            challenger=next_challenger.name,
        )
        self.raise_stakes()
        return self.contest

    def resolve_contest(self, accepting_player: Player) -> PenaltyResult:
        """
        Settle the contest: the accepting player pays the current stake.

        Returns:
            The penalty owed by ``accepting_player``
        """
        self._require(BorderlandPhase.CONTEST, action="resolve a contest")
        self._check_seated(accepting_player)
        card = self.contest.base_card
        if card is None:
            self._reject("Contest has no base card")

        base = calculate_penalty(card.value, self.contest.level, card.unit)
        penalty = PenaltyResult(
            amount=base.amount,
            unit=base.unit,
            kind=PenaltyKind.DRINK,
            recipient=accepting_player.id,
        )
        self.events.emit_new(
            EventType.CONTEST_RESOLVED,
            player=accepting_player.name,
            level=self.contest.level,
            amount=penalty.amount,
            unit=penalty.unit.value,
        )
        self.contest.clear()
        self.last_penalty = penalty
        self.settle_contest()
        return penalty

    def cancel_contest(self) -> None:
        """Drop the contest without charging anyone."""
        self._require(BorderlandPhase.CONTEST, action="cancel a contest")
        self.contest.clear()
        self.events.emit_new(EventType.CONTEST_CANCELLED)
        self.drop_contest()

    def next_turn(self) -> Player | None:
        """
        Pass to the next active player, clearing the table.

        Returns:
            The new current player, or None when nobody is active
        """
        if self.state == BorderlandPhase.ENDED:
            self._reject("Game is over")
        if not self.active_players:
            return None

        self._discard_current()
        self.contest.clear()
        self.last_penalty = None

        count = len(self.players)
        index = self.current_player_index
        for _ in range(count):
            index = (index + 1) % count
            if self.players[index].active:
                break
        self.current_player_index = index

        self.events.emit_new(EventType.TURN_ADVANCED, player=self.players[index].name)
        self.pass_turn()
        return self.players[index]

    def set_player_active(self, player_id: str, active: bool) -> Player:
        """Sit a player out of the rotation or bring them back."""
        player = self._find_player(player_id)
        player.active = active
        self.events.emit_new(EventType.PLAYER_TOGGLED, player=player.name, active=active)
        return player

    def reset_game(self) -> None:
        """Start over with a fresh deck and the same players."""
        self.deck = self._fresh_deck()
        self.discard_pile = []
        self.current_player_index = 0
        self.current_card = None
        self.is_card_revealed = False
        self.contest.clear()
        self.last_penalty = None
        for player in self.players:
            player.active = True
        self.restart()
        self.events.emit_new(EventType.GAME_STARTED, players=[p.name for p in self.players])

    def snapshot(self) -> BorderlandSnapshot:
        """State needed by a screen to render or resume the game."""
        visible = self.current_card if self.is_card_revealed else None
        contest = self.contest
        return BorderlandSnapshot(
            phase=self.state.name.lower(),
            players=[PlayerSchema.model_validate(p) for p in self.players],
            current_player_index=self.current_player_index,
            current_card=CardSchema.from_card(visible) if visible else None,
            has_current_card=self.current_card is not None,
            is_card_revealed=self.is_card_revealed,
            rule=self.current_rule.value if self.current_rule else None,
            contest=ContestSchema(
                active=contest.active,
                level=contest.level,
                base_card=CardSchema.from_card(contest.base_card) if contest.base_card else None,
                challenger_id=contest.challenger.id if contest.challenger else None,
            ),
            pending_penalty=PenaltySchema.from_result(self.current_penalty) if self.current_penalty else None,
            last_penalty=PenaltySchema.from_result(self.last_penalty) if self.last_penalty else None,
            cards_remaining=self.cards_remaining,
        )

    def _discard_current(self) -> None:
        if self.current_card is not None:
            self.discard_pile.append(self.current_card)
        self.current_card = None
        self.is_card_revealed = False

    def _check_seated(self, player: Player) -> None:
        if not any(p is player for p in self.players):
            self._reject(f"{player.name} is not seated in this game", player_id=player.id)

    def _find_player(self, player_id: str) -> Player:
        for player in self.players:
            if player.id == player_id:
                return player
        self._reject(f"Unknown player: {player_id}")
