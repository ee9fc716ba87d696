"""99 counting game engine."""

from random import Random
from typing import Sequence

from blackout.base import GameEngine
from blackout.cards import Card, Deck, RandomSource, Unit, ninety_nine_value, shuffle
from blackout.events import EventType
from blackout.ninety_nine.state import (
    ACE_VALUES,
    CardEffect,
    NinetyNinePhase,
    NinetyNinePlayer,
    NinetyNineRules,
    PlayResult,
    card_value,
    effect_for,
)
from blackout.penalty import PenaltyKind, PenaltyResult
from blackout.players import validate_roster
from blackout.schemas import CardSchema, NinetyNinePlayerSchema, NinetyNineSnapshot


class NinetyNineGame(GameEngine):
    """
    Players take turns adding cards to a running total without passing 99.

    A play that would pass the limit is refused: the player keeps the card,
    loses a life and drinks a shot, and the turn moves on. The game ends when
    at most one player still has lives; the player who caused it is the loser.
    """

    NAME = "ninety_nine"
    PHASES = NinetyNinePhase
    INITIAL = "playing"
    TRANSITIONS = [
        {"trigger": "finish", "source": "playing", "dest": "ended"},
        {"trigger": "restart", "source": "*", "dest": "playing"},
    ]

    def __init__(
        self,
        player_names: Sequence[str],
        rules: NinetyNineRules | None = None,
        rng: RandomSource | None = None,
        deck: Deck | None = None,
    ) -> None:
        """
        Initialize a new 99 game and deal the opening hands.

        Args:
            player_names: 2-8 display names
            rules: Limit, lives and hand size (defaults if not provided)
            rng: Random source for shuffles
            deck: Pre-arranged deck, mainly for tests
        """
        self.rules = rules or NinetyNineRules()
        self._rng = rng or Random()
        self._names = validate_roster(player_names)
        super().__init__()
        self._deal(deck)

    def _deal(self, deck: Deck | None = None) -> None:
        self.deck = deck if deck is not None else Deck.standard(1, ninety_nine_value, self._rng)
        self.discard_pile: list[Card] = []
        self.players: list[NinetyNinePlayer] = []
        for index, name in enumerate(self._names):
            hand = [self.deck.draw() for _ in range(self.rules.hand_size)]
            self.players.append(
                NinetyNinePlayer(
                    id=f"player-{index}",
                    name=name,
                    hand=hand,
                    lives=self.rules.starting_lives,
                )
            )
        self.current_player_index = 0
        self.current_total = 0
        self.direction = 1
        self.last_played_card: Card | None = None
        self.loser: NinetyNinePlayer | None = None
        self.events.emit_new(EventType.GAME_STARTED, players=list(self._names))

    @property
    def current_player(self) -> NinetyNinePlayer | None:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def active_players(self) -> list[NinetyNinePlayer]:
        return [p for p in self.players if not p.is_out]

    @property
    def cards_remaining(self) -> int:
        return self.deck.cards_remaining

    def get_card_value(self, card: Card, ace_value: int = 1) -> int:
        """Amount ``card`` would add to the total."""
        return card_value(card, ace_value)

    def can_play_card(self, card: Card, ace_value: int = 1) -> bool:
        """Check whether ``card`` keeps the total within the limit."""
        return not self.rules.would_exceed(self.current_total, card, ace_value)

    def playable_indices(self) -> list[int]:
        """Indices of the current player's cards that can be played safely."""
        player = self.current_player
        if player is None:
            return []
        return [
            i
            for i, card in enumerate(player.hand)
            if any(self.can_play_card(card, v) for v in ACE_VALUES)
        ]

    def play_card(self, index: int, ace_value: int = 1) -> PlayResult:
        """
        Play the current player's card at ``index``.

        Args:
            index: Position of the card in the player's hand
            ace_value: 1 or 11 when the card is an Ace

        Returns:
            What happened; an illegal play is a normal result, not an error
        """
        self._require(NinetyNinePhase.PLAYING, action="play a card")
        player = self.current_player
        if player is None or player.is_out:
            self._reject("Current player cannot play")
        if not 0 <= index < len(player.hand):
            self._reject(f"Card index {index} out of range", player=player.name)
        if ace_value not in ACE_VALUES:
            self._reject(f"Ace value must be 1 or 11, got {ace_value}")

        card = player.hand[index]
        if self.rules.would_exceed(self.current_total, card, ace_value):
            return self._bust(player, card)

        player.hand.pop(index)
        effect = effect_for(card.rank)
        total = self.current_total
        if effect == CardEffect.REVERSE:
            self.direction = -self.direction
            self.events.emit_new(EventType.DIRECTION_REVERSED, direction=self.direction)
        elif effect == CardEffect.SET_TO_LIMIT:
            total = self.rules.limit
            self.events.emit_new(EventType.TOTAL_RESET, total=total)
        else:
            total += card_value(card, ace_value)
        self.current_total = max(0, min(self.rules.limit, total))

        self.draw_card()

        self.discard_pile.append(card)
        self.last_played_card = card
        self.events.emit_new(
            EventType.CARD_PLAYED,
            player=player.name,
            card=str(card),
            total=self.current_total,
        )

        self.next_turn()
        return PlayResult(legal=True, card=card, total=self.current_total)

    def draw_card(self) -> Card | None:
        """
        Draw a card into the current player's hand.

        Returns:
            The drawn card, or None when neither deck nor discard pile can supply one
        """
        self._require(NinetyNinePhase.PLAYING, action="draw a card")
        player = self.current_player
        if player is None or player.is_out:
            self._reject("Current player cannot draw")

        card = self._take_from_deck()
        if card is not None:
            player.hand.append(card)
        return card

    def _take_from_deck(self) -> Card | None:
        """Top card of the deck; an empty deck is rebuilt from the discard pile under its top card."""
        if self.deck.is_empty:
            if len(self.discard_pile) <= 1:
                return None
            top = self.discard_pile[-1]
            self.deck = Deck(shuffle(self.discard_pile[:-1], self._rng))
            self.discard_pile = [top]
            self.events.emit_new(EventType.DECK_SHUFFLED, cards_remaining=self.deck.cards_remaining)
        return self.deck.draw()

    def next_turn(self) -> NinetyNinePlayer | None:
        """Move to the next player in the current direction, skipping eliminated players."""
        self._require(NinetyNinePhase.PLAYING, action="advance the turn")
        count = len(self.players)
        index = self.current_player_index
        for _ in range(count):
            index = (index + self.direction) % count
            if not self.players[index].is_out:
                break
        self.current_player_index = index
        self.events.emit_new(EventType.TURN_ADVANCED, player=self.players[index].name)
        return self.players[index]

    def reset_game(self) -> None:
        """Reshuffle and redeal for the same players."""
        self.restart()
        self._deal()

    def snapshot(self) -> NinetyNineSnapshot:
        """State needed by a screen to render or resume the game."""
        return NinetyNineSnapshot(
            phase=self.state.name.lower(),
            players=[
                NinetyNinePlayerSchema(
                    id=p.id,
                    name=p.name,
                    hand=[CardSchema.from_card(c) for c in p.hand],
                    lives=p.lives,
                    is_out=p.is_out,
                )
                for p in self.players
            ],
            current_player_index=self.current_player_index,
            current_total=self.current_total,
            direction=self.direction,
            last_played_card=CardSchema.from_card(self.last_played_card) if self.last_played_card else None,
            loser_id=self.loser.id if self.loser else None,
            cards_remaining=self.cards_remaining,
            discard_count=len(self.discard_pile),
        )

    def _bust(self, player: NinetyNinePlayer, card: Card) -> PlayResult:
        """Refuse a play that passes the limit; the card stays in hand."""
        player.lives -= 1
        penalty = PenaltyResult(1, Unit.SHOT, PenaltyKind.DRINK, player.id)
        self.events.emit_new(
            EventType.LIFE_LOST,
            player=player.name,
            card=str(card),
            lives=player.lives,
        )

        eliminated = player.lives <= 0
        if eliminated:
            player.lives = 0
            player.is_out = True
            self.events.emit_new(EventType.PLAYER_ELIMINATED, player=player.name)

        if len(self.active_players) <= 1:
            self.loser = player
            self.events.emit_new(EventType.GAME_ENDED, loser=player.name)
            self.finish()
            return PlayResult(
                legal=False,
                card=card,
                total=self.current_total,
                penalty=penalty,
                eliminated=eliminated,
                game_over=True,
            )

        self.next_turn()
        return PlayResult(
            legal=False,
            card=card,
            total=self.current_total,
            penalty=penalty,
            eliminated=eliminated,
        )
