"""Party session: one roster shared by independently created game engines."""

import logging
from enum import Enum
from random import Random
from typing import Sequence

from config import AppConfig, config

from blackout.blackjack import BlackjackGame, BlackjackRules
from blackout.borderland import BorderlandGame
from blackout.horse_race import HorseRaceGame
from blackout.ninety_nine import NinetyNineGame, NinetyNineRules
from blackout.palm_tree import PalmTreeGame
from blackout.players import validate_roster

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Available mini-games."""

    BORDERLAND = "borderland"
    BLACKJACK = "blackjack"
    NINETY_NINE = "ninety_nine"
    HORSE_RACE = "horse_race"
    PALM_TREE = "palm_tree"


Engine = BorderlandGame | BlackjackGame | NinetyNineGame | HorseRaceGame | PalmTreeGame


class PartySession:
    """
    Holds the roster for a session and hands out one engine per game mode.

    Each engine builds its own deck and player records from the roster
    names, so games never share mutable state.
    """

    def __init__(
        self,
        player_names: Sequence[str],
        app_config: AppConfig | None = None,
        rng: Random | None = None,
    ) -> None:
        self.config = app_config or config
        self.player_names = validate_roster(
            player_names,
            min_players=self.config.min_players,
            max_players=self.config.max_players,
        )
        if self.config.debug:
            logging.getLogger("blackout").setLevel(logging.DEBUG)
        self._rng = rng or Random()
        self._games: dict[GameMode, Engine] = {}

    def blackjack_rules(self) -> BlackjackRules:
        bj = self.config.blackjack
        return BlackjackRules(
            num_decks=bj.num_decks,
            reshuffle_threshold=bj.reshuffle_threshold,
            min_bet=bj.min_bet,
            max_bet=bj.max_bet,
            dealer_stand_value=bj.dealer_stand_value,
            blackjack_multiplier=bj.blackjack_multiplier,
        )

    def ninety_nine_rules(self) -> NinetyNineRules:
        nn = self.config.ninety_nine
        return NinetyNineRules(
            limit=nn.limit,
            starting_lives=nn.starting_lives,
            hand_size=nn.hand_size,
        )

    def game(self, mode: GameMode) -> Engine:
        """Return the running engine for ``mode``, creating it on first use."""
        if mode not in self._games:
            return self.new_game(mode)
        return self._games[mode]

    def new_game(self, mode: GameMode) -> Engine:
        """Replace the engine for ``mode`` with a fresh one."""
        engine: Engine
        if mode == GameMode.BORDERLAND:
            engine = BorderlandGame(
                self.player_names,
                num_decks=self.config.borderland.num_decks,
                rng=self._rng,
            )
        elif mode == GameMode.BLACKJACK:
            engine = BlackjackGame(self.player_names, rules=self.blackjack_rules(), rng=self._rng)
        elif mode == GameMode.NINETY_NINE:
            engine = NinetyNineGame(self.player_names, rules=self.ninety_nine_rules(), rng=self._rng)
        elif mode == GameMode.HORSE_RACE:
            engine = HorseRaceGame(finish_position=self.config.horse_race.finish_position, rng=self._rng)
        else:
            engine = PalmTreeGame(card_count=self.config.palm_tree.circle_cards, rng=self._rng)

        logger.info("Started %s for %d players", mode.value, len(self.player_names))
        self._games[mode] = engine
        return engine

    def end_game(self, mode: GameMode) -> None:
        """Forget the engine for ``mode``."""
        self._games.pop(mode, None)

    @property
    def running_games(self) -> list[GameMode]:
        return list(self._games)
