"""Tests for the party session."""

import logging
import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from blackout.blackjack import BlackjackGame
from blackout.borderland import BorderlandGame
from blackout.horse_race import HorseRaceGame
from blackout.ninety_nine import NinetyNineGame
from blackout.palm_tree import PalmTreeGame
from blackout.session import GameMode, PartySession


@pytest.fixture
def session(names, rng):
    return PartySession(names, rng=rng)


class TestPartySession:
    """Tests for PartySession."""

    def test_invalid_roster(self):
        with pytest.raises(ValidationError):
            PartySession(["Solo"])

    @pytest.mark.parametrize(
        "mode,engine_type",
        [
            (GameMode.BORDERLAND, BorderlandGame),
            (GameMode.BLACKJACK, BlackjackGame),
            (GameMode.NINETY_NINE, NinetyNineGame),
            (GameMode.HORSE_RACE, HorseRaceGame),
            (GameMode.PALM_TREE, PalmTreeGame),
        ],
    )
    def test_game_per_mode(self, session, mode, engine_type):
        assert isinstance(session.game(mode), engine_type)

    def test_game_is_reused(self, session):
        first = session.game(GameMode.BORDERLAND)
        assert session.game(GameMode.BORDERLAND) is first

    def test_new_game_replaces(self, session):
        first = session.game(GameMode.NINETY_NINE)
        assert session.new_game(GameMode.NINETY_NINE) is not first

    def test_games_do_not_share_players(self, session):
        borderland = session.game(GameMode.BORDERLAND)
        blackjack = session.game(GameMode.BLACKJACK)
        borderland.set_player_active("player-0", False)
        assert [p.name for p in blackjack.players] == ["Alice", "Bob", "Chloe"]
        assert borderland.players[0] is not blackjack.players[0]

    def test_end_game(self, session):
        session.game(GameMode.PALM_TREE)
        session.game(GameMode.HORSE_RACE)
        session.end_game(GameMode.PALM_TREE)
        assert session.running_games == [GameMode.HORSE_RACE]

    def test_start_is_logged(self, session, caplog):
        with caplog.at_level(logging.INFO, logger="blackout.session"):
            session.new_game(GameMode.BLACKJACK)
        assert "Started blackjack for 3 players" in caplog.text

    def test_rules_follow_config(self, names, rng):
        with patch.dict(os.environ, {"BLACKOUT_BLACKJACK_MAX_BET": "20", "BLACKOUT_99_LIVES": "1"}):
            from config import AppConfig

            session = PartySession(names, app_config=AppConfig(), rng=rng)

        blackjack = session.game(GameMode.BLACKJACK)
        assert blackjack.rules.max_bet == 20
        ninety_nine = session.game(GameMode.NINETY_NINE)
        assert all(p.lives == 1 for p in ninety_nine.players)

    def test_roster_limits_follow_config(self, rng):
        from config import AppConfig

        narrow = AppConfig(min_players=3, max_players=4)
        with pytest.raises(ValidationError):
            PartySession(["Alice", "Bob"], app_config=narrow, rng=rng)
        with pytest.raises(ValidationError):
            PartySession(["A", "B", "C", "D", "E"], app_config=narrow, rng=rng)
        session = PartySession(["Alice", "Bob", "Chloe"], app_config=narrow, rng=rng)
        assert session.player_names == ["Alice", "Bob", "Chloe"]

    def test_debug_turns_on_engine_logging(self, names, rng):
        from config import AppConfig

        blackout_logger = logging.getLogger("blackout")
        previous = blackout_logger.level
        try:
            blackout_logger.setLevel(logging.WARNING)
            PartySession(names, app_config=AppConfig(debug=False), rng=rng)
            assert blackout_logger.level == logging.WARNING
            PartySession(names, app_config=AppConfig(debug=True), rng=rng)
            assert blackout_logger.level == logging.DEBUG
        finally:
            blackout_logger.setLevel(previous)
