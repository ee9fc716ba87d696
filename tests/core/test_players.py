"""Tests for roster validation and player records."""

import pytest
from pydantic import ValidationError

from blackout.players import Roster, create_players, validate_roster


class TestRoster:
    """Tests for the Roster model."""

    def test_valid_roster(self):
        assert Roster(names=["Alice", "Bob"]).names == ["Alice", "Bob"]

    def test_names_are_stripped(self):
        assert validate_roster(["  Alice ", "Bob"]) == ["Alice", "Bob"]

    def test_too_few_players(self):
        with pytest.raises(ValidationError):
            validate_roster(["Alice"])

    def test_too_many_players(self):
        with pytest.raises(ValidationError):
            validate_roster([f"P{i}" for i in range(9)])

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            validate_roster(["Alice", "   "])

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_roster([])


class TestCreatePlayers:
    def test_ids_follow_seat_order(self, names):
        players = create_players(names)
        assert [p.id for p in players] == ["player-0", "player-1", "player-2"]
        assert [p.name for p in players] == names
        assert all(p.active for p in players)

    def test_fresh_records_per_call(self, names):
        first = create_players(names)
        second = create_players(names)
        first[0].active = False
        assert second[0].active


class TestRosterLimits:
    """Tests for narrowing the player count."""

    def test_narrowed_limits(self):
        with pytest.raises(ValidationError):
            validate_roster(["Alice", "Bob"], min_players=3)
        with pytest.raises(ValidationError):
            validate_roster(["A", "B", "C", "D"], max_players=3)
        assert validate_roster(["A", "B", "C"], min_players=3, max_players=3) == ["A", "B", "C"]

    def test_context_on_model(self):
        roster = Roster.model_validate({"names": ["A", "B"]}, context={"max_players": 2})
        assert roster.names == ["A", "B"]
