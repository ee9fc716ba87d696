"""Tests for the Borderland engine."""

import pytest

from blackout.borderland import (
    CONTEST_MULTIPLIERS,
    BorderlandGame,
    BorderlandPhase,
    RuleKind,
    calculate_penalty,
    contest_multiplier,
    requires_reveal,
    rule_for,
)
from blackout.cards import Card, Unit
from blackout.errors import InvalidOperationError
from blackout.events import EventType
from blackout.penalty import PenaltyKind


@pytest.fixture
def game(names, make_deck):
    """Game with a known deck: K♠, A♥, 7♣, 3♦."""
    return BorderlandGame(names, deck=make_deck("KS", "AH", "7C", "3D"))


class TestRules:
    """Tests for suit rules and multipliers."""

    def test_suit_rules(self):
        assert rule_for(Card.from_string("2C")) == RuleKind.GUESS
        assert rule_for(Card.from_string("2D")) == RuleKind.ACTION
        assert rule_for(Card.from_string("2H")) == RuleKind.QUESTION
        assert rule_for(Card.from_string("2S")) == RuleKind.DARE

    def test_only_clubs_start_hidden(self):
        assert requires_reveal(Card.from_string("9C"))
        assert not requires_reveal(Card.from_string("9H"))

    def test_multiplier_sequence(self):
        assert [contest_multiplier(level) for level in range(4)] == [1, 1, 2, 4]
        assert CONTEST_MULTIPLIERS == {0: 1, 1: 1, 2: 2, 3: 4}

    def test_multiplier_out_of_range(self):
        with pytest.raises(ValueError):
            contest_multiplier(4)

    def test_calculate_penalty(self):
        result = calculate_penalty(10, 3, Unit.SIPS)
        assert result.amount == 40
        assert result.unit == Unit.SIPS


class TestDrawing:
    """Tests for the draw flow."""

    def test_initial_state(self, game):
        assert game.state == BorderlandPhase.IDLE
        assert game.current_card is None
        assert game.cards_remaining == 4
        assert game.current_player.name == "Alice"

    def test_draw_card(self, game):
        card = game.draw_card()
        assert str(card) == "K♠"
        assert game.current_card == card
        assert game.is_card_revealed
        assert game.current_rule == RuleKind.DARE
        assert game.state == BorderlandPhase.CARD_DRAWN
        assert game.cards_remaining == 3

    def test_clubs_start_hidden(self, names, make_deck):
        game = BorderlandGame(names, deck=make_deck("7C"))
        game.draw_card()
        assert not game.is_card_revealed
        assert game.snapshot().current_card is None
        game.reveal_card()
        assert game.is_card_revealed
        assert game.snapshot().current_card.rank == "7"

    def test_reveal_without_card(self, game):
        with pytest.raises(InvalidOperationError):
            game.reveal_card()

    def test_drawing_again_discards(self, game):
        first = game.draw_card()
        game.draw_card()
        assert game.discard_pile == [first]

    def test_exhausted_deck_ends_game(self, names, make_deck):
        game = BorderlandGame(names, deck=make_deck("2H"))
        assert game.draw_card() is not None
        assert game.draw_card() is None
        assert game.state == BorderlandPhase.ENDED
        with pytest.raises(InvalidOperationError):
            game.draw_card()

    def test_cannot_draw_during_contest(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        with pytest.raises(InvalidOperationError):
            game.draw_card()


class TestContest:
    """Tests for the contest escalation state machine."""

    def test_start_contest(self, game):
        game.draw_card()
        contest = game.start_contest(game.players[1])
        assert contest.active
        assert contest.level == 1
        assert contest.base_card == game.current_card
        assert contest.challenger.name == "Bob"
        assert game.state == BorderlandPhase.CONTEST

    def test_start_contest_without_card(self, game):
        with pytest.raises(InvalidOperationError):
            game.start_contest(game.players[1])

    def test_cannot_start_twice(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        with pytest.raises(InvalidOperationError):
            game.start_contest(game.players[2])

    def test_king_contested_to_level_three(self, game):
        """A King of Spades at level 3 costs 40 sips."""
        game.draw_card()
        game.start_contest(game.players[1])
        game.escalate_contest(game.players[0])
        game.escalate_contest(game.players[1])
        assert game.contest.level == 3
        assert game.current_penalty.amount == 40

        penalty = game.resolve_contest(game.players[0])
        assert penalty.amount == 40
        assert penalty.unit == Unit.SIPS
        assert penalty.kind == PenaltyKind.DRINK
        assert penalty.recipient == "player-0"
        assert penalty.display_text == "40 sips"
        assert game.state == BorderlandPhase.RESOLVED
        assert not game.contest.active
        assert game.last_penalty == penalty

    def test_escalation_beyond_three_rejected(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        game.escalate_contest(game.players[2])
        game.escalate_contest(game.players[0])
        with pytest.raises(InvalidOperationError):
            game.escalate_contest(game.players[1])
        assert game.contest.level == 3

    def test_escalate_without_contest(self, game):
        game.draw_card()
        with pytest.raises(InvalidOperationError):
            game.escalate_contest(game.players[1])

    def test_ace_contest_scales_shots(self, game):
        """An Ace at level 2 costs 2 shots."""
        game.draw_card()
        game.next_turn()
        game.draw_card()
        assert game.current_card.is_ace
        game.start_contest(game.players[2])
        game.escalate_contest(game.players[1])
        penalty = game.resolve_contest(game.players[1])
        assert penalty.unit == Unit.SHOT
        assert penalty.amount == 2
        assert penalty.display_text == "2 shots"

    def test_escalation_replaces_challenger(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        game.escalate_contest(game.players[2])
        assert game.contest.challenger.name == "Chloe"

    def test_cancel_contest(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        game.cancel_contest()
        assert not game.contest.active
        assert game.contest.level == 0
        assert game.state == BorderlandPhase.CARD_DRAWN
        assert game.last_penalty is None

    def test_cancel_without_contest(self, game):
        with pytest.raises(InvalidOperationError):
            game.cancel_contest()

    def test_recontest_after_resolution(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        game.resolve_contest(game.players[1])
        game.start_contest(game.players[2])
        assert game.contest.level == 1

    def test_invalid_action_event(self, game):
        seen = []
        game.subscribe(seen.append, EventType.INVALID_ACTION)
        with pytest.raises(InvalidOperationError):
            game.escalate_contest(game.players[0])
        assert len(seen) == 1


class TestTurns:
    """Tests for turn rotation."""

    def test_next_turn_clears_table(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        player = game.next_turn()
        assert player.name == "Bob"
        assert game.current_card is None
        assert not game.contest.active
        assert game.state == BorderlandPhase.IDLE

    def test_next_turn_wraps(self, game):
        game.next_turn()
        game.next_turn()
        assert game.next_turn().name == "Alice"

    def test_skips_inactive_players(self, game):
        game.set_player_active("player-1", False)
        assert game.next_turn().name == "Chloe"

    def test_no_active_players_is_noop(self, game):
        for player in game.players:
            game.set_player_active(player.id, False)
        assert game.next_turn() is None
        assert game.current_player_index == 0

    def test_unknown_player(self, game):
        with pytest.raises(InvalidOperationError):
            game.set_player_active("player-9", False)

    def test_reset_game(self, game):
        game.draw_card()
        game.next_turn()
        game.reset_game()
        assert game.state == BorderlandPhase.IDLE
        assert game.cards_remaining == 52
        assert game.current_player_index == 0
        assert game.discard_pile == []


class TestSnapshot:
    """Tests for the render snapshot."""

    def test_snapshot_during_contest(self, game):
        game.draw_card()
        game.start_contest(game.players[1])
        game.escalate_contest(game.players[2])
        snap = game.snapshot()
        assert snap.phase == "contest"
        assert snap.contest.level == 2
        assert snap.contest.challenger_id == "player-2"
        assert snap.pending_penalty.amount == 20
        assert snap.rule == "dare"
        assert [p.name for p in snap.players] == ["Alice", "Bob", "Chloe"]


class TestSeating:
    """Tests for players who are sitting out or not at the table."""

    def test_inactive_player_cannot_draw(self, game):
        for player in game.players:
            game.set_player_active(player.id, False)
        with pytest.raises(InvalidOperationError):
            game.draw_card()
        assert game.cards_remaining == 4
        assert game.state == BorderlandPhase.IDLE

    def test_reactivated_player_draws(self, game):
        game.set_player_active("player-0", False)
        with pytest.raises(InvalidOperationError):
            game.draw_card()
        game.set_player_active("player-0", True)
        assert game.draw_card() is not None

    def test_stranger_cannot_contest(self, game, names):
        stranger = BorderlandGame(names).players[1]
        game.draw_card()
        with pytest.raises(InvalidOperationError):
            game.start_contest(stranger)
        assert not game.contest.active

    def test_stranger_cannot_escalate_or_accept(self, game, names):
        stranger = BorderlandGame(names).players[2]
        game.draw_card()
        game.start_contest(game.players[1])
        with pytest.raises(InvalidOperationError):
            game.escalate_contest(stranger)
        with pytest.raises(InvalidOperationError):
            game.resolve_contest(stranger)
        assert game.contest.level == 1
        assert game.state == BorderlandPhase.CONTEST
