"""Tests for blackjack hand evaluation."""

import pytest

from blackout.blackjack.engine import settle
from blackout.blackjack.hand import BlackjackHand, calculate_hand_value
from blackout.blackjack.state import Outcome


@pytest.fixture
def hand(bj_card):
    """Factory building a hand from card codes."""

    def _hand(*codes):
        return calculate_hand_value([bj_card(c) for c in codes])

    return _hand


class TestCalculateHandValue:
    """Tests for the soft-ace valuation."""

    def test_empty_hand(self):
        empty = calculate_hand_value([])
        assert empty.value == 0
        assert not empty.is_soft
        assert not empty.is_blackjack
        assert not empty.is_busted

    def test_pair_of_aces(self, hand):
        """A-A = 12, still soft."""
        h = hand("AS", "AH")
        assert h.value == 12
        assert h.is_soft
        assert not h.is_blackjack

    def test_natural(self, hand):
        h = hand("AS", "KH")
        assert h.value == 21
        assert h.is_blackjack
        assert h.is_soft

    def test_bust_without_aces(self, hand):
        h = hand("KS", "QH", "2C")
        assert h.value == 22
        assert h.is_busted
        assert not h.is_soft

    def test_not_blackjack_three_cards(self, hand):
        h = hand("7S", "7H", "7C")
        assert h.value == 21
        assert not h.is_blackjack

    def test_soft_to_hard_transition(self, hand):
        assert hand("AS", "5H").value == 16
        assert hand("AS", "5H").is_soft
        h = hand("AS", "5H", "8C")
        assert h.value == 14
        assert not h.is_soft

    def test_multiple_aces(self, hand):
        assert hand("AS", "AH", "AC").value == 13
        assert hand("AS", "AH", "AC").is_soft
        h = hand("AS", "AH", "AC", "9D")
        assert h.value == 12
        assert not h.is_soft

    def test_soft_17(self, hand):
        h = hand("AS", "6H")
        assert h.value == 17
        assert h.is_soft

    def test_with_card_builds_new_hand(self, hand, bj_card):
        h = hand("5S", "6H")
        grown = h.with_card(bj_card("KD"))
        assert h.value == 11
        assert grown.value == 21
        assert len(grown) == 3
        assert not grown.is_blackjack

    def test_hand_is_frozen(self, hand):
        h = hand("5S", "6H")
        with pytest.raises(AttributeError):
            h.value = 3

    def test_hand_str(self, hand):
        assert "BLACKJACK" in str(hand("AS", "KH"))
        assert "BUST" in str(hand("KS", "QH", "2C"))
        assert "soft 17" in str(hand("AS", "6H"))

    def test_default_hand_empty(self):
        assert BlackjackHand().value == 0


class TestSettle:
    """Tests for hand comparison priority."""

    def test_player_bust_loses_even_if_dealer_busts(self, hand):
        assert settle(hand("KS", "6H", "KC"), hand("KD", "6C", "QS")) == Outcome.LOSE

    def test_blackjack_beats_dealer_21(self, hand):
        assert settle(hand("AS", "KH"), hand("7C", "7D", "7S")) == Outcome.BLACKJACK

    def test_both_naturals_push(self, hand):
        assert settle(hand("AS", "KH"), hand("AC", "QD")) == Outcome.PUSH

    def test_dealer_bust_wins(self, hand):
        assert settle(hand("KS", "7H"), hand("KC", "6D", "KH")) == Outcome.WIN

    def test_higher_wins(self, hand):
        assert settle(hand("KS", "9H"), hand("KC", "8D")) == Outcome.WIN

    def test_lower_loses(self, hand):
        assert settle(hand("KS", "7H"), hand("KC", "9D")) == Outcome.LOSE

    def test_equal_push(self, hand):
        assert settle(hand("KS", "8H"), hand("QC", "8D")) == Outcome.PUSH

    def test_three_card_21_against_natural_is_push(self, hand):
        """Only the player's natural is checked ahead of the totals."""
        assert settle(hand("7C", "7D", "7S"), hand("AS", "KH")) == Outcome.PUSH
