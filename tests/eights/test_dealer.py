"""Tests for dealing and the opening position."""

import pytest
from random import Random
from unittest.mock import patch

from conftest import assert_conserved
from eights.cards import Card, Rank, Suit, build_deck, shuffle as real_shuffle
from eights.dealer import MAX_HAND_SIZE, DealError, deal, deal_new_game
from eights.game import Participant, Phase


class TestDeal:
    """Tests for deal()."""

    def test_deal_splits_front_cards(self):
        deck = build_deck()
        hand, remaining = deal(deck, 8)

        assert hand == deck[:8]
        assert remaining == deck[8:]

    def test_deal_zero(self):
        deck = build_deck()
        result = deal(deck, 0)
        assert result.hand == ()
        assert result.remaining == deck

    def test_deal_whole_deck(self):
        deck = build_deck()
        result = deal(deck, 52)
        assert len(result.hand) == 52
        assert result.remaining == ()

    def test_deal_too_many_fails_loudly(self):
        with pytest.raises(DealError):
            deal(build_deck()[:5], 6)

    def test_deal_negative_fails_loudly(self):
        with pytest.raises(DealError):
            deal(build_deck(), -1)

    def test_deal_error_is_value_error(self):
        with pytest.raises(ValueError):
            deal([], 1)


class TestNewGame:
    """Tests for the initialization protocol."""

    def test_opening_sizes(self, rng):
        state = deal_new_game(rng)

        assert len(state.player_hand) == 8
        assert len(state.opponent_hand) == 8
        assert len(state.discard_pile) == 1
        assert len(state.stock) == 35

    def test_opening_position(self, rng):
        state = deal_new_game(rng)

        assert state.active is Participant.PLAYER
        assert state.declared_suit is state.top_card.suit
        assert state.winner is None
        assert not state.choosing_suit
        assert state.phase is Phase.PLAYER_TURN

    def test_all_cards_accounted_for(self, rng):
        assert_conserved(deal_new_game(rng))

    @pytest.mark.parametrize("seed", range(200))
    def test_starting_card_is_never_an_eight(self, seed):
        state = deal_new_game(Random(seed))
        assert not state.top_card.is_eight

    def test_eight_on_top_is_reshuffled(self):
        """An eight turned up goes back into the stock."""
        eight = Card(Rank.EIGHT, Suit.HEARTS)
        # Player and opponent hands, then an eight, then a seven
        ordered = [c for c in build_deck() if c not in (eight, Card(Rank.SEVEN, Suit.CLUBS))]
        deck = tuple(ordered[:16]) + (eight, Card(Rank.SEVEN, Suit.CLUBS)) + tuple(ordered[16:])

        calls = []

        def fake_shuffle(cards, rng=None):
            calls.append(len(cards))
            if len(calls) == 1:
                return deck
            # Stock reshuffle: put the eight at the back
            rest = [c for c in cards if c != eight]
            return tuple(rest) + (eight,)

        with patch("eights.dealer.shuffle", side_effect=fake_shuffle):
            state = deal_new_game(Random(0))

        assert calls == [52, 36]
        assert not state.top_card.is_eight
        assert eight in state.stock
        assert len(state.stock) == 35
        assert_conserved(state)

    def test_custom_hand_size(self, rng):
        state = deal_new_game(rng, hand_size=5)
        assert len(state.player_hand) == 5
        assert len(state.opponent_hand) == 5
        assert len(state.stock) == 52 - 10 - 1

    def test_seeded_games_repeat(self):
        assert deal_new_game(Random(9)) == deal_new_game(Random(9))


class TestHandSizeLimits:
    """The opening deal must always find a starter that is not an eight."""

    def test_largest_hand_size(self):
        assert MAX_HAND_SIZE == 23
        for seed in range(50):
            state = deal_new_game(Random(seed), hand_size=23)
            assert len(state.stock) == 5
            assert not state.top_card.is_eight
            assert_conserved(state)

    def test_largest_hand_size_with_every_eight_in_stock(self):
        """Six undealt cards, four of them eights: one of the other two starts."""
        eights = [c for c in build_deck() if c.is_eight]
        others = [c for c in build_deck() if not c.is_eight]
        deck = tuple(others[:46]) + tuple(eights) + tuple(others[46:])
        calls = []

        def fake_shuffle(cards, rng=None):
            calls.append(len(cards))
            if len(calls) == 1:
                return deck
            return real_shuffle(cards, rng)

        with patch("eights.dealer.shuffle", side_effect=fake_shuffle):
            state = deal_new_game(Random(3), hand_size=23)

        assert len(calls) >= 2
        assert state.top_card in others[46:]
        assert sum(c.is_eight for c in state.stock) == 4
        assert_conserved(state)

    @pytest.mark.parametrize("hand_size", [0, 24, 25, 26, 30, -1])
    def test_unsafe_hand_sizes_fail_loudly(self, hand_size):
        with pytest.raises(DealError):
            deal_new_game(Random(0), hand_size=hand_size)
