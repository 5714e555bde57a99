"""Tests for the automated opponent's decisions."""

from hypothesis import given
from hypothesis import strategies as st

from conftest import card_strategy, cards, hand_strategy
from eights.cards import Card, Suit
from eights.rules import is_legal_play
from eights.strategy import choose_card, choose_suit

C = Card.from_string


class TestChooseCard:
    """Tests for card choice."""

    def test_nothing_playable_means_draw(self):
        assert choose_card(cards("2C", "KH"), Suit.SPADES, C("7D")) is None

    def test_first_legal_card_by_hand_order(self):
        hand = cards("KH", "3S", "7C", "QS")
        assert choose_card(hand, Suit.SPADES, C("7D")) == C("3S")

    def test_prefers_non_eight(self):
        hand = cards("8C", "KH", "4S")
        assert choose_card(hand, Suit.SPADES, C("7D")) == C("4S")

    def test_eight_when_it_is_the_only_option(self):
        hand = cards("KH", "8C", "2C")
        assert choose_card(hand, Suit.SPADES, C("7D")) == C("8C")

    def test_first_eight_when_only_eights_fit(self):
        hand = cards("8D", "8C")
        assert choose_card(hand, Suit.SPADES, C("7H")) == C("8D")

    @given(hand_strategy(), st.sampled_from(list(Suit)), card_strategy())
    def test_choice_is_always_legal(self, hand, declared, top):
        card = choose_card(hand, declared, top)
        if card is None:
            assert not any(is_legal_play(c, declared, top) for c in hand)
        else:
            assert card in hand
            assert is_legal_play(card, declared, top)


class TestChooseSuit:
    """Tests for suit choice after an eight."""

    def test_most_common_suit(self):
        assert choose_suit(cards("5C", "9C", "KD")) is Suit.CLUBS

    def test_eights_are_not_counted(self):
        assert choose_suit(cards("8S", "8S", "8S", "2D")) is Suit.DIAMONDS
        assert choose_suit(cards("8S", "8C", "2D")) is Suit.DIAMONDS

    def test_ties_follow_enumeration_order(self):
        assert choose_suit(cards("KS", "2C")) is Suit.CLUBS
        assert choose_suit(cards("KS", "2D", "3C")) is Suit.DIAMONDS
        assert choose_suit(cards("AS", "QH")) is Suit.HEARTS

    def test_tie_ignores_hand_order(self):
        assert choose_suit(cards("2S", "3S", "4C", "5C")) is Suit.CLUBS

    def test_only_eights_gives_hearts(self):
        assert choose_suit(cards("8S", "8C")) is Suit.HEARTS

    def test_empty_hand_gives_hearts(self):
        assert choose_suit(()) is Suit.HEARTS

    @given(hand_strategy(min_cards=1))
    def test_chosen_suit_has_maximal_count(self, hand):
        counts = {s: sum(1 for c in hand if c.suit is s and not c.is_eight) for s in Suit}
        chosen = choose_suit(hand)
        assert counts[chosen] == max(counts.values())
