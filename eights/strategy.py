"""Decision policy for the automated opponent."""

from collections import Counter
from typing import Iterable, Sequence

from eights.cards import Card, Suit
from eights.rules import legal_cards


def choose_card(hand: Sequence[Card], declared_suit: Suit, top_card: Card) -> Card | None:
    """
    Pick the card the opponent plays.

    Eights are kept back while any other card fits, so the first legal
    non-eight in hand order wins. Returns None when nothing is playable and
    the opponent has to draw.
    """
    playable = legal_cards(hand, declared_suit, top_card)
    if not playable:
        return None
    for card in playable:
        if not card.is_eight:
            return card
    return playable[0]


def choose_suit(hand: Iterable[Card]) -> Suit:
    """
    Pick the suit to declare after playing an eight.

    Counts the non-eight cards of the remaining hand per suit and returns
    the most common one. Ties go to the earliest suit in enumeration order
    (hearts, diamonds, clubs, spades); a hand of only eights gives hearts.
    """
    counts = Counter(card.suit for card in hand if not card.is_eight)
    best = Suit.HEARTS
    best_count = 0
    for suit in Suit:
        if counts[suit] > best_count:
            best, best_count = suit, counts[suit]
    return best
