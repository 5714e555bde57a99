"""Move legality for Crazy Eights."""

from enum import Enum
from typing import Iterable

from eights.cards import Card, Suit


class RejectReason(Enum):
    """Why an action was refused. The state is never changed on rejection."""

    GAME_OVER = "game is over"
    NOT_YOUR_TURN = "not your turn"
    SUIT_CHOICE_PENDING = "a suit must be chosen first"
    NO_SUIT_CHOICE = "no suit choice is pending"
    CARD_NOT_IN_HAND = "card is not in hand"
    ILLEGAL_CARD = "card does not match the suit or rank"

    def __str__(self) -> str:
        return self.value


def is_legal_play(card: Card, declared_suit: Suit, top_card: Card) -> bool:
    """
    Check whether a card may be played.

    An eight is always playable. Otherwise the card must match the declared
    suit (which may differ from the top card's own suit after an eight) or
    the top card's rank.
    """
    return card.is_eight or card.suit is declared_suit or card.rank is top_card.rank


def legal_cards(hand: Iterable[Card], declared_suit: Suit, top_card: Card) -> list[Card]:
    """Return the playable cards of a hand, in hand order."""
    return [card for card in hand if is_legal_play(card, declared_suit, top_card)]


def has_legal_play(hand: Iterable[Card], declared_suit: Suit, top_card: Card) -> bool:
    """Check whether any card of a hand may be played."""
    return any(is_legal_play(card, declared_suit, top_card) for card in hand)
