"""Dealing and new-game initialization."""

from random import Random
from typing import NamedTuple, Sequence

from eights.cards import Card, build_deck, shuffle
from eights.game.state import GameState, Participant
from eights.logger import get_logger

logger = get_logger(__name__)

HAND_SIZE = 8

# The stock must hold a non-eight starter even if all four eights are in it
MAX_HAND_SIZE = (52 - 4 - 1) // 2


class DealError(ValueError):
    """Raised when a deal cannot be made from the deck."""


class Deal(NamedTuple):
    """A dealt hand and the undealt rest of the deck."""

    hand: tuple[Card, ...]
    remaining: tuple[Card, ...]


def deal(deck: Sequence[Card], n: int) -> Deal:
    """
    Take the first ``n`` cards as a hand.

    Args:
        deck: Cards to deal from, front first
        n: Number of cards in the hand

    Returns:
        The hand and the remaining cards in their original order

    Raises:
        DealError: If ``n`` is negative or exceeds the deck length
    """
    if n < 0 or n > len(deck):
        raise DealError(f"Cannot deal {n} cards from a deck of {len(deck)}")
    cards = tuple(deck)
    return Deal(cards[:n], cards[n:])


def deal_new_game(rng: Random | None = None, hand_size: int = HAND_SIZE) -> GameState:
    """
    Build the opening position of a game.

    The player and then the opponent receive ``hand_size`` cards. The next
    stock card starts the discard pile; an eight goes back into the stock,
    the stock is reshuffled and the next card is tried instead.

    Raises:
        DealError: If the hands would leave no guaranteed non-eight starter
    """
    if not 1 <= hand_size <= MAX_HAND_SIZE:
        raise DealError(f"Hand size must be between 1 and {MAX_HAND_SIZE}, got {hand_size}")
    rng = rng or Random()

    deck = shuffle(build_deck(), rng)
    player = deal(deck, hand_size)
    opponent = deal(player.remaining, hand_size)
    stock = list(opponent.remaining)

    top = stock.pop(0)
    reshuffles = 0
    while top.is_eight:
        stock.append(top)
        stock = list(shuffle(stock, rng))
        top = stock.pop(0)
        reshuffles += 1

    if reshuffles:
        logger.debug("Starting card was an eight, stock reshuffled %d time(s)", reshuffles)

    return GameState(
        stock=tuple(stock),
        discard_pile=(top,),
        player_hand=player.hand,
        opponent_hand=opponent.hand,
        active=Participant.PLAYER,
        declared_suit=top.suit,
    )
