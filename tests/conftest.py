"""Pytest fixtures for Crazy Eights tests."""

import pytest
from random import Random

from hypothesis import strategies as st

from eights.cards import Card, Rank, Suit, build_deck
from eights.game import CrazyEightsGame, GameState, Participant


def cards(*specs: str) -> tuple[Card, ...]:
    """Build a tuple of cards from short strings like '8S', '10D'."""
    return tuple(Card.from_string(s) for s in specs)


def make_state(
    player: str = "",
    opponent: str = "",
    top: str = "7D",
    stock: str = "",
    declared: Suit | None = None,
    active: Participant = Participant.PLAYER,
    choosing_suit: bool = False,
    winner: Participant | None = None,
) -> GameState:
    """
    Build a small hand-crafted position.

    Card lists are space separated. The declared suit defaults to the top
    card's suit.
    """
    top_card = Card.from_string(top)
    return GameState(
        stock=cards(*stock.split()),
        discard_pile=(top_card,),
        player_hand=cards(*player.split()),
        opponent_hand=cards(*opponent.split()),
        active=active,
        declared_suit=declared or top_card.suit,
        choosing_suit=choosing_suit,
        winner=winner,
    )


def assert_conserved(state: GameState) -> None:
    """Every card of the deck sits in exactly one place."""
    ids = [c.id for c in state.all_cards()]
    assert len(ids) == 52
    assert set(ids) == {c.id for c in build_deck()}


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def game(rng):
    """A new game instance whose opponent moves immediately."""
    return CrazyEightsGame(rng=rng)


@pytest.fixture
def deferred():
    """Scheduler that collects opponent moves instead of running them."""

    class Deferred:
        def __init__(self) -> None:
            self.moves = []

        def __call__(self, move) -> None:
            self.moves.append(move)

        def run_all(self) -> None:
            moves, self.moves = self.moves, []
            for move in moves:
                move()

    return Deferred()


@pytest.fixture
def paced_game(rng, deferred):
    """A game whose opponent waits until the test runs its move."""
    return CrazyEightsGame(rng=rng, scheduler=deferred)


# Hypothesis strategies for property-based testing
@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)


@st.composite
def hand_strategy(draw, min_cards=0, max_cards=10):
    """Generate a hand of distinct cards."""
    return tuple(
        draw(st.lists(card_strategy(), min_size=min_cards, max_size=max_cards, unique=True))
    )
