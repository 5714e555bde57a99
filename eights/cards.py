"""Card, Suit and Rank types plus deck construction - immutable card representations."""

from dataclasses import dataclass, field
from enum import Enum
from random import Random
from typing import Sequence


class Suit(Enum):
    """Card suits, in tie-break order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """Check if this suit is hearts or diamonds."""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(Enum):
    """Card ranks. Only EIGHT carries special meaning."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def is_wild(self) -> bool:
        """Check if this rank may be played on anything."""
        return self is Rank.EIGHT


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card with a stable identity."""

    rank: Rank
    suit: Suit
    id: str = field(init=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", f"{self.suit.value}-{self.rank.value}")

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def is_eight(self) -> bool:
        """Check if this card is a wild eight."""
        return self.rank.is_wild

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a string like '8♠', 'KH', '10d'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_str = s[:-1]
        suit_str = s[-1]

        rank_map = {rank.value: rank for rank in Rank}
        rank_map["T"] = Rank.TEN

        suit_map = {
            "H": Suit.HEARTS,
            "♥": Suit.HEARTS,
            "D": Suit.DIAMONDS,
            "♦": Suit.DIAMONDS,
            "C": Suit.CLUBS,
            "♣": Suit.CLUBS,
            "S": Suit.SPADES,
            "♠": Suit.SPADES,
        }

        if rank_str not in rank_map:
            raise ValueError(f"Invalid rank: {rank_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(rank_map[rank_str], suit_map[suit_str])

    @classmethod
    def from_id(cls, card_id: str) -> "Card":
        """Create a card from its id, e.g. 'spades-8'."""
        suit_str, sep, rank_str = card_id.partition("-")
        if not sep:
            raise ValueError(f"Invalid card id: {card_id}")
        try:
            return cls(Rank(rank_str), Suit(suit_str))
        except ValueError as exc:
            raise ValueError(f"Invalid card id: {card_id}") from exc


def build_deck() -> tuple[Card, ...]:
    """Return the ordered 52-card deck."""
    return tuple(Card(rank, suit) for suit in Suit for rank in Rank)


def shuffle(deck: Sequence[Card], rng: Random | None = None) -> tuple[Card, ...]:
    """Return a uniformly shuffled copy of the deck; the input is left untouched."""
    cards = list(deck)
    (rng or Random()).shuffle(cards)
    return tuple(cards)
