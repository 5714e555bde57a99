"""Game state snapshot and phase enumeration."""

from dataclasses import dataclass, replace
from enum import Enum, auto

from eights.cards import Card, Suit
from eights.game.events import EventType


class Participant(Enum):
    """The two seats at the table."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Participant":
        """Return the participant who moves after this one."""
        return Participant.OPPONENT if self is Participant.PLAYER else Participant.PLAYER

    def __str__(self) -> str:
        return self.value


class Phase(Enum):
    """
    Game state machine phases.

    Flow: PLAYER_TURN ⇄ OPPONENT_TURN, PLAYER_TURN → CHOOSING_SUIT → OPPONENT_TURN,
    any turn → GAME_OVER
    """

    # Human to play or draw
    PLAYER_TURN = auto()

    # Human played an eight and must name a suit
    CHOOSING_SUIT = auto()

    # Automated opponent to move
    OPPONENT_TURN = auto()

    # A hand was emptied
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid phase transitions
VALID_TRANSITIONS: dict[Phase, list[Phase]] = {
    Phase.PLAYER_TURN: [Phase.OPPONENT_TURN, Phase.CHOOSING_SUIT, Phase.GAME_OVER],
    Phase.CHOOSING_SUIT: [Phase.OPPONENT_TURN],
    Phase.OPPONENT_TURN: [Phase.PLAYER_TURN, Phase.GAME_OVER],
    Phase.GAME_OVER: [],  # Terminal state
}


def is_valid_transition(from_phase: Phase, to_phase: Phase) -> bool:
    """
    Check if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Desired phase

    Returns:
        True if the transition is allowed
    """
    return to_phase in VALID_TRANSITIONS.get(from_phase, [])


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of one game.

    Every accepted action produces a new snapshot; rejected actions hand back
    the same object.
    """

    stock: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    player_hand: tuple[Card, ...]
    opponent_hand: tuple[Card, ...]
    active: Participant
    declared_suit: Suit
    winner: Participant | None = None
    choosing_suit: bool = False
    last_event: EventType = EventType.GAME_STARTED

    def __post_init__(self) -> None:
        if not self.discard_pile:
            raise ValueError("Discard pile must hold at least one card")

    @property
    def top_card(self) -> Card:
        """Return the card currently on top of the discard pile."""
        return self.discard_pile[-1]

    @property
    def is_over(self) -> bool:
        """Check if a winner has been decided."""
        return self.winner is not None

    @property
    def phase(self) -> Phase:
        """Derive the state machine phase from the snapshot."""
        if self.winner is not None:
            return Phase.GAME_OVER
        if self.choosing_suit:
            return Phase.CHOOSING_SUIT
        if self.active is Participant.PLAYER:
            return Phase.PLAYER_TURN
        return Phase.OPPONENT_TURN

    def hand(self, participant: Participant) -> tuple[Card, ...]:
        """Return the hand held by a participant."""
        if participant is Participant.PLAYER:
            return self.player_hand
        return self.opponent_hand

    def with_hand(self, participant: Participant, cards: tuple[Card, ...], **changes) -> "GameState":
        """Return a copy with one hand replaced, plus any other field changes."""
        key = "player_hand" if participant is Participant.PLAYER else "opponent_hand"
        return replace(self, **{key: cards}, **changes)

    def all_cards(self) -> list[Card]:
        """Return every card in the game, wherever it sits."""
        return [*self.stock, *self.player_hand, *self.opponent_hand, *self.discard_pile]
