"""Crazy Eights turn controller with state machine."""

from random import Random
from typing import Callable

from transitions import Machine

from eights.cards import Card, Suit
from eights.dealer import HAND_SIZE, deal_new_game
from eights.game.events import EventEmitter, EventType, GameEvent
from eights.game.reducer import Action, DeclareSuit, Draw, Outcome, Play, apply
from eights.game.state import GameState, Participant, Phase
from eights.logger import get_logger
from eights.rules import RejectReason, has_legal_play, legal_cards
from eights.strategy import choose_card

logger = get_logger(__name__)

# Receives the opponent's move and decides when to run it
Scheduler = Callable[[Callable[[], None]], None]


def new_game(rng: Random | None = None) -> GameState:
    """Deal a fresh game; the human player moves first."""
    return deal_new_game(rng)


def play_card(state: GameState, card: Card, actor: Participant) -> GameState:
    """Play a card, or return ``state`` unchanged if the play is refused."""
    return apply(state, Play(actor, card)).state


def draw_card(state: GameState, actor: Participant) -> GameState:
    """Draw a card, or return ``state`` unchanged if drawing is refused."""
    return apply(state, Draw(actor)).state


def declare_suit(state: GameState, suit: Suit) -> GameState:
    """Declare a suit, or return ``state`` unchanged if no choice is pending."""
    return apply(state, DeclareSuit(suit)).state


def decide(state: GameState) -> Action | None:
    """
    Choose the opponent's action.

    Returns None unless the opponent is the one to move.
    """
    if state.phase is not Phase.OPPONENT_TURN:
        return None
    card = choose_card(state.opponent_hand, state.declared_suit, state.top_card)
    if card is None:
        return Draw(Participant.OPPONENT)
    return Play(Participant.OPPONENT, card)


def take_automated_turn(state: GameState) -> GameState:
    """Let the opponent move; a no-op whenever it is not the opponent's turn."""
    action = decide(state)
    if action is None:
        return state
    return apply(state, action).state


def is_game_over(state: GameState) -> bool:
    """Check if the game has a winner."""
    return state.is_over


def winner(state: GameState) -> Participant | None:
    """Return the winner, or None while the game is in progress."""
    return state.winner


class CrazyEightsGame:
    """
    Crazy Eights game engine using a state machine.

    Owns the single current ``GameState`` and is the only caller of the
    reducer. The machine mirrors the snapshot's phase so that an impossible
    phase change fails loudly instead of corrupting a game.

    Whenever an accepted action leaves the opponent to move, exactly one
    call to ``opponent_turn`` is handed to the scheduler. Without a
    scheduler the opponent moves immediately.
    """

    # State machine states
    STATES = [p.name.lower() for p in Phase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "pass_turn", "source": "player_turn", "dest": "opponent_turn"},
        {"trigger": "pass_turn", "source": "opponent_turn", "dest": "player_turn"},
        {"trigger": "await_suit", "source": "player_turn", "dest": "choosing_suit"},
        {"trigger": "suit_declared", "source": "choosing_suit", "dest": "opponent_turn"},
        {"trigger": "finish", "source": ["player_turn", "opponent_turn"], "dest": "game_over"},
        {"trigger": "redeal", "source": "*", "dest": "player_turn"},
    ]

    def __init__(
        self,
        rng: Random | None = None,
        hand_size: int = HAND_SIZE,
        scheduler: Scheduler | None = None,
        state: GameState | None = None,
    ) -> None:
        """
        Initialize a game.

        Args:
            rng: Random number generator for reproducible games
            hand_size: Cards dealt to each participant
            scheduler: Runs the opponent's move, e.g. after a pacing delay
            state: Resume from an existing snapshot instead of dealing
        """
        self._rng = rng or Random()
        self.hand_size = hand_size
        self.scheduler = scheduler
        self.events = EventEmitter()
        self._opponent_pending = False
        self.last_rejection: RejectReason | None = None

        self.state = state if state is not None else deal_new_game(self._rng, hand_size)

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=self.state.phase.name.lower(),
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        if state is None:
            self._announce_new_game()

    @property
    def phase(self) -> Phase:
        """Get current phase as enum."""
        return Phase[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def restart(self) -> None:
        """Throw the current game away and deal a new one."""
        self.state = deal_new_game(self._rng, self.hand_size)
        self._opponent_pending = False
        self.redeal()
        self._announce_new_game()

    def play(self, card: Card | str) -> bool:
        """
        Player plays a card.

        Args:
            card: The card, or its id such as ``"hearts-7"``

        Returns:
            True if the play was accepted
        """
        if isinstance(card, str):
            card = Card.from_id(card)
        return self._commit(apply(self.state, Play(Participant.PLAYER, card)))

    def draw(self) -> bool:
        """Player draws from the stock (or passes if it is empty)."""
        return self._commit(apply(self.state, Draw(Participant.PLAYER)))

    def choose_suit(self, suit: Suit) -> bool:
        """Player names the suit after playing an eight."""
        return self._commit(apply(self.state, DeclareSuit(suit)))

    def opponent_turn(self) -> bool:
        """
        Take the automated opponent's turn.

        Safe to call at any time; returns False without emitting anything
        when it is not the opponent's move.
        """
        self._opponent_pending = False
        action = decide(self.state)
        if action is None:
            return False
        return self._commit(apply(self.state, action))

    def _commit(self, outcome: Outcome) -> bool:
        """Adopt an accepted outcome, or report a rejected one."""
        self.last_rejection = outcome.rejected
        if outcome.rejected is not None:
            logger.debug("Rejected action: %s", outcome.rejected)
            self.events.emit_new(
                EventType.INVALID_ACTION,
                reason=outcome.rejected.name,
                message=str(outcome.rejected),
            )
            return False

        previous = self.state
        self.state = outcome.state
        logger.debug("%s: %s", previous.active, self.state.last_event.name)
        self._advance_machine(previous.phase)
        self._emit_transition(previous)

        if self.phase is Phase.OPPONENT_TURN:
            self._schedule_opponent()
        return True

    def _advance_machine(self, previous: Phase) -> None:
        """Fire the one machine trigger matching the phase change."""
        current = self.state.phase
        if current is Phase.GAME_OVER:
            self.finish()
        elif current is Phase.CHOOSING_SUIT:
            self.await_suit()
        elif previous is Phase.CHOOSING_SUIT:
            self.suit_declared()
        else:
            self.pass_turn()

    def _emit_transition(self, previous: GameState) -> None:
        """Describe the change from ``previous`` to the current snapshot."""
        state = self.state
        actor = previous.active
        kind = state.last_event

        if kind is EventType.CARD_DRAWN:
            data = {"actor": actor.value, "stock": len(state.stock)}
            if actor is Participant.PLAYER:
                data["card"] = state.player_hand[-1].id
            self.events.emit_new(EventType.CARD_DRAWN, **data)
        elif kind is EventType.TURN_SKIPPED:
            self.events.emit_new(EventType.TURN_SKIPPED, actor=actor.value)
        elif kind is EventType.SUIT_DECLARED and actor is Participant.PLAYER and previous.choosing_suit:
            self.events.emit_new(EventType.SUIT_DECLARED, actor=actor.value, suit=state.declared_suit.value)
        else:
            played = state.top_card
            self.events.emit_new(EventType.CARD_PLAYED, actor=actor.value, card=played.id)
            if kind is EventType.SUIT_CHOICE_REQUIRED:
                self.events.emit_new(EventType.SUIT_CHOICE_REQUIRED, actor=actor.value)
            elif kind is EventType.SUIT_DECLARED:
                self.events.emit_new(EventType.SUIT_DECLARED, actor=actor.value, suit=state.declared_suit.value)

        if state.winner is not None:
            logger.info("%s wins", state.winner.value.title())
            self.events.emit_new(EventType.GAME_WON, winner=state.winner.value)
        elif state.active is not previous.active:
            self.events.emit_new(EventType.TURN_CHANGED, active=state.active.value)

    def _schedule_opponent(self) -> None:
        """Queue exactly one opponent move."""
        if self._opponent_pending:
            return
        self._opponent_pending = True
        if self.scheduler is None:
            self.opponent_turn()
        else:
            self.scheduler(self.opponent_turn)

    def _announce_new_game(self) -> None:
        logger.info(
            "New game: %s up, %d cards in stock",
            self.state.top_card,
            len(self.state.stock),
        )
        self.events.emit_new(
            EventType.GAME_STARTED,
            top_card=self.state.top_card.id,
            declared_suit=self.state.declared_suit.value,
        )

    @property
    def top_card(self) -> Card:
        """Card on top of the discard pile."""
        return self.state.top_card

    @property
    def declared_suit(self) -> Suit:
        """Suit the next card must match (unless rank matches or it is an eight)."""
        return self.state.declared_suit

    @property
    def winner(self) -> Participant | None:
        """Winner of the game, if decided."""
        return self.state.winner

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def player_hand(self) -> tuple[Card, ...]:
        return self.state.player_hand

    @property
    def opponent_card_count(self) -> int:
        return len(self.state.opponent_hand)

    @property
    def playable_cards(self) -> list[Card]:
        """Player cards that may be played right now."""
        if self.phase is not Phase.PLAYER_TURN:
            return []
        return legal_cards(self.state.player_hand, self.state.declared_suit, self.state.top_card)

    @property
    def can_draw(self) -> bool:
        """Check if the player may draw."""
        return self.phase is Phase.PLAYER_TURN

    @property
    def must_draw(self) -> bool:
        """Check if drawing is the player's only option."""
        return self.can_draw and not has_legal_play(
            self.state.player_hand, self.state.declared_suit, self.state.top_card
        )

    @property
    def can_choose_suit(self) -> bool:
        """Check if the player has to name a suit."""
        return self.phase is Phase.CHOOSING_SUIT
