"""Pure state transitions: ``(state, action) -> state``."""

from dataclasses import dataclass, replace

from eights.cards import Card, Suit
from eights.game.events import EventType
from eights.game.state import GameState, Participant
from eights.rules import RejectReason, is_legal_play
from eights.strategy import choose_suit


@dataclass(frozen=True)
class Play:
    """Play a card from the actor's hand."""

    actor: Participant
    card: Card


@dataclass(frozen=True)
class Draw:
    """Take the front card of the stock, or pass if it is empty."""

    actor: Participant


@dataclass(frozen=True)
class DeclareSuit:
    """Name the suit after the human player's eight."""

    suit: Suit


Action = Play | Draw | DeclareSuit


@dataclass(frozen=True)
class Outcome:
    """Result of applying an action."""

    state: GameState
    rejected: RejectReason | None = None

    @property
    def accepted(self) -> bool:
        return self.rejected is None


def _check_turn(state: GameState, actor: Participant) -> RejectReason | None:
    if state.is_over:
        return RejectReason.GAME_OVER
    if state.active is not actor:
        return RejectReason.NOT_YOUR_TURN
    if state.choosing_suit:
        return RejectReason.SUIT_CHOICE_PENDING
    return None


def check_play(state: GameState, card: Card, actor: Participant) -> RejectReason | None:
    """Return why ``actor`` may not play ``card`` now, or None if it may."""
    reason = _check_turn(state, actor)
    if reason is not None:
        return reason
    if card not in state.hand(actor):
        return RejectReason.CARD_NOT_IN_HAND
    if not is_legal_play(card, state.declared_suit, state.top_card):
        return RejectReason.ILLEGAL_CARD
    return None


def check_draw(state: GameState, actor: Participant) -> RejectReason | None:
    """Return why ``actor`` may not draw now, or None if it may."""
    return _check_turn(state, actor)


def check_suit_declaration(state: GameState) -> RejectReason | None:
    """Return why a suit may not be declared now, or None if it may."""
    if state.is_over:
        return RejectReason.GAME_OVER
    if state.active is not Participant.PLAYER:
        return RejectReason.NOT_YOUR_TURN
    if not state.choosing_suit:
        return RejectReason.NO_SUIT_CHOICE
    return None


def apply_play(state: GameState, card: Card, actor: Participant) -> GameState:
    """
    Play a card.

    The card moves from the actor's hand onto the discard pile. Emptying the
    hand wins the game outright. An eight played by the human leaves the turn
    with them until a suit is declared; an eight played by the opponent
    declares a suit immediately and hands the turn back. Any other card
    becomes the declared suit and passes the turn.
    """
    if check_play(state, card, actor) is not None:
        return state

    hand = tuple(c for c in state.hand(actor) if c != card)
    discard_pile = state.discard_pile + (card,)

    if not hand:
        return state.with_hand(
            actor,
            hand,
            discard_pile=discard_pile,
            declared_suit=card.suit,
            winner=actor,
            last_event=EventType.GAME_WON,
        )

    if card.is_eight:
        if actor is Participant.PLAYER:
            return state.with_hand(
                actor,
                hand,
                discard_pile=discard_pile,
                choosing_suit=True,
                last_event=EventType.SUIT_CHOICE_REQUIRED,
            )
        return state.with_hand(
            actor,
            hand,
            discard_pile=discard_pile,
            declared_suit=choose_suit(hand),
            active=actor.other,
            last_event=EventType.SUIT_DECLARED,
        )

    return state.with_hand(
        actor,
        hand,
        discard_pile=discard_pile,
        declared_suit=card.suit,
        active=actor.other,
        last_event=EventType.CARD_PLAYED,
    )


def apply_draw(state: GameState, actor: Participant) -> GameState:
    """
    Draw one card and pass the turn.

    With an empty stock nothing is drawn and the turn is forfeited. A drawn
    card is never played automatically, even when it would be legal.
    """
    if check_draw(state, actor) is not None:
        return state

    if not state.stock:
        return replace(state, active=actor.other, last_event=EventType.TURN_SKIPPED)

    drawn, stock = state.stock[0], state.stock[1:]
    return state.with_hand(
        actor,
        state.hand(actor) + (drawn,),
        stock=stock,
        active=actor.other,
        last_event=EventType.CARD_DRAWN,
    )


def apply_suit_declaration(state: GameState, suit: Suit) -> GameState:
    """Declare the suit after the human player's eight and pass the turn."""
    if check_suit_declaration(state) is not None:
        return state

    return replace(
        state,
        declared_suit=suit,
        choosing_suit=False,
        active=Participant.OPPONENT,
        last_event=EventType.SUIT_DECLARED,
    )


def apply(state: GameState, action: Action) -> Outcome:
    """Apply any action, reporting the reason when it is refused."""
    if isinstance(action, Play):
        reason = check_play(state, action.card, action.actor)
        next_state = apply_play(state, action.card, action.actor)
    elif isinstance(action, Draw):
        reason = check_draw(state, action.actor)
        next_state = apply_draw(state, action.actor)
    elif isinstance(action, DeclareSuit):
        reason = check_suit_declaration(state)
        next_state = apply_suit_declaration(state, action.suit)
    else:
        raise TypeError(f"Unknown action: {action!r}")
    return Outcome(next_state, reason)
