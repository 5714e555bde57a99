"""Game API endpoints."""

import time
from collections import OrderedDict
from fastapi import APIRouter, Depends, HTTPException, Header
from typing import Annotated, Any, Callable

from api.schemas import (
    PlayRequest,
    SuitRequest,
    GameStateResponse,
    CardResponse,
)
from api.session import close_session, get_session_store, open_session, resolve_session
from config import config
from eights.cards import Card, Suit
from eights.game import CrazyEightsGame, GameState, Participant
from eights.game.engine import Scheduler
from eights.game.events import EventType

router = APIRouter()

# Live engines by session id, least recently used first. The session store
# stays authoritative: a game is only served while its session exists there.
MAX_CACHED_GAMES = 1024
_games: OrderedDict[str, CrazyEightsGame] = OrderedDict()

# Session data keys
SESSION_KEY_GAME = "game"
SESSION_KEY_CREATED_AT = "created_at"
SESSION_KEY_LAST_ACTIVITY = "last_activity"


def _serialize_cards(cards: tuple[Card, ...]) -> list[str]:
    """Serialize cards as a list of card ids."""
    return [c.id for c in cards]


def _deserialize_cards(data: list[str]) -> tuple[Card, ...]:
    """Restore cards from a list of card ids."""
    return tuple(Card.from_id(card_id) for card_id in data)


def _serialize_state(state: GameState) -> dict[str, Any]:
    """Serialize a game snapshot for session storage."""
    return {
        "stock": _serialize_cards(state.stock),
        "discard_pile": _serialize_cards(state.discard_pile),
        "player_hand": _serialize_cards(state.player_hand),
        "opponent_hand": _serialize_cards(state.opponent_hand),
        "active": state.active.value,
        "declared_suit": state.declared_suit.value,
        "winner": state.winner.value if state.winner else None,
        "choosing_suit": state.choosing_suit,
        "last_event": state.last_event.name,
    }


def _deserialize_state(data: dict[str, Any]) -> GameState:
    """Restore a game snapshot from session data."""
    return GameState(
        stock=_deserialize_cards(data["stock"]),
        discard_pile=_deserialize_cards(data["discard_pile"]),
        player_hand=_deserialize_cards(data["player_hand"]),
        opponent_hand=_deserialize_cards(data["opponent_hand"]),
        active=Participant(data["active"]),
        declared_suit=Suit(data["declared_suit"]),
        winner=Participant(data["winner"]) if data["winner"] else None,
        choosing_suit=data["choosing_suit"],
        last_event=EventType[data["last_event"]],
    )


def _manual_opponent(move: Callable[[], None]) -> None:
    """Leave the opponent's move to an explicit /opponent call."""


def _scheduler() -> Scheduler | None:
    """Opponent scheduling for API games."""
    return None if config.game.auto_opponent else _manual_opponent


def _new_game() -> CrazyEightsGame:
    return CrazyEightsGame(hand_size=config.game.hand_size, scheduler=_scheduler())


def _cache_game(session_id: str, game: CrazyEightsGame) -> None:
    """Remember a live engine, evicting the least recently used beyond the limit."""
    _games[session_id] = game
    _games.move_to_end(session_id)
    while len(_games) > MAX_CACHED_GAMES:
        _games.popitem(last=False)


def require_session(
    token: Annotated[str, Header(alias="X-Session-ID")],
) -> str:
    """Resolve the signed session header to a session id."""
    session_id = resolve_session(token)
    if session_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired session")
    return session_id


SessionId = Annotated[str, Depends(require_session)]


async def _save_game(session_id: str, game: CrazyEightsGame) -> None:
    """Save game to session store, refreshing the session TTL."""
    store = await get_session_store()
    session_data = await store.load(session_id) or {}
    session_data[SESSION_KEY_GAME] = _serialize_state(game.state)
    session_data[SESSION_KEY_LAST_ACTIVITY] = int(time.time())
    session_data.setdefault(SESSION_KEY_CREATED_AT, int(time.time()))
    await store.save(session_id, session_data)


async def _get_game(session_id: str) -> CrazyEightsGame:
    """Get the session's game, from the cache or the session store."""
    store = await get_session_store()
    session_data = await store.load(session_id)
    if session_data is None:
        _games.pop(session_id, None)
        raise HTTPException(status_code=404, detail="Session expired")

    game = _games.get(session_id)
    if game is None:
        if SESSION_KEY_GAME in session_data:
            game = CrazyEightsGame(
                hand_size=config.game.hand_size,
                scheduler=_scheduler(),
                state=_deserialize_state(session_data[SESSION_KEY_GAME]),
            )
        else:
            game = _new_game()
            await _save_game(session_id, game)
    _cache_game(session_id, game)
    return game


def _card_response(card: Card, playable: bool = False) -> CardResponse:
    """Convert a Card to CardResponse."""
    return CardResponse(
        id=card.id,
        rank=str(card.rank),
        suit=card.suit.value,
        label=str(card),
        playable=playable,
    )


def _game_state_response(game: CrazyEightsGame) -> GameStateResponse:
    """Convert game state to response."""
    state = game.state
    playable = set(game.playable_cards)

    return GameStateResponse(
        phase=game.phase.name,
        active=state.active.value,
        declared_suit=state.declared_suit.value,
        top_card=_card_response(state.top_card),
        player_hand=[_card_response(c, c in playable) for c in state.player_hand],
        opponent_card_count=game.opponent_card_count,
        stock_count=len(state.stock),
        discard_count=len(state.discard_pile),
        winner=state.winner.value if state.winner else None,
        last_event=state.last_event.name,
        must_draw=game.must_draw,
        can_draw=game.can_draw,
        can_choose_suit=game.can_choose_suit,
        opponent_delay_ms=config.game.opponent_delay_ms,
    )


def _reject(game: CrazyEightsGame) -> HTTPException:
    """Build the error for a refused action."""
    reason = game.last_rejection
    return HTTPException(status_code=400, detail=str(reason) if reason else "Action refused")


@router.post("/new")
async def new_game(
    token: Annotated[str | None, Header(alias="X-Session-ID")] = None,
) -> dict[str, str]:
    """Start a new game, keeping a live session or opening a fresh one."""
    session_id = resolve_session(token)
    store = await get_session_store()
    if session_id is None or await store.load(session_id) is None:
        session_id, token = await open_session()

    game = _new_game()
    _cache_game(session_id, game)
    await _save_game(session_id, game)

    return {"session_id": token}


@router.delete("/session", status_code=204)
async def end_session(session_id: SessionId) -> None:
    """Forget the session and its game."""
    _games.pop(session_id, None)
    await close_session(session_id)


@router.get("/state")
async def get_state(session_id: SessionId) -> GameStateResponse:
    """Get current game state."""
    game = await _get_game(session_id)
    return _game_state_response(game)


@router.post("/play")
async def play_card(request: PlayRequest, session_id: SessionId) -> GameStateResponse:
    """Play a card from the player's hand."""
    game = await _get_game(session_id)

    try:
        card = Card.from_id(request.card_id)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown card: {request.card_id}") from None

    if not game.play(card):
        raise _reject(game)

    await _save_game(session_id, game)
    return _game_state_response(game)


@router.post("/draw")
async def draw_card(session_id: SessionId) -> GameStateResponse:
    """Draw from the stock, or pass if it is empty."""
    game = await _get_game(session_id)

    if not game.draw():
        raise _reject(game)

    await _save_game(session_id, game)
    return _game_state_response(game)


@router.post("/suit")
async def choose_suit(request: SuitRequest, session_id: SessionId) -> GameStateResponse:
    """Declare the suit after playing an eight."""
    game = await _get_game(session_id)

    if not game.choose_suit(request.suit):
        raise _reject(game)

    await _save_game(session_id, game)
    return _game_state_response(game)


@router.post("/opponent")
async def opponent_turn(session_id: SessionId) -> GameStateResponse:
    """Let the opponent move. Returns the unchanged state if it is not its turn."""
    game = await _get_game(session_id)

    if game.opponent_turn():
        await _save_game(session_id, game)
    return _game_state_response(game)
