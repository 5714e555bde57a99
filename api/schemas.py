"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal

from eights.cards import Suit


class PlayRequest(BaseModel):
    """Request to play a card from the player's hand."""

    card_id: str = Field(..., min_length=3, description="Card id, e.g. 'hearts-7'")


class SuitRequest(BaseModel):
    """Request to declare the suit after an eight."""

    suit: Suit


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    rank: str
    suit: str
    label: str
    playable: bool = False


class GameStateResponse(BaseModel):
    """Current game state as seen by the human player."""

    phase: Literal["PLAYER_TURN", "CHOOSING_SUIT", "OPPONENT_TURN", "GAME_OVER"]
    active: Literal["player", "opponent"]
    declared_suit: str
    top_card: CardResponse
    player_hand: list[CardResponse]
    opponent_card_count: int
    stock_count: int
    discard_count: int
    winner: Literal["player", "opponent"] | None
    last_event: str
    must_draw: bool
    can_draw: bool
    can_choose_suit: bool
    opponent_delay_ms: int
