"""Game state, transitions and the turn controller."""

from eights.game.events import GameEvent, EventType, EventEmitter
from eights.game.state import GameState, Participant, Phase
from eights.game.reducer import Play, Draw, DeclareSuit, Outcome, apply
from eights.game.engine import (
    CrazyEightsGame,
    new_game,
    play_card,
    draw_card,
    declare_suit,
    take_automated_turn,
    is_game_over,
    winner,
)

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "GameState",
    "Participant",
    "Phase",
    "Play",
    "Draw",
    "DeclareSuit",
    "Outcome",
    "apply",
    "CrazyEightsGame",
    "new_game",
    "play_card",
    "draw_card",
    "declare_suit",
    "take_automated_turn",
    "is_game_over",
    "winner",
]
