"""Core Crazy Eights engine - 100% UI-agnostic."""

from eights.cards import Card, Rank, Suit, build_deck, shuffle
from eights.rules import RejectReason, is_legal_play, has_legal_play, legal_cards
from eights.game import (
    CrazyEightsGame,
    GameState,
    Participant,
    Phase,
    new_game,
    play_card,
    draw_card,
    declare_suit,
    take_automated_turn,
    is_game_over,
    winner,
)
from eights.dealer import Deal, DealError, deal

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "build_deck",
    "shuffle",
    "RejectReason",
    "is_legal_play",
    "has_legal_play",
    "legal_cards",
    "CrazyEightsGame",
    "GameState",
    "Participant",
    "Phase",
    "new_game",
    "play_card",
    "draw_card",
    "declare_suit",
    "take_automated_turn",
    "is_game_over",
    "winner",
    "Deal",
    "DealError",
    "deal",
]
