"""Deterministic, headless Tic-Tac-Toe engine.

IMPORTANT: This package must never import pygame.
"""

from .ai import AISpec, choose_move
from .board import WINNING_LINES, Board
from .match import MatchConfig, MatchController
from .round import RoundState, new_round, play_computer_turn, play_human_turn
from .types import (
    BoardAnomaly,
    Cell,
    EngineError,
    InvalidMarkerAssignment,
    InvalidMove,
    MatchOver,
    Player,
    RoundInProgress,
    RoundOutcome,
)

__all__ = [
    "AISpec",
    "Board",
    "BoardAnomaly",
    "Cell",
    "EngineError",
    "InvalidMarkerAssignment",
    "InvalidMove",
    "MatchConfig",
    "MatchController",
    "MatchOver",
    "Player",
    "RoundInProgress",
    "RoundOutcome",
    "RoundState",
    "WINNING_LINES",
    "choose_move",
    "new_round",
    "play_computer_turn",
    "play_human_turn",
]
