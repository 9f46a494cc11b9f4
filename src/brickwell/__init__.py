"""Simulation core for a falling-block puzzle game."""

from .board import Board, EMPTY_ROW
from .config import DEFAULT_CONFIG, GameConfig
from .engine import GameEngine
from .events import GameEventListener, InputEvent, LoggingListener
from .game_state import GamePhase, GameState
from .lines import clear_lines, find_complete_lines
from .scoring import level_for_lines, points
from .snapshot import RenderState
from .tetromino import Block, Piece, PieceType, base_blocks, rotate_clockwise
from .utils import can_place, render_grid

__all__ = [
    "Block",
    "Board",
    "DEFAULT_CONFIG",
    "EMPTY_ROW",
    "GameConfig",
    "GameEngine",
    "GameEventListener",
    "GamePhase",
    "GameState",
    "InputEvent",
    "LoggingListener",
    "Piece",
    "PieceType",
    "RenderState",
    "base_blocks",
    "can_place",
    "clear_lines",
    "find_complete_lines",
    "level_for_lines",
    "points",
    "render_grid",
    "rotate_clockwise",
]
