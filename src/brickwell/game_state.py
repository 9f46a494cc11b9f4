"""Mutable state container for one game session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
import random

from .board import Board
from .config import DEFAULT_CONFIG, GameConfig
from .tetromino import Piece


class GamePhase(str, Enum):
    """Coarse lifecycle of a game."""

    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Everything that changes while a game is played.

    A single :class:`~brickwell.engine.GameEngine` owns an instance and is the
    only code that mutates it.  ``piece_col``/``piece_row`` are the absolute
    grid origin of ``active``; ``upcoming`` has no position.
    """

    config: GameConfig = DEFAULT_CONFIG
    phase: GamePhase = GamePhase.READY
    board: Board = field(init=False)
    active: Optional[Piece] = None
    upcoming: Optional[Piece] = None
    piece_col: int = 0
    piece_row: int = 0
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    descent_offset: float = 0.0
    # ``None`` until the first playing frame sets the gravity baseline.
    last_drop_time: Optional[float] = None
    lines_to_destroy: Tuple[int, ...] = ()
    destruction_remaining_ms: float = 0.0

    def __post_init__(self) -> None:
        self.board = Board(self.config.columns, self.config.rows)
        self.piece_col = self.config.spawn_column
        self.piece_row = self.config.spawn_row

    def reset_game(self, rng: random.Random) -> None:
        """Reset everything for a new game and draw the first two pieces."""

        self.board = Board(self.config.columns, self.config.rows)
        self.active = Piece.random(rng)
        self.upcoming = Piece.random(rng)
        self.piece_col = self.config.spawn_column
        self.piece_row = self.config.spawn_row
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.descent_offset = 0.0
        self.last_drop_time = None
        self.lines_to_destroy = ()
        self.destruction_remaining_ms = 0.0
        self.phase = GamePhase.PLAYING

    def spawn_next(self, rng: random.Random) -> Piece:
        """Promote the upcoming piece, draw a new one and return to spawn."""

        self.active = self.upcoming or Piece.random(rng)
        self.upcoming = Piece.random(rng)
        self.piece_col = self.config.spawn_column
        self.piece_row = self.config.spawn_row
        return self.active


__all__ = ["GamePhase", "GameState"]
