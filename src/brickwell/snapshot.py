"""Immutable per-frame view of the game for renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .game_state import GamePhase
from .tetromino import Block


@dataclass(frozen=True)
class RenderState:
    """Complete frame data handed to the presentation layer.

    All block positions are grid cells ``(col, row)`` with row ``0`` at the
    floor, except ``next_blocks`` which are offsets local to the preview
    piece.  Renderers treat every field as authoritative and never recompute
    game logic from it.  Instances share nothing with the engine and may be
    kept indefinitely.
    """

    grid_blocks: Tuple[Block, ...]
    active_blocks: Tuple[Block, ...]
    ghost_blocks: Tuple[Block, ...]
    next_blocks: Tuple[Block, ...]
    camera_offset: float
    score: int
    level: int
    lines_cleared: int
    descent_progress: float
    phase: GamePhase
    lines_to_destroy: Tuple[int, ...]

    @classmethod
    def empty(cls) -> "RenderState":
        """Return the state shown before any game has started."""

        return cls(
            grid_blocks=(),
            active_blocks=(),
            ghost_blocks=(),
            next_blocks=(),
            camera_offset=0.0,
            score=0,
            level=1,
            lines_cleared=0,
            descent_progress=0.0,
            phase=GamePhase.READY,
            lines_to_destroy=(),
        )

    @property
    def is_ready(self) -> bool:
        return self.phase is GamePhase.READY

    @property
    def is_playing(self) -> bool:
        return self.phase is GamePhase.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.phase is GamePhase.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.phase is GamePhase.GAME_OVER

    @property
    def has_lines_to_destroy(self) -> bool:
        return bool(self.lines_to_destroy)


__all__ = ["RenderState"]
