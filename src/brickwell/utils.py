"""Utility helpers for the engine: collision probes, gravity timing, ASCII output."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .config import DEFAULT_CONFIG, GameConfig
from .tetromino import Piece


def can_place(board: Board, piece: Piece, col: int, row: int) -> bool:
    """Return ``True`` if ``piece`` fits on ``board`` with its origin at ``(col, row)``.

    Every absolute cell of the piece must be empty according to
    :meth:`Board.is_occupied`, so walls and the floor reject the placement
    while cells above the top of the grid are accepted.  The check has no
    side effects and is meant to be called before any move or rotation is
    committed.
    """

    return all(not board.is_occupied(b.col, b.row) for b in piece.cells(col, row))


def would_collide_below(board: Board, piece: Piece, col: int, row: int) -> bool:
    return not can_place(board, piece, col, row - 1)


def would_collide_left(board: Board, piece: Piece, col: int, row: int) -> bool:
    return not can_place(board, piece, col - 1, row)


def would_collide_right(board: Board, piece: Piece, col: int, row: int) -> bool:
    return not can_place(board, piece, col + 1, row)


def find_drop_row(board: Board, piece: Piece, col: int, row: int) -> int:
    """Return the lowest row ``piece`` can reach by falling straight down from ``row``."""

    target = row
    while can_place(board, piece, col, target - 1):
        target -= 1
    return target


def drop_interval_ms(level: int, config: GameConfig = DEFAULT_CONFIG) -> float:
    """Return the automatic drop interval in milliseconds for ``level``.

    The interval shrinks linearly with the level and bottoms out at
    ``config.min_drop_interval_ms``.
    """

    reduction = (level - 1) * config.drop_reduction_per_level_ms
    return max(config.min_drop_interval_ms, config.initial_drop_interval_ms - reduction)


def render_grid(
    board: Board,
    active: Optional[Piece] = None,
    col: int = 0,
    row: int = 0,
) -> List[str]:
    """Return the board as text lines, top row first, with ``active`` overlaid.

    Locked cells are drawn as ``#`` and the active piece as ``@``.  Parts of
    the active piece above the grid are not shown.  The board is not mutated.
    """

    cells = [["#" if occupied else "." for occupied in board_row] for board_row in board.grid]
    if active is not None:
        for block in active.cells(col, row):
            if 0 <= block.row < board.height and 0 <= block.col < board.width:
                cells[block.row][block.col] = "@"
    return ["".join(line) for line in reversed(cells)]


__all__ = [
    "can_place",
    "drop_interval_ms",
    "find_drop_row",
    "render_grid",
    "would_collide_below",
    "would_collide_left",
    "would_collide_right",
]
