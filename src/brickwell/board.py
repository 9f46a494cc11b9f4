"""Board representation for the play field."""

from __future__ import annotations

from typing import List

import numpy as np
from numpy.typing import NDArray

from .config import GRID_COLUMNS, GRID_ROWS
from .tetromino import Block, Piece


Grid = NDArray[np.bool_]

# Returned by :meth:`Board.highest_occupied_row` when nothing is locked.
EMPTY_ROW = -1


def create_empty_grid(columns: int = GRID_COLUMNS, rows: int = GRID_ROWS) -> Grid:
    """Return a new empty occupancy grid indexed ``[row, col]``."""

    return np.zeros((rows, columns), dtype=np.bool_)


class Board:
    """Fixed-size occupancy store.

    Row ``0`` is the floor row and indices grow upward.  Queries are
    bounds-aware: anything left, right or below the grid counts as occupied
    (walls and floor) while anything above the top row counts as empty sky, so
    a piece may poke out of the top while it is still falling.
    """

    def __init__(self, columns: int = GRID_COLUMNS, rows: int = GRID_ROWS) -> None:
        self.width = columns
        self.height = rows
        self.grid: Grid = create_empty_grid(columns, rows)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_occupied(self, col: int, row: int) -> bool:
        """Return ``True`` if ``(col, row)`` is blocked.

        Columns outside the grid and rows below ``0`` are walls; rows at or
        above the top are open.
        """

        if col < 0 or col >= self.width or row < 0:
            return True
        if row >= self.height:
            return False
        return bool(self.grid[row, col])

    def is_empty(self, col: int, row: int) -> bool:
        return not self.is_occupied(col, row)

    def is_row_complete(self, row: int) -> bool:
        """Return ``True`` if every column of ``row`` is occupied."""

        if not 0 <= row < self.height:
            return False
        return bool(self.grid[row].all())

    def is_row_empty(self, row: int) -> bool:
        if not 0 <= row < self.height:
            return True
        return not self.grid[row].any()

    def highest_occupied_row(self) -> int:
        """Return the topmost row holding a block, or :data:`EMPTY_ROW`."""

        rows = np.flatnonzero(self.grid.any(axis=1))
        if rows.size == 0:
            return EMPTY_ROW
        return int(rows[-1])

    def occupied_cells(self) -> List[Block]:
        """Return every occupied cell ordered by row, then column."""

        rows, cols = np.nonzero(self.grid)
        return [Block(int(c), int(r)) for r, c in zip(rows, cols)]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def set_cell(self, col: int, row: int, occupied: bool = True) -> None:
        """Set the occupancy of ``(col, row)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = occupied
        else:
            raise IndexError("Cell out of bounds")

    def lock(self, piece: Piece, col: int, row: int) -> None:
        """Write the piece's blocks into the grid with its origin at ``(col, row)``."""

        coordinates = np.asarray(
            [(b.row, b.col) for b in piece.cells(col, row)], dtype=np.int16
        )
        rows, cols = coordinates.T
        if (
            np.any(rows < 0)
            or np.any(rows >= self.height)
            or np.any(cols < 0)
            or np.any(cols >= self.width)
        ):
            raise IndexError("Block out of bounds")
        self.grid[rows, cols] = True

    def clear_row(self, row: int) -> None:
        """Remove ``row`` and shift every row above it down by one.

        The top row becomes empty and the rows above ``row`` keep their
        relative order.
        """

        if not 0 <= row < self.height:
            raise IndexError("Row out of bounds")
        self.grid[row:-1] = self.grid[row + 1 :].copy()
        self.grid[-1] = False

    def clear(self) -> None:
        self.grid[:] = False

    def __str__(self) -> str:
        lines = [
            "|" + "".join("#" if cell else " " for cell in self.grid[row]) + "|"
            for row in range(self.height - 1, -1, -1)
        ]
        lines.append("+" + "-" * self.width + "+")
        return "\n".join(lines)


__all__ = ["Board", "EMPTY_ROW", "create_empty_grid"]
