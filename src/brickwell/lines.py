"""Complete-line detection and removal."""

from __future__ import annotations

from typing import Iterable, List

from .board import Board


def find_complete_lines(board: Board) -> List[int]:
    """Return the indices of all complete rows in ascending order."""

    return [row for row in range(board.height) if board.is_row_complete(row)]


def count_complete_lines(board: Board) -> int:
    return len(find_complete_lines(board))


def clear_lines(board: Board, rows: Iterable[int]) -> None:
    """Remove ``rows`` from ``board``, compacting the rows above them.

    Rows are cleared from the top down.  Each :meth:`Board.clear_row` shifts
    everything above the cleared row, so the indices still to be cleared
    must all lie below it.
    """

    for row in sorted(set(rows), reverse=True):
        board.clear_row(row)


__all__ = ["clear_lines", "count_complete_lines", "find_complete_lines"]
