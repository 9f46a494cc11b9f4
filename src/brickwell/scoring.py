"""Score and level progression."""

from __future__ import annotations

from typing import Mapping

from .config import LINE_POINTS, LINES_PER_LEVEL, POINTS_SINGLE


_CLEAR_NAMES = {1: "Single", 2: "Double", 3: "Triple", 4: "Tetris"}


def points(lines: int, level: int, table: Mapping[int, int] = LINE_POINTS) -> int:
    """Return the points for clearing ``lines`` rows at once on ``level``.

    One to four lines use the classic 100/300/500/800 table.  Larger counts
    cannot happen with four-block pieces but fall back to 100 per line.  The
    base value is multiplied by the level.
    """

    if lines <= 0:
        return 0
    base = table.get(lines, lines * POINTS_SINGLE)
    return base * level


def level_for_lines(total_lines: int, lines_per_level: int = LINES_PER_LEVEL) -> int:
    """Return the level reached after ``total_lines`` cleared lines (starts at 1)."""

    return total_lines // lines_per_level + 1


def lines_to_next_level(total_lines: int, lines_per_level: int = LINES_PER_LEVEL) -> int:
    return level_for_lines(total_lines, lines_per_level) * lines_per_level - total_lines


def line_clear_name(lines: int) -> str:
    return _CLEAR_NAMES.get(lines, f"{lines} Lines")


__all__ = ["level_for_lines", "line_clear_name", "lines_to_next_level", "points"]
