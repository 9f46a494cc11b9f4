"""Game constants and the immutable configuration passed to the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


# Dimensions of the play field.  Row ``0`` is the bottom row; the rows above
# ``VISIBLE_ROWS`` are headroom that the descending camera eats into.
GRID_COLUMNS = 8
GRID_ROWS = 24
VISIBLE_ROWS = 16

# Height of one row in world units, used to convert the descent offset back
# into rows.
BRICK_HEIGHT = 0.48

# Timing, in milliseconds.
INITIAL_DROP_INTERVAL_MS = 1000
MIN_DROP_INTERVAL_MS = 150
DROP_SPEED_REDUCTION_PER_LEVEL = 80
DESCENT_SPEED = 0.003  # world units per millisecond
LINE_DESTRUCTION_DURATION_MS = 300

# Base points for clearing 1-4 lines at once, before the level multiplier.
POINTS_SINGLE = 100
POINTS_DOUBLE = 300
POINTS_TRIPLE = 500
POINTS_TETRIS = 800
LINES_PER_LEVEL = 10

LINE_POINTS: Dict[int, int] = {
    1: POINTS_SINGLE,
    2: POINTS_DOUBLE,
    3: POINTS_TRIPLE,
    4: POINTS_TETRIS,
}

# Game over triggers once the stack is this close to the visible top.
TOP_OUT_MARGIN = 2


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants for a :class:`~brickwell.engine.GameEngine`.

    The defaults reproduce the standard game.  Use
    :func:`dataclasses.replace` to derive variants, e.g. a taller grid for a
    test.  Invalid combinations raise :class:`ValueError` on construction.
    """

    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS
    visible_rows: int = VISIBLE_ROWS
    brick_height: float = BRICK_HEIGHT
    initial_drop_interval_ms: float = INITIAL_DROP_INTERVAL_MS
    min_drop_interval_ms: float = MIN_DROP_INTERVAL_MS
    drop_reduction_per_level_ms: float = DROP_SPEED_REDUCTION_PER_LEVEL
    descent_speed: float = DESCENT_SPEED
    line_destruction_ms: float = LINE_DESTRUCTION_DURATION_MS
    lines_per_level: int = LINES_PER_LEVEL
    line_points: Dict[int, int] = field(default_factory=lambda: dict(LINE_POINTS))

    def __post_init__(self) -> None:
        if self.columns < 4:
            raise ValueError("Grid needs at least 4 columns to hold an I piece")
        if self.rows < 4:
            raise ValueError("Grid needs at least 4 rows")
        if not 0 < self.visible_rows <= self.rows:
            raise ValueError("visible_rows must be within 1..rows")
        if self.brick_height <= 0:
            raise ValueError("brick_height must be positive")
        if self.min_drop_interval_ms < 0 or self.initial_drop_interval_ms < 0:
            raise ValueError("Drop intervals must not be negative")
        if self.descent_speed < 0:
            raise ValueError("descent_speed must not be negative")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")

    @property
    def spawn_column(self) -> int:
        return (self.columns - 2) // 2

    @property
    def spawn_row(self) -> int:
        return self.rows - 4


DEFAULT_CONFIG = GameConfig()


__all__ = ["GameConfig", "DEFAULT_CONFIG"]
