"""Game engine: the phase state machine that drives a session.

:class:`GameEngine` owns the :class:`~brickwell.game_state.GameState` of a
single game and is the only object that mutates it.  The platform layer
drives it through two calls:

* :meth:`GameEngine.update` once per frame with the current time and the
  time elapsed since the previous frame, both in milliseconds;
* :meth:`GameEngine.submit_input` whenever the player performs an action.

Each frame produces a fresh :class:`~brickwell.snapshot.RenderState`.  Side
effects such as sound or haptics hang off :class:`GameEventListener` objects
registered with :meth:`GameEngine.add_listener`.

Example
-------

>>> from brickwell import GameEngine, InputEvent
>>> engine = GameEngine()
>>> engine.start(seed=0)
>>> frame = engine.update(16, 16)
>>> frame.is_playing
True
>>> engine.submit_input(InputEvent.HARD_DROP)
>>> engine.snapshot().grid_blocks != ()
True

The engine is single threaded and holds no locks.  Calls must be made
serially from one thread.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional
import logging
import random

from .config import DEFAULT_CONFIG, TOP_OUT_MARGIN, GameConfig
from .events import GameEventListener, InputEvent
from .game_state import GamePhase, GameState
from .lines import clear_lines, find_complete_lines
from .scoring import level_for_lines, points
from .snapshot import RenderState
from .utils import can_place, drop_interval_ms, find_drop_row


LOGGER = logging.getLogger(__name__)

# Column offsets tried, in order, when a rotation collides in place.
WALL_KICKS = (0, -1, 1)


class GameEngine:
    """Authoritative simulation core for one game at a time."""

    def __init__(
        self,
        *,
        config: GameConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self._rng = rng or random.Random()
        self.state = GameState(config=config)
        self._listeners: List[GameEventListener] = []
        self._handlers: Dict[InputEvent, Callable[[], None]] = {
            InputEvent.MOVE_LEFT: self._move_left,
            InputEvent.MOVE_RIGHT: self._move_right,
            InputEvent.ROTATE: self._rotate,
            InputEvent.SOFT_DROP: self._soft_drop,
            InputEvent.HARD_DROP: self._hard_drop,
            InputEvent.PAUSE: self._pause,
            InputEvent.RESUME: self._resume,
        }

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: GameEventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: GameEventListener) -> None:
        """Unregister ``listener``; unknown listeners are ignored."""

        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, hook: str, *args) -> None:
        for listener in list(self._listeners):
            getattr(listener, hook)(*args)

    # ------------------------------------------------------------------
    # Public accessors
    # ------------------------------------------------------------------
    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def lines_cleared(self) -> int:
        return self.state.lines_cleared

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, *, seed: Optional[int] = None) -> None:
        """Start a new game from any phase, discarding the current one."""

        if seed is not None:
            self._rng.seed(seed)
        self.state.reset_game(self._rng)
        LOGGER.info("Game started")
        self._notify("on_game_started")

    def update(self, now_ms: float, delta_ms: float) -> RenderState:
        """Advance the game by one frame and return the resulting snapshot.

        The line destruction countdown always runs so a clear animation that
        began before a pause still finishes.  Everything else only advances
        while playing.  Calling this before :meth:`start` is harmless and
        returns a ``READY`` snapshot.
        """

        state = self.state
        if state.destruction_remaining_ms > 0:
            state.destruction_remaining_ms -= delta_ms
            if state.destruction_remaining_ms <= 0:
                state.lines_to_destroy = ()
                state.destruction_remaining_ms = 0.0

        if state.phase is not GamePhase.PLAYING:
            return self.snapshot()

        if state.last_drop_time is None:
            state.last_drop_time = now_ms

        state.descent_offset += self.config.descent_speed * delta_ms

        if self._topped_out():
            self._game_over()
            return self.snapshot()

        if now_ms - state.last_drop_time >= drop_interval_ms(state.level, self.config):
            self._drop_piece()
            state.last_drop_time = now_ms

        return self.snapshot()

    def submit_input(self, event: InputEvent) -> None:
        """Apply a player action.  Actions invalid for the current phase are ignored."""

        self._handlers[InputEvent(event)]()

    # ------------------------------------------------------------------
    # Input handlers
    # ------------------------------------------------------------------
    def _move_left(self) -> None:
        self._shift(-1)

    def _move_right(self) -> None:
        self._shift(1)

    def _shift(self, dcol: int) -> None:
        state = self.state
        if state.phase is not GamePhase.PLAYING or state.active is None:
            return
        if can_place(state.board, state.active, state.piece_col + dcol, state.piece_row):
            state.piece_col += dcol
            self._notify("on_piece_moved")

    def _rotate(self) -> None:
        state = self.state
        if state.phase is not GamePhase.PLAYING or state.active is None:
            return
        candidate = state.active.rotated()
        for kick in WALL_KICKS:
            if can_place(state.board, candidate, state.piece_col + kick, state.piece_row):
                state.active = candidate
                state.piece_col += kick
                self._notify("on_piece_rotated")
                return

    def _soft_drop(self) -> None:
        if self.state.phase is not GamePhase.PLAYING:
            return
        self._drop_piece()
        self._notify("on_soft_drop")

    def _hard_drop(self) -> None:
        state = self.state
        if state.phase is not GamePhase.PLAYING or state.active is None:
            return
        state.piece_row = find_drop_row(
            state.board, state.active, state.piece_col, state.piece_row
        )
        self._notify("on_hard_drop")
        self._lock_piece()

    def _pause(self) -> None:
        if self.state.phase is GamePhase.PLAYING:
            self.state.phase = GamePhase.PAUSED
            LOGGER.info("Paused")

    def _resume(self) -> None:
        if self.state.phase is GamePhase.PAUSED:
            self.state.phase = GamePhase.PLAYING
            # The next frame re-arms gravity from its own timestamp.
            self.state.last_drop_time = None
            LOGGER.info("Resumed")

    # ------------------------------------------------------------------
    # Game logic
    # ------------------------------------------------------------------
    def _drop_piece(self) -> None:
        """Move the active piece down one row, locking it if it cannot fall."""

        state = self.state
        if state.active is None:
            return
        if can_place(state.board, state.active, state.piece_col, state.piece_row - 1):
            state.piece_row -= 1
        else:
            self._lock_piece()

    def _lock_piece(self) -> None:
        state = self.state
        if state.active is None:
            return

        state.board.lock(state.active, state.piece_col, state.piece_row)
        LOGGER.debug(
            "Locked %s at col=%d row=%d",
            state.active.shape.value,
            state.piece_col,
            state.piece_row,
        )
        self._notify("on_piece_locked")

        completed = find_complete_lines(state.board)
        if completed:
            state.score += points(len(completed), state.level, self.config.line_points)
            state.lines_cleared += len(completed)

            new_level = level_for_lines(state.lines_cleared, self.config.lines_per_level)
            if new_level > state.level:
                state.level = new_level
                LOGGER.info("Level up: %d", new_level)
                self._notify("on_level_up", new_level)

            state.lines_to_destroy = tuple(completed)
            state.destruction_remaining_ms = self.config.line_destruction_ms
            LOGGER.debug("Cleared rows %s, score=%d", completed, state.score)
            self._notify("on_lines_cleared", list(completed))

            # The grid is compacted right away; the destruction window is
            # purely for presentation.
            clear_lines(state.board, completed)

        self._spawn_next_piece()

    def _spawn_next_piece(self) -> None:
        state = self.state
        piece = state.spawn_next(self._rng)
        if not can_place(state.board, piece, state.piece_col, state.piece_row):
            self._game_over()

    def _topped_out(self) -> bool:
        visible_top = (
            int(self.state.descent_offset / self.config.brick_height)
            + self.config.visible_rows
        )
        return self.state.board.highest_occupied_row() >= visible_top - TOP_OUT_MARGIN

    def _game_over(self) -> None:
        self.state.phase = GamePhase.GAME_OVER
        LOGGER.info("Game over. Final score: %d", self.state.score)
        self._notify("on_game_over", self.state.score)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------
    def ghost_row(self) -> int:
        """Return the row the active piece would land on if hard dropped now."""

        state = self.state
        if state.active is None:
            return state.piece_row
        return find_drop_row(state.board, state.active, state.piece_col, state.piece_row)

    def snapshot(self) -> RenderState:
        """Build a fresh :class:`RenderState` from the current state without ticking."""

        state = self.state
        active_blocks = ()
        ghost_blocks = ()
        if state.active is not None:
            active_blocks = tuple(state.active.cells(state.piece_col, state.piece_row))
            ghost_row = self.ghost_row()
            if ghost_row != state.piece_row:
                ghost_blocks = tuple(state.active.cells(state.piece_col, ghost_row))
        next_blocks = state.upcoming.blocks if state.upcoming is not None else ()

        max_descent = self.config.rows * self.config.brick_height
        progress = min(max(state.descent_offset / max_descent, 0.0), 1.0)

        return RenderState(
            grid_blocks=tuple(state.board.occupied_cells()),
            active_blocks=active_blocks,
            ghost_blocks=ghost_blocks,
            next_blocks=tuple(next_blocks),
            camera_offset=state.descent_offset,
            score=state.score,
            level=state.level,
            lines_cleared=state.lines_cleared,
            descent_progress=progress,
            phase=state.phase,
            lines_to_destroy=tuple(state.lines_to_destroy),
        )


__all__ = ["GameEngine", "WALL_KICKS"]
