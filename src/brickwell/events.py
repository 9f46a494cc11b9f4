"""Player input events and game event notifications."""

from __future__ import annotations

from enum import Enum
from typing import List
import logging


class InputEvent(str, Enum):
    """Discrete, already debounced player actions.

    Gesture or key interpretation happens upstream; the engine only sees these
    values.
    """

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    ROTATE = "rotate"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    RESUME = "resume"


class GameEventListener:
    """Receiver for engine notifications.

    Every hook is a no-op so subclasses only override what they care about.
    Hooks are called synchronously from inside the engine call that caused
    them, in listener registration order.  They must not call back into
    :meth:`GameEngine.update` or :meth:`GameEngine.submit_input`.
    """

    def on_game_started(self) -> None:
        pass

    def on_piece_moved(self) -> None:
        pass

    def on_piece_rotated(self) -> None:
        pass

    def on_soft_drop(self) -> None:
        pass

    def on_hard_drop(self) -> None:
        pass

    def on_piece_locked(self) -> None:
        pass

    def on_lines_cleared(self, rows: List[int]) -> None:
        pass

    def on_level_up(self, new_level: int) -> None:
        pass

    def on_game_over(self, final_score: int) -> None:
        pass


class LoggingListener(GameEventListener):
    """Listener that writes every notification to a logger.

    Frequent events (moves, rotations, drops) go to ``DEBUG``; clears, level
    changes and the game lifecycle go to ``INFO``.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def on_game_started(self) -> None:
        self.logger.info("Game started")

    def on_piece_moved(self) -> None:
        self.logger.debug("Piece moved")

    def on_piece_rotated(self) -> None:
        self.logger.debug("Piece rotated")

    def on_soft_drop(self) -> None:
        self.logger.debug("Soft drop")

    def on_hard_drop(self) -> None:
        self.logger.debug("Hard drop")

    def on_piece_locked(self) -> None:
        self.logger.debug("Piece locked")

    def on_lines_cleared(self, rows: List[int]) -> None:
        self.logger.info("Cleared %d row(s): %s", len(rows), rows)

    def on_level_up(self, new_level: int) -> None:
        self.logger.info("Level up: %d", new_level)

    def on_game_over(self, final_score: int) -> None:
        self.logger.info("Game over. Final score: %d", final_score)


__all__ = ["GameEventListener", "InputEvent", "LoggingListener"]
