"""Simple pygame front-end for the engine.

A minimal playable window that exercises the engine's two public channels:
keyboard presses are translated into :class:`InputEvent` values and every
frame is drawn from the returned :class:`RenderState`.  It performs no game
logic of its own.  Requires the optional ``pygame`` extra.

Run with: `python -m brickwell.run_pygame`
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple
import asyncio
import logging
import os

import pygame

from .config import DEFAULT_CONFIG, GameConfig
from .engine import GameEngine
from .events import InputEvent, LoggingListener
from .game_state import GamePhase
from .snapshot import RenderState
from .tetromino import Block

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel holding the next-piece preview
PANEL_WIDTH = 5 * CELL_SIZE
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
LOCKED_COLOR = (110, 110, 110)
ACTIVE_COLOR = (0, 255, 255)
GHOST_COLOR = (0, 90, 90)
DESTROY_COLOR = (255, 255, 255)

KEY_BINDINGS: Dict[int, InputEvent] = {
    pygame.K_LEFT: InputEvent.MOVE_LEFT,
    pygame.K_RIGHT: InputEvent.MOVE_RIGHT,
    pygame.K_UP: InputEvent.ROTATE,
    pygame.K_DOWN: InputEvent.SOFT_DROP,
    pygame.K_SPACE: InputEvent.HARD_DROP,
}


def input_for_key(key: int, phase: GamePhase) -> Optional[InputEvent]:
    """Map a key press to an input event; ``P`` toggles pause depending on ``phase``."""

    if key == pygame.K_p:
        return InputEvent.RESUME if phase is GamePhase.PAUSED else InputEvent.PAUSE
    return KEY_BINDINGS.get(key)


def _cell_rect(block: Block, rows: int, origin: Tuple[int, int] = (0, 0)) -> pygame.Rect:
    # Grid row 0 is the floor, screen y grows downward.
    x0, y0 = origin
    return pygame.Rect(
        x0 + block.col * CELL_SIZE,
        y0 + (rows - 1 - block.row) * CELL_SIZE,
        CELL_SIZE,
        CELL_SIZE,
    )


def _draw_blocks(
    screen: pygame.Surface,
    blocks: Iterable[Block],
    color: Tuple[int, int, int],
    rows: int,
    origin: Tuple[int, int] = (0, 0),
    width: int = 0,
) -> None:
    for block in blocks:
        if not 0 <= block.row < rows:
            continue
        rect = _cell_rect(block, rows, origin)
        pygame.draw.rect(screen, color, rect, width)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_frame(screen: pygame.Surface, frame: RenderState, config: GameConfig = DEFAULT_CONFIG) -> None:
    """Render ``frame`` onto ``screen``."""

    screen.fill(BACKGROUND)
    rows = config.rows
    _draw_blocks(screen, frame.grid_blocks, LOCKED_COLOR, rows)
    _draw_blocks(screen, frame.ghost_blocks, GHOST_COLOR, rows, width=2)
    _draw_blocks(screen, frame.active_blocks, ACTIVE_COLOR, rows)
    for row in frame.lines_to_destroy:
        rect = pygame.Rect(0, (rows - 1 - row) * CELL_SIZE, config.columns * CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(screen, DESTROY_COLOR, rect, 2)
    # Mark the visible window shrinking as the camera descends.
    top = config.visible_rows + int(frame.camera_offset / config.brick_height)
    if top < rows:
        y = (rows - top) * CELL_SIZE
        pygame.draw.line(screen, (255, 0, 0), (0, y), (config.columns * CELL_SIZE, y))
    preview_origin = (config.columns * CELL_SIZE + CELL_SIZE, CELL_SIZE)
    _draw_blocks(screen, frame.next_blocks, ACTIVE_COLOR, 4, preview_origin)


class GameRunner:
    """Own a window and feed the engine from the pygame event loop."""

    def __init__(self, config: GameConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.engine = GameEngine(config=config)
        self.engine.add_listener(LoggingListener(LOGGER))
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def run(self) -> None:
        # Ensure SDL/pygame binds to the visible canvas when running on Web.
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        size = (self.config.columns * CELL_SIZE + PANEL_WIDTH, self.config.rows * CELL_SIZE)
        screen = pygame.display.set_mode(size)
        clock = pygame.time.Clock()

        self.engine.start()
        self._running = True
        while self._running:
            delta = clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_RETURN:
                        self.engine.start()
                        continue
                    action = input_for_key(event.key, self.engine.phase)
                    if action is not None:
                        self.engine.submit_input(action)

            frame = self.engine.update(pygame.time.get_ticks(), delta)
            draw_frame(screen, frame, self.config)
            status = "Game over - Enter to restart - " if frame.is_game_over else ""
            if frame.is_paused:
                status = "Paused - "
            pygame.display.set_caption(
                f"brickwell - {status}Score: {frame.score} Level: {frame.level}"
            )
            pygame.display.flip()

            # Yield to the browser/host event loop to keep UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Window closed")

    def stop(self) -> None:
        self._running = False


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    asyncio.run(GameRunner().run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
