"""Play headless games with random inputs and log what happened.

Run with::

    PYTHONPATH=src python examples/autoplay.py

The engine is ticked at a fixed 60 Hz and a random input is submitted every
few frames.  Pass ``--help`` for options controlling the number of games, the
frame budget per game and the random seed.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Dict, List

from brickwell import GameEngine, GameEventListener, InputEvent, LoggingListener, RenderState


LOGGER = logging.getLogger(__name__)

FRAME_MS = 16
# Pause and resume are left out so games always make progress.
PLAY_INPUTS = [
    InputEvent.MOVE_LEFT,
    InputEvent.MOVE_RIGHT,
    InputEvent.ROTATE,
    InputEvent.SOFT_DROP,
    InputEvent.HARD_DROP,
]


class ClearCounter(GameEventListener):
    """Tally line clears by how many rows went at once."""

    def __init__(self) -> None:
        self.clears: Dict[int, int] = {}
        self.pieces = 0

    def on_piece_locked(self) -> None:
        self.pieces += 1

    def on_lines_cleared(self, rows: List[int]) -> None:
        self.clears[len(rows)] = self.clears.get(len(rows), 0) + 1


def play_game(
    engine: GameEngine,
    *,
    frames: int,
    rng: random.Random,
    input_every: int = 4,
) -> RenderState:
    """Play one game until game over or ``frames`` frames have elapsed."""

    engine.start(seed=rng.randrange(2**32))
    frame = engine.update(0, 0)
    for index in range(1, frames + 1):
        if index % input_every == 0:
            engine.submit_input(rng.choice(PLAY_INPUTS))
        frame = engine.update(index * FRAME_MS, FRAME_MS)
        if frame.is_game_over:
            break
    return frame


def log_summary(frame: RenderState, counter: ClearCounter, *, index: int) -> Dict[str, int]:
    summary = {
        "score": frame.score,
        "level": frame.level,
        "lines": frame.lines_cleared,
        "pieces": counter.pieces,
    }
    clears = ", ".join(f"{size}x{count}" for size, count in sorted(counter.clears.items()))
    LOGGER.info(
        "Game %d (%s): score=%d level=%d lines=%d pieces=%d clears=[%s]",
        index,
        frame.phase.value,
        frame.score,
        frame.level,
        frame.lines_cleared,
        counter.pieces,
        clears or "none",
    )
    return summary


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--games", type=int, default=1, help="Number of games to play.")
    parser.add_argument(
        "--frames",
        type=int,
        default=60 * 60 * 5,
        help="Maximum frames per game (60 per simulated second).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for inputs and pieces.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    rng = random.Random(args.seed)
    engine = GameEngine(rng=random.Random(args.seed))
    if args.log_level.upper() == "DEBUG":
        engine.add_listener(LoggingListener(LOGGER))
    for game in range(1, args.games + 1):
        counter = ClearCounter()
        engine.add_listener(counter)
        frame = play_game(engine, frames=args.frames, rng=rng)
        log_summary(frame, counter, index=game)
        engine.remove_listener(counter)


if __name__ == "__main__":
    main()
