"""Simple ASCII demo for the engine.

Run with: `python -m brickwell`

Starts a game, hard-drops a handful of pieces and prints the resulting frame
with the active piece overlaid.  Useful as a minimal smoke test that the
engine produces more than a blank grid.
"""

from __future__ import annotations

from . import GameEngine, InputEvent, render_grid

DROPS = 5


def main() -> None:
    engine = GameEngine()
    engine.start(seed=0)
    for _ in range(DROPS):
        engine.submit_input(InputEvent.HARD_DROP)
    state = engine.state
    for line in render_grid(state.board, state.active, state.piece_col, state.piece_row):
        print(line)
    frame = engine.snapshot()
    print(f"score={frame.score} level={frame.level} phase={frame.phase.value}")


if __name__ == "__main__":
    main()
