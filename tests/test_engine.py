from __future__ import annotations

import dataclasses
import random
from typing import List, Tuple

import pytest

from brickwell import (
    Block,
    GameEngine,
    GameEventListener,
    GamePhase,
    InputEvent,
    Piece,
    PieceType,
    RenderState,
)


class Recorder(GameEventListener):
    def __init__(self) -> None:
        self.events: List[Tuple] = []

    def on_game_started(self) -> None:
        self.events.append(("started",))

    def on_piece_moved(self) -> None:
        self.events.append(("moved",))

    def on_piece_rotated(self) -> None:
        self.events.append(("rotated",))

    def on_soft_drop(self) -> None:
        self.events.append(("soft_drop",))

    def on_hard_drop(self) -> None:
        self.events.append(("hard_drop",))

    def on_piece_locked(self) -> None:
        self.events.append(("locked",))

    def on_lines_cleared(self, rows: List[int]) -> None:
        self.events.append(("lines", rows))

    def on_level_up(self, new_level: int) -> None:
        self.events.append(("level", new_level))

    def on_game_over(self, final_score: int) -> None:
        self.events.append(("game_over", final_score))

    def names(self) -> List[str]:
        return [event[0] for event in self.events]


def _engine(active: PieceType = PieceType.O, upcoming: PieceType = PieceType.T):
    engine = GameEngine(rng=random.Random(0))
    engine.start()
    engine.state.active = Piece(active)
    engine.state.upcoming = Piece(upcoming)
    recorder = Recorder()
    engine.add_listener(recorder)
    return engine, recorder


def _fill_row_except(engine: GameEngine, row: int, *gaps: int) -> None:
    for col in range(engine.state.board.width):
        if col not in gaps:
            engine.state.board.set_cell(col, row)


# ----------------------------------------------------------------------
# Lifecycle
# ----------------------------------------------------------------------
def test_update_before_start_returns_ready_snapshot() -> None:
    engine = GameEngine()
    frame = engine.update(16, 16)
    assert frame == RenderState.empty()
    assert frame.is_ready


def test_input_before_start_is_ignored() -> None:
    engine = GameEngine()
    recorder = Recorder()
    engine.add_listener(recorder)
    for event in InputEvent:
        engine.submit_input(event)
    assert engine.phase is GamePhase.READY
    assert recorder.events == []


def test_start_spawns_two_pieces_at_spawn() -> None:
    engine = GameEngine(rng=random.Random(3))
    recorder = Recorder()
    engine.add_listener(recorder)
    engine.start()
    state = engine.state
    assert engine.phase is GamePhase.PLAYING
    assert state.active is not None and state.upcoming is not None
    assert (state.piece_col, state.piece_row) == (3, 20)
    assert (engine.score, engine.level, engine.lines_cleared) == (0, 1, 0)
    assert recorder.names() == ["started"]


def test_start_resets_a_finished_game() -> None:
    engine, _ = _engine()
    engine.state.score = 900
    engine.state.level = 4
    engine.state.descent_offset = 5.0
    engine.state.board.set_cell(0, 0)
    engine.state.phase = GamePhase.GAME_OVER

    engine.start()

    frame = engine.snapshot()
    assert frame.is_playing
    assert (frame.score, frame.level, frame.lines_cleared) == (0, 1, 0)
    assert frame.camera_offset == 0.0
    assert frame.grid_blocks == ()


def test_seeded_start_is_reproducible() -> None:
    first = GameEngine()
    second = GameEngine()
    first.start(seed=11)
    second.start(seed=11)
    assert first.state.active == second.state.active
    assert first.state.upcoming == second.state.upcoming


def test_listeners_called_in_registration_order() -> None:
    engine = GameEngine()
    calls: List[str] = []

    class Named(GameEventListener):
        def __init__(self, name: str) -> None:
            self.name = name

        def on_game_started(self) -> None:
            calls.append(self.name)

    a, b = Named("a"), Named("b")
    engine.add_listener(a)
    engine.add_listener(b)
    engine.start()
    engine.remove_listener(a)
    engine.remove_listener(a)
    engine.start()
    assert calls == ["a", "b", "b"]


# ----------------------------------------------------------------------
# Movement and rotation
# ----------------------------------------------------------------------
def test_move_stops_at_wall() -> None:
    engine, recorder = _engine(PieceType.O)
    for _ in range(5):
        engine.submit_input(InputEvent.MOVE_LEFT)
    assert engine.state.piece_col == 0
    assert recorder.names() == ["moved"] * 3

    for _ in range(10):
        engine.submit_input(InputEvent.MOVE_RIGHT)
    assert engine.state.piece_col == engine.state.board.width - 2


def test_rotation_kicks_left_before_right() -> None:
    engine, recorder = _engine(PieceType.T)
    engine.state.piece_row = 10
    # Blocks only the in-place rotation; both kicks would fit.
    engine.state.board.set_cell(3, 12)

    engine.submit_input(InputEvent.ROTATE)

    assert engine.state.piece_col == 2
    assert engine.state.active.rotation == 1
    assert recorder.names() == ["rotated"]


def test_rotation_kicks_right_when_left_blocked() -> None:
    engine, _ = _engine(PieceType.T)
    engine.state.piece_row = 10
    engine.state.board.set_cell(3, 12)
    engine.state.board.set_cell(2, 12)

    engine.submit_input(InputEvent.ROTATE)

    assert engine.state.piece_col == 4


def test_blocked_rotation_leaves_piece_unchanged() -> None:
    engine, recorder = _engine(PieceType.T)
    engine.state.piece_row = 10
    for col in (2, 3, 4):
        engine.state.board.set_cell(col, 12)
    before = engine.state.active

    engine.submit_input(InputEvent.ROTATE)

    assert engine.state.active == before
    assert engine.state.piece_col == 3
    assert recorder.events == []


def test_rotating_o_changes_nothing_but_the_counter() -> None:
    engine, _ = _engine(PieceType.O)
    blocks = engine.state.active.blocks
    engine.submit_input(InputEvent.ROTATE)
    assert engine.state.active.blocks == blocks
    assert engine.state.piece_col == 3


# ----------------------------------------------------------------------
# Drops and locking
# ----------------------------------------------------------------------
def test_soft_drop_moves_one_row() -> None:
    engine, recorder = _engine()
    engine.submit_input(InputEvent.SOFT_DROP)
    assert engine.state.piece_row == 19
    assert recorder.names() == ["soft_drop"]


def test_soft_drop_on_floor_locks() -> None:
    engine, recorder = _engine()
    engine.state.piece_row = 0
    engine.submit_input(InputEvent.SOFT_DROP)
    assert recorder.names() == ["locked", "soft_drop"]
    assert engine.state.active == Piece(PieceType.T)


def test_hard_drop_locks_at_lowest_row_and_respawns() -> None:
    engine, recorder = _engine(PieceType.O, PieceType.T)

    engine.submit_input(InputEvent.HARD_DROP)

    frame = engine.snapshot()
    assert set(frame.grid_blocks) == {Block(3, 0), Block(4, 0), Block(3, 1), Block(4, 1)}
    assert engine.state.active == Piece(PieceType.T)
    assert (engine.state.piece_col, engine.state.piece_row) == (3, 20)
    assert recorder.names() == ["hard_drop", "locked"]


def test_hard_drop_lands_on_stack() -> None:
    engine, _ = _engine(PieceType.O)
    engine.state.board.set_cell(4, 6)
    engine.submit_input(InputEvent.HARD_DROP)
    assert Block(3, 7) in engine.snapshot().grid_blocks


def test_single_line_clear_scores_and_compacts() -> None:
    engine, recorder = _engine(PieceType.I)
    engine.state.active = Piece(PieceType.I).rotated()
    _fill_row_except(engine, 0, 3)

    engine.submit_input(InputEvent.HARD_DROP)

    frame = engine.snapshot()
    assert frame.score == 100
    assert frame.lines_cleared == 1
    assert frame.level == 1
    assert frame.lines_to_destroy == (0,)
    # The rest of the vertical I dropped one row.
    assert set(frame.grid_blocks) == {Block(3, 0), Block(3, 1), Block(3, 2)}
    assert ("lines", [0]) in recorder.events


def test_points_use_level_before_the_clear() -> None:
    engine, recorder = _engine(PieceType.I)
    engine.state.lines_cleared = 9
    _fill_row_except(engine, 0, 3, 4, 5, 6)

    engine.submit_input(InputEvent.HARD_DROP)

    assert engine.score == 100
    assert engine.level == 2
    assert engine.lines_cleared == 10
    assert recorder.names() == ["hard_drop", "locked", "level", "lines"]
    assert ("level", 2) in recorder.events


def test_points_multiplied_by_current_level() -> None:
    engine, _ = _engine(PieceType.I)
    engine.state.level = 3
    engine.state.lines_cleared = 20
    _fill_row_except(engine, 0, 3, 4, 5, 6)
    engine.submit_input(InputEvent.HARD_DROP)
    assert engine.score == 300
    assert engine.level == 3


def test_double_clear() -> None:
    engine, _ = _engine(PieceType.O)
    _fill_row_except(engine, 0, 3, 4)
    _fill_row_except(engine, 1, 3, 4)
    engine.state.board.set_cell(0, 2)
    engine.submit_input(InputEvent.HARD_DROP)
    assert engine.score == 300
    assert engine.lines_cleared == 2
    assert engine.snapshot().grid_blocks == (Block(0, 0),)


def test_spawn_collision_ends_game() -> None:
    engine, recorder = _engine(PieceType.O)
    for row in (20, 21):
        _fill_row_except(engine, row, 7)
    engine.state.piece_row = 22

    engine.submit_input(InputEvent.HARD_DROP)

    assert engine.phase is GamePhase.GAME_OVER
    assert recorder.events[-1] == ("game_over", 0)

    engine.submit_input(InputEvent.MOVE_LEFT)
    engine.submit_input(InputEvent.RESUME)
    engine.update(5000, 16)
    assert engine.phase is GamePhase.GAME_OVER
    assert recorder.names().count("game_over") == 1


# ----------------------------------------------------------------------
# Timing
# ----------------------------------------------------------------------
def test_gravity_drops_after_interval() -> None:
    engine, _ = _engine()
    engine.update(0, 0)
    engine.update(999, 999)
    assert engine.state.piece_row == 20
    engine.update(1000, 1)
    assert engine.state.piece_row == 19
    engine.update(1500, 500)
    assert engine.state.piece_row == 19
    engine.update(2000, 500)
    assert engine.state.piece_row == 18


def test_gravity_faster_on_higher_levels() -> None:
    engine, _ = _engine()
    engine.state.level = 2
    engine.update(0, 0)
    engine.update(920, 920)
    assert engine.state.piece_row == 19


def test_resume_after_long_pause_does_not_drop_immediately() -> None:
    engine, _ = _engine()
    engine.update(1000, 16)
    engine.submit_input(InputEvent.PAUSE)
    assert engine.update(100_000, 99_000).is_paused
    engine.submit_input(InputEvent.RESUME)

    engine.update(100_016, 16)
    assert engine.state.piece_row == 20

    engine.update(101_016, 1000)
    assert engine.state.piece_row == 19


def test_pause_freezes_game_logic() -> None:
    engine, recorder = _engine()
    engine.update(0, 0)
    engine.submit_input(InputEvent.PAUSE)
    engine.submit_input(InputEvent.MOVE_LEFT)
    engine.submit_input(InputEvent.HARD_DROP)
    frame = engine.update(10_000, 10_000)
    assert frame.camera_offset == 0.0
    assert engine.state.piece_row == 20
    assert engine.state.piece_col == 3
    assert recorder.events == []


def test_pause_and_resume_only_from_matching_phase() -> None:
    engine, _ = _engine()
    engine.submit_input(InputEvent.RESUME)
    assert engine.phase is GamePhase.PLAYING
    engine.submit_input(InputEvent.PAUSE)
    engine.submit_input(InputEvent.PAUSE)
    assert engine.phase is GamePhase.PAUSED
    engine.submit_input(InputEvent.RESUME)
    assert engine.phase is GamePhase.PLAYING


def test_zero_delta_updates_change_nothing() -> None:
    engine, _ = _engine()
    engine.submit_input(InputEvent.HARD_DROP)
    engine.submit_input(InputEvent.HARD_DROP)
    before = engine.snapshot()
    for _ in range(50):
        frame = engine.update(5000, 0)
    assert frame.score == before.score
    assert frame.level == before.level
    assert frame.grid_blocks == before.grid_blocks


def test_descent_advances_and_progress_is_clamped() -> None:
    engine, _ = _engine()
    frame = engine.update(0, 1000)
    assert frame.camera_offset == pytest.approx(3.0)
    assert frame.descent_progress == pytest.approx(3.0 / (24 * 0.48))
    engine.state.descent_offset = 1000.0
    assert engine.snapshot().descent_progress == 1.0


def test_stack_near_visible_top_ends_game() -> None:
    engine, recorder = _engine()
    engine.state.board.set_cell(0, 13)
    assert engine.update(0, 0).is_playing
    engine.state.board.set_cell(0, 14)
    frame = engine.update(16, 16)
    assert frame.is_game_over
    assert recorder.events == [("game_over", 0)]


def test_descent_raises_the_visible_top() -> None:
    engine, _ = _engine()
    engine.state.board.set_cell(0, 14)
    # Two rows worth of descent moves the threshold up by two.
    engine.state.descent_offset = 2 * 0.48
    assert engine.update(0, 0).is_playing


def test_destruction_window_runs_while_paused() -> None:
    engine, _ = _engine(PieceType.I)
    _fill_row_except(engine, 0, 3, 4, 5, 6)
    engine.submit_input(InputEvent.HARD_DROP)
    engine.submit_input(InputEvent.PAUSE)

    assert engine.update(100, 200).lines_to_destroy == (0,)
    frame = engine.update(200, 100)
    assert frame.lines_to_destroy == ()
    assert not frame.has_lines_to_destroy
    assert frame.is_paused


# ----------------------------------------------------------------------
# Snapshot
# ----------------------------------------------------------------------
def test_snapshot_contains_active_ghost_and_preview() -> None:
    engine, _ = _engine(PieceType.O, PieceType.I)
    frame = engine.snapshot()
    assert set(frame.active_blocks) == {Block(3, 20), Block(4, 20), Block(3, 21), Block(4, 21)}
    assert set(frame.ghost_blocks) == {Block(3, 0), Block(4, 0), Block(3, 1), Block(4, 1)}
    assert frame.next_blocks == Piece(PieceType.I).blocks


def test_ghost_omitted_when_resting() -> None:
    engine, _ = _engine()
    engine.state.piece_row = 0
    assert engine.snapshot().ghost_blocks == ()
    assert engine.ghost_row() == 0


def test_snapshot_is_detached_from_engine() -> None:
    engine, _ = _engine()
    frame = engine.snapshot()
    engine.submit_input(InputEvent.MOVE_RIGHT)
    engine.submit_input(InputEvent.HARD_DROP)
    assert Block(3, 20) in frame.active_blocks
    assert frame.grid_blocks == ()
    with pytest.raises(dataclasses.FrozenInstanceError):
        frame.score = 10  # type: ignore[misc]


def test_unknown_input_rejected() -> None:
    engine, _ = _engine()
    with pytest.raises(ValueError):
        engine.submit_input("teleport")  # type: ignore[arg-type]
