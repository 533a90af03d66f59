from __future__ import annotations

import pytest

from falling_blocks.game import Command, EngineState, TetrominoType

from conftest import fill_row


@pytest.fixture
def falling(make_engine):
    engine = make_engine([TetrominoType.O])
    engine.tick()
    return engine


def game_over_engine(make_engine):
    engine = make_engine()
    engine.board.set_cell_at(4, 0, 1)
    engine.tick()
    assert engine.is_game_over
    return engine


def test_move_left_and_right(falling, view):
    before = view.board_changed
    assert falling.move_left()
    assert falling.current_shape.x == 3
    assert falling.move_right()
    assert falling.move_right()
    assert falling.current_shape.x == 5
    assert view.board_changed == before + 3


def test_moves_stop_at_walls(falling, view):
    for _ in range(4):
        assert falling.move_left()
    changes = view.board_changed
    assert not falling.move_left()
    assert falling.current_shape.x == 0
    assert view.board_changed == changes

    for _ in range(8):
        assert falling.move_right()
    assert not falling.move_right()
    assert falling.current_shape.x == 8


def test_moves_blocked_by_settled_cells(falling):
    falling.board.set_cell_at(3, 1, 2)
    assert not falling.move_left()
    assert falling.current_shape.x == 4
    assert not falling.board.can_place(falling.current_shape.moved(-1, 0).cells())


def test_soft_drop_moves_one_row(falling):
    assert falling.soft_drop()
    assert falling.current_shape.y == 1


def test_soft_drop_blocked_does_not_lock(falling):
    fill_row(falling, 2, skip=[0])
    assert not falling.soft_drop()
    assert falling.current_shape is not None
    assert falling.state is EngineState.PIECE_FALLING


def test_rotate_rejected_at_wall(make_engine):
    engine = make_engine([TetrominoType.I])
    engine.tick()
    assert engine.rotate()
    assert engine.current_shape.rotation == 1
    for _ in range(6):
        assert engine.move_right()
    assert not engine.move_right()
    before = engine.current_shape

    assert not engine.rotate()

    assert engine.current_shape == before
    assert engine.current_shape.rotation == 1
    assert engine.current_shape.x == 9


def test_rotate_rejected_by_settled_cells(make_engine):
    engine = make_engine([TetrominoType.I])
    engine.tick()
    engine.board.set_cell_at(3, 2, 1)
    assert not engine.rotate()
    assert engine.current_shape.rotation == 0


def test_movement_ignored_without_piece(make_engine):
    engine = make_engine()
    assert not engine.move_left()
    assert not engine.rotate()
    assert engine.hard_drop() == 0


def test_pause_blocks_ticks_and_moves(falling, view):
    assert falling.toggle_pause()
    assert falling.state is EngineState.PAUSED
    assert falling.is_paused
    assert not falling.scheduler.running

    falling.tick()
    assert falling.current_shape.y == 0
    assert not falling.move_left()
    assert not falling.soft_drop()
    assert falling.hard_drop() == 0
    assert not falling.restart()

    assert falling.toggle_pause()
    assert falling.state is EngineState.PIECE_FALLING
    assert falling.scheduler.running
    assert view.pause_toggled == 2


def test_pause_while_awaiting_piece_resumes_there(make_engine):
    engine = make_engine()
    engine.toggle_pause()
    engine.toggle_pause()
    assert engine.state is EngineState.AWAITING_PIECE


def test_game_over_only_accepts_restart_and_quit(make_engine):
    engine = game_over_engine(make_engine)
    assert not engine.move_left()
    assert not engine.move_right()
    assert not engine.soft_drop()
    assert not engine.rotate()
    assert engine.hard_drop() == 0
    assert not engine.toggle_pause()
    assert engine.state is EngineState.GAME_OVER
    assert engine.restart()


def test_restart_only_from_game_over(falling):
    assert not falling.restart()
    assert falling.state is EngineState.PIECE_FALLING


def test_restart_resets_game(make_engine, view):
    engine = game_over_engine(make_engine)
    engine.score = 7
    engine.lines_cleared = 7
    engine.speed = 2.0
    changes = view.board_changed

    assert engine.restart()

    assert engine.score == 0
    assert engine.lines_cleared == 0
    assert engine.level == 1
    assert engine.speed == engine.rules.initial_speed
    assert engine.board.filled_count() == 0
    assert engine.state is EngineState.AWAITING_PIECE
    assert engine.current_shape is None
    assert engine.next_shape is None
    assert engine.scheduler.running
    assert engine.scheduler.period_millis == 1000
    assert view.board_changed == changes + 1

    engine.tick()
    assert engine.state is EngineState.PIECE_FALLING


def test_quit_stops_everything(falling):
    assert falling.quit()
    assert falling.is_quit
    assert not falling.scheduler.running
    falling.tick()
    assert falling.current_shape.y == 0
    assert not falling.handle(Command.MOVE_LEFT)
    assert not falling.handle(Command.TOGGLE_PAUSE)
    assert not falling.quit()


def test_quit_accepted_while_paused(falling):
    falling.toggle_pause()
    assert falling.handle(Command.QUIT)
    assert falling.is_quit


def test_handle_dispatches_commands(falling):
    assert falling.handle(Command.MOVE_LEFT)
    assert falling.current_shape.x == 3
    assert falling.handle(Command.ROTATE)
    assert falling.handle(Command.SOFT_DROP)
    assert falling.handle(Command.HARD_DROP)
    assert not falling.handle(Command.HARD_DROP)
    assert falling.handle(Command.TOGGLE_PAUSE)
    assert falling.handle(2) is False  # soft drop while paused
