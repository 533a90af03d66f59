from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional, Protocol

import numpy as np

from .board import Board
from .pieces import Piece
from .providers import RandomShapeProvider, ShapeProvider
from .rules import ProgressionRules
from .scheduler import ManualScheduler, Scheduler


logger = logging.getLogger(__name__)


class EngineState(Enum):
    AWAITING_PIECE = "awaiting_piece"
    PIECE_FALLING = "piece_falling"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Command(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    HARD_DROP = 3
    ROTATE = 4
    TOGGLE_PAUSE = 5
    RESTART = 6
    QUIT = 7


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    spawn_y: int = 0
    random_seed: Optional[int] = None


class GameView(Protocol):
    """Notifications for whatever draws the game. Return values are ignored."""

    def on_game_over(self) -> None:
        ...

    def on_pause_toggled(self) -> None:
        ...

    def on_board_changed(self) -> None:
        ...


class NullView:
    def on_game_over(self) -> None:
        pass

    def on_pause_toggled(self) -> None:
        pass

    def on_board_changed(self) -> None:
        pass


class GameEngine:
    """Tick-driven state machine for one game.

    ``tick()`` is called by the scheduler once per period; the command
    methods are called by the input layer. Both run under the same lock, so
    a command never interleaves with a tick.

    A piece that cannot drop is locked into the board on the tick that finds
    it blocked, and the next piece is only spawned on the following tick,
    after full rows are cleared. Hard drop moves the piece down but leaves
    locking to that same tick.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ProgressionRules] = None,
        provider: Optional[ShapeProvider] = None,
        scheduler: Optional[Scheduler] = None,
        view: Optional[GameView] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ProgressionRules()
        self.provider = provider or RandomShapeProvider(self.config.random_seed)
        self.scheduler = scheduler or ManualScheduler(self.rules.period_millis(self.rules.initial_speed))
        self.view = view or NullView()
        self.board = Board(self.config.width, self.config.height)
        self._lock = threading.RLock()
        self._phase = EngineState.AWAITING_PIECE
        self.is_paused = False
        self.is_quit = False
        self.current_shape: Optional[Piece] = None
        self.next_shape: Optional[Piece] = None
        self.score = 0
        self.lines_cleared = 0
        self.last_cleared = 0
        self.speed = self.rules.initial_speed
        self.scheduler.bind(self.tick)
        self._commands: Dict[Command, Callable[[], object]] = {
            Command.MOVE_LEFT: self.move_left,
            Command.MOVE_RIGHT: self.move_right,
            Command.SOFT_DROP: self.soft_drop,
            Command.HARD_DROP: self.hard_drop,
            Command.ROTATE: self.rotate,
            Command.TOGGLE_PAUSE: self.toggle_pause,
            Command.RESTART: self.restart,
            Command.QUIT: self.quit,
        }

    # State

    @property
    def state(self) -> EngineState:
        if self.is_paused:
            return EngineState.PAUSED
        return self._phase

    @property
    def is_game_over(self) -> bool:
        return self._phase is EngineState.GAME_OVER

    @property
    def level(self) -> int:
        return self.rules.level_for_lines(self.lines_cleared)

    @property
    def period_millis(self) -> int:
        return self.rules.period_millis(self.speed)

    def snapshot(self) -> np.ndarray:
        # Overlay current piece on a copy of the board
        state = self.board.clone_state()
        if self.current_shape is not None:
            for x, y in self.current_shape.cells():
                if self.board.is_inside(x, y):
                    # Negative marks the falling piece
                    state[y, x] = -int(self.current_shape.kind)
        return state

    # Scheduler

    def start(self) -> None:
        with self._lock:
            if self.is_quit or self.is_game_over:
                return
            self.scheduler.set_period_millis(self.period_millis)
            if not self.is_paused:
                self.scheduler.start()

    def stop(self) -> None:
        with self._lock:
            self.scheduler.stop()

    # Tick

    def tick(self) -> None:
        with self._lock:
            if self.is_quit or self.is_paused or self.is_game_over:
                return
            if self._phase is EngineState.AWAITING_PIECE:
                self._recalc_speed()
                self.last_cleared = self._clear_full_rows()
                self._spawn_current()
            else:
                self.last_cleared = 0
                if not self.drop_down_one():
                    self._lock_current()
            self.view.on_board_changed()

    def _recalc_speed(self) -> None:
        self.speed = self.rules.speed_for_score(self.score)
        self.scheduler.set_period_millis(self.period_millis)

    def _clear_full_rows(self) -> int:
        cleared = 0
        y = 0
        while y < self.board.height:
            if self.board.is_row_full(y):
                self.board.clear_row(y)
                cleared += 1
                # Rows above moved down into y; look at it again
                continue
            y += 1
        if cleared:
            self.score += cleared
            self.lines_cleared += cleared
            logger.debug("cleared %d row(s), score %d", cleared, self.score)
        return cleared

    def _new_shape(self) -> Piece:
        kind = self.provider.next_kind()
        return Piece(kind).spawned(self.board.width, self.config.spawn_y)

    def _spawn_current(self) -> None:
        if self.next_shape is None:
            self.next_shape = self._new_shape()
        self.current_shape = self.next_shape
        if not self.board.can_place(self.current_shape.cells()):
            self._do_game_over()
            return
        self.next_shape = self._new_shape()
        self._phase = EngineState.PIECE_FALLING
        logger.debug("spawned %s, next %s", self.current_shape.kind.name, self.next_shape.kind.name)

    def _lock_current(self) -> None:
        assert self.current_shape is not None
        self.board.lock(self.current_shape.cells(), int(self.current_shape.kind))
        self.current_shape = None
        self._phase = EngineState.AWAITING_PIECE

    def _do_game_over(self) -> None:
        self.scheduler.stop()
        self._phase = EngineState.GAME_OVER
        self.current_shape = None
        self.next_shape = None
        logger.info("game over, score %d, level %d", self.score, self.level)
        self.view.on_game_over()

    # Movement primitives

    def _try_move(self, dx: int, dy: int) -> bool:
        if self.current_shape is None:
            return False
        moved = self.current_shape.moved(dx, dy)
        if not self.board.can_place(moved.cells()):
            return False
        self.current_shape = moved
        return True

    def try_move_left(self) -> bool:
        with self._lock:
            return self._try_move(-1, 0)

    def try_move_right(self) -> bool:
        with self._lock:
            return self._try_move(1, 0)

    def drop_down_one(self) -> bool:
        with self._lock:
            return self._try_move(0, 1)

    def try_rotate(self) -> bool:
        with self._lock:
            if self.current_shape is None:
                return False
            rotated = self.current_shape.rotated(1)
            if not self.board.can_place(rotated.cells()):
                return False
            self.current_shape = rotated
            return True

    # Commands

    def handle(self, command: Command) -> bool:
        return bool(self._commands[Command(command)]())

    def _accepts_movement(self) -> bool:
        if self.is_quit or self.is_paused or self.is_game_over:
            return False
        return self.current_shape is not None

    def _changed(self, changed: bool) -> bool:
        if changed:
            self.view.on_board_changed()
        return changed

    def move_left(self) -> bool:
        with self._lock:
            return self._accepts_movement() and self._changed(self.try_move_left())

    def move_right(self) -> bool:
        with self._lock:
            return self._accepts_movement() and self._changed(self.try_move_right())

    def soft_drop(self) -> bool:
        with self._lock:
            return self._accepts_movement() and self._changed(self.drop_down_one())

    def rotate(self) -> bool:
        with self._lock:
            return self._accepts_movement() and self._changed(self.try_rotate())

    def hard_drop(self) -> int:
        """Drop the piece as far as it goes and return the rows travelled."""
        with self._lock:
            if not self._accepts_movement():
                return 0
            rows = 0
            while self.drop_down_one():
                rows += 1
            self._changed(rows > 0)
            return rows

    def toggle_pause(self) -> bool:
        with self._lock:
            if self.is_quit or self.is_game_over:
                return False
            self.is_paused = not self.is_paused
            if self.is_paused:
                self.scheduler.stop()
            else:
                self.scheduler.start()
            self.view.on_pause_toggled()
            return True

    def restart(self) -> bool:
        with self._lock:
            if self.is_quit or not self.is_game_over:
                return False
            self.scheduler.stop()
            self.board.reset()
            self.provider.reset()
            self.current_shape = None
            self.next_shape = None
            self.score = 0
            self.lines_cleared = 0
            self.last_cleared = 0
            self.speed = self.rules.initial_speed
            self.is_paused = False
            self._phase = EngineState.AWAITING_PIECE
            self.scheduler.set_period_millis(self.period_millis)
            self.scheduler.start()
            logger.info("game restarted")
            self.view.on_board_changed()
            return True

    def quit(self) -> bool:
        with self._lock:
            if self.is_quit:
                return False
            self.scheduler.stop()
            self.is_quit = True
            logger.info("quit requested, score %d", self.score)
            return True
