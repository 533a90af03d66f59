from __future__ import annotations

from typing import Iterable

import pytest

from falling_blocks.game import (
    GameConfig,
    GameEngine,
    ManualScheduler,
    ProgressionRules,
    SequenceShapeProvider,
    TetrominoType,
)


class RecordingView:
    def __init__(self) -> None:
        self.game_over = 0
        self.pause_toggled = 0
        self.board_changed = 0

    def on_game_over(self) -> None:
        self.game_over += 1

    def on_pause_toggled(self) -> None:
        self.pause_toggled += 1

    def on_board_changed(self) -> None:
        self.board_changed += 1


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def make_engine(view):
    def _make(
        kinds: Iterable[TetrominoType] = (TetrominoType.O,),
        width: int = 10,
        height: int = 20,
        rules: ProgressionRules | None = None,
    ) -> GameEngine:
        engine = GameEngine(
            GameConfig(width=width, height=height),
            rules or ProgressionRules(),
            provider=SequenceShapeProvider(kinds),
            scheduler=ManualScheduler(),
            view=view,
        )
        engine.start()
        return engine

    return _make


def fill_row(engine: GameEngine, y: int, skip: Iterable[int] = ()) -> None:
    skip = set(skip)
    for x in range(engine.board.width):
        if x not in skip:
            engine.board.set_cell_at(x, y, 1)
