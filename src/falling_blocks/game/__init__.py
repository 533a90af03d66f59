"""Game module for Falling Blocks.

Exports the rules engine and supporting classes:
- Board: Grid of settled cells, row detection and compaction
- Piece: Tetromino piece with rotation mechanics
- TetrominoType: Enum of available piece types
- ProgressionRules: Speed and level progression
- RandomShapeProvider / SequenceShapeProvider: Next-piece selection
- ManualScheduler / ThreadingScheduler: Tick timers
- GameEngine: Tick and command state machine
"""

from .errors import LogicError, OccupiedCellError, EmptyCellError
from .board import Board
from .pieces import Piece, TetrominoType
from .providers import ShapeProvider, RandomShapeProvider, SequenceShapeProvider
from .rules import ProgressionRules
from .scheduler import Scheduler, ManualScheduler, ThreadingScheduler
from .core import GameEngine, GameConfig, GameView, NullView, EngineState, Command

__all__ = [
    "LogicError",
    "OccupiedCellError",
    "EmptyCellError",
    "Board",
    "Piece",
    "TetrominoType",
    "ShapeProvider",
    "RandomShapeProvider",
    "SequenceShapeProvider",
    "ProgressionRules",
    "Scheduler",
    "ManualScheduler",
    "ThreadingScheduler",
    "GameEngine",
    "GameConfig",
    "GameView",
    "NullView",
    "EngineState",
    "Command",
]
