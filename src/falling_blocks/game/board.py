from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .errors import EmptyCellError, LogicError, OccupiedCellError


Coordinate = Tuple[int, int]


class Board:
    """Fixed-size grid of settled cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Values are tetromino indices, kept for optional coloring. Storage is
    indexed ``[y, x]`` with (0, 0) at the top-left; every public method takes
    ``(x, y)``.

    Coordinates outside the grid count as occupied, so walls, floor and
    settled cells share one collision predicate. The falling piece is never
    stored here until it locks.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if not self.is_inside(x, y):
            return True
        return bool(self.grid[y, x] != 0)

    def get_cell_at(self, x: int, y: int) -> int:
        if not self.is_inside(x, y) or self.grid[y, x] == 0:
            raise EmptyCellError(x, y)
        return int(self.grid[y, x])

    def set_cell_at(self, x: int, y: int, value: int) -> None:
        if value <= 0:
            raise LogicError(f"cell value must be positive, got {value}")
        if self.is_occupied(x, y):
            raise OccupiedCellError(x, y)
        self.grid[y, x] = value

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if self.is_occupied(x, y):
                return False
        return True

    def lock(self, cells: Iterable[Coordinate], value: int) -> None:
        """Copy a piece's cells into the board as settled cells.

        Either every cell is written or, on the first collision, none is.
        """
        cells = list(cells)
        for x, y in cells:
            if self.is_occupied(x, y):
                raise OccupiedCellError(x, y)
        for x, y in cells:
            self.set_cell_at(x, y, value)

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def find_full_rows(self) -> List[int]:
        full_rows = np.where(np.all(self.grid != 0, axis=1))[0]
        return [int(y) for y in full_rows]

    def clear_row(self, y: int) -> None:
        """Remove row ``y`` and shift every row above it down by one.

        Row 0 becomes empty. Callers must re-examine index ``y`` afterwards,
        since the row shifted into it may itself be full.
        """
        if not 0 <= y < self.height:
            raise LogicError(f"row {y} outside board of height {self.height}")
        if y > 0:
            self.grid[1 : y + 1] = self.grid[0:y].copy()
        self.grid[0].fill(0)

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def row_counts(self) -> np.ndarray:
        return np.count_nonzero(self.grid, axis=1)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
