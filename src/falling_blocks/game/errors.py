from __future__ import annotations


class LogicError(Exception):
    """Raised when a caller breaks a board or engine invariant."""


class OccupiedCellError(LogicError):
    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"cannot set cell ({x}, {y}): already occupied or out of bounds")
        self.x = x
        self.y = y


class EmptyCellError(LogicError):
    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"cannot read cell ({x}, {y}): no settled cell there")
        self.x = x
        self.y = y
