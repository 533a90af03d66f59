from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[1, 1, 1], [0, 1, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}


@dataclass(frozen=True)
class Piece:
    """A tetromino anchored at board position (x, y), its top-left corner."""

    kind: TetrominoType
    rotation: int = 0  # 0..3
    x: int = 0
    y: int = 0

    def shape(self) -> Shape:
        base = BASE_SHAPES[self.kind]
        return _rot90(base, self.rotation)

    def rotated(self, delta: int = 1) -> "Piece":
        return replace(self, rotation=(self.rotation + delta) % 4)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def spawned(self, board_width: int, spawn_y: int = 0) -> "Piece":
        h, w = self.shape().shape
        return replace(self, x=(board_width - w) // 2, y=spawn_y)

    def cells(self) -> List[Tuple[int, int]]:
        return self.cells_at(self.x, self.y)

    def cells_at(self, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
        s = self.shape()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((origin_x + dx, origin_y + dy))
        return cells
