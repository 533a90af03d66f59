from __future__ import annotations

import random
from typing import Iterable, List, Optional, Protocol

from .errors import LogicError
from .pieces import TetrominoType


class ShapeProvider(Protocol):
    """Chooses the kind of every piece the engine spawns."""

    def next_kind(self) -> TetrominoType:
        ...

    def reset(self) -> None:
        ...


class RandomShapeProvider:
    """Uniform random selection over the whole catalog."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.rng = random.Random(seed)

    def next_kind(self) -> TetrominoType:
        return self.rng.choice(list(TetrominoType))

    def reset(self) -> None:
        self.rng = random.Random(self.seed)


class SequenceShapeProvider:
    """Hands out a fixed sequence of kinds, for tests and replays."""

    def __init__(self, kinds: Iterable[TetrominoType], repeat: bool = True) -> None:
        self.kinds: List[TetrominoType] = [TetrominoType(k) for k in kinds]
        if not self.kinds:
            raise ValueError("SequenceShapeProvider needs at least one kind")
        self.repeat = repeat
        self.index = 0

    def next_kind(self) -> TetrominoType:
        if self.index >= len(self.kinds):
            if not self.repeat:
                raise LogicError("shape sequence exhausted")
            self.index = 0
        kind = self.kinds[self.index]
        self.index += 1
        return kind

    def reset(self) -> None:
        self.index = 0
