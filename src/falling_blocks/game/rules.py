from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProgressionRules:
    """Speed and level progression. Speed is in drops per second."""

    initial_speed: float = 1.0
    lines_per_level: int = 5
    speed_raise_per_level: float = 0.5

    def __post_init__(self) -> None:
        if self.initial_speed <= 0:
            raise ValueError(f"initial_speed must be positive, got {self.initial_speed}")
        if self.lines_per_level <= 0:
            raise ValueError(f"lines_per_level must be positive, got {self.lines_per_level}")
        if self.speed_raise_per_level < 0:
            raise ValueError(f"speed_raise_per_level must not be negative, got {self.speed_raise_per_level}")

    def speed_for_score(self, score: int) -> float:
        return self.initial_speed + (score // self.lines_per_level) * self.speed_raise_per_level

    def level_for_lines(self, lines: int) -> int:
        return 1 + lines // self.lines_per_level

    def period_millis(self, speed: float) -> int:
        return max(1, int(1000 / speed))
