from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import (
    Command,
    GameConfig,
    GameEngine,
    ManualScheduler,
    ProgressionRules,
    RandomShapeProvider,
    TetrominoType,
)


# Action index -> engine command; index 0 lets gravity act alone
ACTION_COMMANDS: Tuple[Optional[Command], ...] = (
    None,
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    Command.HARD_DROP,
)


class FallingBlocksEnv(gym.Env):
    """One step applies an optional command, then advances the engine one tick.

    Observation:
      board: settled cells as kind values, the falling piece as negative values
      next: kind of the next piece, 0 while none is queued

    Reward is the number of rows cleared during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ProgressionRules] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 5000,
    ) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.rules = rules or ProgressionRules()
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.engine = self._make_engine(self.config.random_seed)

        n_kinds = len(TetrominoType)
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(
                    low=-n_kinds,
                    high=n_kinds,
                    shape=(self.config.height, self.config.width),
                    dtype=np.int8,
                ),
                "next": spaces.Discrete(n_kinds + 1),
            }
        )
        self.action_space = spaces.Discrete(len(ACTION_COMMANDS))
        self._steps = 0

    def _make_engine(self, seed: Optional[int]) -> GameEngine:
        engine = GameEngine(
            self.config,
            self.rules,
            provider=RandomShapeProvider(seed),
            scheduler=ManualScheduler(),
        )
        engine.start()
        return engine

    def _get_obs(self) -> Dict[str, Any]:
        next_shape = self.engine.next_shape
        return {
            "board": self.engine.snapshot().astype(np.int8),
            "next": int(next_shape.kind) if next_shape is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.engine.score,
            "level": self.engine.level,
            "speed": self.engine.speed,
            "state": self.engine.state.value,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        engine_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.engine = self._make_engine(engine_seed)
        self._steps = 0
        # First tick spawns the first piece
        self.engine.tick()
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = ACTION_COMMANDS[int(action)]
        if command is not None:
            self.engine.handle(command)
        self.engine.tick()
        self._steps += 1

        reward = float(self.engine.last_cleared)
        terminated = bool(self.engine.is_game_over)
        truncated = self._steps >= self.max_episode_steps
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            # Create a simple RGB image from the board
            state = self.engine.snapshot()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    v = int(state[y, x])
                    if v > 0:
                        color = (70, 200, 120)
                    elif v < 0:
                        color = (230, 200, 80)
                    else:
                        color = (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        self.engine.quit()
