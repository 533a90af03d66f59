from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

import numpy as np

from falling_blocks.game import (
    Command,
    GameConfig,
    GameEngine,
    ManualScheduler,
    ProgressionRules,
)


DEMO_COMMANDS = (
    Command.MOVE_LEFT,
    Command.MOVE_RIGHT,
    Command.ROTATE,
    Command.SOFT_DROP,
    Command.HARD_DROP,
)


def print_board(state: np.ndarray) -> None:
    for row in state:
        print("".join(["█" if cell > 0 else ("▒" if cell < 0 else "·") for cell in row]))


def run_demo(config: GameConfig, rules: ProgressionRules, max_ticks: int = 2000) -> GameEngine:
    """Play a headless game with random commands until game over or ``max_ticks``."""
    rng = random.Random(config.random_seed)
    scheduler = ManualScheduler()
    engine = GameEngine(config, rules, scheduler=scheduler)
    engine.start()
    ticks = 0
    while not engine.is_game_over and ticks < max_ticks:
        if rng.random() < 0.5:
            engine.handle(rng.choice(DEMO_COMMANDS))
        # Advance by exactly one period so every iteration is one tick
        ticks += scheduler.advance(scheduler.period_millis)
    return engine


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="falling-blocks")
    p.add_argument("--width", type=int, default=10)
    p.add_argument("--height", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--speed", type=float, default=1.0, help="Initial drops per second")
    p.add_argument("--lines_per_level", type=int, default=5)
    p.add_argument("--speed_raise", type=float, default=0.5, help="Speed added per level")
    p.add_argument("--log_level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])

    sub = p.add_subparsers(dest="mode")
    play = sub.add_parser("play", help="Play in a pygame window")
    play.add_argument("--cell_size", type=int, default=28)
    demo = sub.add_parser("demo", help="Run a headless game with random input")
    demo.add_argument("--max_ticks", type=int, default=2000)
    rand = sub.add_parser("random", help="Run a random agent on the gym environment")
    rand.add_argument("--steps", type=int, default=500)
    return p


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    config = GameConfig(width=args.width, height=args.height, random_seed=args.seed)
    rules = ProgressionRules(
        initial_speed=args.speed,
        lines_per_level=args.lines_per_level,
        speed_raise_per_level=args.speed_raise,
    )
    mode = args.mode or "play"

    if mode == "demo":
        engine = run_demo(config, rules, max_ticks=args.max_ticks)
        print_board(engine.board.clone_state())
        print(f"State: {engine.state.value}")
        print(f"Score: {engine.score}  Level: {engine.level}  Speed: {engine.speed:g}")
    elif mode == "random":
        from falling_blocks.env.random_agent import run_random

        run_random(steps=args.steps, seed=args.seed)
    else:
        from falling_blocks.visualization.human_play import run

        score = run(config, rules, cell_size=getattr(args, "cell_size", 28))
        print(f"Final score: {score}")


if __name__ == "__main__":  # pragma: no cover
    main()
