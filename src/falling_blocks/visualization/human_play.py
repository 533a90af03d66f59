from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from falling_blocks.game import Command, GameConfig, GameEngine, ProgressionRules
from .pygame_scheduler import PygameScheduler
from .renderer import Renderer


logger = logging.getLogger(__name__)


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_UP: Command.ROTATE,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_ESCAPE: Command.QUIT,
}


def command_for_key(key: int, game_over: bool) -> Optional[Command]:
    # Space doubles as restart once the game is over
    if game_over and key == pygame.K_SPACE:
        return Command.RESTART
    return KEY_TO_COMMAND.get(key)


class PygameView:
    """Marks the window dirty whenever the engine reports a change."""

    def __init__(self) -> None:
        self.dirty = True

    def on_game_over(self) -> None:
        self.dirty = True

    def on_pause_toggled(self) -> None:
        self.dirty = True

    def on_board_changed(self) -> None:
        self.dirty = True


def run(config: Optional[GameConfig] = None, rules: Optional[ProgressionRules] = None, cell_size: int = 28) -> int:
    """Play until the window closes or Esc is pressed. Returns the final score."""
    pygame.init()
    try:
        clock = pygame.time.Clock()
        rules = rules or ProgressionRules()
        scheduler = PygameScheduler(rules.period_millis(rules.initial_speed))
        view = PygameView()
        engine = GameEngine(config, rules, scheduler=scheduler, view=view)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(engine))
        pygame.display.set_caption("Falling Blocks")
        engine.start()

        while not engine.is_quit:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    engine.quit()
                elif event.type == scheduler.event_type:
                    scheduler.fire()
                elif event.type == pygame.KEYDOWN:
                    command = command_for_key(event.key, engine.is_game_over)
                    if command is not None:
                        engine.handle(command)

            if view.dirty:
                renderer.draw(screen, engine)
                view.dirty = False

            clock.tick(60)
        logger.info("session ended with score %d", engine.score)
        return engine.score
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
