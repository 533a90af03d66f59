from __future__ import annotations

import pygame

from falling_blocks.game import Command
from falling_blocks.visualization import KEY_TO_COMMAND, PygameScheduler, PygameView, command_for_key


def test_key_bindings():
    assert KEY_TO_COMMAND[pygame.K_LEFT] is Command.MOVE_LEFT
    assert KEY_TO_COMMAND[pygame.K_UP] is Command.ROTATE
    assert KEY_TO_COMMAND[pygame.K_p] is Command.TOGGLE_PAUSE
    assert KEY_TO_COMMAND[pygame.K_ESCAPE] is Command.QUIT


def test_space_restarts_only_after_game_over():
    assert command_for_key(pygame.K_SPACE, game_over=False) is Command.HARD_DROP
    assert command_for_key(pygame.K_SPACE, game_over=True) is Command.RESTART
    assert command_for_key(pygame.K_a, game_over=False) is None


def test_pygame_scheduler_fires_only_while_running():
    calls = []
    scheduler = PygameScheduler(500)
    scheduler.bind(lambda: calls.append(1))
    scheduler.fire()
    assert calls == []
    scheduler.set_period_millis(250)
    assert scheduler.period_millis == 250
    scheduler.running = True
    scheduler.fire()
    assert calls == [1]


def test_view_marks_dirty():
    view = PygameView()
    view.dirty = False
    view.on_board_changed()
    assert view.dirty
