"""Pygame front end: renderer, timer-backed scheduler and key bindings."""

from .renderer import Renderer
from .pygame_scheduler import PygameScheduler, TICK_EVENT
from .human_play import KEY_TO_COMMAND, PygameView, command_for_key, run

__all__ = [
    "Renderer",
    "PygameScheduler",
    "TICK_EVENT",
    "KEY_TO_COMMAND",
    "PygameView",
    "command_for_key",
    "run",
]
