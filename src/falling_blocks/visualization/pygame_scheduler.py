from __future__ import annotations

from typing import Optional

import pygame

from falling_blocks.game.scheduler import TickCallback


TICK_EVENT = pygame.USEREVENT + 1


class PygameScheduler:
    """Scheduler backed by ``pygame.time.set_timer``.

    The timer posts ``event_type`` to the pygame queue; the event loop hands
    those events to ``fire()``.
    """

    def __init__(self, period_millis: int = 1000, event_type: int = TICK_EVENT) -> None:
        self.period_millis = int(period_millis)
        self.event_type = event_type
        self.callback: Optional[TickCallback] = None
        self.running = False

    def bind(self, callback: TickCallback) -> None:
        self.callback = callback

    def start(self) -> None:
        self.running = True
        pygame.time.set_timer(self.event_type, self.period_millis)

    def stop(self) -> None:
        self.running = False
        pygame.time.set_timer(self.event_type, 0)

    def set_period_millis(self, period_millis: int) -> None:
        if period_millis <= 0:
            raise ValueError(f"period must be positive, got {period_millis}")
        changed = period_millis != self.period_millis
        self.period_millis = int(period_millis)
        if self.running and changed:
            pygame.time.set_timer(self.event_type, self.period_millis)

    def fire(self) -> None:
        if self.running and self.callback is not None:
            self.callback()
