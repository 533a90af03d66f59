from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from falling_blocks.game import GameEngine, Piece


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (0, 0, 240),    # J
        7: (240, 160, 0),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


class Renderer:
    """Draws the board on the left and a status panel on the right."""

    def __init__(self, cell_size: int = 28, margin: int = 20, panel_cells: int = 6) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_cells = panel_cells
        self._font: pygame.font.Font | None = None

    def window_size(self, engine: GameEngine) -> Tuple[int, int]:
        board = engine.board
        width = self.margin * 3 + (board.width + self.panel_cells) * self.cell_size
        height = self.margin * 2 + board.height * self.cell_size
        return width, height

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        return self._font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(state[y, x])), rect)
        return surf

    def _draw_piece(self, screen: pygame.Surface, piece: Piece, left: int, top: int) -> None:
        shape = piece.shape()
        h, w = shape.shape
        for dy in range(h):
            for dx in range(w):
                if shape[dy, dx]:
                    rect = pygame.Rect(
                        left + dx * self.cell_size,
                        top + dy * self.cell_size,
                        self.cell_size - 1,
                        self.cell_size - 1,
                    )
                    pygame.draw.rect(screen, _color_for_value(int(piece.kind)), rect)

    def _text(self, screen: pygame.Surface, text: str, left: int, top: int) -> None:
        screen.blit(self._font_obj().render(text, True, (230, 230, 230)), (left, top))

    def draw(self, screen: pygame.Surface, engine: GameEngine) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(engine.snapshot()), (self.margin, self.margin))

        left = self.margin * 2 + engine.board.width * self.cell_size
        top = self.margin
        self._text(screen, "Next", left, top)
        if engine.next_shape is not None:
            self._draw_piece(screen, engine.next_shape, left, top + 30)
        top += 30 + 5 * self.cell_size
        self._text(screen, f"Score: {engine.score}", left, top)
        self._text(screen, f"Level: {engine.level}", left, top + 30)
        self._text(screen, f"Speed: {engine.speed:g}", left, top + 60)

        if engine.is_game_over:
            self._text(screen, "Game Over", left, top + 120)
            self._text(screen, "Space: restart", left, top + 150)
            self._text(screen, "Esc: quit", left, top + 180)
        elif engine.is_paused:
            self._text(screen, "Paused (P)", left, top + 120)
        pygame.display.flip()
