from __future__ import annotations

from typing import Iterable, Optional, Tuple

import numpy as np
import pygame

from tetro_puzzles.game.grid import CellState


Color = Tuple[int, int, int]

PALETTE = {
    CellState.EMPTY: (40, 40, 48),
    CellState.FILLED: (70, 200, 120),
    CellState.HOLE: (12, 12, 16),
}
PREVIEW_VALID: Color = (120, 220, 140)
PREVIEW_INVALID: Color = (220, 120, 120)
GIVEN: Color = (200, 180, 60)


def _color_for_value(v: int) -> Color:
    return PALETTE.get(CellState(v), (200, 200, 200))


def state_to_rgb(state: np.ndarray, cell: int = 12) -> np.ndarray:
    h, w = state.shape
    img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
    for y in range(h):
        for x in range(w):
            img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _color_for_value(int(state[y, x]))
    return img


def cell_at(pos: Tuple[int, int], size: int, cell_size: int, margin: int) -> Optional[Tuple[int, int]]:
    """Board (row, col) under a pixel position, or None off the board."""
    mx, my = pos
    col = (mx - margin) // cell_size
    row = (my - margin) // cell_size
    if mx < margin or my < margin or not (0 <= row < size and 0 <= col < size):
        return None
    return int(row), int(col)


class Renderer:
    def __init__(self, cell_size: int = 40, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def cell_rect(self, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(
            self.margin + col * self.cell_size,
            self.margin + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def draw_board(self, screen: pygame.Surface, state: np.ndarray) -> None:
        screen.fill((15, 15, 20))
        h, w = state.shape
        for row in range(h):
            for col in range(w):
                pygame.draw.rect(screen, _color_for_value(int(state[row, col])), self.cell_rect(row, col))

    def outline_cells(self, screen: pygame.Surface, cells: Iterable[Tuple[int, int]], color: Color, width: int = 2) -> None:
        for row, col in cells:
            pygame.draw.rect(screen, color, self.cell_rect(row, col), width)

    def draw_text(self, screen: pygame.Surface, font: pygame.font.Font, lines: Iterable[str], x: int, y: int,
                  color: Color = (230, 230, 230)) -> None:
        for i, txt in enumerate(lines):
            img = font.render(txt, True, color)
            screen.blit(img, (x, y + i * 20))
