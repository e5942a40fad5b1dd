from __future__ import annotations

import numpy as np

from tetro_puzzles.game import CellState
from tetro_puzzles.visualization.renderer import PALETTE, cell_at, state_to_rgb


def test_cell_at_maps_pixels_to_board():
    assert cell_at((20, 20), size=8, cell_size=40, margin=20) == (0, 0)
    assert cell_at((20 + 40 * 3 + 5, 20 + 40 * 2 + 39), size=8, cell_size=40, margin=20) == (2, 3)
    assert cell_at((19, 50), size=8, cell_size=40, margin=20) is None
    assert cell_at((20 + 40 * 8, 30), size=8, cell_size=40, margin=20) is None


def test_state_to_rgb_uses_palette():
    state = np.array([[CellState.EMPTY, CellState.HOLE], [CellState.FILLED, CellState.EMPTY]], dtype=np.int8)
    img = state_to_rgb(state, cell=2)
    assert img.shape == (4, 4, 3)
    assert tuple(img[0, 2]) == PALETTE[CellState.HOLE]
    assert tuple(img[2, 0]) == PALETTE[CellState.FILLED]
