from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Optional, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class CellState(IntEnum):
    EMPTY = 0
    FILLED = 1
    HOLE = 2


class GameGrid:
    """Square board of cell states.

    Cells are addressed as (row, col) and stored in an int8 array indexed
    ``grid[row, col]``. Holes never change once a puzzle is carved; only
    Empty and Filled cells flip during play.
    """

    def __init__(self, size: int) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(CellState.EMPTY)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def can_place(self, cells: Iterable[Coordinate]) -> bool:
        for row, col in cells:
            if not self.is_inside(row, col):
                return False
            if self.grid[row, col] != CellState.EMPTY:
                return False
        return True

    def paint(self, cells: Iterable[Coordinate], state: CellState) -> None:
        """Write `state` into every cell; callers validate beforehand."""
        for row, col in cells:
            self.grid[row, col] = state

    def first_empty(self) -> Optional[Coordinate]:
        # np.argwhere walks in C order, i.e. row-major
        empties = np.argwhere(self.grid == CellState.EMPTY)
        if empties.size == 0:
            return None
        row, col = empties[0]
        return int(row), int(col)

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.grid == state))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def restore(self, state: np.ndarray) -> None:
        if state.shape != self.grid.shape:
            raise ValueError(f"expected a {self.grid.shape} state, got {state.shape}")
        self.grid = state.astype(np.int8, copy=True)

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.size)
        new_grid.grid = self.grid.copy()
        return new_grid
