from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Tuple

import numpy as np


Cell = Tuple[int, int]
Variant = Tuple[Cell, ...]


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


BASE_SHAPES = {
    TetrominoType.I: np.array([[1, 1, 1, 1]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1]], dtype=np.int8),
}

# Awkward shapes first so dead ends are found early.
SEARCH_ORDER: Tuple[TetrominoType, ...] = (
    TetrominoType.T,
    TetrominoType.S,
    TetrominoType.Z,
    TetrominoType.J,
    TetrominoType.L,
    TetrominoType.I,
    TetrominoType.O,
)


def shape_to_cells(shape: np.ndarray) -> List[Cell]:
    rows, cols = np.nonzero(shape)
    return [(int(r), int(c)) for r, c in zip(rows, cols)]


def normalize(cells: Iterable[Cell]) -> Variant:
    """Shift cells so the minimum row and column are 0, sorted row then col."""
    cells = list(cells)
    min_r = min(r for r, _ in cells)
    min_c = min(c for _, c in cells)
    return tuple(sorted((r - min_r, c - min_c) for r, c in cells))


def rotate90(cells: Iterable[Cell]) -> Variant:
    return normalize((c, -r) for r, c in cells)


def unique_rotations(cells: Iterable[Cell]) -> List[Variant]:
    """Return the structurally distinct quarter turns of a shape, in turn order."""
    rotations: List[Variant] = []
    current = normalize(cells)
    for _ in range(4):
        if current not in rotations:
            rotations.append(current)
        current = rotate90(current)
    return rotations


ROTATIONS: Dict[TetrominoType, Tuple[Variant, ...]] = {
    kind: tuple(unique_rotations(shape_to_cells(shape))) for kind, shape in BASE_SHAPES.items()
}


def rotation_count(kind: TetrominoType) -> int:
    return len(ROTATIONS[kind])


def variant_shape(cells: Variant) -> np.ndarray:
    """Render a variant back to a 0/1 mask, mainly for drawing."""
    h = max(r for r, _ in cells) + 1
    w = max(c for _, c in cells) + 1
    shape = np.zeros((h, w), dtype=np.int8)
    for r, c in cells:
        shape[r, c] = 1
    return shape


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    rotation: int = 0  # index into ROTATIONS[kind]

    def cells(self) -> Variant:
        return ROTATIONS[self.kind][self.rotation]

    def shape(self) -> np.ndarray:
        return variant_shape(self.cells())

    def rotated(self, delta: int) -> "Piece":
        return Piece(self.kind, (self.rotation + delta) % rotation_count(self.kind))

    def cells_at(self, origin_row: int, origin_col: int) -> List[Cell]:
        return [(origin_row + dr, origin_col + dc) for dr, dc in self.cells()]

    def origin_for_anchor(self, anchor: Cell, row: int, col: int) -> Cell:
        """Origin that lands the variant cell `anchor` on (row, col)."""
        return row - anchor[0], col - anchor[1]
