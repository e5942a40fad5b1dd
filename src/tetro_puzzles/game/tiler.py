from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import GenerationFailure
from .grid import CellState, Coordinate, GameGrid
from .pieces import ROTATIONS, SEARCH_ORDER, Piece, TetrominoType


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    kind: TetrominoType
    rotation: int
    row: int
    col: int

    @property
    def piece(self) -> Piece:
        return Piece(self.kind, self.rotation)

    def cells(self) -> List[Coordinate]:
        return self.piece.cells_at(self.row, self.col)


class TetrominoTiler:
    """Depth-first exact cover of a square board by tetrominoes.

    The search always extends the first empty cell in row-major order. Every
    rotation of every type is tried with each of its cells as the anchor on
    that empty cell. A commit is rolled back before the next candidate.
    """

    def __init__(self, size: int, node_limit: Optional[int] = None) -> None:
        self.size = int(size)
        self.node_limit = node_limit
        self.grid = GameGrid(self.size)
        self.placements: List[Placement] = []
        self.nodes = 0

    def solve(self) -> List[Placement]:
        if self.size < 2 or (self.size * self.size) % 4 != 0:
            raise GenerationFailure(f"a {self.size}x{self.size} board cannot be tiled by tetrominoes")
        self.grid.reset()
        self.placements = []
        self.nodes = 0
        if not self._search():
            raise GenerationFailure(f"no tiling found for a {self.size}x{self.size} board")
        logger.debug("tiled %dx%d board with %d pieces after %d nodes", self.size, self.size, len(self.placements), self.nodes)
        return list(self.placements)

    def _commit(self, placement: Placement) -> None:
        self.grid.paint(placement.cells(), CellState.FILLED)
        self.placements.append(placement)

    def _rollback(self, placement: Placement) -> None:
        self.grid.paint(placement.cells(), CellState.EMPTY)
        self.placements.pop()

    def _search(self) -> bool:
        target = self.grid.first_empty()
        if target is None:
            return True
        self.nodes += 1
        if self.node_limit is not None and self.nodes > self.node_limit:
            raise GenerationFailure(f"search gave up after {self.node_limit} nodes")
        row, col = target
        for kind in SEARCH_ORDER:
            for rotation, variant in enumerate(ROTATIONS[kind]):
                for anchor_r, anchor_c in variant:
                    placement = Placement(kind, rotation, row - anchor_r, col - anchor_c)
                    if not self.grid.can_place(placement.cells()):
                        continue
                    self._commit(placement)
                    if not self._leaves_pocket(placement) and self._search():
                        return True
                    self._rollback(placement)
        return False

    def _leaves_pocket(self, placement: Placement) -> bool:
        """True if the placement walls off an empty region of 1-3 cells.

        Such a region can never be covered, so the subtree is skipped. The
        first tiling found is the same one the unpruned search would find.
        """
        for row, col in placement.cells():
            for nr, nc in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
                if self.grid.is_inside(nr, nc) and self.grid.grid[nr, nc] == CellState.EMPTY:
                    if self._region_size(nr, nc, limit=4) < 4:
                        return True
        return False

    def _region_size(self, row: int, col: int, limit: int) -> int:
        seen = {(row, col)}
        frontier = [(row, col)]
        while frontier and len(seen) < limit:
            r, c = frontier.pop()
            for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
                if (nr, nc) in seen or not self.grid.is_inside(nr, nc):
                    continue
                if self.grid.grid[nr, nc] == CellState.EMPTY:
                    seen.add((nr, nc))
                    frontier.append((nr, nc))
        return len(seen)


def tile_board(size: int, node_limit: Optional[int] = None) -> List[Placement]:
    return TetrominoTiler(size, node_limit=node_limit).solve()
