from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Tuple

import numpy as np

from .carving import Inventory, empty_inventory
from .errors import EmptyUndo, GenerationFailure, InvalidPlacement, PuzzleError
from .generator import PuzzleConfig, generate_puzzle
from .grid import CellState, Coordinate, GameGrid
from .pieces import ROTATIONS, Piece, TetrominoType, rotation_count
from .tiler import Placement


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    message: str = ""
    error: Optional[PuzzleError] = None

    @classmethod
    def ok(cls, message: str = "") -> "MoveResult":
        return cls(True, message)

    @classmethod
    def rejected(cls, error: PuzzleError) -> "MoveResult":
        return cls(False, str(error), error)


@dataclass(frozen=True)
class _Snapshot:
    grid: np.ndarray
    inventory: Tuple[Tuple[TetrominoType, int], ...]


class TetrominoPuzzle:
    """A single play session of the tetromino fill puzzle.

    The session owns the board, the inventory, the current selection and the
    stack of placements used for undo. Regenerating replaces all of it.
    """

    def __init__(self, config: Optional[PuzzleConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or PuzzleConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.size)
        self.inventory: Inventory = empty_inventory()
        self.placements: List[Placement] = []
        self.hole_placements: List[Placement] = []
        self.selected_type: Optional[TetrominoType] = None
        self.selected_rotation = 0
        self._initial: Optional[_Snapshot] = None
        result = self.new_puzzle()
        if not result.accepted:
            # Nothing to fall back to on the very first puzzle
            raise result.error  # type: ignore[misc]

    # ---------- Generation ----------
    def new_puzzle(self, size: Optional[int] = None, hole_pieces: Optional[int] = None) -> MoveResult:
        config = self.config
        if size is not None:
            config = replace(config, size=size)
        if hole_pieces is not None:
            config = replace(config, hole_pieces=hole_pieces)
        try:
            carved = generate_puzzle(config, self.rng)
        except GenerationFailure as exc:
            logger.warning("keeping the current puzzle: %s", exc)
            return MoveResult.rejected(exc)

        self.config = config
        self.grid = carved.grid
        self.inventory = carved.inventory
        self.hole_placements = carved.hole_placements
        self.placements = []
        self.selected_type = None
        self.selected_rotation = 0
        self._initial = _Snapshot(self.grid.clone_state(), tuple(self.inventory.items()))
        return MoveResult.ok("new puzzle")

    # ---------- Queries ----------
    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def remaining_cells(self) -> int:
        return self.grid.count(CellState.EMPTY)

    @property
    def hole_cells(self) -> int:
        return self.grid.count(CellState.HOLE)

    @property
    def is_solved(self) -> bool:
        return self.remaining_cells == 0

    @property
    def can_undo(self) -> bool:
        return len(self.placements) > 0

    @property
    def placed_count(self) -> int:
        return len(self.placements)

    @property
    def total_pieces(self) -> int:
        """Pieces the player started with; constant for the whole session."""
        return sum(self.inventory.values()) + len(self.placements)

    def can_place(self, kind: TetrominoType, rotation: int, row: int, col: int) -> bool:
        kind = TetrominoType(kind)
        if not 0 <= rotation < rotation_count(kind):
            return False
        return self.grid.can_place(Piece(kind, rotation).cells_at(row, col))

    def anchored_origin(self, row: int, col: int) -> Optional[Coordinate]:
        """Origin of the selected piece when its first cell sits on (row, col)."""
        if self.selected_type is None:
            return None
        piece = Piece(self.selected_type, self.selected_rotation)
        return piece.origin_for_anchor(piece.cells()[0], row, col)

    def preview(self, row: int, col: int) -> Tuple[List[Coordinate], bool]:
        origin = self.anchored_origin(row, col)
        if origin is None:
            return [], False
        cells = Piece(self.selected_type, self.selected_rotation).cells_at(*origin)  # type: ignore[arg-type]
        valid = self.grid.can_place(cells)
        return [(r, c) for r, c in cells if self.grid.is_inside(r, c)], valid

    # ---------- Moves ----------
    def select(self, kind: TetrominoType) -> MoveResult:
        kind = TetrominoType(kind)
        if self.inventory[kind] <= 0:
            return MoveResult.rejected(InvalidPlacement(f"no {kind.name} pieces left"))
        self.selected_type = kind
        self.selected_rotation = 0
        return MoveResult.ok(f"selected {kind.name}")

    def rotate_selection(self, delta: int = 1) -> MoveResult:
        if self.selected_type is None:
            return MoveResult.rejected(InvalidPlacement("no piece selected"))
        self.selected_rotation = (self.selected_rotation + delta) % rotation_count(self.selected_type)
        return MoveResult.ok(f"rotation {self.selected_rotation}")

    def place(self, kind: TetrominoType, rotation: int, row: int, col: int) -> MoveResult:
        try:
            placement = self._validated(TetrominoType(kind), rotation, row, col)
        except InvalidPlacement as exc:
            logger.debug("rejected placement: %s", exc)
            return MoveResult.rejected(exc)

        self.grid.paint(placement.cells(), CellState.FILLED)
        self.inventory[placement.kind] -= 1
        self.placements.append(placement)
        if self.inventory[placement.kind] == 0 and self.selected_type == placement.kind:
            self.selected_type = None
            self.selected_rotation = 0
        logger.debug("placed %s", placement)
        return MoveResult.ok("solved" if self.is_solved else f"placed {placement.kind.name}")

    def place_selected(self, row: int, col: int) -> MoveResult:
        origin = self.anchored_origin(row, col)
        if origin is None:
            return MoveResult.rejected(InvalidPlacement("no piece selected"))
        return self.place(self.selected_type, self.selected_rotation, *origin)  # type: ignore[arg-type]

    def undo(self) -> MoveResult:
        if not self.placements:
            return MoveResult.rejected(EmptyUndo("nothing to undo"))
        last = self.placements.pop()
        self.grid.paint(last.cells(), CellState.EMPTY)
        self.inventory[last.kind] += 1
        self.selected_type = last.kind
        self.selected_rotation = last.rotation
        logger.debug("undid %s", last)
        return MoveResult.ok(f"took back {last.kind.name}")

    def reset(self) -> MoveResult:
        assert self._initial is not None
        self.grid.restore(self._initial.grid)
        self.inventory = dict(self._initial.inventory)
        self.placements = []
        self.selected_type = None
        self.selected_rotation = 0
        return MoveResult.ok("reset")

    def _validated(self, kind: TetrominoType, rotation: int, row: int, col: int) -> Placement:
        if not 0 <= rotation < len(ROTATIONS[kind]):
            raise InvalidPlacement(f"{kind.name} has no rotation {rotation}")
        if self.inventory[kind] <= 0:
            raise InvalidPlacement(f"no {kind.name} pieces left")
        placement = Placement(kind, rotation, row, col)
        if not self.grid.can_place(placement.cells()):
            raise InvalidPlacement(f"{kind.name} does not fit at ({row}, {col})")
        return placement

    # ---------- Presentation ----------
    def get_state(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.clone_state(),
            "inventory": {kind.name: count for kind, count in self.inventory.items()},
            "selected_type": self.selected_type.name if self.selected_type is not None else None,
            "selected_rotation": self.selected_rotation,
            "can_undo": self.can_undo,
            "solved": self.is_solved,
            "remaining_cells": self.remaining_cells,
            "hole_cells": self.hole_cells,
            "pieces_placed": self.placed_count,
        }

    def status_lines(self) -> List[str]:
        if self.is_solved:
            return [
                "Solved.",
                f"Board {self.size}x{self.size} · Holes {self.hole_cells} · Pieces placed {self.placed_count}",
            ]
        return [
            f"{self.remaining_cells} cells left to fill.",
            f"{self.hole_cells} hole cells.",
            f"{self.placed_count} pieces placed.",
        ]
