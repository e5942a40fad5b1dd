from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from .grid import CellState, GameGrid
from .pieces import TetrominoType
from .tiler import Placement


Inventory = Dict[TetrominoType, int]


def empty_inventory() -> Inventory:
    return {kind: 0 for kind in TetrominoType}


def clamp_hole_count(requested: int, total_pieces: int) -> int:
    """Cap the hole count so at least one piece is left to place."""
    return max(0, min(int(requested), total_pieces - 1))


def choose_hole_indices(total_pieces: int, count: int, rng: random.Random) -> Set[int]:
    chosen: Set[int] = set()
    while len(chosen) < count:
        chosen.add(rng.randrange(total_pieces))
    return chosen


@dataclass
class CarvedPuzzle:
    grid: GameGrid
    inventory: Inventory
    hole_placements: List[Placement] = field(default_factory=list)

    @property
    def total_pieces(self) -> int:
        return sum(self.inventory.values())


def carve_holes(placements: Sequence[Placement], size: int, hole_pieces: int, rng: random.Random) -> CarvedPuzzle:
    """Turn `hole_pieces` random pieces of a tiling into holes.

    The remaining pieces are lifted off the board into the inventory, so the
    returned grid holds only Empty and Hole cells.
    """
    k = clamp_hole_count(hole_pieces, len(placements))
    chosen = choose_hole_indices(len(placements), k, rng)
    grid = GameGrid(size)
    inventory = empty_inventory()
    holes: List[Placement] = []
    for index, placement in enumerate(placements):
        if index in chosen:
            grid.paint(placement.cells(), CellState.HOLE)
            holes.append(placement)
        else:
            inventory[placement.kind] += 1
    return CarvedPuzzle(grid=grid, inventory=inventory, hole_placements=holes)
