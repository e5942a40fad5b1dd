from __future__ import annotations

"""
Latin Square Puzzle Logic
A 4x4 board where every row, column and 2x2 block must hold exactly one
empty cell. The player toggles cells between filled and empty; a couple of
empty cells of the hidden solution are revealed up front as locked givens.
"""

import itertools
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

import numpy as np

from tetro_puzzles.game.core import MoveResult
from tetro_puzzles.game.errors import EmptyUndo, InvalidPlacement
from tetro_puzzles.game.grid import CellState


logger = logging.getLogger(__name__)

Cell = Tuple[int, int]
Permutation = Tuple[int, ...]


@dataclass
class LatinConfig:
    """Configuration for the latin square puzzle"""
    size: int = 4
    block: int = 2
    givens: int = 2
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.block < 1 or self.size % self.block != 0:
            raise ValueError(f"block {self.block} does not divide size {self.size}")
        if not 0 <= self.givens <= self.size:
            raise ValueError(f"givens must be in [0, {self.size}], got {self.givens}")


def _one_per_block(perm: Sequence[int], block: int) -> bool:
    bands = len(perm) // block
    counts = np.zeros((bands, bands), dtype=int)
    for row, col in enumerate(perm):
        counts[row // block, col // block] += 1
    return bool(np.all(counts == 1))


def valid_permutations(size: int = 4, block: int = 2) -> List[Permutation]:
    """All row-to-column maps with exactly one empty cell per block.

    Brute force over every permutation; only meant for the 4x4 board.
    """
    return [perm for perm in itertools.permutations(range(size)) if _one_per_block(perm, block)]


def generate_solution(rng: random.Random, size: int = 4, block: int = 2) -> Permutation:
    candidates = valid_permutations(size, block)
    if not candidates:
        raise ValueError(f"no valid layout for size={size}, block={block}")
    return rng.choice(candidates)


def choose_givens(solution: Permutation, count: int, rng: random.Random) -> FrozenSet[Cell]:
    rows = rng.sample(range(len(solution)), count)
    return frozenset((row, solution[row]) for row in rows)


def solution_grid(solution: Permutation) -> np.ndarray:
    size = len(solution)
    grid = np.full((size, size), CellState.FILLED, dtype=np.int8)
    for row, col in enumerate(solution):
        grid[row, col] = CellState.EMPTY
    return grid


@dataclass(frozen=True)
class ValidationReport:
    conflicts: FrozenSet[Cell]
    complete: bool
    row_counts: Tuple[int, ...]
    col_counts: Tuple[int, ...]
    block_counts: Tuple[int, ...]  # row-major over blocks


def validate(grid: np.ndarray, block: int = 2) -> ValidationReport:
    """Recompute empty counts and conflicts from the grid alone.

    A row, column or block with more than one empty cell flags every empty
    cell inside it.
    """
    empty = grid == CellState.EMPTY
    size = grid.shape[0]
    bands = size // block
    row_counts = empty.sum(axis=1)
    col_counts = empty.sum(axis=0)
    block_counts = empty.reshape(bands, block, bands, block).sum(axis=(1, 3))

    conflicts = set()
    for row, col in zip(*np.nonzero(empty)):
        row, col = int(row), int(col)
        if row_counts[row] > 1 or col_counts[col] > 1 or block_counts[row // block, col // block] > 1:
            conflicts.add((row, col))

    complete = bool(np.all(row_counts == 1) and np.all(col_counts == 1) and np.all(block_counts == 1))
    return ValidationReport(
        conflicts=frozenset(conflicts),
        complete=complete,
        row_counts=tuple(int(v) for v in row_counts),
        col_counts=tuple(int(v) for v in col_counts),
        block_counts=tuple(int(v) for v in block_counts.reshape(-1)),
    )


class LatinPuzzle:
    """Main play session for the latin square puzzle"""

    def __init__(self, config: Optional[LatinConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or LatinConfig()
        self.rng = rng or random.Random(self.config.random_seed)
        self.solution: Permutation = ()
        self.givens: FrozenSet[Cell] = frozenset()
        self.grid = np.zeros((self.config.size, self.config.size), dtype=np.int8)
        self.history: List[np.ndarray] = []
        self._initial = self.grid.copy()
        self.new_puzzle()

    def new_puzzle(self) -> MoveResult:
        """Draw a fresh solution and givens; nothing carries over."""
        self.solution = generate_solution(self.rng, self.config.size, self.config.block)
        self.givens = choose_givens(self.solution, self.config.givens, self.rng)
        self.grid = np.full((self.config.size, self.config.size), CellState.FILLED, dtype=np.int8)
        for row, col in self.givens:
            self.grid[row, col] = CellState.EMPTY
        self.history = []
        self._initial = self.grid.copy()
        logger.info("new latin puzzle with %d givens", len(self.givens))
        return MoveResult.ok("new puzzle")

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def report(self) -> ValidationReport:
        return validate(self.grid, self.config.block)

    @property
    def conflicts(self) -> FrozenSet[Cell]:
        return self.report.conflicts

    @property
    def is_solved(self) -> bool:
        return self.report.complete

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    def is_given(self, row: int, col: int) -> bool:
        return (row, col) in self.givens

    def toggle(self, row: int, col: int) -> MoveResult:
        if not (0 <= row < self.size and 0 <= col < self.size):
            return MoveResult.rejected(InvalidPlacement(f"({row}, {col}) is off the board"))
        if self.is_given(row, col):
            return MoveResult.rejected(InvalidPlacement(f"({row}, {col}) is a given"))
        self.history.append(self.grid.copy())
        current = CellState(int(self.grid[row, col]))
        self.grid[row, col] = CellState.FILLED if current == CellState.EMPTY else CellState.EMPTY
        logger.debug("toggled (%d, %d) to %s", row, col, CellState(int(self.grid[row, col])).name)
        return MoveResult.ok("solved" if self.is_solved else "toggled")

    def undo(self) -> MoveResult:
        if not self.history:
            return MoveResult.rejected(EmptyUndo("nothing to undo"))
        self.grid = self.history.pop()
        return MoveResult.ok("undone")

    def reset(self) -> MoveResult:
        self.grid = self._initial.copy()
        self.history = []
        return MoveResult.ok("reset")

    def reveal_solution(self) -> MoveResult:
        self.history.append(self.grid.copy())
        self.grid = solution_grid(self.solution)
        return MoveResult.ok("solution revealed")

    def get_state(self) -> Dict[str, Any]:
        report = self.report
        return {
            "grid": self.grid.copy(),
            "givens": sorted(self.givens),
            "conflicts": sorted(report.conflicts),
            "can_undo": self.can_undo,
            "solved": report.complete,
        }

    def status_lines(self) -> List[str]:
        report = self.report
        if report.complete:
            return ["Solved.", "One empty cell in every row, column and block."]
        empties = sum(report.row_counts)
        lines = [f"{empties} empty cells, {self.size} needed."]
        if report.conflicts:
            lines.append(f"{len(report.conflicts)} cells clash.")
        return lines


def print_grid(grid: np.ndarray, givens: Sequence[Cell] = ()) -> None:
    locked = set(givens)
    for row in range(grid.shape[0]):
        chars = []
        for col in range(grid.shape[1]):
            if grid[row, col] == CellState.EMPTY:
                chars.append("○" if (row, col) in locked else "·")
            else:
                chars.append("█")
        print("".join(chars))


def run_demo(seed: Optional[int] = None) -> None:  # pragma: no cover
    puzzle = LatinPuzzle(LatinConfig(random_seed=seed))
    print("=== Latin Square Demo ===")
    print_grid(puzzle.grid, sorted(puzzle.givens))
    puzzle.reveal_solution()
    print("\nSolution:")
    print_grid(puzzle.grid, sorted(puzzle.givens))
    print(f"Solved: {puzzle.is_solved}")


if __name__ == "__main__":  # pragma: no cover
    run_demo()
