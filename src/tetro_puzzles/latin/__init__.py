"""Latin square (4x4) puzzle logic.

A one-empty-cell-per-row/column/block puzzle: the player toggles cells until
each row, column and 2x2 block holds exactly one empty cell.
"""

from .logic import (
    LatinConfig,
    LatinPuzzle,
    ValidationReport,
    valid_permutations,
    generate_solution,
    choose_givens,
    solution_grid,
    validate,
    print_grid,
)

__all__ = [
    "LatinConfig",
    "LatinPuzzle",
    "ValidationReport",
    "valid_permutations",
    "generate_solution",
    "choose_givens",
    "solution_grid",
    "validate",
    "print_grid",
]
