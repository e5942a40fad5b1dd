from __future__ import annotations

import random

import numpy as np
import pytest

from tetro_puzzles.game import CellState, EmptyUndo, InvalidPlacement
from tetro_puzzles.latin import (
    LatinConfig,
    LatinPuzzle,
    choose_givens,
    generate_solution,
    solution_grid,
    valid_permutations,
    validate,
)


@pytest.fixture
def latin() -> LatinPuzzle:
    return LatinPuzzle(LatinConfig(random_seed=3))


def _non_given_in_row(puzzle: LatinPuzzle, row: int):
    return next(col for col in range(puzzle.size) if not puzzle.is_given(row, col))


def test_valid_permutations_for_four_by_four():
    perms = valid_permutations(4, 2)
    assert len(perms) == 16
    for perm in perms:
        assert sorted(perm) == [0, 1, 2, 3]
        assert {perm[0] // 2, perm[1] // 2} == {0, 1}
        assert {perm[2] // 2, perm[3] // 2} == {0, 1}


@pytest.mark.parametrize("seed", range(10))
def test_generated_solution_is_one_empty_per_group(seed):
    solution = generate_solution(random.Random(seed))
    report = validate(solution_grid(solution))
    assert report.complete
    assert report.conflicts == frozenset()
    assert report.row_counts == (1, 1, 1, 1)
    assert report.col_counts == (1, 1, 1, 1)
    assert report.block_counts == (1, 1, 1, 1)


def test_givens_come_from_the_solution(rng):
    solution = generate_solution(rng)
    givens = choose_givens(solution, 2, rng)
    assert len(givens) == 2
    assert len({row for row, _ in givens}) == 2
    assert all(solution[row] == col for row, col in givens)


def test_fresh_puzzle_shows_only_givens(latin):
    empties = {(int(r), int(c)) for r, c in zip(*np.nonzero(latin.grid == CellState.EMPTY))}
    assert empties == set(latin.givens)
    assert not latin.is_solved
    assert not latin.can_undo


def test_toggle_twice_restores_cell(latin):
    row = 0
    col = _non_given_in_row(latin, row)
    before = latin.grid.copy()
    assert latin.toggle(row, col).accepted
    assert latin.grid[row, col] == CellState.EMPTY
    assert latin.toggle(row, col).accepted
    assert (latin.grid == before).all()


def test_two_empties_in_a_row_conflict(latin):
    given_row, given_col = sorted(latin.givens)[0]
    col = _non_given_in_row(latin, given_row)
    latin.toggle(given_row, col)
    assert {(given_row, given_col), (given_row, col)} <= latin.conflicts
    latin.undo()
    assert latin.conflicts == frozenset()


def test_givens_are_locked(latin):
    row, col = next(iter(latin.givens))
    result = latin.toggle(row, col)
    assert not result.accepted
    assert isinstance(result.error, InvalidPlacement)
    assert latin.grid[row, col] == CellState.EMPTY
    assert not latin.toggle(4, 0).accepted


def test_validation_ignores_history():
    grid = np.full((4, 4), CellState.FILLED, dtype=np.int8)
    report = validate(grid)
    assert not report.complete
    assert report.conflicts == frozenset()
    grid[0, 0] = grid[1, 1] = CellState.EMPTY
    report = validate(grid)
    assert report.conflicts == frozenset({(0, 0), (1, 1)})


def test_undo_and_reset(latin):
    initial = latin.grid.copy()
    row = 1
    col = _non_given_in_row(latin, row)
    latin.toggle(row, col)
    latin.toggle(2, _non_given_in_row(latin, 2))
    assert latin.undo().accepted
    assert latin.grid[row, col] == CellState.EMPTY
    assert latin.reset().accepted
    assert (latin.grid == initial).all()
    result = latin.undo()
    assert not result.accepted
    assert isinstance(result.error, EmptyUndo)


def test_reveal_solution_solves_and_can_be_undone(latin):
    initial = latin.grid.copy()
    latin.reveal_solution()
    assert latin.is_solved
    assert latin.status_lines()[0] == "Solved."
    latin.undo()
    assert (latin.grid == initial).all()


def test_same_seed_same_puzzle():
    first = LatinPuzzle(LatinConfig(random_seed=11))
    second = LatinPuzzle(LatinConfig(random_seed=11))
    assert first.solution == second.solution
    assert first.givens == second.givens


def test_new_puzzle_clears_history(latin):
    latin.toggle(0, _non_given_in_row(latin, 0))
    latin.new_puzzle()
    assert not latin.can_undo
    assert len(latin.givens) == 2


def test_config_validation():
    with pytest.raises(ValueError):
        LatinConfig(size=4, block=3)
    with pytest.raises(ValueError):
        LatinConfig(givens=5)
