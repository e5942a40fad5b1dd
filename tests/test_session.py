from __future__ import annotations

import pytest

from tetro_puzzles.game import (
    CellState,
    EmptyUndo,
    GenerationFailure,
    InvalidPlacement,
    PuzzleConfig,
    TetrominoPuzzle,
    TetrominoType,
)


def _assert_conserved(puzzle: TetrominoPuzzle, total: int) -> None:
    assert sum(puzzle.inventory.values()) + len(puzzle.placements) == total


def test_fresh_puzzle_state(puzzle):
    assert puzzle.remaining_cells == 64 - 12
    assert puzzle.hole_cells == 12
    assert puzzle.total_pieces == 13
    assert not puzzle.is_solved
    assert not puzzle.can_undo
    assert puzzle.selected_type is None


def test_replaying_the_tiling_solves_the_puzzle(puzzle, solution_moves):
    total = puzzle.total_pieces
    for move in solution_moves:
        result = puzzle.place(move.kind, move.rotation, move.row, move.col)
        assert result.accepted
        _assert_conserved(puzzle, total)
    assert puzzle.is_solved
    assert puzzle.remaining_cells == 0
    assert all(count == 0 for count in puzzle.inventory.values())
    assert puzzle.status_lines()[0] == "Solved."


def test_place_then_undo_is_identity(puzzle, solution_moves):
    move = solution_moves[0]
    grid_before = puzzle.grid.clone_state()
    inventory_before = dict(puzzle.inventory)

    assert puzzle.place(move.kind, move.rotation, move.row, move.col).accepted
    assert all(puzzle.grid.grid[r, c] == CellState.FILLED for r, c in move.cells())
    result = puzzle.undo()

    assert result.accepted
    assert (puzzle.grid.grid == grid_before).all()
    assert puzzle.inventory == inventory_before
    assert puzzle.selected_type == move.kind
    assert puzzle.selected_rotation == move.rotation
    assert not puzzle.can_undo


def test_undo_with_no_history_is_a_noop(puzzle):
    grid_before = puzzle.grid.clone_state()
    result = puzzle.undo()
    assert not result.accepted
    assert isinstance(result.error, EmptyUndo)
    assert (puzzle.grid.grid == grid_before).all()


@pytest.mark.parametrize("row, col", [(-1, -1), (8, 0), (0, 7), (-4, 3)])
def test_off_board_placement_is_rejected(puzzle, row, col):
    grid_before = puzzle.grid.clone_state()
    inventory_before = dict(puzzle.inventory)
    assert not puzzle.can_place(TetrominoType.I, 0, row, col)
    result = puzzle.place(TetrominoType.I, 0, row, col)
    assert not result.accepted
    assert isinstance(result.error, InvalidPlacement)
    assert (puzzle.grid.grid == grid_before).all()
    assert puzzle.inventory == inventory_before


def test_placement_over_a_hole_is_rejected(puzzle):
    hole = puzzle.hole_placements[0]
    assert not puzzle.can_place(hole.kind, hole.rotation, hole.row, hole.col)
    assert not puzzle.place(hole.kind, hole.rotation, hole.row, hole.col).accepted


def test_overlap_with_filled_is_rejected(puzzle, solution_moves):
    move = solution_moves[0]
    assert puzzle.place(move.kind, move.rotation, move.row, move.col).accepted
    result = puzzle.place(move.kind, move.rotation, move.row, move.col)
    assert not result.accepted
    assert len(puzzle.placements) == 1


def test_unknown_rotation_is_rejected(puzzle):
    assert not puzzle.can_place(TetrominoType.O, 1, 0, 0)
    assert not puzzle.place(TetrominoType.O, 1, 0, 0).accepted


def test_selection_clears_when_type_runs_out(puzzle, solution_moves):
    kind = solution_moves[0].kind
    assert puzzle.select(kind).accepted
    for move in [m for m in solution_moves if m.kind == kind]:
        assert puzzle.place(move.kind, move.rotation, move.row, move.col).accepted
    assert puzzle.inventory[kind] == 0
    assert puzzle.selected_type is None
    result = puzzle.select(kind)
    assert not result.accepted
    assert not puzzle.place(*_first_open(puzzle, kind)).accepted


def _first_open(puzzle, kind):
    for row in range(puzzle.size):
        for col in range(puzzle.size):
            if puzzle.can_place(kind, 0, row, col):
                return kind, 0, row, col
    return kind, 0, 0, 0


def test_place_selected_uses_first_cell_as_anchor(puzzle, solution_moves):
    move = solution_moves[0]
    puzzle.select(move.kind)
    puzzle.rotate_selection(move.rotation)
    anchor_r, anchor_c = move.piece.cells()[0]

    cells, valid = puzzle.preview(move.row + anchor_r, move.col + anchor_c)
    assert valid
    assert sorted(cells) == sorted(move.cells())
    assert puzzle.place_selected(move.row + anchor_r, move.col + anchor_c).accepted
    assert puzzle.placements[-1] == move


def test_place_selected_without_selection(puzzle):
    result = puzzle.place_selected(0, 0)
    assert not result.accepted
    assert not puzzle.rotate_selection().accepted
    assert puzzle.preview(0, 0) == ([], False)


def test_reset_restores_generation_snapshot(puzzle, solution_moves):
    grid_before = puzzle.grid.clone_state()
    inventory_before = dict(puzzle.inventory)
    for move in solution_moves[:5]:
        puzzle.place(move.kind, move.rotation, move.row, move.col)
    puzzle.undo()

    assert puzzle.reset().accepted
    assert (puzzle.grid.grid == grid_before).all()
    assert puzzle.inventory == inventory_before
    assert not puzzle.can_undo
    assert puzzle.selected_type is None


def test_failed_regeneration_keeps_current_puzzle(puzzle, solution_moves):
    move = solution_moves[0]
    puzzle.place(move.kind, move.rotation, move.row, move.col)
    grid_before = puzzle.grid.clone_state()

    result = puzzle.new_puzzle(size=5)

    assert not result.accepted
    assert isinstance(result.error, GenerationFailure)
    assert puzzle.size == 8
    assert puzzle.config.size == 8
    assert (puzzle.grid.grid == grid_before).all()
    assert puzzle.can_undo


def test_new_puzzle_replaces_state(puzzle, solution_moves):
    move = solution_moves[0]
    puzzle.place(move.kind, move.rotation, move.row, move.col)
    assert puzzle.new_puzzle(size=4, hole_pieces=1).accepted
    assert puzzle.size == 4
    assert puzzle.total_pieces == 3
    assert not puzzle.can_undo


def test_first_generation_failure_raises():
    with pytest.raises(GenerationFailure):
        TetrominoPuzzle(PuzzleConfig(size=5))


def test_get_state_snapshot(puzzle):
    state = puzzle.get_state()
    assert state["grid"].shape == (8, 8)
    assert sum(state["inventory"].values()) == 13
    assert state["can_undo"] is False
    assert state["solved"] is False
    assert state["hole_cells"] == 12
    state["grid"][0, 0] = 99
    assert puzzle.grid.grid[0, 0] != 99
