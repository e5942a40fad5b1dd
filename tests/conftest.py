from __future__ import annotations

import random

import pytest

from tetro_puzzles.game import PuzzleConfig, TetrominoPuzzle, tile_board


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def puzzle() -> TetrominoPuzzle:
    return TetrominoPuzzle(PuzzleConfig(size=8, hole_pieces=3, random_seed=7))


@pytest.fixture
def solution_moves(puzzle: TetrominoPuzzle):
    """Placements that solve `puzzle`: the tiling minus the carved holes.

    The tiler is deterministic, so re-running it yields the same tiling the
    puzzle was carved from.
    """
    holes = set(puzzle.hole_placements)
    return [p for p in tile_board(puzzle.size) if p not in holes]
