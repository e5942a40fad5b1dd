"""Tetromino fill puzzle.

Exports the generator and play session:
- TetrominoType / Piece: tetromino shapes and their unique rotations
- GameGrid / CellState: board representation
- TetrominoTiler: exact-cover board tiler
- carve_holes: turns a tiling into holes plus an inventory
- TetrominoPuzzle: single-player session with place/undo/reset
"""

from .errors import PuzzleError, GenerationFailure, InvalidPlacement, EmptyUndo
from .grid import GameGrid, CellState
from .pieces import Piece, TetrominoType, ROTATIONS, SEARCH_ORDER, unique_rotations
from .tiler import Placement, TetrominoTiler, tile_board
from .carving import CarvedPuzzle, carve_holes, clamp_hole_count
from .generator import PuzzleConfig, generate_puzzle
from .core import MoveResult, TetrominoPuzzle

__all__ = [
    "PuzzleError",
    "GenerationFailure",
    "InvalidPlacement",
    "EmptyUndo",
    "GameGrid",
    "CellState",
    "Piece",
    "TetrominoType",
    "ROTATIONS",
    "SEARCH_ORDER",
    "unique_rotations",
    "Placement",
    "TetrominoTiler",
    "tile_board",
    "CarvedPuzzle",
    "carve_holes",
    "clamp_hole_count",
    "PuzzleConfig",
    "generate_puzzle",
    "MoveResult",
    "TetrominoPuzzle",
]
