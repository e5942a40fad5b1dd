from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .carving import CarvedPuzzle, carve_holes
from .errors import GenerationFailure
from .tiler import tile_board


logger = logging.getLogger(__name__)


@dataclass
class PuzzleConfig:
    """Configuration for the tetromino fill puzzle"""
    size: int = 8
    hole_pieces: int = 3
    random_seed: Optional[int] = None
    max_attempts: int = 2  # first try plus one retry
    node_limit: Optional[int] = None

    def __post_init__(self) -> None:
        if self.size < 2:
            raise ValueError(f"board size must be at least 2, got {self.size}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")


def generate_puzzle(config: PuzzleConfig, rng: random.Random) -> CarvedPuzzle:
    """Tile the board and carve holes, retrying on GenerationFailure.

    Each attempt draws fresh values from `rng`. The last failure is re-raised
    once `config.max_attempts` attempts have failed.
    """
    last_error: Optional[GenerationFailure] = None
    for attempt in range(1, config.max_attempts + 1):
        try:
            placements = tile_board(config.size, node_limit=config.node_limit)
            puzzle = carve_holes(placements, config.size, config.hole_pieces, rng)
        except GenerationFailure as exc:
            logger.warning("generation attempt %d/%d failed: %s", attempt, config.max_attempts, exc)
            last_error = exc
            continue
        logger.info(
            "generated %dx%d puzzle: %d holes, %d pieces to place",
            config.size,
            config.size,
            len(puzzle.hole_placements),
            puzzle.total_pieces,
        )
        return puzzle
    assert last_error is not None
    raise last_error
