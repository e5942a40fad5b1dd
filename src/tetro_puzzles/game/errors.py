from __future__ import annotations


class PuzzleError(Exception):
    """Base class for recoverable puzzle errors."""


class GenerationFailure(PuzzleError):
    """The tiler exhausted every candidate without covering the board."""


class InvalidPlacement(PuzzleError):
    """A placement would leave the board or overlap a non-empty cell."""


class EmptyUndo(PuzzleError):
    """Undo was requested with no history."""
