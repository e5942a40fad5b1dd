"""Gymnasium environments for the tetromino fill puzzle."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="TetrominoFill-8x8-v0",
    entry_point="tetro_puzzles.env.fill_env:TetrominoFillEnv",
)

__all__ = ["TetrominoFill-8x8-v0"]
