from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetro_puzzles.game import CellState, PuzzleConfig, TetrominoPuzzle, TetrominoType
from tetro_puzzles.game.pieces import ROTATIONS


N_TYPES = len(TetrominoType)
MAX_ROTATIONS = 4


def _compute_action_mask(game: TetrominoPuzzle) -> np.ndarray:
    size = game.size
    mask = np.zeros((N_TYPES, MAX_ROTATIONS, size, size), dtype=np.bool_)
    for kind in TetrominoType:
        if game.inventory[kind] <= 0:
            continue
        for rotation in range(len(ROTATIONS[kind])):
            for row in range(size):
                for col in range(size):
                    if game.can_place(kind, rotation, row, col):
                        mask[int(kind) - 1, rotation, row, col] = True
    return mask


class TetrominoFillEnv(gym.Env):
    """Gymnasium view of a tetromino fill session.

    Action: (type index, rotation, row, col) where the type index is
    ``TetrominoType - 1`` and (row, col) is the origin of the rotated piece.
    Rotations beyond a type's unique count are always masked out.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[PuzzleConfig] = None, render_mode: Optional[str] = None,
                 placement_reward: float = 1.0,
                 invalid_action_penalty: float = -0.1,
                 solved_bonus: float = 10.0,
                 max_episode_steps: int = 500) -> None:
        super().__init__()
        self.game = TetrominoPuzzle(config)
        self.render_mode = render_mode

        self.placement_reward = float(placement_reward)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.solved_bonus = float(solved_bonus)
        self.max_episode_steps = int(max_episode_steps)

        size = self.game.size
        max_pieces = size * size // 4
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=int(CellState.HOLE), shape=(size, size), dtype=np.int8),
                "inventory": spaces.Box(low=0, high=max_pieces, shape=(N_TYPES,), dtype=np.int16),
            }
        )
        self.action_space = spaces.MultiDiscrete((N_TYPES, MAX_ROTATIONS, size, size))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        inventory = np.array([self.game.inventory[kind] for kind in TetrominoType], dtype=np.int16)
        return {"grid": self.game.grid.clone_state(), "inventory": inventory}

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "remaining_cells": self.game.remaining_cells,
            "pieces_placed": self.game.placed_count,
            "solved": self.game.is_solved,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        result = self.game.new_puzzle()
        if not result.accepted:
            raise result.error  # type: ignore[misc]
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        type_idx, rotation, row, col = map(int, action)
        kind = TetrominoType(type_idx + 1)
        result = self.game.place(kind, rotation, row, col)

        reward = self.placement_reward if result.accepted else self.invalid_action_penalty
        self._steps += 1
        info = self._get_info()
        terminated = bool(self.game.is_solved)
        if terminated:
            reward += self.solved_bonus
        elif not info["action_mask"].any():
            # Stuck: remaining pieces cannot fill the remaining cells
            terminated = True
        truncated = self._steps >= self.max_episode_steps and not terminated
        info["accepted"] = result.accepted
        info["message"] = result.message
        return self._get_obs(), float(reward), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        from tetro_puzzles.visualization.renderer import state_to_rgb

        return state_to_rgb(self.game.grid.grid, cell=12)

    def close(self) -> None:
        pass
