from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import gymnasium as gym
import numpy as np

# Ensure envs are registered
import tetro_puzzles.env  # noqa: F401
from tetro_puzzles.game import PuzzleConfig


logger = logging.getLogger(__name__)


def run_random(episodes: int = 5, size: int = 8, holes: int = 3, seed: Optional[int] = None) -> float:
    """Play episodes with a uniformly random valid placement; return the solve rate."""
    rng = random.Random(seed)
    env = gym.make("TetrominoFill-8x8-v0", config=PuzzleConfig(size=size, hole_pieces=holes))
    solved = 0
    for episode in range(episodes):
        obs, info = env.reset(seed=None if seed is None else seed + episode)
        total_reward = 0.0
        done = False
        while not done:
            valid = np.argwhere(info["action_mask"])
            if len(valid):
                action = valid[rng.randrange(len(valid))]
            else:
                action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            done = terminated or truncated
        solved += int(info["solved"])
        logger.info("episode %d: reward %.2f, solved=%s", episode, total_reward, info["solved"])
    env.close()
    return solved / max(1, episodes)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Masked random agent for the tetromino fill puzzle")
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--size", type=int, default=8)
    p.add_argument("--holes", type=int, default=3)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    rate = run_random(args.episodes, args.size, args.holes, args.seed)
    print(f"Random agent solve rate: {rate:.0%}")


if __name__ == "__main__":  # pragma: no cover
    main()
