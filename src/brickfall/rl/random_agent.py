from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import gymnasium as gym
import numpy as np

import brickfall.env  # noqa: F401  ensure registration

logger = logging.getLogger(__name__)


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    env = gym.make("BrickFall-v0")
    rng = random.Random(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Prefer commands that would be applied
        valid = np.flatnonzero(info["action_mask"])
        action = int(rng.choice(list(valid))) if valid.size else env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("Episode %d finished: %d pieces, %d lines",
                        episodes, info["pieces_locked"], info["lines_cleared"])
            obs, info = env.reset()
    env.close()
    logger.info("Random agent total reward: %.2f over %d finished episodes", total_reward, episodes)
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="[BRICKFALL] %(asctime)s - %(message)s")
    run_random(steps=args.steps, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
