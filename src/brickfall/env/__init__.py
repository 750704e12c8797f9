"""Gymnasium environments for brickfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the headless falling-block environment (6 discrete commands)
register(
    id="BrickFall-v0",
    entry_point="brickfall.env.brickfall_env:BrickFallEnv",
)

__all__ = ["BrickFall-v0"]
