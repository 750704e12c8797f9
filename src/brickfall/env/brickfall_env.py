from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from brickfall.game import Action, GameConfig, GameSession, Outcome


def _compute_action_mask(session: GameSession) -> np.ndarray:
    """Boolean mask over ``Action`` marking commands that would currently apply."""
    mask = np.zeros((len(Action),), dtype=np.bool_)
    piece = session.controller.piece
    if session.game_over or piece is None:
        return mask
    field = session.field
    if not piece.dropped:
        mask[Action.LEFT] = not field.would_collide(piece.shape, piece.x - 1, piece.y)
        mask[Action.RIGHT] = not field.would_collide(piece.shape, piece.x + 1, piece.y)
        mask[Action.ROTATE] = not field.would_collide(piece.shape.rotated_clockwise(), piece.x, piece.y)
        mask[Action.DROP] = True
    mask[Action.ADVANCE] = True
    mask[Action.NONE] = True
    return mask


class BrickFallEnv(gym.Env):
    """Headless host for a GameSession.

    Each step applies one command and then one gravity step, unless the
    command already was ``Action.ADVANCE``.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000,
                 reward_weights: Optional[Dict[str, float]] = None) -> None:
        super().__init__()
        self.session = GameSession(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.reward_weights: Dict[str, float] = {
            "lines": 1.0,       # reward per row cleared
            "lock": 0.0,        # reward per piece locked
            "rejected": 0.0,    # added when the chosen command was rejected
            "terminal": 0.0,    # added on game over
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        field = self.session.field
        self.observation_space = spaces.Box(low=-1, high=1, shape=(field.height, field.width), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_info(self) -> Dict[str, Any]:
        info: Dict[str, Any] = {"action_mask": self.action_masks()}
        info.update(self.session.get_stats())
        return info

    def action_masks(self) -> np.ndarray:
        return _compute_action_mask(self.session)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng.seed(seed)
        self.session.reset()
        self._steps = 0
        return self.session.get_state(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        result = self.session.step(action)
        rows = result.rows_cleared
        locked = int(result.locked)
        if action != Action.ADVANCE and not self.session.game_over:
            gravity = self.session.advance_fall()
            rows += gravity.rows_cleared
            locked += int(gravity.locked)

        reward_components: Dict[str, float] = {
            "lines": self.reward_weights["lines"] * float(rows),
            "lock": self.reward_weights["lock"] * float(locked),
        }
        if result.outcome is Outcome.REJECTED:
            reward_components["rejected"] = self.reward_weights["rejected"]

        terminated = bool(self.session.game_over)
        if terminated:
            reward_components["terminal"] = self.reward_weights["terminal"]
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated

        info = self._get_info()
        info["reward_components"] = reward_components
        info["rows_cleared"] = rows
        return self.session.get_state(), float(sum(reward_components.values())), terminated, truncated, info

    def render(self) -> Optional[str]:
        if self.render_mode != "ansi":
            return None
        rows = []
        for row in self.session.get_state()[::-1]:
            rows.append("".join("#" if v > 0 else ("@" if v < 0 else ".") for v in row))
        return "\n".join(rows)

    def close(self) -> None:
        pass
