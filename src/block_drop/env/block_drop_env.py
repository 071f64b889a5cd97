from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_drop.game import Action, BlockDropGame, GameConfig
from block_drop.game.pieces import PALETTE


class BlockDropEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 step_time: float = 250.0,
                 max_episode_steps: int = 10_000,
                 reward_weights: Optional[Dict[str, float]] = None) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.game = BlockDropGame(self.config)
        self.render_mode = render_mode
        self.step_time = float(step_time)
        self.max_episode_steps = int(max_episode_steps)

        # Shaping on top of the engine score; penalties apply to increases only
        self.reward_weights: Dict[str, float] = {
            "score": 1.0,
            "holes": 0.0,
            "height": 0.0,
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.config.height, self.config.width
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-7, high=7, shape=(h, w), dtype=np.int8),
                "score": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float64),
            }
        )
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.game.get_state().astype(np.int8),
            "score": np.array(self.game.score, dtype=np.float64),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "pieces_placed": self.game.pieces_placed,
            "games_played": self.game.games_played,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        # Piece selection is driven by the env's seeded generator
        self.game.rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        games_before = self.game.games_played
        score_before = self.game.score
        holes_before = self.game.grid.count_holes()
        height_before = self.game.grid.get_max_height()

        self.game.step(action)
        self.game.advance_time(self.step_time)
        self._steps += 1

        # A blocked spawn wipes the board in place; treat it as the end of the episode
        terminated = self.game.games_played != games_before
        truncated = not terminated and self._steps >= self.max_episode_steps

        reward_components: Dict[str, float] = {}
        if terminated:
            reward_components["score"] = 0.0
        else:
            reward_components["score"] = self.reward_weights["score"] * float(self.game.score - score_before)
            reward_components["holes"] = -self.reward_weights["holes"] * float(
                max(0, self.game.grid.count_holes() - holes_before))
            reward_components["height"] = -self.reward_weights["height"] * float(
                max(0, self.game.grid.get_max_height() - height_before))
        reward = float(sum(reward_components.values()))

        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = PALETTE[abs(int(state[y, x]))]
        return img

    def close(self) -> None:
        pass
