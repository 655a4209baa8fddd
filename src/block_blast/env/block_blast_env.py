from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import BlockBlastGame, GameConfig, ScoringRules


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    size = game.grid_size
    k = game.config.pieces_per_set
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for slot in range(k):
        shape = game.piece_blueprint(slot)
        if shape is None:
            continue
        for x, y in game.grid.get_valid_placements(shape):
            mask[slot, y, x] = True
    return mask


class BlockBlastEnv(gym.Env):
    """One step drops one tray piece; reward is the engine's score gain."""

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None,
                 rules: Optional[ScoringRules] = None,
                 invalid_action_penalty: float = -1.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = BlockBlastGame(config, rules)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.max_episode_steps = int(max_episode_steps)
        self._steps = 0

        size = self.game.grid_size
        k = self.game.config.pieces_per_set
        n_shapes = len(self.game.config.catalog)

        # Tray entries are -1 for an empty slot
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=n_shapes - 1, shape=(k,), dtype=np.int8),
                "rotations": spaces.Box(low=-1, high=3, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, x, y)
        self.action_space = spaces.MultiDiscrete((k, size, size))

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.pieces_per_set
        pieces = np.full((k,), -1, dtype=np.int8)
        rotations = np.full((k,), -1, dtype=np.int8)
        for i, piece in enumerate(self.game.tray[:k]):
            if piece is not None:
                pieces[i] = piece.shape_index
                rotations[i] = piece.rotation
        return {
            "grid": self.game.grid.to_array(),
            "pieces": pieces,
            "rotations": rotations,
            "pieces_remaining": self.game.pieces_remaining,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "streak": self.game.state.streak,
            "high_score": self.game.state.high_score,
            "filled_ratio": self.game.grid.get_filled_ratio(),
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng = random.Random(seed)
        self.game.start_session()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, x, y = map(int, action)

        success = self.game.attempt_placement(slot, (x, y))
        if success:
            assert self.game.last_outcome is not None
            reward = float(self.game.last_outcome.score_gained)
        else:
            reward = self.invalid_action_penalty

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps

        info = self._get_info()
        info["placed"] = success
        return self._get_obs(), reward, terminated, truncated, info
