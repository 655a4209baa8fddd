from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .block_blast_env import _compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (slot, x, y) -> Discrete(N).

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N,).
    Order: slot, y, x (C-order flattening of the (slot, y, x) mask).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        k, size_x, size_y = map(int, env.action_space.nvec)
        assert size_x == size_y, "Expected square grid"
        self.k = k
        self.size = size_x
        self.n = int(k * self.size * self.size)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int, int]:
        x = idx % self.size
        idx //= self.size
        y = idx % self.size
        slot = idx // self.size
        return int(slot), int(x), int(y)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.env.unwrapped.game).reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """Replace an unplaceable flattened action with a placeable one.

    The replacement keeps the chosen tray slot when that piece fits anywhere,
    otherwise it is drawn from every slot that still holds a piece.
    """

    def __init__(self, env: FlattenDiscreteActionWrapper):
        super().__init__(env)
        self.cells_per_slot = env.size * env.size

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.env.unwrapped.game).reshape(-1)

    def step(self, action):  # type: ignore[override]
        action = int(action)
        mask = self.get_action_mask()
        if 0 <= action < mask.shape[0] and not mask[action]:
            slot = action // self.cells_per_slot
            start = slot * self.cells_per_slot
            same_slot = np.flatnonzero(mask[start:start + self.cells_per_slot]) + start
            candidates = same_slot if same_slot.size > 0 else np.flatnonzero(mask)
            if candidates.size > 0:
                action = int(self.np_random.choice(candidates))
        return self.env.step(action)
