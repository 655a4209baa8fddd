from __future__ import annotations

from typing import Optional

import gymnasium as gym

import block_blast.env  # noqa: F401
from block_blast.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper


def build_env() -> gym.Env:
    env = gym.make("BlockBlast-8x8-v0")
    env = FlattenDiscreteActionWrapper(env)
    return ResampleInvalidActionWrapper(env)


def run_random(steps: int = 200, seed: Optional[int] = None) -> float:
    env = build_env()
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes")
    return total_reward


if __name__ == "__main__":  # pragma: no cover
    run_random()
