"""
Action-space adapters for algorithms that cannot drive a Discrete action space
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces


class DiscreteToBoxWrapper(gym.ActionWrapper):
    """
    Wrapper to convert a Discrete action space to Box for SAC.
    SAC outputs a single continuous value in [-1, 1] which is bucketed into
    one of the n discrete actions.
    """

    def __init__(self, env):
        super().__init__(env)
        self.orig_action_space = env.action_space
        self._n = int(env.action_space.n)
        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(1,), dtype=np.float32)

    def action(self, action):
        """Convert continuous action to discrete."""
        scaled = (float(np.asarray(action).reshape(-1)[0]) + 1) / 2  # [0, 1]
        return int(np.clip(scaled * self._n, 0, self._n - 1))
