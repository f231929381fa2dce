"""
PacmanEnv - the maze chase game as a Gymnasium environment
----------------------------------------------------------
- Engine ticks are the simulation; one env step runs `frame_skip` ticks
- Gymnasium API
- Discrete action space: 0 keep, 1 up, 2 down, 3 left, 4 right
- Vector observation: player state + K pursuers + M nearest pickups
- Reward shaped from score events, life loss and a small time penalty
- Arcade window for render_mode="human", numpy raster for "rgb_array"

Quick test:
    python -m game.pacman.pacman_env
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional, Sequence

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import EngineConfig
from .engine import GamePhase, initialize, reset as reset_engine, tick
from .entities import CARDINALS, Direction
from .maze import DEFAULT_MAP
from .utils import clamp, seed_everything

# Action index -> requested direction; 0 leaves the current request alone
ACTIONS = (None, Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

DEFAULT_REWARDS = {
    "R_PICKUP": 0.1,     # per pickup eaten
    "R_POWER": 0.5,      # per power-pickup eaten
    "R_CAPTURE": 2.0,    # per vulnerable pursuer captured
    "R_DEATH": 5.0,      # per life lost
    "R_TIME": 0.001,     # every step
    "R_CLEAR": 10.0,     # maze cleared
}


class PacmanEnv(gym.Env):
    """Maze chase environment driven by the pacman engine"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        grid: Sequence[str] = DEFAULT_MAP,
        dt: float = 1 / 60,
        frame_skip: int = 4,
        max_steps: int = 5000,
        k_pursuers: int = 4,
        m_pickups: int = 5,
        reward_config: Optional[Dict[str, float]] = None,
        engine_config: Optional[EngineConfig] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' is implemented in this compact version."
        assert frame_skip >= 1, "frame_skip must be at least 1"
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.dt = dt
        self.frame_skip = frame_skip
        self.max_steps = max_steps
        self.k_pursuers = k_pursuers
        self.m_pickups = m_pickups

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        # Raises MazeConfigError straight away for a bad grid
        self.state = initialize(grid, engine_config)
        self.width = int(self.state.maze.pixel_width)
        self.height = int(self.state.maze.pixel_height)

        self.action_space = spaces.Discrete(len(ACTIONS))

        # Player: pos(2) direction one-hot(4) power timer(1) lives(1)
        # Each pursuer: rel pos(2) vulnerable(1) respawning(1)
        # Each pickup: rel pos(2)
        obs_dim = 2 + 4 + 1 + 1 + (self.k_pursuers * 4) + (self.m_pickups * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)
        if seed is None:
            seed = int(self.np_random.integers(0, 2**31 - 1))
        reset_engine(self.state, seed=seed)
        self._step_count = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        state = self.state
        before = self._counters()

        requested = ACTIONS[int(action)]
        for _ in range(self.frame_skip):
            tick(state, self.dt, requested)
            requested = None
            if state.phase is GamePhase.GAME_OVER_MENU:
                break

        after = self._counters()
        events = {k: after[k] - before[k] for k in before}
        reward = self._compute_reward(events)

        terminated = state.phase is GamePhase.GAME_OVER_MENU
        self._step_count += 1
        truncated = not terminated and self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _counters(self) -> Dict[str, int]:
        s = self.state
        return {
            "pickup": s.pickups_eaten,
            "power": s.power_pickups_eaten,
            "capture": s.captures,
            "death": s.lives_lost,
        }

    def _compute_reward(self, events: Dict[str, int]) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_PICKUP"] * events["pickup"]
        reward += r["R_POWER"] * events["power"]
        reward += r["R_CAPTURE"] * events["capture"]
        reward -= r["R_DEATH"] * events["death"]
        reward -= r["R_TIME"]
        if self.state.won:
            reward += r["R_CLEAR"]
        return float(reward)

    def _get_obs(self) -> np.ndarray:
        s = self.state
        cfg = s.config
        w, h = float(self.width), float(self.height)
        px, py = s.player.center

        obs_parts = [px / w * 2 - 1, py / h * 2 - 1]
        obs_parts += [1.0 if s.player.direction is d else 0.0 for d in CARDINALS]
        power = s.power_timer / cfg.power_duration if cfg.power_duration > 0 else 0.0
        obs_parts.append(clamp(power * 2 - 1, -1, 1))
        obs_parts.append(clamp(s.player.lives / max(1, cfg.starting_lives) * 2 - 1, -1, 1))

        for i in range(self.k_pursuers):
            if i < len(s.pursuers):
                p = s.pursuers[i]
                gx, gy = p.center
                obs_parts += [
                    clamp((gx - px) / w, -1, 1),
                    clamp((gy - py) / h, -1, 1),
                    1.0 if p.vulnerable else 0.0,
                    1.0 if p.is_respawning else 0.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        # Pickups: M nearest, power-pickups included
        pellets = sorted(
            s.pickups + s.power_pickups,
            key=lambda d: (d[0] - px) ** 2 + (d[1] - py) ** 2
        )
        for i in range(self.m_pickups):
            if i < len(pellets):
                dx, dy = pellets[i]
                obs_parts += [clamp((dx - px) / w, -1, 1), clamp((dy - py) / h, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        s = self.state
        return {
            "score": s.score,
            "lives": s.lives,
            "pickups_left": len(s.pickups) + len(s.power_pickups),
            "pickups_eaten": s.pickups_eaten + s.power_pickups_eaten,
            "pursuers_captured": s.captures,
            "power_active": s.power_active,
            "won": s.won,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "human":
            if self._window is None:
                from .rendering import EnvWindow
                self._window = EnvWindow(self, self.width, self.height)
            self._window.on_draw()
            return None
        elif self.render_mode == "rgb_array":
            return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        """Rasterize the state into an (H, W, 3) uint8 frame"""
        s = self.state
        frame = np.zeros((self.height, self.width, 3), dtype=np.uint8)

        def fill(x0, y0, x1, y1, color):
            x0, y0 = max(0, int(x0)), max(0, int(y0))
            x1, y1 = min(self.width, int(round(x1))), min(self.height, int(round(y1)))
            if x1 > x0 and y1 > y0:
                frame[y0:y1, x0:x1] = color

        for wall in s.maze.walls:
            fill(wall.x, wall.y, wall.x + wall.w, wall.y + wall.h, (33, 33, 222))
        for size, dots in ((s.config.pickup_size, s.pickups), (s.config.power_pickup_size, s.power_pickups)):
            for x, y in dots:
                fill(x - size / 2, y - size / 2, x + size / 2, y + size / 2, (255, 255, 255))
        for p in s.pursuers:
            if not p.is_respawning:
                fill(p.x, p.y, p.x + p.size, p.y + p.size, (0, 0, 255) if p.vulnerable else p.color)
        pl = s.player
        fill(pl.x, pl.y, pl.x + pl.size, pl.y + pl.size, (255, 255, 0))
        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42):
    """Run a random episode for testing"""
    env = PacmanEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(1 / 60)

    print(f"Random episode return: {total:.2f}  score: {info['score']}  lives: {info['lives']}")
    env.close()


if __name__ == "__main__":
    run_random_episode(render=True)
