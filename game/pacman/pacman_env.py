"""
PacmanEnv - gymnasium wrapper around the pacman simulation
----------------------------------------------------------
- Discrete(5) actions: 0 keep heading, 1 up, 2 down, 3 left, 4 right
- Vector observation: player state + ghosts (nearest first) + top-M nearest
  cherries + apex
- Reward: score delta (cherry +1, ghost +10), small time penalty, death penalty
- Timed effects run on a ManualClock advanced by dt per step, so episodes are
  reproducible under a seed

Quick test:
    python -m game.pacman.pacman_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from ..common.clock import ManualClock
from ..common.lifecycle import Intent, LifecycleState
from ..common.render import blank_frame, fill_box, fill_circle
from ..common.utils import clamp, seed_everything
from .effects import is_hidden, is_vulnerable
from .simulation import PacmanConfig, handle_intent, new_session, session_info, tick

ACTION_INTENTS = {1: Intent.UP, 2: Intent.DOWN, 3: Intent.LEFT, 4: Intent.RIGHT}

BG_C = (0, 0, 0)
WALL_C = (0, 51, 204)
CHERRY_C = (255, 0, 27)
GHOST_C = (255, 0, 27)
GHOST_VULNERABLE_C = (255, 255, 255)
PLAYER_C = (255, 214, 91)
APEX_C = (255, 215, 0)


class PacmanEnv(gym.Env):
    """Pacman game as a gymnasium environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        m_cherries: int = 3,
        reward_scale: float = 1.0,
        penalty_time: float = 0.001,
        penalty_death: float = 5.0,
        **config,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.config = PacmanConfig(**config)
        self.dt = dt
        self.max_steps = max_steps
        self.m_cherries = m_cherries
        self.reward_scale = reward_scale
        self.penalty_time = penalty_time
        self.penalty_death = penalty_death

        self.action_space = spaces.Discrete(5)

        # Player: pos(2) vel(2)
        # Each ghost: rel pos(2) vulnerable(1) hidden(1)
        # Each cherry: rel pos(2)
        # Apex: present(1) rel pos(2)
        obs_dim = 4 + self.config.num_ghosts * 4 + self.m_cherries * 2 + 3
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self.clock = ManualClock()
        self.session = new_session(self.config, random.Random())
        self._step_count = 0
        self._window = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self.clock = ManualClock()
        self.session = new_session(self.config, self._session_rng())
        handle_intent(self.session, Intent.START)
        self._step_count = 0
        if self._window is not None:
            self._window.attach(self.session, clock=self.clock)

        return self._get_obs(), self._get_info()

    def step(self, action):
        score_before = self.session.score

        intent = ACTION_INTENTS.get(int(action))
        if intent is not None:
            handle_intent(self.session, intent)
        tick(self.session, self.clock.advance(self.dt))

        terminated = self.session.state is LifecycleState.ENDED
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        reward = self.reward_scale * (self.session.score - score_before) - self.penalty_time
        if terminated:
            reward -= self.penalty_death

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def _session_rng(self) -> random.Random:
        """Simulation RNG drawn from np_random, so unseeded resets continue the seeded stream"""
        return random.Random(int(self.np_random.integers(2**31)))

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _rel(self, box) -> tuple:
        cfg = self.config
        px, py = self.session.player.box.center
        bx, by = box.center
        return clamp((bx - px) / cfg.width, -1, 1), clamp((by - py) / cfg.height, -1, 1)

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        now = self.clock()
        player = self.session.player

        obs_parts = [
            player.x / cfg.width * 2 - 1,
            player.y / cfg.height * 2 - 1,
            clamp(player.vx / cfg.player_speed, -1, 1),
            clamp(player.vy / cfg.player_speed, -1, 1),
        ]

        ghosts_sorted = sorted(
            self.session.ghosts,
            key=lambda g: (g.x - player.x) ** 2 + (g.y - player.y) ** 2
        )
        for i in range(cfg.num_ghosts):
            if i < len(ghosts_sorted):
                g = ghosts_sorted[i]
                dx, dy = self._rel(g.box)
                obs_parts += [
                    dx,
                    dy,
                    1.0 if is_vulnerable(g, now) else -1.0,
                    1.0 if is_hidden(g, now) else -1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        cherries_sorted = sorted(
            self.session.cherries,
            key=lambda c: (c.x - player.x) ** 2 + (c.y - player.y) ** 2
        )
        for i in range(self.m_cherries):
            if i < len(cherries_sorted):
                obs_parts += list(self._rel(cherries_sorted[i].box))
            else:
                obs_parts += [0.0, 0.0]

        apex = self.session.apex
        if apex is not None:
            obs_parts += [1.0, *self._rel(apex.box)]
        else:
            obs_parts += [-1.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        info = session_info(self.session, self.clock())
        info["step"] = self._step_count
        return info

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return self._render_rgb_array()

        if self._window is None:
            from .window import PacmanWindow
            self._window = PacmanWindow(self.session, clock=self.clock, interactive=False)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def _render_rgb_array(self) -> np.ndarray:
        cfg = self.config
        now = self.clock()
        frame = blank_frame(cfg.width, cfg.height, BG_C)
        for c in self.session.cherries:
            fill_circle(frame, c.box, CHERRY_C)
        for g in self.session.ghosts:
            if is_hidden(g, now):
                continue
            fill_box(frame, g.box, GHOST_VULNERABLE_C if is_vulnerable(g, now) else GHOST_C)
        fill_circle(frame, self.session.player.box, PLAYER_C)
        for wall in cfg.walls:
            fill_box(frame, wall, WALL_C)
        if self.session.apex is not None:
            fill_circle(frame, self.session.apex.box, APEX_C)
        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(seed: Optional[int] = 42) -> float:
    """Play one episode with a random policy, return the total reward"""
    env = PacmanEnv()
    obs, info = env.reset(seed=seed)

    terminated = truncated = False
    total = 0.0
    while not (terminated or truncated):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        total += reward

    print(f"Random episode return: {total:.2f}, score: {info['score']}, steps: {info['step']}")
    env.close()
    return total


if __name__ == "__main__":
    run_random_episode()
