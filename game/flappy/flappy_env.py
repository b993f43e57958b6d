"""
FlappyEnv - gymnasium wrapper around the flappy simulation
----------------------------------------------------------
- Discrete(2) actions: 0 do nothing, 1 flap
- Vector observation: bird height/velocity + distance to the next gap
- Reward: +1 per pipe passed, small survival bonus, penalty on death
- Rendering: arcade window ("human") or numpy frame ("rgb_array")

Quick test:
    python -m game.flappy.flappy_env
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
from .simulation import FlappyConfig, handle_intent, new_session, session_info, tick

MAX_FALL_SPEED = 10.0

SKY_C = (135, 206, 235)
PIPE_C = (34, 139, 34)
BIRD_C = (255, 215, 0)


class FlappyEnv(gym.Env):
    """Flappy game as a gymnasium environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        dt: float = 1 / 60,
        max_steps: int = 3600,  # 60s at 60 FPS
        reward_pass: float = 1.0,
        reward_alive: float = 0.01,
        penalty_death: float = 1.0,
        **config,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.config = FlappyConfig(**config)
        self.dt = dt
        self.max_steps = max_steps
        self.reward_pass = reward_pass
        self.reward_alive = reward_alive
        self.penalty_death = penalty_death

        self.action_space = spaces.Discrete(2)
        # bird y, bird vy, next pipe dx, gap centre dy
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(4,), dtype=np.float32)

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

        if int(action) == 1:
            handle_intent(self.session, Intent.FLAP)
        tick(self.session, self.clock.advance(self.dt))

        terminated = self.session.state is LifecycleState.ENDED
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        reward = self.reward_pass * (self.session.score - score_before)
        if terminated:
            reward -= self.penalty_death
        else:
            reward += self.reward_alive

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def _session_rng(self) -> random.Random:
        """Simulation RNG drawn from np_random, so unseeded resets continue the seeded stream"""
        return random.Random(int(self.np_random.integers(2**31)))

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _next_pipe(self):
        bird = self.session.bird
        ahead = [p for p in self.session.pipes if p.trailing_edge >= bird.x - bird.radius]
        return min(ahead, key=lambda p: p.x) if ahead else None

    def _get_obs(self) -> np.ndarray:
        cfg = self.config
        bird = self.session.bird

        y = bird.y / cfg.height * 2 - 1
        vy = bird.vy / MAX_FALL_SPEED

        pipe = self._next_pipe()
        if pipe is None:
            dx, dy = 1.0, 0.0
        else:
            dx = (pipe.x - bird.x) / cfg.width
            gap_centre = pipe.gap_y + pipe.gap_height / 2
            dy = (gap_centre - bird.y) / cfg.height

        return np.array(
            [clamp(y, -1, 1), clamp(vy, -1, 1), clamp(dx, -1, 1), clamp(dy, -1, 1)],
            dtype=np.float32,
        )

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
            from .window import FlappyWindow
            self._window = FlappyWindow(self.session, clock=self.clock, interactive=False)
        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def _render_rgb_array(self) -> np.ndarray:
        cfg = self.config
        frame = blank_frame(cfg.width, cfg.height, SKY_C)
        for pipe in self.session.pipes:
            fill_box(frame, pipe.top_box(), PIPE_C)
            fill_box(frame, pipe.bottom_box(cfg.height), PIPE_C)
        fill_circle(frame, self.session.bird.box, BIRD_C)
        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(seed: Optional[int] = 42) -> float:
    """Play one episode with a random policy, return the total reward"""
    env = FlappyEnv()
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
