"""
Flappy simulation core
----------------------
A session holds all mutable state for one game. tick() advances it by one
frame; handle_intent() feeds player input through the lifecycle.

Per-tick order:
1. gravity, then displacement
2. floor/ceiling contact ends the game at once
3. spawn on cadence, scroll, drop off-screen pipes
4. edge-triggered pass scoring
5. pipe body contact ends the game
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..common.lifecycle import Intent, InputOutcome, Lifecycle, LifecycleState
from ..common.utils import overlaps
from .entities import Bird, Pipe

logger = logging.getLogger(__name__)


@dataclass
class FlappyConfig:
    """Tunable constants (pixels and ticks)"""
    width: int = 400
    height: int = 600
    bird_radius: float = 12.0
    gravity: float = 0.35  # px/tick^2
    flap_strength: float = -6.0  # px/tick, negative is up
    pipe_width: float = 50.0
    gap_height: float = 140.0
    pipe_speed: float = 1.5  # px/tick
    pipe_interval: int = 90  # ticks between spawns
    gap_margin: float = 60.0  # min distance of the gap from top/bottom

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Arena must have positive size, got {self.width}x{self.height}")
        if self.pipe_interval <= 0:
            raise ValueError(f"pipe_interval must be positive, got {self.pipe_interval}")
        if self.gap_height + 2 * self.gap_margin > self.height:
            raise ValueError("Gap and margins do not fit in the arena height")

    @property
    def bird_x(self) -> float:
        return self.width / 4


@dataclass
class FlappySession:
    """Authoritative state for one flappy game"""
    config: FlappyConfig
    rng: random.Random
    bird: Bird = None  # type: ignore
    pipes: List[Pipe] = field(default_factory=list)
    score: int = 0
    frame_count: int = 0
    lifecycle: Lifecycle = field(default_factory=Lifecycle)

    @property
    def state(self) -> LifecycleState:
        return self.lifecycle.state


def new_session(config: Optional[FlappyConfig] = None, rng: Optional[random.Random] = None) -> FlappySession:
    session = FlappySession(config=config or FlappyConfig(), rng=rng or random.Random())
    reset_session(session)
    return session


def reset_session(session: FlappySession) -> None:
    """Back to the starting position; lifecycle is left alone"""
    cfg = session.config
    session.bird = Bird(x=cfg.bird_x, y=cfg.height / 2, radius=cfg.bird_radius)
    session.pipes = []
    session.score = 0
    session.frame_count = 0


def handle_intent(session: FlappySession, intent: Intent) -> InputOutcome:
    outcome = session.lifecycle.on_input(intent)
    if outcome is InputOutcome.RESTARTED:
        reset_session(session)
    elif outcome in (InputOutcome.STARTED, InputOutcome.PASSTHROUGH) and intent is Intent.FLAP:
        session.bird.vy = session.config.flap_strength
    return outcome


def tick(session: FlappySession, now: float = 0.0) -> None:
    """Advance one frame. Flappy has no timed effects, so now is unused."""
    if not session.lifecycle.is_running:
        return

    _update_bird(session)
    if _hit_boundary(session):
        _game_over(session, "boundary")
        return

    _update_pipes(session)
    _score_passed_pipes(session)

    if _hit_pipe(session):
        _game_over(session, "pipe")


def _update_bird(session: FlappySession) -> None:
    bird = session.bird
    bird.vy += session.config.gravity
    bird.y += bird.vy


def _hit_boundary(session: FlappySession) -> bool:
    box = session.bird.box
    return box.bottom > session.config.height or box.y < 0


def _update_pipes(session: FlappySession) -> None:
    cfg = session.config
    if session.frame_count % cfg.pipe_interval == 0:
        _spawn_pipe(session)
    session.frame_count += 1

    for pipe in session.pipes:
        pipe.x -= cfg.pipe_speed

    session.pipes = [p for p in session.pipes if p.trailing_edge > 0]


def _spawn_pipe(session: FlappySession) -> None:
    cfg = session.config
    span = cfg.height - cfg.gap_height - 2 * cfg.gap_margin
    gap_y = session.rng.random() * span + cfg.gap_margin
    session.pipes.append(
        Pipe(x=float(cfg.width), gap_y=gap_y, width=cfg.pipe_width, gap_height=cfg.gap_height)
    )


def _score_passed_pipes(session: FlappySession) -> None:
    bird_x = session.bird.x
    for pipe in session.pipes:
        if not pipe.passed and pipe.trailing_edge < bird_x:
            pipe.passed = True
            session.score += 1
            logger.debug(f"Pipe passed, score={session.score}")


def _hit_pipe(session: FlappySession) -> bool:
    box = session.bird.box
    height = session.config.height
    return any(
        overlaps(box, pipe.top_box()) or overlaps(box, pipe.bottom_box(height))
        for pipe in session.pipes
    )


def _game_over(session: FlappySession, cause: str) -> None:
    if session.lifecycle.end():
        logger.info(f"Game over ({cause}), score={session.score}")


def session_info(session: FlappySession, now: float = 0.0) -> Dict[str, Any]:
    """Read model for renderers and env info dicts"""
    return {
        "score": session.score,
        "state": session.state.name,
        "bird_y": session.bird.y,
        "bird_vy": session.bird.vy,
        "num_pipes": len(session.pipes),
        "frame": session.frame_count,
    }
