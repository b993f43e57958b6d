"""
Pacman simulation core
----------------------
A session holds all mutable state for one game. tick(session, now) advances
it by one frame using a single timestamp for every timed-effect check;
handle_intent() feeds player input through the lifecycle.

Per-tick order:
1. player moves
2. a move into a wall is reverted and the player stops
3. visible ghosts move, bounce, then steer
4. cherries within reach are eaten and the pool is topped up
5. apex pickup opens the vulnerability window; apex respawns when due
6. ghost contact: capture if vulnerable, otherwise game over
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..common.lifecycle import Intent, InputOutcome, Lifecycle, LifecycleState
from ..common.utils import Box, clamp, overlaps_any, random_heading, within_reach
from .effects import clear_effects, hide, is_hidden, is_vulnerable, make_vulnerable
from .entities import EXPIRED, Apex, Cherry, Ghost, Player, default_walls
from .steering import steer

logger = logging.getLogger(__name__)

DIRECTIONS = {
    Intent.UP: (0.0, -1.0),
    Intent.DOWN: (0.0, 1.0),
    Intent.LEFT: (-1.0, 0.0),
    Intent.RIGHT: (1.0, 0.0),
}


@dataclass
class PacmanConfig:
    """Tunable constants (pixels, ticks and seconds)"""
    width: int = 500
    height: int = 500
    wall_thickness: float = 10.0
    walls: Optional[List[Box]] = None  # None -> default_walls()

    player_size: float = 34.0
    ghost_size: float = 34.0
    cherry_size: float = 26.0
    apex_size: float = 36.0

    player_speed: float = 3.2  # px/tick
    ghost_speed: float = 2.0  # px/tick
    chase_radius: float = 150.0
    wander_probability: float = 0.02  # per tick

    num_ghosts: int = 3
    num_cherries: int = 5

    vulnerable_duration: float = 10.0  # seconds
    hidden_duration: float = 2.0
    apex_respawn_delay: float = 15.0

    cherry_points: int = 1
    ghost_points: int = 10

    max_spawn_attempts: int = 200

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Arena must have positive size, got {self.width}x{self.height}")
        for name in ("player_size", "ghost_size", "cherry_size", "apex_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if not 0.0 <= self.wander_probability <= 1.0:
            raise ValueError(f"wander_probability must be in [0, 1], got {self.wander_probability}")
        if self.num_ghosts < 0 or self.num_cherries < 0:
            raise ValueError("Entity counts cannot be negative")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1")
        if self.walls is None:
            self.walls = default_walls(self.width, self.height, self.wall_thickness)

    def start_position(self, size: float) -> Tuple[float, float]:
        """Arena centre for an entity of the given size (clear in the default arena)"""
        return self.width / 2 - size / 2, self.height / 2 - size / 2


@dataclass
class PacmanSession:
    """Authoritative state for one pacman game"""
    config: PacmanConfig
    rng: random.Random
    player: Player = None  # type: ignore
    ghosts: List[Ghost] = field(default_factory=list)
    cherries: List[Cherry] = field(default_factory=list)
    apex: Optional[Apex] = None
    apex_respawn_at: float = EXPIRED
    score: int = 0
    lifecycle: Lifecycle = field(default_factory=Lifecycle)

    @property
    def state(self) -> LifecycleState:
        return self.lifecycle.state


# ----------------------------
# Session setup
# ----------------------------

def new_session(config: Optional[PacmanConfig] = None, rng: Optional[random.Random] = None) -> PacmanSession:
    session = PacmanSession(config=config or PacmanConfig(), rng=rng or random.Random())
    reset_session(session)
    return session


def reset_session(session: PacmanSession) -> None:
    """Fresh board: score 0, everything re-spawned, all effects expired"""
    cfg = session.config
    x, y = start_position(session, cfg.player_size)
    session.player = Player(x=x, y=y, size=cfg.player_size)
    session.score = 0

    # existing ghost objects are reused so references held elsewhere stay valid
    ghosts = session.ghosts[: cfg.num_ghosts]
    while len(ghosts) < cfg.num_ghosts:
        ghosts.append(Ghost(x=0.0, y=0.0, vx=0.0, vy=0.0, size=cfg.ghost_size))
    for g in ghosts:
        _place_ghost(session, g)
    session.ghosts = ghosts

    session.cherries = []
    _top_up_cherries(session)
    session.apex = _spawn_apex(session)
    session.apex_respawn_at = EXPIRED


def random_position(session: PacmanSession, size: float, avoid: Optional[Box] = None) -> Tuple[float, float]:
    """Uniform position whose box does not touch a wall (nor `avoid`, if given).

    Rejection sampling is capped at max_spawn_attempts; after that a grid scan
    looks for the first clear cell, and the arena centre is the last resort.
    """
    cfg = session.config
    walls = cfg.walls
    rng = session.rng

    def clear(x: float, y: float) -> bool:
        box = Box(x, y, size, size)
        if overlaps_any(box, walls):
            return False
        return avoid is None or not within_reach(box, avoid)

    for _ in range(cfg.max_spawn_attempts):
        x = rng.random() * (cfg.width - size)
        y = rng.random() * (cfg.height - size)
        if clear(x, y):
            return x, y

    logger.warning(f"No spawn spot for size {size} after {cfg.max_spawn_attempts} attempts, scanning")
    step = max(1.0, size / 2)
    y = 0.0
    while y <= cfg.height - size:
        x = 0.0
        while x <= cfg.width - size:
            if clear(x, y):
                return x, y
            x += step
        y += step

    logger.warning("Arena has no clear cell, using the centre")
    return cfg.start_position(size)


def start_position(session: PacmanSession, size: float) -> Tuple[float, float]:
    """Arena centre, or a random clear spot when custom walls cover the centre"""
    cfg = session.config
    x, y = cfg.start_position(size)
    if overlaps_any(Box(x, y, size, size), cfg.walls):
        logger.debug(f"Arena centre is walled for size {size}, picking a random spot")
        return random_position(session, size)
    return x, y


def _place_ghost(session: PacmanSession, ghost: Ghost) -> None:
    cfg = session.config
    ghost.size = cfg.ghost_size
    ghost.x, ghost.y = random_position(session, ghost.size, avoid=session.player.box)
    ghost.vx, ghost.vy = random_heading(session.rng, cfg.ghost_speed)
    clear_effects(ghost)


def _spawn_apex(session: PacmanSession) -> Apex:
    cfg = session.config
    x, y = random_position(session, cfg.apex_size)
    return Apex(x=x, y=y, size=cfg.apex_size)


def _top_up_cherries(session: PacmanSession) -> None:
    cfg = session.config
    while len(session.cherries) < cfg.num_cherries:
        x, y = random_position(session, cfg.cherry_size)
        session.cherries.append(Cherry(x=x, y=y, size=cfg.cherry_size))


# ----------------------------
# Input
# ----------------------------

def handle_intent(session: PacmanSession, intent: Intent) -> InputOutcome:
    outcome = session.lifecycle.on_input(intent)
    if outcome is InputOutcome.RESTARTED:
        reset_session(session)
    elif outcome in (InputOutcome.STARTED, InputOutcome.PASSTHROUGH) and intent in DIRECTIONS:
        dx, dy = DIRECTIONS[intent]
        speed = session.config.player_speed
        session.player.vx = dx * speed
        session.player.vy = dy * speed
    return outcome


# ----------------------------
# Tick
# ----------------------------

def tick(session: PacmanSession, now: float) -> None:
    """Advance one frame; does nothing unless the game is running"""
    if not session.lifecycle.is_running:
        return

    _move_player(session)
    _move_ghosts(session, now)
    _eat_cherries(session)
    _update_apex(session, now)
    _resolve_ghost_contacts(session, now)


def _move_player(session: PacmanSession) -> None:
    cfg = session.config
    p = session.player
    prev_x, prev_y = p.x, p.y

    p.x += p.vx
    p.y += p.vy
    if overlaps_any(p.box, cfg.walls):
        p.x, p.y = prev_x, prev_y
        p.vx = p.vy = 0.0

    # keep inside the frame walls
    t = cfg.wall_thickness
    p.x = clamp(p.x, t, cfg.width - p.size - t)
    p.y = clamp(p.y, t, cfg.height - p.size - t)


def _move_ghosts(session: PacmanSession, now: float) -> None:
    cfg = session.config
    for g in session.ghosts:
        if is_hidden(g, now):
            continue

        prev_x, prev_y = g.x, g.y
        g.x += g.vx
        g.y += g.vy

        # bounce off the arena edges
        if g.x < 0:
            g.x, g.vx = 0.0, -g.vx
        elif g.x > cfg.width - g.size:
            g.x, g.vx = cfg.width - g.size, -g.vx
        if g.y < 0:
            g.y, g.vy = 0.0, -g.vy
        elif g.y > cfg.height - g.size:
            g.y, g.vy = cfg.height - g.size, -g.vy

        if overlaps_any(g.box, cfg.walls):
            g.x, g.y = prev_x, prev_y
            g.vx, g.vy = -g.vx, -g.vy

        steer(
            g, session.player, now,
            speed=cfg.ghost_speed,
            chase_radius=cfg.chase_radius,
            wander_probability=cfg.wander_probability,
            rng=session.rng,
        )


def _eat_cherries(session: PacmanSession) -> None:
    player_box = session.player.box
    remaining = []
    for c in session.cherries:
        if within_reach(player_box, c.box):
            session.score += session.config.cherry_points
        else:
            remaining.append(c)
    session.cherries = remaining
    _top_up_cherries(session)


def _update_apex(session: PacmanSession, now: float) -> None:
    cfg = session.config
    apex = session.apex
    if apex is not None and within_reach(session.player.box, apex.box):
        session.apex = None
        session.apex_respawn_at = now + cfg.apex_respawn_delay
        until = make_vulnerable(session.ghosts, now, cfg.vulnerable_duration)
        logger.debug(f"Apex taken at {now:.2f}, ghosts vulnerable until {until:.2f}")

    if session.apex is None and now > session.apex_respawn_at:
        session.apex = _spawn_apex(session)


def _resolve_ghost_contacts(session: PacmanSession, now: float) -> None:
    cfg = session.config
    player_box = session.player.box
    for g in session.ghosts:
        if is_hidden(g, now) or not within_reach(player_box, g.box):
            continue

        if is_vulnerable(g, now):
            session.score += cfg.ghost_points
            hide(g, now, cfg.hidden_duration)
            g.x, g.y = start_position(session, g.size)
            g.vx, g.vy = random_heading(session.rng, cfg.ghost_speed)
            logger.debug(f"Ghost captured, score={session.score}")
        else:
            if session.lifecycle.end():
                logger.info(f"Game over (caught by ghost), score={session.score}")
            return


# ----------------------------
# Read model
# ----------------------------

def session_info(session: PacmanSession, now: float) -> Dict[str, Any]:
    """Snapshot for renderers and env info dicts; ghost flags derived from now"""
    return {
        "score": session.score,
        "state": session.state.name,
        "player": (session.player.x, session.player.y),
        "num_cherries": len(session.cherries),
        "apex_present": session.apex is not None,
        "ghosts": [
            {
                "x": g.x,
                "y": g.y,
                "vulnerable": is_vulnerable(g, now),
                "hidden": is_hidden(g, now),
            }
            for g in session.ghosts
        ],
    }
