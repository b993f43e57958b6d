"""
Ghost steering policy.

Each tick a ghost is either CHASING (not vulnerable and the player is inside
the chase radius: re-aim straight at the player) or WANDERING (occasionally
pick a fresh random heading). The behaviour is recomputed every tick from
distance and vulnerability, never stored.
"""

import random
from enum import Enum, auto

from ..common.utils import center_distance, normalize, random_heading
from .effects import is_vulnerable
from .entities import Ghost, Player


class Behavior(Enum):
    CHASING = auto()
    WANDERING = auto()


def choose_behavior(ghost: Ghost, player: Player, now: float, chase_radius: float) -> Behavior:
    if is_vulnerable(ghost, now):
        return Behavior.WANDERING
    if center_distance(ghost.box, player.box) < chase_radius:
        return Behavior.CHASING
    return Behavior.WANDERING


def steer(
    ghost: Ghost,
    player: Player,
    now: float,
    speed: float,
    chase_radius: float,
    wander_probability: float,
    rng: random.Random,
) -> Behavior:
    """Update the ghost's velocity for this tick and report the behaviour used"""
    behavior = choose_behavior(ghost, player, now, chase_radius)

    if behavior is Behavior.CHASING:
        gx, gy = ghost.box.center
        px, py = player.box.center
        nx, ny = normalize(px - gx, py - gy)
        ghost.vx = nx * speed
        ghost.vy = ny * speed
    elif rng.random() < wander_probability:
        ghost.vx, ghost.vy = random_heading(rng, speed)

    return behavior
