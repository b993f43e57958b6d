"""Pacman game - eat cherries, dodge ghosts, turn the tables with the apex"""

from .entities import Player, Ghost, Cherry, Apex, default_walls
from .effects import is_vulnerable, is_hidden, make_vulnerable, hide
from .steering import Behavior, choose_behavior, steer
from .simulation import (
    PacmanConfig,
    PacmanSession,
    new_session,
    reset_session,
    random_position,
    handle_intent,
    tick,
    session_info,
)
from .pacman_env import PacmanEnv, run_random_episode

__all__ = [
    "Player",
    "Ghost",
    "Cherry",
    "Apex",
    "default_walls",
    "is_vulnerable",
    "is_hidden",
    "make_vulnerable",
    "hide",
    "Behavior",
    "choose_behavior",
    "steer",
    "PacmanConfig",
    "PacmanSession",
    "new_session",
    "reset_session",
    "random_position",
    "handle_intent",
    "tick",
    "session_info",
    "PacmanEnv",
    "run_random_episode",
]
