"""Flappy game - scroll through pipe gaps under gravity"""

from .entities import Bird, Pipe
from .simulation import FlappyConfig, FlappySession, new_session, reset_session, handle_intent, tick, session_info
from .flappy_env import FlappyEnv, run_random_episode

__all__ = [
    "Bird",
    "Pipe",
    "FlappyConfig",
    "FlappySession",
    "new_session",
    "reset_session",
    "handle_intent",
    "tick",
    "session_info",
    "FlappyEnv",
    "run_random_episode",
]
