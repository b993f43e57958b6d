from __future__ import annotations

import random

import pytest

from game.common.lifecycle import Intent
from game.flappy.simulation import FlappyConfig, new_session as new_flappy_session
from game.pacman.simulation import PacmanConfig, new_session as new_pacman_session


@pytest.fixture
def flappy():
    """A running flappy session with a fixed seed"""
    session = new_flappy_session(FlappyConfig(), random.Random(1234))
    session.lifecycle.on_input(Intent.START)
    return session


@pytest.fixture
def pacman():
    """A running pacman session with a fixed seed and nothing wandering off on its own"""
    session = new_pacman_session(PacmanConfig(wander_probability=0.0), random.Random(1234))
    session.lifecycle.on_input(Intent.START)
    return session
