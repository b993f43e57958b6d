import random

import pytest

from game.common.lifecycle import Intent, InputOutcome, LifecycleState
from game.flappy.entities import Pipe
from game.flappy.simulation import FlappyConfig, handle_intent, new_session, tick


def running_session(**config):
    session = new_session(FlappyConfig(**config), random.Random(7))
    handle_intent(session, Intent.START)
    return session


def test_free_fall_ends_at_floor_and_freezes_score(flappy) -> None:
    ys = [flappy.bird.y]
    for _ in range(100):
        tick(flappy)
        if flappy.state is LifecycleState.ENDED:
            break
        ys.append(flappy.bird.y)

    assert flappy.state is LifecycleState.ENDED
    assert all(b > a for a, b in zip(ys, ys[1:]))
    # y(n) = 300 + 0.35 * n(n+1)/2, floor contact once y + 12 > 600
    assert len(ys) == 41
    assert flappy.bird.box.bottom > flappy.config.height

    frozen = (flappy.bird.y, flappy.score, len(flappy.pipes))
    for _ in range(10):
        tick(flappy)
    assert (flappy.bird.y, flappy.score, len(flappy.pipes)) == frozen


def test_ceiling_contact_ends_game() -> None:
    session = running_session(gravity=0.0)
    session.bird.y = 13.0
    session.bird.vy = -2.0
    tick(session)
    assert session.state is LifecycleState.ENDED


def test_flap_sets_upward_impulse(flappy) -> None:
    assert handle_intent(flappy, Intent.FLAP) is InputOutcome.PASSTHROUGH
    assert flappy.bird.vy == flappy.config.flap_strength
    tick(flappy)
    assert flappy.bird.y < flappy.config.height / 2


def test_pass_scoring_fires_once_per_pipe() -> None:
    session = running_session(gravity=0.0)
    bird = session.bird
    # gap 230..370 around the bird at y=300, trailing edge just ahead of the bird
    session.pipes = [Pipe(x=bird.x - 49.0, gap_y=230.0)]

    tick(session)
    assert session.pipes[0].passed
    assert session.score == 1

    for _ in range(20):
        tick(session)
    assert session.score == 1
    assert session.state is LifecycleState.RUNNING


def test_pipe_body_contact_ends_game() -> None:
    session = running_session(gravity=0.0)
    session.pipes = [Pipe(x=session.bird.x - 10.0, gap_y=400.0)]
    tick(session)
    assert session.state is LifecycleState.ENDED
    assert session.score == 0


def test_touching_pipe_edge_is_not_a_collision() -> None:
    session = running_session(gravity=0.0)
    bird_right = session.bird.box.right
    session.pipes = [Pipe(x=bird_right + session.config.pipe_speed, gap_y=400.0)]
    tick(session)
    assert session.pipes[0].x == bird_right
    assert session.state is LifecycleState.RUNNING


def test_pipes_spawn_on_cadence_with_gap_in_bounds() -> None:
    session = running_session(gravity=0.0)
    for _ in range(181):
        tick(session)

    cfg = session.config
    assert len(session.pipes) == 3
    for pipe in session.pipes:
        assert cfg.gap_margin <= pipe.gap_y < cfg.height - cfg.gap_height - cfg.gap_margin


def test_off_screen_pipes_are_discarded() -> None:
    session = running_session(gravity=0.0)
    session.frame_count = 1  # no spawn this tick
    session.pipes = [Pipe(x=-49.0, gap_y=100.0, passed=True)]
    tick(session)
    assert session.pipes == []


def test_idle_session_does_not_tick() -> None:
    session = new_session(FlappyConfig(), random.Random(0))
    y = session.bird.y
    tick(session)
    assert session.bird.y == y
    assert session.state is LifecycleState.IDLE


def test_first_flap_starts_and_flaps() -> None:
    session = new_session(FlappyConfig(), random.Random(0))
    assert handle_intent(session, Intent.FLAP) is InputOutcome.STARTED
    assert session.state is LifecycleState.RUNNING
    assert session.bird.vy == session.config.flap_strength


def test_input_after_game_over_resets_without_flapping(flappy) -> None:
    flappy.score = 5
    flappy.pipes = [Pipe(x=200.0, gap_y=100.0)]
    flappy.bird.y = 590.0
    tick(flappy)
    assert flappy.state is LifecycleState.ENDED

    assert handle_intent(flappy, Intent.FLAP) is InputOutcome.RESTARTED
    assert flappy.state is LifecycleState.RUNNING
    assert flappy.score == 0
    assert flappy.pipes == []
    assert flappy.bird.y == flappy.config.height / 2
    assert flappy.bird.vy == 0.0


def test_config_rejects_gap_taller_than_arena() -> None:
    with pytest.raises(ValueError):
        FlappyConfig(height=200, gap_height=140, gap_margin=60)
