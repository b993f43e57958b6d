import math
import random

import pytest

from game.common.lifecycle import Intent, InputOutcome, LifecycleState
from game.common.utils import Box, overlaps_any
from game.pacman.effects import clear_effects, hide, is_hidden, is_vulnerable, make_vulnerable
from game.pacman.entities import EXPIRED, Apex, Cherry, Ghost, Player, default_walls
from game.pacman.simulation import (
    PacmanConfig,
    handle_intent,
    new_session,
    random_position,
    tick,
)
from game.pacman.steering import Behavior, choose_behavior, steer

CLEAR_SPOT = (70.0, 400.0)  # clear of every default wall


def quiet_session(**config):
    """Running session with no ghosts, cherries or apex and a parked player"""
    config.setdefault("num_cherries", 0)
    config.setdefault("wander_probability", 0.0)
    session = new_session(PacmanConfig(**config), random.Random(99))
    handle_intent(session, Intent.START)
    session.ghosts = []
    session.apex = None
    session.apex_respawn_at = math.inf
    session.player = Player(x=CLEAR_SPOT[0], y=CLEAR_SPOT[1], size=session.config.player_size)
    return session


def ghost_at(x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Ghost:
    return Ghost(x=x, y=y, vx=vx, vy=vy)


# ----------------------------
# Timed effects
# ----------------------------

def test_effects_default_to_expired() -> None:
    g = ghost_at(0, 0)
    assert g.vulnerable_until == EXPIRED and g.hidden_until == EXPIRED
    assert not is_vulnerable(g, 0.0)
    assert not is_hidden(g, -1e9)


def test_effect_windows_are_half_open() -> None:
    g = ghost_at(0, 0)
    assert make_vulnerable([g], 10.0, 5.0) == 15.0
    assert is_vulnerable(g, 14.999)
    assert not is_vulnerable(g, 15.0)

    hide(g, 20.0, 2.0)
    assert is_hidden(g, 21.999)
    assert not is_hidden(g, 22.0)


def test_clear_effects_expires_both_windows() -> None:
    g = ghost_at(0, 0)
    make_vulnerable([g], 0.0, 10.0)
    hide(g, 0.0, 2.0)
    clear_effects(g)
    assert g.vulnerable_until == EXPIRED and g.hidden_until == EXPIRED
    assert not is_vulnerable(g, 1.0) and not is_hidden(g, 1.0)


# ----------------------------
# Player motion
# ----------------------------

def test_move_into_wall_is_reverted_and_stops() -> None:
    session = quiet_session()
    # just below the centre hoop's top bar (y 130..140)
    session.player = Player(x=233.0, y=141.0, vy=-3.2)
    tick(session, 0.0)
    assert (session.player.x, session.player.y) == (233.0, 141.0)
    assert (session.player.vx, session.player.vy) == (0.0, 0.0)


def test_direction_intent_persists_until_changed() -> None:
    session = quiet_session()
    assert handle_intent(session, Intent.UP) is InputOutcome.PASSTHROUGH
    for _ in range(3):
        tick(session, 0.0)
    assert session.player.y == pytest.approx(CLEAR_SPOT[1] - 3 * 3.2)
    assert session.player.vy == -3.2 and session.player.vx == 0.0

    handle_intent(session, Intent.RIGHT)
    assert (session.player.vx, session.player.vy) == (3.2, 0.0)


def test_first_direction_starts_and_moves() -> None:
    session = new_session(PacmanConfig(), random.Random(5))
    assert session.state is LifecycleState.IDLE
    assert handle_intent(session, Intent.LEFT) is InputOutcome.STARTED
    assert session.state is LifecycleState.RUNNING
    assert session.player.vx == -3.2


def test_idle_session_does_not_tick() -> None:
    session = new_session(PacmanConfig(), random.Random(5))
    before = [(g.x, g.y) for g in session.ghosts]
    tick(session, 0.0)
    assert [(g.x, g.y) for g in session.ghosts] == before


# ----------------------------
# Collectibles
# ----------------------------

def test_cherry_capture_scores_and_refills_pool() -> None:
    session = quiet_session(num_cherries=5)
    px, py = CLEAR_SPOT
    session.cherries = [
        Cherry(x=px + 4, y=py + 4),
        Cherry(x=400.0, y=60.0),
        Cherry(x=400.0, y=420.0),
        Cherry(x=20.0, y=20.0),
        Cherry(x=20.0, y=460.0),
    ]
    tick(session, 0.0)

    assert session.score == 1
    assert len(session.cherries) == 5
    assert not any(overlaps_any(c.box, session.config.walls) for c in session.cherries)


def test_random_position_never_inside_walls() -> None:
    session = quiet_session()
    for _ in range(500):
        x, y = random_position(session, 26.0)
        assert not overlaps_any(Box(x, y, 26.0, 26.0), session.config.walls)


def test_random_position_falls_back_when_arena_is_full() -> None:
    cfg = PacmanConfig(width=100, height=100, walls=[Box(0, 0, 100, 100)], max_spawn_attempts=3)
    session = new_session(cfg, random.Random(1))
    assert random_position(session, 26.0) == (37.0, 37.0)


def test_random_position_scans_for_last_clear_cell() -> None:
    walls = [Box(0, 0, 100, 50), Box(0, 50, 50, 50)]
    cfg = PacmanConfig(width=100, height=100, walls=walls, num_ghosts=0, num_cherries=0, max_spawn_attempts=1)
    session = new_session(cfg, random.Random(1))
    for _ in range(20):
        x, y = random_position(session, 26.0)
        assert not overlaps_any(Box(x, y, 26.0, 26.0), walls)


# ----------------------------
# Apex, vulnerability, capture
# ----------------------------

@pytest.mark.parametrize(
    "dt, captured",
    [(0.0, True), (5.0, True), (9.999, True), (10.0, False), (12.0, False)],
)
def test_vulnerability_window_decides_capture_or_game_over(dt: float, captured: bool) -> None:
    session = quiet_session()
    px, py = CLEAR_SPOT
    far_ghost = ghost_at(400.0, 60.0)
    session.ghosts = [far_ghost]
    session.apex = Apex(x=px - 1, y=py - 1)

    T = 100.0
    tick(session, T)
    assert session.apex is None
    assert session.apex_respawn_at == T + 15.0
    assert far_ghost.vulnerable_until == T + 10.0

    ghost = session.ghosts[0]
    ghost.x, ghost.y, ghost.vx, ghost.vy = px, py, 0.0, 0.0
    tick(session, T + dt)

    if captured:
        assert session.state is LifecycleState.RUNNING
        assert session.score == 10
        assert is_hidden(ghost, T + dt)
        assert ghost.hidden_until == T + dt + 2.0
        assert (ghost.x, ghost.y) == session.config.start_position(ghost.size)
        assert math.hypot(ghost.vx, ghost.vy) == pytest.approx(2.0)
    else:
        assert session.state is LifecycleState.ENDED
        assert session.score == 0


def test_apex_respawns_after_delay() -> None:
    session = quiet_session()
    session.apex_respawn_at = 15.0
    tick(session, 15.0)
    assert session.apex is None
    tick(session, 15.01)
    assert session.apex is not None
    assert not overlaps_any(session.apex.box, session.config.walls)


def test_hidden_ghost_is_frozen_and_harmless_until_expiry() -> None:
    session = quiet_session()
    px, py = CLEAR_SPOT
    ghost = ghost_at(px, py, vx=2.0)
    ghost.hidden_until = 5.0
    session.ghosts = [ghost]

    tick(session, 4.0)
    tick(session, 4.999)
    assert (ghost.x, ghost.y) == (px, py)
    assert session.state is LifecycleState.RUNNING

    tick(session, 5.0)
    assert ghost.x == px + 2.0
    assert session.state is LifecycleState.ENDED


def test_score_stops_after_game_over() -> None:
    session = quiet_session()
    px, py = CLEAR_SPOT
    session.ghosts = [ghost_at(px, py)]
    tick(session, 0.0)
    assert session.state is LifecycleState.ENDED

    session.cherries = [Cherry(x=px, y=py)]
    tick(session, 1.0)
    assert session.score == 0


# ----------------------------
# Steering
# ----------------------------

def test_choose_behavior_from_distance_and_vulnerability() -> None:
    player = Player(x=100.0, y=100.0)
    near = ghost_at(200.0, 100.0)
    far = ghost_at(400.0, 100.0)
    assert choose_behavior(near, player, 0.0, 150.0) is Behavior.CHASING
    assert choose_behavior(far, player, 0.0, 150.0) is Behavior.WANDERING

    near.vulnerable_until = 1.0
    assert choose_behavior(near, player, 0.5, 150.0) is Behavior.WANDERING
    assert choose_behavior(near, player, 1.0, 150.0) is Behavior.CHASING


def test_wandering_only_turns_with_probability() -> None:
    player = Player(x=0.0, y=0.0)
    ghost = ghost_at(400.0, 400.0, vx=2.0)
    rng = random.Random(3)

    steer(ghost, player, 0.0, 2.0, 150.0, 0.0, rng)
    assert (ghost.vx, ghost.vy) == (2.0, 0.0)

    steer(ghost, player, 0.0, 2.0, 150.0, 1.0, rng)
    assert (ghost.vx, ghost.vy) != (2.0, 0.0)
    assert math.hypot(ghost.vx, ghost.vy) == pytest.approx(2.0)


def test_ghost_reaims_at_player_within_same_tick() -> None:
    session = quiet_session()
    far = ghost_at(400.0, 60.0, vx=2.0)
    near = ghost_at(150.0, 380.0)
    session.ghosts = [far, near]

    tick(session, 0.0)

    # far ghost keeps wandering on its heading
    assert (far.vx, far.vy) == (2.0, 0.0)
    assert far.x == 402.0

    px, py = session.player.box.center
    gx, gy = near.box.center
    dist = math.hypot(px - gx, py - gy)
    assert near.vx == pytest.approx((px - gx) / dist * 2.0)
    assert near.vy == pytest.approx((py - gy) / dist * 2.0)


# ----------------------------
# Lifecycle + invariants
# ----------------------------

def test_restart_resets_everything() -> None:
    session = quiet_session(num_cherries=5)
    session.score = 42
    session.lifecycle.end()

    assert handle_intent(session, Intent.RIGHT) is InputOutcome.RESTARTED
    cfg = session.config
    assert session.state is LifecycleState.RUNNING
    assert session.score == 0
    assert (session.player.x, session.player.y) == cfg.start_position(cfg.player_size)
    assert (session.player.vx, session.player.vy) == (0.0, 0.0)
    assert len(session.ghosts) == cfg.num_ghosts
    assert all(g.vulnerable_until == EXPIRED and g.hidden_until == EXPIRED for g in session.ghosts)
    assert len(session.cherries) == 5
    assert session.apex is not None
    assert session.apex_respawn_at == EXPIRED


def test_restart_reuses_ghosts_with_effects_cleared() -> None:
    session = new_session(PacmanConfig(), random.Random(5))
    handle_intent(session, Intent.START)
    ghosts = list(session.ghosts)
    make_vulnerable(ghosts, 50.0, 10.0)
    hide(ghosts[0], 50.0, 2.0)
    session.lifecycle.end()

    handle_intent(session, Intent.UP)
    assert all(a is b for a, b in zip(session.ghosts, ghosts))
    for g in session.ghosts:
        assert not is_vulnerable(g, 51.0)
        assert not is_hidden(g, 51.0)
        assert not overlaps_any(g.box, session.config.walls)


def test_start_while_running_is_ignored(pacman) -> None:
    pacman.score = 3
    assert handle_intent(pacman, Intent.START) is InputOutcome.IGNORED
    assert pacman.score == 3


def test_nothing_ends_a_tick_inside_a_wall() -> None:
    session = new_session(PacmanConfig(), random.Random(2024))
    rng = random.Random(11)
    moves = [Intent.UP, Intent.DOWN, Intent.LEFT, Intent.RIGHT]
    walls = session.config.walls
    now = 0.0
    last_score = 0

    handle_intent(session, Intent.START)
    for _ in range(3000):
        now += 1 / 60
        if rng.random() < 0.05:
            outcome = handle_intent(session, rng.choice(moves))
            if outcome is InputOutcome.RESTARTED:
                last_score = 0
        tick(session, now)

        assert not overlaps_any(session.player.box, walls)
        for g in session.ghosts:
            if not is_hidden(g, now):
                assert not overlaps_any(g.box, walls)
        assert session.score >= last_score
        last_score = session.score


CENTRE_BLOCK = Box(240.0, 240.0, 20.0, 20.0)


def test_walled_centre_moves_player_start_to_a_clear_spot() -> None:
    walls = default_walls(500, 500) + [CENTRE_BLOCK]
    session = new_session(PacmanConfig(walls=walls), random.Random(8))
    assert not overlaps_any(session.player.box, walls)


def test_captured_ghost_never_reappears_inside_a_wall() -> None:
    walls = default_walls(500, 500) + [CENTRE_BLOCK]
    session = quiet_session(walls=walls)
    px, py = CLEAR_SPOT
    ghost = ghost_at(px, py)
    ghost.vulnerable_until = 10.0
    session.ghosts = [ghost]

    tick(session, 0.0)
    assert session.score == 10
    assert is_hidden(ghost, 0.0)
    assert not overlaps_any(ghost.box, walls)

    now = ghost.hidden_until
    for _ in range(40):
        tick(session, now)
        assert not overlaps_any(ghost.box, walls)
        now += 1 / 60
