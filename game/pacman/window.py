"""Arcade window for playing / watching the pacman game"""

from typing import Callable, Optional

import arcade

from ..common.lifecycle import Intent
from ..common.render import to_lrbt
from ..common.window import SessionWindow
from .effects import is_hidden, is_vulnerable
from .pacman_env import APEX_C, BG_C, CHERRY_C, GHOST_C, GHOST_VULNERABLE_C, PLAYER_C, WALL_C
from .simulation import PacmanSession, handle_intent, tick


class PacmanWindow(SessionWindow):
    """Arrows / WASD to steer, click to start or restart"""

    KEY_INTENTS = {
        arcade.key.UP: Intent.UP,
        arcade.key.W: Intent.UP,
        arcade.key.DOWN: Intent.DOWN,
        arcade.key.S: Intent.DOWN,
        arcade.key.LEFT: Intent.LEFT,
        arcade.key.A: Intent.LEFT,
        arcade.key.RIGHT: Intent.RIGHT,
        arcade.key.D: Intent.RIGHT,
    }
    MOUSE_INTENT = Intent.START
    START_HINT = "Click or press an arrow key to start!"
    RESTART_HINT = "Click or press an arrow key to play again"

    def __init__(
        self,
        session: PacmanSession,
        clock: Optional[Callable[[], float]] = None,
        interactive: bool = True,
    ):
        cfg = session.config
        super().__init__(
            session, tick, handle_intent, cfg.width, cfg.height, "Pacman",
            clock=clock, interactive=interactive,
        )
        self.background_color = BG_C

    def _circle(self, box, color) -> None:
        h = self.session.config.height
        cx, cy = box.center
        arcade.draw_circle_filled(cx, h - cy, box.width / 2, color)

    def draw_world(self, now: float) -> None:
        session = self.session
        cfg = session.config
        h = cfg.height

        for c in session.cherries:
            self._circle(c.box, CHERRY_C)

        for g in session.ghosts:
            if is_hidden(g, now):
                continue
            color = GHOST_VULNERABLE_C if is_vulnerable(g, now) else GHOST_C
            arcade.draw_lrbt_rectangle_filled(*to_lrbt(g.box, h), color)

        # open mouth facing right
        box = session.player.box
        cx, cy = box.center
        arcade.draw_arc_filled(cx, h - cy, box.width, box.height, PLAYER_C, 45, 315)

        for wall in cfg.walls:
            arcade.draw_lrbt_rectangle_filled(*to_lrbt(wall, h), WALL_C)

        if session.apex is not None:
            self._circle(session.apex.box, APEX_C)
