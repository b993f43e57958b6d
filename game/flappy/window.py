"""Arcade window for playing / watching the flappy game"""

from typing import Callable, Optional

import arcade

from ..common.lifecycle import Intent
from ..common.render import flip_y, to_lrbt
from ..common.window import SessionWindow
from .flappy_env import BIRD_C, PIPE_C, SKY_C
from .simulation import FlappySession, handle_intent, tick


class FlappyWindow(SessionWindow):
    """Space or click to flap"""

    KEY_INTENTS = {arcade.key.SPACE: Intent.FLAP}
    MOUSE_INTENT = Intent.FLAP
    START_HINT = "Click or press Space to start!"
    RESTART_HINT = "Click or press Space to play again"

    def __init__(
        self,
        session: FlappySession,
        clock: Optional[Callable[[], float]] = None,
        interactive: bool = True,
    ):
        cfg = session.config
        super().__init__(
            session, tick, handle_intent, cfg.width, cfg.height, "Flappy",
            clock=clock, interactive=interactive,
        )
        self.background_color = SKY_C

    def draw_world(self, now: float) -> None:
        cfg = self.session.config
        for pipe in self.session.pipes:
            arcade.draw_lrbt_rectangle_filled(*to_lrbt(pipe.top_box(), cfg.height), PIPE_C)
            arcade.draw_lrbt_rectangle_filled(*to_lrbt(pipe.bottom_box(cfg.height), cfg.height), PIPE_C)

        bird = self.session.bird
        arcade.draw_circle_filled(bird.x, flip_y(bird.y, cfg.height), bird.radius, BIRD_C)
