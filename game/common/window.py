"""
Arcade window base shared by both games.

The window is the input adapter (keys/mouse -> intents) and the render
adapter (reads session state, never mutates it). The frame loop and input
handlers are registered together and torn down together on close.
"""

from typing import Any, Callable, Dict, Optional

import arcade

from .clock import WallClock
from .lifecycle import Intent, LifecycleState
from .loop import GameLoop, SessionBinding

HUD_C = (255, 255, 255)
OVERLAY_C = (0, 0, 0, 150)


class SessionWindow(arcade.Window):
    """Base window driving one game session"""

    # Overridden by subclasses
    KEY_INTENTS: Dict[int, Intent] = {}
    MOUSE_INTENT: Intent = Intent.START
    START_HINT = "Press a key to start!"
    RESTART_HINT = "Press a key to play again"

    def __init__(
        self,
        session: Any,
        tick: Callable[[Any, float], None],
        handle_intent: Callable[[Any, Intent], Any],
        width: int,
        height: int,
        title: str,
        clock: Optional[Callable[[], float]] = None,
        interactive: bool = True,
    ):
        super().__init__(width, height, title)
        self.session = session
        self.clock = clock if clock is not None else WallClock()
        self._handle_intent = handle_intent
        self.loop = GameLoop(session, tick, self.clock)
        self.binding = SessionBinding(
            self, self.loop, {"on_key_press": self._on_key, "on_mouse_press": self._on_mouse}
        )

        if interactive:
            self.binding.bind(arcade.schedule, arcade.unschedule)

    def attach(self, session: Any, clock: Optional[Callable[[], float]] = None) -> None:
        """Point the window (and its loop) at a new session"""
        self.session = session
        self.loop.session = session
        if clock is not None:
            self.clock = self.loop.clock = clock

    # ----------------------------
    # Input adapter
    # ----------------------------

    def _on_key(self, symbol: int, modifiers: int):
        intent = self.KEY_INTENTS.get(symbol)
        if intent is None:
            return None
        self._handle_intent(self.session, intent)
        return True

    def _on_mouse(self, x: int, y: int, button: int, modifiers: int):
        self._handle_intent(self.session, self.MOUSE_INTENT)
        return True

    # ----------------------------
    # Render adapter
    # ----------------------------

    def on_draw(self):
        self.clear()
        self.draw_world(self.clock())
        self.draw_hud()

    def draw_world(self, now: float) -> None:
        raise NotImplementedError

    def draw_hud(self) -> None:
        arcade.draw_text(str(self.session.score), 10, self.height - 34, HUD_C, 22, bold=True)

        state = self.session.state
        if state is LifecycleState.RUNNING:
            return
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, OVERLAY_C)
        cx, cy = self.width / 2, self.height / 2
        if state is LifecycleState.IDLE:
            arcade.draw_text(self.START_HINT, cx, cy, HUD_C, 16, anchor_x="center")
        else:
            arcade.draw_text("Game Over", cx, cy + 30, HUD_C, 22, anchor_x="center", bold=True)
            arcade.draw_text(f"Your score: {self.session.score}", cx, cy, HUD_C, 16, anchor_x="center")
            arcade.draw_text(self.RESTART_HINT, cx, cy - 28, HUD_C, 12, anchor_x="center")

    # ----------------------------
    # Teardown
    # ----------------------------

    def teardown(self) -> None:
        self.binding.unbind()

    def on_close(self):
        self.teardown()
        super().on_close()
