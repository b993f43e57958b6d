"""
Frame loop: one recurring callback per session that reads the clock once
and advances the simulation. Drawing is left to the window, which arcade
calls after the update of the same frame.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .clock import WallClock

logger = logging.getLogger(__name__)


class GameLoop:
    """Drives tick(session, now) from a scheduler until stopped"""

    def __init__(
        self,
        session: Any,
        tick: Callable[[Any, float], None],
        clock: Optional[Callable[[], float]] = None,
        interval: float = 1 / 60,
    ):
        self.session = session
        self.tick = tick
        self.clock = clock if clock is not None else WallClock()
        self.interval = interval
        self.frames = 0
        self._unschedule: Optional[Callable[[Callable], None]] = None
        self._stopped = False

    @property
    def active(self) -> bool:
        return self._unschedule is not None

    def frame(self, delta_time: float = 0.0) -> None:
        """Scheduled callback; delta_time is unused because motion is per tick"""
        if self._stopped:
            return
        now = self.clock()
        self.tick(self.session, now)
        self.frames += 1

    def start(
        self,
        schedule: Callable[[Callable, float], None],
        unschedule: Callable[[Callable], None],
    ) -> None:
        """Register frame() with a scheduler such as arcade.schedule"""
        if self.active:
            return
        self._stopped = False
        schedule(self.frame, self.interval)
        self._unschedule = unschedule
        logger.debug("Game loop started")

    def stop(self) -> None:
        """Deregister the callback; later frames never touch the session"""
        self._stopped = True
        if self._unschedule is not None:
            self._unschedule(self.frame)
            self._unschedule = None
            logger.debug(f"Game loop stopped after {self.frames} frames")


class SessionBinding:
    """
    A frame loop plus the input handlers feeding the same session, pushed onto
    an event dispatcher (the arcade window) and removed from it as one unit.
    """

    def __init__(self, dispatcher: Any, loop: GameLoop, handlers: Dict[str, Callable]):
        self.dispatcher = dispatcher
        self.loop = loop
        self.handlers = handlers
        self.bound = False

    def bind(
        self,
        schedule: Callable[[Callable, float], None],
        unschedule: Callable[[Callable], None],
    ) -> None:
        if self.bound:
            return
        self.dispatcher.push_handlers(**self.handlers)
        self.loop.start(schedule, unschedule)
        self.bound = True

    def unbind(self) -> None:
        """Stop the loop and drop the handlers; safe to call more than once"""
        self.loop.stop()
        if self.bound:
            self.dispatcher.remove_handlers(**self.handlers)
            self.bound = False
