"""Game lifecycle state machine shared by both games."""

import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    """Where a session is in its lifecycle."""

    IDLE = auto()     # Waiting for the first input
    RUNNING = auto()  # Simulation active
    ENDED = auto()    # Game over, waiting for restart input


class Intent(Enum):
    """Discrete player intents produced by input adapters."""

    START = auto()
    RESTART = auto()
    FLAP = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()


MOVEMENT_INTENTS = frozenset({Intent.FLAP, Intent.UP, Intent.DOWN, Intent.LEFT, Intent.RIGHT})


class InputOutcome(Enum):
    """What the caller must do after feeding an intent to the lifecycle."""

    STARTED = auto()      # Idle -> Running, intent also acts on the simulation
    RESTARTED = auto()    # Ended -> Running, caller resets; intent is swallowed
    PASSTHROUGH = auto()  # Running, intent acts on the simulation
    IGNORED = auto()      # Nothing to do


class Lifecycle:
    """Idle -> Running -> Ended -> Running state machine.

    Only RUNNING lets the tick update execute. Any qualifying input starts
    an idle game; any input on an ended game restarts it. The reset itself
    is the caller's job, signalled by InputOutcome.RESTARTED.
    """

    def __init__(self):
        self.state = LifecycleState.IDLE

    @property
    def is_running(self) -> bool:
        return self.state is LifecycleState.RUNNING

    def on_input(self, intent: Intent) -> InputOutcome:
        if self.state is LifecycleState.ENDED:
            self._transition(LifecycleState.RUNNING)
            return InputOutcome.RESTARTED

        if self.state is LifecycleState.IDLE:
            self._transition(LifecycleState.RUNNING)
            return InputOutcome.STARTED

        if intent in MOVEMENT_INTENTS:
            return InputOutcome.PASSTHROUGH

        logger.debug(f"Ignoring {intent.name} while running")
        return InputOutcome.IGNORED

    def end(self) -> bool:
        """Running -> Ended. Returns False if the game was not running."""
        if self.state is not LifecycleState.RUNNING:
            return False
        self._transition(LifecycleState.ENDED)
        return True

    def _transition(self, new_state: LifecycleState) -> None:
        logger.info(f"Lifecycle: {self.state.name} -> {new_state.name}")
        self.state = new_state
