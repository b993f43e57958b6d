"""Primitives shared by the arcade games"""

from .utils import Box, overlaps, overlaps_any, center_distance, within_reach
from .clock import WallClock, ManualClock
from .lifecycle import LifecycleState, Intent, InputOutcome, Lifecycle
from .loop import GameLoop

__all__ = [
    "Box",
    "overlaps",
    "overlaps_any",
    "center_distance",
    "within_reach",
    "WallClock",
    "ManualClock",
    "LifecycleState",
    "Intent",
    "InputOutcome",
    "Lifecycle",
    "GameLoop",
]
