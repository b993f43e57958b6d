"""
Clocks used to stamp ticks. Timed effects compare against absolute seconds,
so any clock works as long as it never goes backwards.
"""

import time


class WallClock:
    """Monotonic wall time in seconds"""

    def __call__(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock that only moves when told to (tests, gym envs)"""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError(f"Clock cannot move backwards: {seconds}")
        self.now += seconds
        return self.now

    def __call__(self) -> float:
        return self.now
