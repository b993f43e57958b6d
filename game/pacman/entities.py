"""
Pacman entity dataclasses and the default arena
"""

from dataclasses import dataclass
from typing import List

from ..common.utils import Box

EXPIRED = float("-inf")  # timestamp that is always in the past


@dataclass
class Player:
    """Player-controlled entity, (x, y) is the top-left corner"""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    size: float = 34.0

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.size, self.size)


@dataclass
class Ghost:
    """Pursuer with two absolute-time effect windows"""
    x: float
    y: float
    vx: float
    vy: float
    size: float = 34.0
    vulnerable_until: float = EXPIRED  # harmless and capturable while now < this
    hidden_until: float = EXPIRED  # out of play while now < this

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.size, self.size)


@dataclass
class Cherry:
    """Collectible worth a point"""
    x: float
    y: float
    size: float = 26.0

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.size, self.size)


@dataclass
class Apex:
    """Power item that makes every ghost vulnerable"""
    x: float
    y: float
    size: float = 36.0

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.size, self.size)


def default_walls(width: float, height: float, thickness: float = 10.0) -> List[Box]:
    """Centre hoop, side bars, top/bottom bars and the outer frame"""
    cx, cy = width / 2, height / 2
    t = thickness
    return [
        # square hoop in the centre
        Box(cx - 60, cy - 120, 120, t),
        Box(cx - 60, cy + 100, 120, t),
        Box(cx - 120, cy - 60, t, 120),
        Box(cx + 110, cy - 60, t, 120),
        # side bars
        Box(50, 150, t, 200),
        Box(width - 60, 150, t, 200),
        # top and bottom bars
        Box(150, 40, 200, t),
        Box(150, height - 70, 200, t),
        # frame
        Box(0, 0, width, t),
        Box(0, height - t, width, t),
        Box(0, 0, t, height),
        Box(width - t, 0, t, height),
    ]
