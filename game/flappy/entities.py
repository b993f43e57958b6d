"""
Flappy entity dataclasses
"""

from dataclasses import dataclass

from ..common.utils import Box


@dataclass
class Bird:
    """Player bird; x is fixed, y is the centre"""
    x: float
    y: float
    vy: float = 0.0
    radius: float = 12.0

    @property
    def box(self) -> Box:
        r = self.radius
        return Box(self.x - r, self.y - r, 2 * r, 2 * r)


@dataclass
class Pipe:
    """Vertical pipe pair with a gap starting at gap_y"""
    x: float
    gap_y: float
    width: float = 50.0
    gap_height: float = 140.0
    passed: bool = False  # set once when the bird clears it

    @property
    def trailing_edge(self) -> float:
        return self.x + self.width

    def top_box(self) -> Box:
        return Box(self.x, 0.0, self.width, self.gap_y)

    def bottom_box(self, height: float) -> Box:
        gap_bottom = self.gap_y + self.gap_height
        return Box(self.x, gap_bottom, self.width, height - gap_bottom)
