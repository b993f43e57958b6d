"""
Geometry and helper functions shared by both games
"""

from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Tuple, Optional
import numpy as np


@dataclass(frozen=True)
class Box:
    """Axis-aligned box, top-left origin, y grows downward"""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width * 0.5, self.y + self.height * 0.5


def overlaps(a: Box, b: Box) -> bool:
    """Check if two boxes overlap (touching edges do not count)"""
    return a.x < b.right and a.right > b.x and a.y < b.bottom and a.bottom > b.y


def overlaps_any(box: Box, others) -> bool:
    """Check a box against a collection of boxes"""
    return any(overlaps(box, o) for o in others)


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def center_distance(a: Box, b: Box) -> float:
    """Euclidean distance between box centres"""
    ax, ay = a.center
    bx, by = b.center
    return vec_len(ax - bx, ay - by)


def within_reach(a: Box, b: Box) -> bool:
    """Soft contact test for round sprites: centres closer than the mean size"""
    return center_distance(a, b) < (a.width + b.width) * 0.5


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = vec_len(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def heading(angle: float, speed: float) -> Tuple[float, float]:
    """Velocity vector for a heading in radians"""
    return math.cos(angle) * speed, math.sin(angle) * speed


def random_heading(rng: random.Random, speed: float) -> Tuple[float, float]:
    """Velocity with uniformly random heading and fixed speed"""
    return heading(rng.uniform(0.0, math.pi * 2), speed)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
