"""
Render helpers shared by the arcade windows and the rgb_array renderers.
Simulation space is top-left origin with y down; arcade is bottom-left with y up.
"""

from typing import Tuple

import numpy as np

from .utils import Box, clamp

Color = Tuple[int, int, int]


def to_lrbt(box: Box, height: float) -> Tuple[float, float, float, float]:
    """Convert a simulation box to arcade (left, right, bottom, top)"""
    return box.x, box.right, height - box.bottom, height - box.y


def flip_y(y: float, height: float) -> float:
    return height - y


def blank_frame(width: int, height: int, color: Color) -> np.ndarray:
    frame = np.empty((height, width, 3), dtype=np.uint8)
    frame[:, :] = color
    return frame


def fill_box(frame: np.ndarray, box: Box, color: Color) -> None:
    """Paint a box into an (H, W, 3) frame, clipped to the frame"""
    h, w = frame.shape[:2]
    x0 = int(clamp(round(box.x), 0, w))
    x1 = int(clamp(round(box.right), 0, w))
    y0 = int(clamp(round(box.y), 0, h))
    y1 = int(clamp(round(box.bottom), 0, h))
    if x1 > x0 and y1 > y0:
        frame[y0:y1, x0:x1] = color


def fill_circle(frame: np.ndarray, box: Box, color: Color) -> None:
    """Paint the circle inscribed in a box"""
    h, w = frame.shape[:2]
    cx, cy = box.center
    r = min(box.width, box.height) * 0.5
    ys, xs = np.ogrid[:h, :w]
    mask = (xs + 0.5 - cx) ** 2 + (ys + 0.5 - cy) ** 2 <= r * r
    frame[mask] = color
