"""
Utility functions for game mechanics
"""

from __future__ import annotations
import colorsys
import math
import random
from typing import Optional, Tuple

import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Strict axis-aligned overlap of two top-left anchored rectangles"""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def circle_rect_overlap(cx, cy, r, rx, ry, rw, rh) -> bool:
    """Overlap of a circle's bounding box with a rectangle"""
    return cx + r > rx and cx - r < rx + rw and cy + r > ry and cy - r < ry + rh


def within_distance(x1, y1, x2, y2, threshold: float) -> bool:
    """True when two points are strictly closer than `threshold`"""
    return math.hypot(x1 - x2, y1 - y2) < threshold


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> Tuple[int, int, int]:
    """Convert hue in degrees and saturation/lightness in [0,1] to an RGB tuple"""
    r, g, b = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the generator every random draw in the simulation goes through"""
    return np.random.default_rng(seed)


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
