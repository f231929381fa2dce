"""
Utility functions for maze geometry
"""

from __future__ import annotations
import math
import random
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Straight-line distance between two points"""
    return math.hypot(x1 - x2, y1 - y2)


def rects_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Check if two axis-aligned rectangles overlap (touching edges do not count)"""
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


def centers_touch(x1, y1, size1, x2, y2, size2) -> bool:
    """Check if two centred squares are closer than the sum of their half-sizes"""
    return distance(x1, y1, x2, y2) < (size1 + size2) / 2.0


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
