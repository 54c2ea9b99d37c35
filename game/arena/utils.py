"""
Vector and collision helpers shared by the arena systems
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length; zero vectors stay zero"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def dist_sq(x1: float, y1: float, x2: float, y2: float) -> float:
    """Squared Euclidean distance (enough for nearest-neighbour comparisons)"""
    dx = x1 - x2
    dy = y1 - y2
    return dx * dx + dy * dy


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (strictly closer than the sum of radii)"""
    rr = r1 + r2
    return dist_sq(x1, y1, x2, y2) < rr * rr


def step_towards(x: float, y: float, tx: float, ty: float, distance: float) -> Tuple[float, float]:
    """Move (x, y) straight at (tx, ty) by `distance`; no-op when already there"""
    dx = tx - x
    dy = ty - y
    d = math.hypot(dx, dy)
    if d <= 0:
        return x, y
    return x + dx / d * distance, y + dy / d * distance


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
