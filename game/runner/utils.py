"""
Utility functions for game mechanics
"""

from __future__ import annotations
from typing import Optional
import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def aabb_collide(x1, y1, w1, h1, x2, y2, w2, h2) -> bool:
    """Check if two axis-aligned boxes overlap (touching edges count)"""
    collision_x = abs(x1 - x2) <= (w1 / 2.0 + w2 / 2.0)
    collision_y = abs(y1 - y2) <= (h1 / 2.0 + h2 / 2.0)
    return collision_x and collision_y


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the entropy source used for obstacle placement"""
    return np.random.default_rng(seed)


def next_u32(rng: np.random.Generator) -> int:
    """Draw one uniformly distributed unsigned 32-bit integer"""
    return int(rng.integers(0, 2 ** 32, dtype=np.uint64))
