"""
Game entity dataclasses
"""

from dataclasses import dataclass, field
from typing import Tuple

from .config import (
    PLAYER_X,
    PLAYER_SIZE,
    GROUND_LEVEL,
    INITIAL_HEALTH,
    OBSTACLE_SIZE,
)


@dataclass
class Player:
    """The single controllable runner"""
    x: float = PLAYER_X
    y: float = GROUND_LEVEL
    vy: float = 0.0
    width: float = PLAYER_SIZE[0]
    height: float = PLAYER_SIZE[1]
    base_size: Tuple[float, float] = PLAYER_SIZE
    health: int = INITIAL_HEALTH

    @property
    def on_ground(self) -> bool:
        return self.y <= GROUND_LEVEL

    @property
    def crouching(self) -> bool:
        return self.height < self.base_size[1]

    def restore_size(self):
        self.width, self.height = self.base_size


@dataclass
class Obstacle:
    """Incoming block scrolling towards the player"""
    x: float
    y: float
    width: float = OBSTACLE_SIZE[0]
    height: float = OBSTACLE_SIZE[1]


@dataclass
class SpawnTimer:
    """
    Repeating countdown for obstacle spawning.

    Elapsed time is kept in integer nanoseconds so that accumulating
    many small float deltas lands exactly on the interval boundary.
    """
    duration: float
    elapsed_ns: int = 0
    times_finished_this_tick: int = 0
    _duration_ns: int = field(init=False, repr=False)

    def __post_init__(self):
        if self.duration <= 0:
            raise ValueError(f"Timer duration must be positive, got {self.duration}")
        self._duration_ns = _to_ns(self.duration)

    @property
    def finished(self) -> bool:
        return self.times_finished_this_tick > 0

    @property
    def fraction(self) -> float:
        """Progress towards the next completion in [0, 1)"""
        return self.elapsed_ns / self._duration_ns

    def tick(self, dt: float) -> int:
        """Advance by dt seconds; returns how many intervals completed"""
        self.elapsed_ns += _to_ns(dt)
        self.times_finished_this_tick, self.elapsed_ns = divmod(self.elapsed_ns, self._duration_ns)
        return self.times_finished_this_tick

    def reset(self):
        self.elapsed_ns = 0
        self.times_finished_this_tick = 0


def _to_ns(seconds: float) -> int:
    return int(round(seconds * 1_000_000_000))
