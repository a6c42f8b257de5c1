"""
Runner world and per-frame systems
----------------------------------
- One World object owns every piece of mutable state: the player, the
  live obstacles, the spawn timer, the entropy source and the lifecycle.
- Systems are plain functions over the world, run in a fixed order by
  World.step. Nothing here draws or polls devices.

Frame order while ACTIVE:
    jump, crouch -> gravity -> movement -> spawn -> move/reap
    -> collision -> health check -> health text

While OVER only the restart handler runs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np

from .config import (
    GAME_SPEED,
    JUMP_FORCE,
    GRAVITY,
    GROUND_LEVEL,
    GROUND_EDGE,
    SPAWN_INTERVAL,
    OBSTACLE_Y_SPREAD,
    HEALTH_TEXT_FORMAT,
)
from .entities import Player, Obstacle, SpawnTimer
from .input import KeyEvent, JUMP_KEY, CROUCH_KEY, RESTART_KEY, presses
from .utils import aabb_collide, make_rng, next_u32


class GameState(Enum):
    ACTIVE = "active"
    OVER = "over"


@dataclass
class StepResult:
    """What happened during a single tick"""
    hits: int = 0
    jumped: bool = False
    spawned: int = 0
    reaped: int = 0
    game_over: bool = False
    restarted: bool = False


class World:
    """Mutable snapshot of a runner session"""

    def __init__(self, seed: Optional[int] = None):
        self.player: Optional[Player] = None
        self.obstacles: List[Obstacle] = []
        self.spawn_timer = SpawnTimer(SPAWN_INTERVAL)
        self.rng: np.random.Generator = make_rng(seed)
        self.state = GameState.ACTIVE
        self.game_over_banner = False
        self.health_text: Optional[str] = None
        self.frame = 0
        self._setup()

    def _setup(self):
        self.player = Player()
        self.obstacles = []
        self.spawn_timer.reset()
        self.state = GameState.ACTIVE
        self.game_over_banner = False
        self.health_text = HEALTH_TEXT_FORMAT.format(self.player.health)

    def reset(self, seed: Optional[int] = None):
        """Re-bootstrap the session, reseeding the entropy source"""
        self.rng = make_rng(seed)
        self.frame = 0
        self._setup()

    @property
    def active(self) -> bool:
        return self.state is GameState.ACTIVE

    @property
    def health(self) -> int:
        return self.player.health if self.player is not None else 0

    def step(self, dt: float, events: Sequence[KeyEvent] = ()) -> StepResult:
        """Run one tick with the elapsed time and every event buffered since the last tick"""
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite non-negative number, got {dt}")

        result = StepResult()
        self.frame += 1

        if not self.active:
            result.restarted = restart_game(self, events)
            return result

        result.jumped = jump(self, events)
        crouch(self, events)
        apply_gravity(self, dt)
        player_movement(self, dt)
        result.spawned = spawn_obstacles(self, dt)
        result.reaped = move_obstacles(self, dt)
        result.hits = detect_collision(self)
        result.game_over = check_health(self)
        render_health_info(self)
        return result

    def end_game(self):
        if not self.active:
            return
        self.state = GameState.OVER
        self.game_over_banner = True

    def restart(self) -> bool:
        """Full session reset; only valid while OVER"""
        if self.active:
            return False
        self._setup()
        return True


# ----------------------------
# Player systems
# ----------------------------

def jump(world: World, events: Sequence[KeyEvent]) -> bool:
    player = world.player
    if player is None:
        return False

    jumped = False
    for _ in presses(events, JUMP_KEY):
        if player.on_ground:
            player.vy = JUMP_FORCE
            jumped = True
    return jumped


def crouch(world: World, events: Sequence[KeyEvent]):
    player = world.player
    if player is None:
        return

    for e in events:
        if e.key is not CROUCH_KEY:
            continue
        if e.pressed:
            new_height = player.base_size[1] / 2.0
            if player.height > new_height:
                player.height = new_height
        elif e.released:
            player.restore_size()


def apply_gravity(world: World, dt: float):
    if world.player is not None:
        world.player.vy += GRAVITY * dt


def player_movement(world: World, dt: float):
    player = world.player
    if player is None:
        return

    player.y += player.vy * dt

    # Inelastic landing
    if player.y <= GROUND_LEVEL:
        player.y = GROUND_LEVEL
        player.vy = 0.0


# ----------------------------
# Obstacle systems
# ----------------------------

def spawn_obstacles(world: World, dt: float) -> int:
    # At most one obstacle per frame, however many intervals elapsed
    world.spawn_timer.tick(dt)
    if not world.spawn_timer.finished:
        return 0

    obstacle_x = GROUND_EDGE
    obstacle_y = GROUND_LEVEL + float(next_u32(world.rng) % OBSTACLE_Y_SPREAD)
    world.obstacles.append(Obstacle(x=obstacle_x, y=obstacle_y))
    return 1


def move_obstacles(world: World, dt: float) -> int:
    for o in world.obstacles:
        o.x -= GAME_SPEED * dt

    # Remove obstacles once they're off-screen
    remaining = [o for o in world.obstacles if o.x >= -GROUND_EDGE]
    reaped = len(world.obstacles) - len(remaining)
    world.obstacles = remaining
    return reaped


def detect_collision(world: World) -> int:
    player = world.player
    if player is None or not world.active:
        return 0

    hits = 0
    remaining = []
    for o in world.obstacles:
        if aabb_collide(player.x, player.y, player.width, player.height,
                        o.x, o.y, o.width, o.height):
            # Health saturates at zero when several boxes land in one frame
            if player.health > 0:
                player.health -= 1
                hits += 1
        else:
            remaining.append(o)
    world.obstacles = remaining
    return hits


# ----------------------------
# Lifecycle systems
# ----------------------------

def check_health(world: World) -> bool:
    """Returns True when this call moved the game into OVER"""
    if world.player is None or not world.active:
        return False
    if world.player.health == 0:
        world.end_game()
        return True
    return False


def render_health_info(world: World):
    if world.player is not None:
        world.health_text = HEALTH_TEXT_FORMAT.format(world.player.health)


def restart_game(world: World, events: Sequence[KeyEvent]) -> bool:
    # First restart press wins; the rest of the batch is dropped
    if presses(events, RESTART_KEY):
        return world.restart()
    return False
