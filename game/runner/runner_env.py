"""
RunnerEnv - the runner world behind the Gymnasium API
-----------------------------------------------------
- Headless: a fixed dt stands in for the frame clock
- Discrete action space: 0 idle, 1 jump, 2 crouch (held while chosen)
- Actions are turned into the same KeyEvent batches a keyboard produces
- Vector observation: player state + spawn timer + nearest K obstacles ahead
- Episode ends when the world enters GAME OVER; no restart inside an episode

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.runner.runner_env
"""

from __future__ import annotations

import time
from typing import List, Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import JUMP_FORCE, GRAVITY, GROUND_LEVEL, GROUND_EDGE, OBSTACLE_Y_SPREAD, INITIAL_HEALTH
from .input import KeyEvent, JUMP_KEY, CROUCH_KEY
from .utils import clamp
from .world import World, GameState


ACTION_IDLE = 0
ACTION_JUMP = 1
ACTION_CROUCH = 2

# Apex of a jump from the ground
MAX_JUMP_HEIGHT = JUMP_FORCE ** 2 / (2.0 * -GRAVITY)

DEFAULT_REWARDS = {
    "R_ALIVE": 0.01,   # per step survived
    "R_DODGE": 0.1,    # obstacle scrolled past without a hit
    "R_HIT": 1.0,      # penalty per hit taken
    "R_JUMP": 0.002,   # small cost per accepted jump
    "R_DEATH": 5.0,
}


class RunnerEnv(gym.Env):
    """Side-scrolling runner environment"""

    metadata = {"render_modes": ["human"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        dt: float = 1 / 30,
        max_steps: int = 1800,  # 60s at 30 FPS
        k_obstacles: int = 3,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode: {render_mode}"
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.k_obstacles = k_obstacles

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.action_space = spaces.Discrete(3)

        # Player: jump height fraction(1) vy(1) crouched(1) health(1), spawn timer(1)
        # Each obstacle: rel dx(1) rel dy(1) present(1)
        obs_dim = 4 + 1 + (self.k_obstacles * 3)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.world = World()
        self._crouch_held = False
        self._step_count = 0

        # Episode totals surfaced through info
        self._hits_taken = 0
        self._jumps = 0
        self._dodged = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        # Derive the world's entropy from the env generator so reset(seed) is reproducible
        world_seed = int(self.np_random.integers(0, 2 ** 31 - 1))
        self.world.reset(seed=world_seed)

        self._crouch_held = False
        self._step_count = 0
        self._hits_taken = 0
        self._jumps = 0
        self._dodged = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        if not self.action_space.contains(int(action)):
            raise ValueError(f"Invalid action: {action}")

        events = self._action_to_events(int(action))
        result = self.world.step(self.dt, events)

        # Only obstacles that left the screen count as dodged
        self._hits_taken += result.hits
        self._dodged += result.reaped
        if result.jumped:
            self._jumps += 1

        reward = self._compute_reward(result)

        terminated = self.world.state is GameState.OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Action decoding
    # ----------------------------

    def _action_to_events(self, action: int) -> List[KeyEvent]:
        events = []
        if action != ACTION_CROUCH and self._crouch_held:
            events.append(KeyEvent.release(CROUCH_KEY))
            self._crouch_held = False

        if action == ACTION_JUMP:
            events.append(KeyEvent.press(JUMP_KEY))
            events.append(KeyEvent.release(JUMP_KEY))
        elif action == ACTION_CROUCH and not self._crouch_held:
            events.append(KeyEvent.press(CROUCH_KEY))
            self._crouch_held = True
        return events

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        player = self.world.player

        jump_height = (player.y - GROUND_LEVEL) / MAX_JUMP_HEIGHT
        vy = player.vy / JUMP_FORCE
        crouched = 1.0 if player.crouching else 0.0
        health = player.health / INITIAL_HEALTH
        timer = self.world.spawn_timer.fraction

        obs_parts = [clamp(jump_height * 2 - 1, -1, 1),
                     clamp(vy, -1, 1),
                     crouched,
                     health * 2 - 1,
                     timer * 2 - 1]

        # Obstacles still in front of (or overlapping) the player, nearest first
        ahead = sorted(
            (o for o in self.world.obstacles if o.x + o.width / 2 >= player.x - player.width / 2),
            key=lambda o: o.x,
        )
        for i in range(self.k_obstacles):
            if i < len(ahead):
                o = ahead[i]
                dx = (o.x - player.x) / (2 * GROUND_EDGE)
                dy = (o.y - player.y) / OBSTACLE_Y_SPREAD
                obs_parts += [clamp(dx, -1, 1), clamp(dy, -1, 1), 1.0]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, result) -> float:
        r = self.rewards
        reward = r["R_ALIVE"]
        reward += r["R_DODGE"] * result.reaped
        reward -= r["R_HIT"] * result.hits
        if result.jumped:
            reward -= r["R_JUMP"]
        if result.game_over:
            reward -= r["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "health": self.world.health,
            "hits_taken": self._hits_taken,
            "jumps": self._jumps,
            "obstacles_dodged": self._dodged,
            "num_obstacles": len(self.world.obstacles),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            # Imported here so headless use never needs a display
            from .window import RunnerWindow
            self._window = RunnerWindow(self.world, self.width, self.height, interactive=False)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = True, seed: Optional[int] = 42):
    """Run a random episode for testing"""
    env = RunnerEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode...")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward
        if render:
            time.sleep(env.dt)

    print(f"Random episode return: {total:.2f} "
          f"(steps: {info['step']}, dodged: {info['obstacles_dodged']}, hits: {info['hits_taken']})")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
