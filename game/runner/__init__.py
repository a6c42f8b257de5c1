"""Runner module - side-scrolling avoidance game"""

from .world import World, GameState, StepResult
from .runner_env import RunnerEnv, run_random_episode

__all__ = ['World', 'GameState', 'StepResult', 'RunnerEnv', 'run_random_episode']
