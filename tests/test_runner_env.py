import numpy as np
import pytest

from game.runner import RunnerEnv, run_random_episode
from game.runner.config import GROUND_LEVEL
from game.runner.runner_env import ACTION_IDLE, ACTION_JUMP, ACTION_CROUCH, DEFAULT_REWARDS


def test_spaces_and_first_observation() -> None:
    env = RunnerEnv(k_obstacles=3)
    obs, info = env.reset(seed=0)

    assert env.action_space.n == 3
    assert obs.shape == (4 + 1 + 3 * 3,)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["health"] == 3
    assert info["step"] == 0


def test_same_seed_same_trajectory() -> None:
    actions = [ACTION_IDLE, ACTION_JUMP, ACTION_IDLE, ACTION_CROUCH, ACTION_CROUCH] * 60

    def rollout():
        env = RunnerEnv()
        obs, _ = env.reset(seed=7)
        trace = [obs]
        rewards = []
        for a in actions:
            obs, reward, terminated, truncated, _ = env.step(a)
            trace.append(obs)
            rewards.append(reward)
            if terminated or truncated:
                break
        return np.stack(trace), rewards

    obs_a, rew_a = rollout()
    obs_b, rew_b = rollout()
    np.testing.assert_array_equal(obs_a, obs_b)
    assert rew_a == rew_b


def test_observations_stay_in_bounds() -> None:
    env = RunnerEnv()
    env.reset(seed=1)
    env.action_space.seed(1)
    for _ in range(600):
        obs, _, terminated, truncated, _ = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        if terminated or truncated:
            break


def test_jump_action_leaves_the_ground() -> None:
    env = RunnerEnv()
    env.reset(seed=0)
    _, reward, _, _, info = env.step(ACTION_JUMP)

    assert env.world.player.y > GROUND_LEVEL
    assert env.world.player.vy > 0
    assert info["jumps"] == 1
    assert reward == pytest.approx(DEFAULT_REWARDS["R_ALIVE"] - DEFAULT_REWARDS["R_JUMP"])


def test_crouch_is_held_while_chosen() -> None:
    env = RunnerEnv()
    env.reset(seed=0)

    env.step(ACTION_CROUCH)
    assert env.world.player.crouching
    env.step(ACTION_CROUCH)
    assert env.world.player.crouching

    env.step(ACTION_IDLE)
    assert not env.world.player.crouching


def test_jump_out_of_crouch_stands_up() -> None:
    env = RunnerEnv()
    env.reset(seed=0)
    env.step(ACTION_CROUCH)
    env.step(ACTION_JUMP)

    assert not env.world.player.crouching
    assert env.world.player.vy > 0


def test_idle_agent_terminates_with_death_penalty() -> None:
    env = RunnerEnv(max_steps=100_000)
    env.reset(seed=3)

    terminated = truncated = False
    reward = 0.0
    info = {}
    while not (terminated or truncated):
        _, reward, terminated, truncated, info = env.step(ACTION_IDLE)

    assert terminated
    assert not truncated
    assert info["health"] == 0
    assert info["hits_taken"] == 3
    assert reward <= DEFAULT_REWARDS["R_ALIVE"] - DEFAULT_REWARDS["R_HIT"] - DEFAULT_REWARDS["R_DEATH"] + 1e-6


def test_truncation_at_max_steps() -> None:
    env = RunnerEnv(max_steps=10)
    env.reset(seed=0)
    for i in range(10):
        _, _, terminated, truncated, info = env.step(ACTION_IDLE)
    assert truncated
    assert not terminated
    assert info["step"] == 10


def test_reset_clears_episode_totals() -> None:
    env = RunnerEnv()
    env.reset(seed=0)
    for _ in range(5):
        env.step(ACTION_JUMP)
    _, info = env.reset(seed=0)

    assert info["jumps"] == 0
    assert info["num_obstacles"] == 0
    assert env.world.active


def test_reward_config_overrides_defaults() -> None:
    env = RunnerEnv(reward_config={"name": "custom", "R_ALIVE": 0.5})
    env.reset(seed=0)
    _, reward, _, _, _ = env.step(ACTION_IDLE)
    assert reward == pytest.approx(0.5)


@pytest.mark.parametrize("action", [-1, 3, 10])
def test_invalid_action_rejected(action: int) -> None:
    env = RunnerEnv()
    env.reset(seed=0)
    with pytest.raises(ValueError):
        env.step(action)


def test_unsupported_render_mode() -> None:
    with pytest.raises(AssertionError):
        RunnerEnv(render_mode="rgb_array")


def test_headless_random_episode() -> None:
    total, info = run_random_episode(render=False, seed=5)
    assert isinstance(total, float)
    assert info["step"] > 0
    assert info["health"] == 0 or info["step"] == 1800
