import numpy as np
import pytest

from game.starfall import ShooterEnv, run_random_episode
from game.starfall.entities import EnemyBullet


@pytest.fixture
def env():
    e = ShooterEnv()
    yield e
    e.close()


def test_spaces(env):
    assert env.action_space.nvec.tolist() == [3, 2]
    assert env.observation_space.shape == (5 + 5 * 4 + 3 * 2 + 2,)


def test_reset_observation_in_space(env):
    obs, info = env.reset(seed=0)
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["lives"] == 3 and info["score"] == 0
    assert env.sim.running


def test_observations_stay_in_space(env):
    obs, _ = env.reset(seed=1)
    env.action_space.seed(1)
    for _ in range(2000):
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        assert env.observation_space.contains(obs)
        if terminated or truncated:
            break


def test_seeded_resets_are_reproducible():
    def rollout():
        e = ShooterEnv()
        e.reset(seed=11)
        frames = []
        for i in range(600):
            obs, *_ = e.step([i % 3, 1])
            frames.append(obs)
        return np.stack(frames)

    np.testing.assert_array_equal(rollout(), rollout())


def test_actions_drive_the_player(env):
    env.reset(seed=2)
    x0 = env.sim.state.player.x
    env.step([1, 0])
    assert env.sim.state.player.x == x0 - 5
    assert not env.sim.state.shooting_enabled
    env.step([2, 1])
    assert env.sim.state.player.x == x0
    assert env.sim.state.shooting_enabled


def test_hit_is_penalised(env):
    env.reset(seed=3)
    state = env.sim.state
    cx, cy = state.player.center
    state.enemy_bullets.append(EnemyBullet(x=cx, y=cy - 4))
    _, reward, terminated, _, info = env.step([0, 0])
    assert info["lives"] == 2
    assert info["lives_lost"] == 1
    assert reward == pytest.approx(-3.0)
    assert not terminated


def test_losing_last_life_terminates(env):
    env.reset(seed=3)
    state = env.sim.state
    state.player.lives = 1
    cx, cy = state.player.center
    state.enemy_bullets.append(EnemyBullet(x=cx, y=cy - 4))
    _, reward, terminated, truncated, info = env.step([0, 0])
    assert terminated and not truncated
    assert info["message"] == "Game over!"
    assert reward == pytest.approx(-3.0 - 5.0)


def test_truncation_at_max_steps():
    e = ShooterEnv(max_steps=10)
    e.reset(seed=0)
    for _ in range(9):
        *_, truncated, _ = e.step([0, 0])
        assert not truncated
    *_, truncated, _ = e.step([0, 0])
    assert truncated


def test_custom_reward_config():
    e = ShooterEnv(reward_config={"name": "x", "R_TIME": 1.0})
    e.reset(seed=0)
    _, reward, *_ = e.step([0, 0])
    assert reward == pytest.approx(-1.0)


def test_unsupported_obs_mode():
    with pytest.raises(AssertionError):
        ShooterEnv(obs_mode="pixels")


def test_passes_gymnasium_checker():
    from gymnasium.utils.env_checker import check_env

    check_env(ShooterEnv(), skip_render_check=True)


def test_random_episode_runs_headless():
    assert isinstance(run_random_episode(render=False, seed=5), float)
