"""Tests for the Gymnasium wrapper."""

import numpy as np
import pytest

from game.arena import ArenaEnv, GameState
from game.arena.entities import Enemy, ExperienceGem


@pytest.fixture
def env(config):
    e = ArenaEnv(config=config, max_steps=50)
    yield e
    e.close()


class TestArenaEnv:

    def test_reset_returns_observation_in_space(self, env):
        obs, info = env.reset(seed=0)
        assert obs.shape == env.observation_space.shape
        assert obs.dtype == np.float32
        assert env.observation_space.contains(obs)
        assert info["state"] == GameState.PLAYING.value
        assert info["level"] == 1

    def test_step_contract(self, env):
        env.reset(seed=0)
        obs, reward, terminated, truncated, info = env.step(np.array([1, 0]))
        assert env.observation_space.contains(obs)
        assert isinstance(reward, float)
        assert terminated is False
        assert truncated is False
        assert info["step"] == 1

    def test_truncates_at_max_steps(self, env):
        env.reset(seed=0)
        truncated = False
        steps = 0
        while not truncated:
            _, _, terminated, truncated, _ = env.step(np.array([0, 0]))
            assert not terminated
            steps += 1
        assert steps == 50

    def test_level_up_is_confirmed_automatically(self, env):
        env.reset(seed=0)
        p = env.sim.ctx.player
        env.sim.ctx.gems.append(ExperienceGem(x=p.x, y=p.y, value=100, lifetime=10, size=20))
        _, reward, _, _, info = env.step(np.array([0, 0]))
        assert env.sim.state is GameState.PLAYING
        assert info["level"] == 2
        assert reward > 0

    def test_same_seed_same_episode(self, make_config):
        cfg = make_config(gameplay={"initialEnemyCount": 5})
        a = ArenaEnv(config=cfg)
        b = ArenaEnv(config=cfg)
        obs_a, _ = a.reset(seed=11)
        obs_b, _ = b.reset(seed=11)
        np.testing.assert_array_equal(obs_a, obs_b)
        for _ in range(20):
            obs_a, *_ = a.step(np.array([3, 1]))
            obs_b, *_ = b.step(np.array([3, 1]))
        np.testing.assert_array_equal(obs_a, obs_b)

    def test_death_terminates(self, env):
        env.reset(seed=0)
        env.sim.ctx.player.health = 0.001
        p = env.sim.ctx.player
        env.sim.ctx.enemies.append(Enemy(id=1, name="e", x=p.x, y=p.y, health=1e6, max_health=1e6,
                                         speed=0, damage=100, exp_reward=0, size=30))
        _, reward, terminated, _, info = env.step(np.array([0, 0]))
        assert terminated is True
        assert info["state"] == GameState.GAME_OVER.value
        assert reward < 0
