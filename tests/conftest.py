"""Shared fixtures for the arena tests."""

import random

import pytest

from game.arena.config import GameConfig, default_game_data
from game.arena.context import GameState, new_context
from game.arena.entities import Enemy, ExperienceGem, Item


def _merge(data, overrides):
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(data.get(key), dict):
            data[key].update(value)
        else:
            data[key] = value
    return data


@pytest.fixture
def make_config():
    """Factory: bundled game data with per-section overrides.

    Defaults are tuned for deterministic tests: no opening population,
    no item drops, and a spawn interval long enough never to fire.
    """
    def _make(**overrides):
        data = default_game_data()
        data["gameplay"].update({
            "initialEnemyCount": 0,
            "itemDropChanceOnEnemyDefeat": 0.0,
            "baseEnemySpawnInterval": 1e9,
            "minEnemySpawnInterval": 1e9,
        })
        return GameConfig.from_dict(_merge(data, overrides))
    return _make


@pytest.fixture
def config(make_config):
    return make_config()


@pytest.fixture
def ctx(config):
    """A PLAYING context with the player in the middle of the map."""
    c = new_context(config, random.Random(1234))
    c.state = GameState.PLAYING
    return c


@pytest.fixture
def add_enemy():
    def _add(ctx, x, y, health=10.0, damage=10.0, speed=0.0, size=30.0, exp_reward=10.0):
        enemy = Enemy(
            id=ctx.next_enemy_id, name="dummy", x=x, y=y,
            health=health, max_health=health, speed=speed,
            damage=damage, exp_reward=exp_reward, size=size,
        )
        ctx.next_enemy_id += 1
        ctx.enemies.append(enemy)
        return enemy
    return _add


@pytest.fixture
def add_gem():
    def _add(ctx, x, y, value=10.0, lifetime=10.0, size=20.0):
        gem = ExperienceGem(x=x, y=y, value=value, lifetime=lifetime, size=size)
        ctx.gems.append(gem)
        return gem
    return _add


@pytest.fixture
def add_item():
    def _add(ctx, x, y, kind, duration=5.0, value=10.0, lifetime=10.0, size=30.0):
        item = Item(
            x=x, y=y, kind=kind, size=size, effect_duration=duration,
            effect_value=value, total_lifetime=lifetime, lifetime=lifetime,
        )
        ctx.items.append(item)
        return item
    return _add
