"""Survival arena - simulation core and headless environment"""

from .config import (
    ConfigError,
    GameConfig,
    ItemKind,
    UpgradeKind,
    default_config,
    default_game_data,
    load_config,
)
from .context import GameState
from .simulation import Simulation, FrameSnapshot
from .arena_env import ArenaEnv

__all__ = [
    'ConfigError',
    'GameConfig',
    'ItemKind',
    'UpgradeKind',
    'default_config',
    'default_game_data',
    'load_config',
    'GameState',
    'Simulation',
    'FrameSnapshot',
    'ArenaEnv',
]
