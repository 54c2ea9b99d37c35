"""
Mutable per-session state
-------------------------
Everything a running session mutates lives on one ``SimulationContext``.
The systems (spawner, combat, progression) take the context as their
first argument; nothing is kept in module globals. Starting a new game
builds a fresh context instead of resetting the old one.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .camera import Camera
from .config import GameConfig
from .entities import Player, Enemy, Projectile, ExperienceGem, Item


class GameState(Enum):
    TITLE = "title"
    PLAYING = "playing"
    LEVEL_UP = "level_up"
    GAME_OVER = "game_over"


@dataclass
class FrameEvents:
    """Counters for what happened during the last update"""
    hits: int = 0
    kills: int = 0
    gems: int = 0
    items: int = 0
    shots: int = 0
    level_ups: int = 0
    player_hits: int = 0
    damage_taken: float = 0.0
    experience_gained: float = 0.0


@dataclass
class SimulationContext:
    config: GameConfig
    rng: random.Random
    player: Player
    enemies: List[Enemy] = field(default_factory=list)
    projectiles: List[Projectile] = field(default_factory=list)
    gems: List[ExperienceGem] = field(default_factory=list)
    items: List[Item] = field(default_factory=list)
    camera: Camera = field(default_factory=Camera)
    state: GameState = GameState.PLAYING
    elapsed: float = 0.0
    final_survival_time: float = 0.0
    spawn_timer: float = 0.0
    next_enemy_id: int = 0
    effective_max_enemies: int = 0
    effective_spawn_interval: float = 0.0
    dt: float = 0.0  # delta of the frame being processed
    events: FrameEvents = field(default_factory=FrameEvents)

    @property
    def playing(self) -> bool:
        return self.state is GameState.PLAYING


def new_player(config: GameConfig) -> Player:
    """Fresh player standing in the centre of the map"""
    p = config.player
    return Player(
        x=config.canvas.map_width / 2,
        y=config.canvas.map_height / 2,
        health=p.max_health,
        max_health=p.max_health,
        speed=p.speed,
        damage=p.base_damage,
        attack_cooldown=p.attack_cooldown,
        size=p.size,
        draw_width=p.draw_width,
        draw_height=p.draw_height,
        base_magnet_radius=p.exp_gem_attract_radius,
        current_magnet_radius=p.exp_gem_attract_radius,
        special_attack_fire_rate=p.special_attack_base_fire_rate,
        next_level_exp=p.starting_next_level_exp,
        number_of_attacks=p.base_number_of_attacks,
    )


def new_context(config: GameConfig, rng: random.Random) -> SimulationContext:
    return SimulationContext(
        config=config,
        rng=rng,
        player=new_player(config),
        effective_max_enemies=config.gameplay.base_max_enemies,
        effective_spawn_interval=config.gameplay.base_enemy_spawn_interval,
    )
