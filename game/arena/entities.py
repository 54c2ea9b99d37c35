"""
Game entity dataclasses
"""

from dataclasses import dataclass

from .config import ItemKind


@dataclass
class Player:
    """The survivor. Recreated for every new session."""
    x: float
    y: float
    health: float
    max_health: float
    speed: float
    damage: float
    attack_cooldown: float
    size: float
    draw_width: float
    draw_height: float
    base_magnet_radius: float
    current_magnet_radius: float
    special_attack_fire_rate: float
    dx: float = 0.0
    dy: float = 0.0
    current_attack_cooldown: float = 0.0
    level: int = 1
    experience: float = 0.0
    next_level_exp: float = 100.0
    number_of_attacks: int = 1
    magnet_effect_timer: float = 0.0
    special_attack_effect_timer: float = 0.0
    is_special_attacking: bool = False
    special_attack_fire_cooldown: float = 0.0
    hit_feedback_cooldown: float = 0.0

    @property
    def radius(self) -> float:
        return self.size / 2


@dataclass
class Enemy:
    """Enemy that walks straight at the player; stats frozen at spawn"""
    id: int
    name: str
    x: float
    y: float
    health: float
    max_health: float
    speed: float
    damage: float  # per second of contact
    exp_reward: float
    size: float

    @property
    def radius(self) -> float:
        return self.size / 2


@dataclass
class Projectile:
    """Player bullet; removed on first hit or when its lifetime runs out"""
    x: float
    y: float
    vx: float
    vy: float
    damage: float
    lifetime: float  # seconds left
    size: float

    @property
    def radius(self) -> float:
        return self.size / 2


@dataclass
class ExperienceGem:
    """Experience dropped by a defeated enemy"""
    x: float
    y: float
    value: float
    lifetime: float  # seconds left
    size: float

    @property
    def radius(self) -> float:
        return self.size / 2


@dataclass
class Item:
    """Time-limited pickup dropped by a defeated enemy"""
    x: float
    y: float
    kind: ItemKind
    size: float
    effect_duration: float
    effect_value: float
    total_lifetime: float
    lifetime: float  # seconds left

    @property
    def radius(self) -> float:
        return self.size / 2
