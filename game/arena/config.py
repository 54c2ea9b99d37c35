"""
Game configuration schema
-------------------------
The game data arrives as a ``data.json``-shaped dict (camelCase keys, one
section per concern). ``GameConfig.from_dict`` validates it once at the load
boundary into frozen pydantic models, so the simulation only ever sees
typed, checked values.

Sections:
    canvas          viewport and map dimensions
    player          base player stats
    enemies         enemy archetypes (weighted)
    projectiles     projectile size
    experienceGems  gem size / lifetime
    items           item archetypes (weighted, closed set of kinds)
    gameplay        spawning, scaling and progression constants
    ui.levelUpOptions   closed set of upgrade choices
"""

from __future__ import annotations

import copy
import json
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, ValidationError
from pydantic.alias_generators import to_camel


class ConfigError(ValueError):
    """Raised when game data fails validation."""


class ItemKind(str, Enum):
    MAGNET = "magnet"
    SPECIAL_ATTACK = "special_attack"
    HEALTH_POTION = "health_potion"


class UpgradeKind(str, Enum):
    MAX_HEALTH_PERCENT = "max_health_percent"
    MAX_HEALTH_FLAT = "max_health_flat"
    DAMAGE_FLAT = "damage_flat"
    DAMAGE_PERCENT = "damage_percent"
    SPEED_FLAT = "speed_flat"
    ATTACK_COOLDOWN_PERCENT = "attack_cooldown_percent"
    MAGNET_RADIUS_FLAT = "magnet_radius_flat"
    HEAL_FLAT = "heal_flat"
    EXTRA_ATTACK = "extra_attack"


# Radial burst size used when no special_attack archetype is configured
DEFAULT_RADIAL_PROJECTILES = 15


class _Section(BaseModel):
    """Frozen, camelCase-keyed section of the game data."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CanvasConfig(_Section):
    width: StrictFloat = Field(gt=0)
    height: StrictFloat = Field(gt=0)
    map_width: StrictFloat = Field(gt=0)
    map_height: StrictFloat = Field(gt=0)


class PlayerConfig(_Section):
    speed: StrictFloat = Field(ge=0)
    max_health: StrictFloat = Field(gt=0)
    base_damage: StrictFloat = Field(ge=0)
    attack_cooldown: StrictFloat = Field(gt=0)
    projectile_speed: StrictFloat = Field(ge=0)
    projectile_lifetime: StrictFloat = Field(gt=0)
    exp_gem_attract_radius: StrictFloat = Field(ge=0)
    draw_width: StrictFloat = Field(gt=0, alias="playerDrawWidth")
    draw_height: StrictFloat = Field(gt=0, alias="playerDrawHeight")
    base_number_of_attacks: StrictInt = Field(ge=1)
    attack_spread_angle: StrictFloat = Field(ge=0)  # degrees, whole fan
    special_attack_base_fire_rate: StrictFloat = Field(gt=0)
    hit_feedback_cooldown: StrictFloat = Field(0.2, ge=0, alias="hitSoundCooldownDuration")
    starting_next_level_exp: StrictInt = Field(100, ge=1)

    @property
    def size(self) -> float:
        """Collision diameter: mean of the two draw dimensions."""
        return (self.draw_width + self.draw_height) / 2


class EnemyArchetype(_Section):
    name: str = Field(min_length=1)
    max_health: StrictFloat = Field(gt=0)
    speed: StrictFloat = Field(ge=0)
    damage: StrictFloat = Field(ge=0)  # per second of contact
    exp_reward: StrictFloat = Field(ge=0)
    spawn_weight: StrictFloat = Field(ge=0, alias="spawnRateWeight")
    size: StrictFloat = Field(gt=0)


class ProjectileConfig(_Section):
    size: StrictFloat = Field(gt=0)


class GemConfig(_Section):
    size: StrictFloat = Field(gt=0)
    total_lifetime: StrictFloat = Field(gt=0)


class ItemArchetype(_Section):
    kind: ItemKind = Field(alias="name")
    size: StrictFloat = Field(gt=0)
    effect_duration: StrictFloat = Field(ge=0)
    effect_value: StrictFloat = Field(ge=0)
    spawn_weight: StrictFloat = Field(ge=0, alias="spawnRateWeight")
    total_lifetime: StrictFloat = Field(gt=0)


class GameplayConfig(_Section):
    initial_enemy_count: StrictInt = Field(ge=0)
    base_max_enemies: StrictInt = Field(ge=0)
    max_enemies_increase_per_level: StrictInt = Field(ge=0)
    base_enemy_spawn_interval: StrictFloat = Field(gt=0)
    min_enemy_spawn_interval: StrictFloat = Field(gt=0)
    spawn_interval_reduction_factor_per_level: StrictFloat = Field(ge=0, le=1)
    enemy_health_scale_per_level: StrictFloat = Field(ge=0)
    enemy_speed_scale_per_level: StrictFloat = Field(ge=0)
    enemy_damage_scale_per_level: StrictFloat = Field(ge=0)
    # Thresholds never shrink
    level_up_exp_multiplier: StrictFloat = Field(ge=1)
    attack_speed_increase_per_level: StrictFloat = Field(ge=0, lt=1)
    item_drop_chance: StrictFloat = Field(ge=0, le=1, alias="itemDropChanceOnEnemyDefeat")
    max_simultaneous_items: StrictInt = Field(ge=0)
    min_attack_cooldown: StrictFloat = Field(0.05, gt=0)
    spawn_padding: StrictFloat = Field(50.0, ge=0)
    initial_spawn_spread: StrictFloat = Field(0.8, ge=0)


class UpgradeOption(_Section):
    name: str = ""
    kind: UpgradeKind
    amount: StrictFloat = Field(0.0, ge=0)
    description: str = ""


class UiConfig(_Section):
    level_up_options: Tuple[UpgradeOption, ...] = ()


class GameConfig(_Section):
    canvas: CanvasConfig
    player: PlayerConfig
    enemies: Tuple[EnemyArchetype, ...] = ()
    projectiles: ProjectileConfig
    gems: GemConfig = Field(alias="experienceGems")
    items: Tuple[ItemArchetype, ...] = ()
    gameplay: GameplayConfig
    ui: UiConfig = Field(default_factory=UiConfig)

    @property
    def level_up_options(self) -> Tuple[UpgradeOption, ...]:
        return self.ui.level_up_options

    @property
    def radial_projectile_count(self) -> int:
        for archetype in self.items:
            if archetype.kind is ItemKind.SPECIAL_ATTACK and archetype.effect_value > 0:
                return int(archetype.effect_value)
        return DEFAULT_RADIAL_PROJECTILES

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Validate a data.json-shaped dict and build the config."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    """One line per failure, located by its data.json path (``enemies[0].size``)."""
    lines = []
    for err in error.errors():
        where = ""
        for part in err["loc"]:
            if isinstance(part, int):
                where += f"[{part}]"
            else:
                where += f".{part}" if where else str(part)
        lines.append(f"{where or 'game data'}: {err['msg']}")
    return "; ".join(lines)


# ----------------------------
# Defaults / loading
# ----------------------------

DEFAULT_GAME_DATA: Dict[str, Any] = {
    "canvas": {"width": 900, "height": 600, "mapWidth": 2400, "mapHeight": 1800},
    "player": {
        "speed": 150,
        "maxHealth": 100,
        "baseDamage": 10,
        "attackCooldown": 0.5,
        "projectileSpeed": 300,
        "projectileLifetime": 3,
        "expGemAttractRadius": 100,
        "playerDrawWidth": 50,
        "playerDrawHeight": 50,
        "baseNumberOfAttacks": 1,
        "attackSpreadAngle": 30,
        "specialAttackBaseFireRate": 0.5,
        "hitSoundCooldownDuration": 0.2,
    },
    "enemies": [
        {"name": "bat", "maxHealth": 10, "speed": 80, "damage": 10,
         "expReward": 10, "spawnRateWeight": 60, "size": 32},
        {"name": "zombie", "maxHealth": 30, "speed": 50, "damage": 15,
         "expReward": 20, "spawnRateWeight": 30, "size": 44},
        {"name": "golem", "maxHealth": 80, "speed": 35, "damage": 25,
         "expReward": 50, "spawnRateWeight": 10, "size": 60},
    ],
    "projectiles": {"size": 20},
    "experienceGems": {"size": 20, "totalLifetime": 15},
    "items": [
        {"name": "magnet", "size": 30, "effectDuration": 10, "effectValue": 300,
         "spawnRateWeight": 40, "totalLifetime": 12},
        {"name": "special_attack", "size": 30, "effectDuration": 5, "effectValue": 15,
         "spawnRateWeight": 20, "totalLifetime": 12},
        {"name": "health_potion", "size": 30, "effectDuration": 0, "effectValue": 30,
         "spawnRateWeight": 40, "totalLifetime": 12},
    ],
    "gameplay": {
        "initialEnemyCount": 5,
        "baseMaxEnemies": 20,
        "maxEnemiesIncreasePerLevel": 5,
        "baseEnemySpawnInterval": 2.0,
        "minEnemySpawnInterval": 0.3,
        "spawnIntervalReductionFactorPerLevel": 0.9,
        "enemyHealthScalePerLevel": 0.1,
        "enemySpeedScalePerLevel": 0.05,
        "enemyDamageScalePerLevel": 0.1,
        "levelUpExpMultiplier": 1.5,
        "attackSpeedIncreasePerLevel": 0.03,
        "itemDropChanceOnEnemyDefeat": 0.1,
        "maxSimultaneousItems": 5,
    },
    "ui": {
        "levelUpOptions": [
            {"name": "Vitality", "description": "+10% max health",
             "kind": "max_health_percent", "amount": 10},
            {"name": "Sharpness", "description": "+5 damage",
             "kind": "damage_flat", "amount": 5},
            {"name": "Swiftness", "description": "Moves 50 units faster",
             "kind": "speed_flat", "amount": 50},
        ],
    },
}


def default_game_data() -> Dict[str, Any]:
    """A deep copy of the bundled game data, safe to tweak in place."""
    return copy.deepcopy(DEFAULT_GAME_DATA)


def default_config() -> GameConfig:
    return GameConfig.from_dict(DEFAULT_GAME_DATA)


def load_config(path: str, overrides: Optional[Dict[str, Any]] = None) -> GameConfig:
    """Read game data from a JSON file; `overrides` are merged per section."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path}: invalid JSON ({e})") from e
    if overrides:
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict):
                data[key].update(value)
            else:
                data[key] = value
    return GameConfig.from_dict(data)
