"""
Combat resolution
-----------------
Targeting and firing, projectile flight, pickup attraction and the
once-per-frame collision pass.

Firing
  * Auto-attack: every ``attack_cooldown`` seconds the player fires
    ``number_of_attacks`` projectiles in a fan centred on the nearest enemy.
    With no enemy alive nothing is fired but the cooldown still resets.
  * Radial burst: while the special-attack buff runs, projectiles are
    emitted evenly around the full circle on their own cadence and the
    auto-attack is suspended.

Collision pass (after all movement), in this order:
  1. projectile x enemy   one enemy per projectile, kills drop rewards
  2. player x enemy       contact damage proportional to dt
  3. player x gem         experience, may level up
  4. player x item        buff / heal

Every sweep walks its list backwards by index, so deleting the current
element never skips or revisits another one. The pass stops as soon as
the session leaves PLAYING.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .config import ItemKind
from .context import GameState, SimulationContext
from .entities import Enemy, Item, Projectile
from .progression import level_up, should_level_up
from .spawner import drop_experience_gem, try_drop_item
from .utils import circle_collide, dist_sq, step_towards

logger = logging.getLogger("game.arena.combat")

# Pickups inside the magnet radius fly at this multiple of player speed
ATTRACT_SPEED_FACTOR = 2.0


# ----------------------------
# Targeting
# ----------------------------

def find_closest_enemy(enemies: Sequence[Enemy], x: float, y: float) -> Optional[Enemy]:
    closest = None
    best = math.inf
    for enemy in enemies:
        d = dist_sq(enemy.x, enemy.y, x, y)
        if d < best:
            best = d
            closest = enemy
    return closest


def fan_angles(bearing: float, count: int, spread_deg: float) -> List[float]:
    """Bearings (radians) of a volley fanned symmetrically around `bearing`."""
    if count <= 1:
        return [bearing] if count == 1 else []
    spread = math.radians(spread_deg)
    step = spread / (count - 1)
    start = bearing - spread / 2
    return [start + i * step for i in range(count)]


def radial_angles(count: int) -> List[float]:
    if count <= 0:
        return []
    step = 2 * math.pi / count
    return [i * step for i in range(count)]


def _launch(ctx: SimulationContext, angles: Sequence[float]) -> None:
    player = ctx.player
    speed = ctx.config.player.projectile_speed
    lifetime = ctx.config.player.projectile_lifetime
    size = ctx.config.projectiles.size
    for angle in angles:
        ctx.projectiles.append(Projectile(
            x=player.x,
            y=player.y,
            vx=math.cos(angle) * speed,
            vy=math.sin(angle) * speed,
            damage=player.damage,
            lifetime=lifetime,
            size=size,
        ))
    if angles:
        ctx.events.shots += 1


def fire_aimed_volley(ctx: SimulationContext) -> int:
    """Fire at the nearest enemy; returns the number of projectiles fired."""
    player = ctx.player
    target = find_closest_enemy(ctx.enemies, player.x, player.y)
    if target is None:
        return 0
    bearing = math.atan2(target.y - player.y, target.x - player.x)
    angles = fan_angles(bearing, player.number_of_attacks, ctx.config.player.attack_spread_angle)
    _launch(ctx, angles)
    return len(angles)


def fire_radial_burst(ctx: SimulationContext, count: int) -> int:
    angles = radial_angles(count)
    _launch(ctx, angles)
    return len(angles)


# ----------------------------
# Per-frame player combat state
# ----------------------------

def update_player_combat(ctx: SimulationContext, dt: float) -> None:
    """Tick buff timers, then run whichever firing mode is active."""
    player = ctx.player

    if player.hit_feedback_cooldown > 0:
        player.hit_feedback_cooldown = max(0.0, player.hit_feedback_cooldown - dt)

    if player.magnet_effect_timer > 0:
        player.magnet_effect_timer -= dt
        if player.magnet_effect_timer <= 0:
            player.magnet_effect_timer = 0.0
            player.current_magnet_radius = player.base_magnet_radius
            logger.debug("Magnet effect ended")

    if player.special_attack_effect_timer > 0:
        player.special_attack_effect_timer -= dt
        if player.special_attack_effect_timer <= 0:
            player.special_attack_effect_timer = 0.0
            player.is_special_attacking = False
            player.special_attack_fire_cooldown = 0.0
            logger.debug("Special attack ended")
        else:
            player.special_attack_fire_cooldown -= dt
            if player.special_attack_fire_cooldown <= 0:
                fire_radial_burst(ctx, ctx.config.radial_projectile_count)
                player.special_attack_fire_cooldown = player.special_attack_fire_rate

    if not player.is_special_attacking:
        player.current_attack_cooldown -= dt
        if player.current_attack_cooldown <= 0:
            fire_aimed_volley(ctx)
            player.current_attack_cooldown = player.attack_cooldown


# ----------------------------
# Movement / lifetimes
# ----------------------------

def update_projectiles(ctx: SimulationContext, dt: float) -> None:
    projectiles = ctx.projectiles
    for i in range(len(projectiles) - 1, -1, -1):
        p = projectiles[i]
        p.x += p.vx * dt
        p.y += p.vy * dt
        p.lifetime -= dt
        if p.lifetime <= 0:
            del projectiles[i]


def update_enemies(ctx: SimulationContext, dt: float) -> None:
    px, py = ctx.player.x, ctx.player.y
    for enemy in ctx.enemies:
        enemy.x, enemy.y = step_towards(enemy.x, enemy.y, px, py, enemy.speed * dt)


def _attract(ctx: SimulationContext, pickup, dt: float) -> None:
    player = ctx.player
    radius = player.current_magnet_radius
    if dist_sq(pickup.x, pickup.y, player.x, player.y) < radius * radius:
        pickup.x, pickup.y = step_towards(
            pickup.x, pickup.y, player.x, player.y, player.speed * ATTRACT_SPEED_FACTOR * dt)


def update_gems(ctx: SimulationContext, dt: float) -> None:
    gems = ctx.gems
    for i in range(len(gems) - 1, -1, -1):
        gem = gems[i]
        _attract(ctx, gem, dt)
        gem.lifetime -= dt
        if gem.lifetime <= 0:
            del gems[i]


def update_items(ctx: SimulationContext, dt: float) -> None:
    items = ctx.items
    for i in range(len(items) - 1, -1, -1):
        item = items[i]
        item.lifetime -= dt
        if item.lifetime <= 0:
            del items[i]
            continue
        _attract(ctx, item, dt)


# ----------------------------
# Item effects
# ----------------------------

def apply_item_effect(ctx: SimulationContext, item: Item) -> None:
    player = ctx.player

    if item.kind is ItemKind.MAGNET:
        # The boost only exists while the timer runs
        if item.effect_duration <= 0:
            return
        player.magnet_effect_timer = item.effect_duration
        player.current_magnet_radius = player.base_magnet_radius + item.effect_value
        logger.debug("Magnet active: radius %.0f for %.1fs", player.current_magnet_radius, item.effect_duration)
    elif item.kind is ItemKind.SPECIAL_ATTACK:
        player.special_attack_effect_timer = item.effect_duration
        player.is_special_attacking = item.effect_duration > 0
        player.special_attack_fire_cooldown = 0.0
        logger.debug("Special attack active for %.1fs", item.effect_duration)
    elif item.kind is ItemKind.HEALTH_POTION:
        before = player.health
        player.health = min(player.max_health, player.health + item.effect_value)
        logger.debug("Healed %.1f HP (%.1f/%.1f)", player.health - before, player.health, player.max_health)


# ----------------------------
# Collision pass
# ----------------------------

def _projectiles_vs_enemies(ctx: SimulationContext) -> None:
    projectiles = ctx.projectiles
    enemies = ctx.enemies
    for i in range(len(projectiles) - 1, -1, -1):
        proj = projectiles[i]
        for j in range(len(enemies) - 1, -1, -1):
            enemy = enemies[j]
            if not circle_collide(proj.x, proj.y, proj.radius, enemy.x, enemy.y, enemy.radius):
                continue
            enemy.health -= proj.damage
            del projectiles[i]
            ctx.events.hits += 1
            if enemy.health <= 0:
                drop_experience_gem(ctx, enemy.x, enemy.y, enemy.exp_reward)
                try_drop_item(ctx, enemy.x, enemy.y)
                del enemies[j]
                ctx.events.kills += 1
            break


def _player_vs_enemies(ctx: SimulationContext) -> None:
    player = ctx.player
    for enemy in reversed(ctx.enemies):
        if not circle_collide(player.x, player.y, player.radius, enemy.x, enemy.y, enemy.radius):
            continue
        damage = min(player.health, enemy.damage * ctx.dt)
        player.health -= damage
        ctx.events.damage_taken += damage
        if player.hit_feedback_cooldown <= 0:
            player.hit_feedback_cooldown = ctx.config.player.hit_feedback_cooldown
            ctx.events.player_hits += 1
        if player.health <= 0:
            player.health = 0.0
            ctx.final_survival_time = ctx.elapsed
            ctx.state = GameState.GAME_OVER
            logger.info("Game over after %.1fs at level %d", ctx.elapsed, player.level)
            return


def _player_vs_gems(ctx: SimulationContext) -> None:
    player = ctx.player
    gems = ctx.gems
    for i in range(len(gems) - 1, -1, -1):
        gem = gems[i]
        if not circle_collide(player.x, player.y, player.radius, gem.x, gem.y, gem.radius):
            continue
        player.experience += gem.value
        del gems[i]
        ctx.events.gems += 1
        ctx.events.experience_gained += gem.value
        if should_level_up(player):
            level_up(ctx)
            return


def _player_vs_items(ctx: SimulationContext) -> None:
    player = ctx.player
    items = ctx.items
    for i in range(len(items) - 1, -1, -1):
        item = items[i]
        if not circle_collide(player.x, player.y, player.radius, item.x, item.y, item.radius):
            continue
        apply_item_effect(ctx, item)
        del items[i]
        ctx.events.items += 1


def resolve_collisions(ctx: SimulationContext) -> None:
    _projectiles_vs_enemies(ctx)
    for sweep in (_player_vs_enemies, _player_vs_gems, _player_vs_items):
        if not ctx.playing:
            return
        sweep(ctx)
