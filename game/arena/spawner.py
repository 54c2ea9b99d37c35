"""
Enemy spawning, gem drops and item drops
"""

from __future__ import annotations

import logging

from .context import SimulationContext
from .entities import Enemy, ExperienceGem, Item
from .selection import weighted_choice
from .utils import clamp

logger = logging.getLogger("game.arena.spawner")


def try_spawn_enemy(ctx: SimulationContext, dt: float) -> bool:
    """
    Advance the spawn accumulator and spawn one enemy when it is due.

    The accumulator only resets when an enemy is actually placed, so time
    keeps building up while the population sits at the cap.
    """
    ctx.spawn_timer += dt
    if ctx.spawn_timer < ctx.effective_spawn_interval:
        return False
    if len(ctx.enemies) >= ctx.effective_max_enemies:
        return False
    ctx.spawn_timer = 0.0
    return spawn_single_enemy(ctx, initial=False) is not None


def spawn_single_enemy(ctx: SimulationContext, initial: bool = False):
    archetype = weighted_choice(ctx.config.enemies, ctx.rng)
    if archetype is None:
        return None

    rng = ctx.rng
    canvas = ctx.config.canvas
    player = ctx.player
    cam = ctx.camera

    if initial:
        # Scatter the opening population around the player
        spread = ctx.config.gameplay.initial_spawn_spread
        x = player.x + (rng.random() - 0.5) * canvas.width * spread
        y = player.y + (rng.random() - 0.5) * canvas.height * spread
    else:
        # Just outside one side of the current view
        pad = ctx.config.gameplay.spawn_padding
        side = rng.randrange(4)
        if side == 0:  # top
            x = cam.x + rng.random() * canvas.width
            y = cam.y - pad
        elif side == 1:  # right
            x = cam.x + canvas.width + pad
            y = cam.y + rng.random() * canvas.height
        elif side == 2:  # bottom
            x = cam.x + rng.random() * canvas.width
            y = cam.y + canvas.height + pad
        else:  # left
            x = cam.x - pad
            y = cam.y + rng.random() * canvas.height

    half = archetype.size / 2
    x = clamp(x, half, canvas.map_width - half)
    y = clamp(y, half, canvas.map_height - half)

    gp = ctx.config.gameplay
    level_factor = player.level - 1
    health_scale = 1 + level_factor * gp.enemy_health_scale_per_level
    speed_scale = 1 + level_factor * gp.enemy_speed_scale_per_level
    damage_scale = 1 + level_factor * gp.enemy_damage_scale_per_level

    enemy = Enemy(
        id=ctx.next_enemy_id,
        name=archetype.name,
        x=x,
        y=y,
        health=archetype.max_health * health_scale,
        max_health=archetype.max_health * health_scale,
        speed=archetype.speed * speed_scale,
        damage=archetype.damage * damage_scale,
        exp_reward=archetype.exp_reward,
        size=archetype.size,
    )
    ctx.next_enemy_id += 1
    ctx.enemies.append(enemy)
    return enemy


def drop_experience_gem(ctx: SimulationContext, x: float, y: float, value: float) -> ExperienceGem:
    gems = ctx.config.gems
    gem = ExperienceGem(x=x, y=y, value=value, lifetime=gems.total_lifetime, size=gems.size)
    ctx.gems.append(gem)
    return gem


def try_drop_item(ctx: SimulationContext, x: float, y: float):
    """Roll for an item drop at a defeated enemy's position."""
    gp = ctx.config.gameplay
    if ctx.rng.random() >= gp.item_drop_chance:
        return None
    if len(ctx.items) >= gp.max_simultaneous_items:
        return None

    archetype = weighted_choice(ctx.config.items, ctx.rng)
    if archetype is None:
        return None

    item = Item(
        x=x,
        y=y,
        kind=archetype.kind,
        size=archetype.size,
        effect_duration=archetype.effect_duration,
        effect_value=archetype.effect_value,
        total_lifetime=archetype.total_lifetime,
        lifetime=archetype.total_lifetime,
    )
    ctx.items.append(item)
    logger.debug("Dropped item %s at (%.0f, %.0f)", item.kind.value, x, y)
    return item
