"""
Experience, levelling and the difficulty curve
----------------------------------------------
Reaching ``next_level_exp`` consumes exactly that much experience (the
surplus carries over), grows the threshold, speeds up auto-attacks,
adds a projectile every third level and retunes the two difficulty knobs:

    max enemies    = base + (level - 1) * increase
    spawn interval = max(minimum, base * factor ** (level - 1))

Enemies already alive keep the stats they were spawned with.
"""

from __future__ import annotations

import logging
import math

from .config import GameConfig, UpgradeKind, UpgradeOption
from .context import GameState, SimulationContext
from .entities import Player

logger = logging.getLogger("game.arena.progression")

# Levels divisible by this add one projectile per volley
EXTRA_ATTACK_EVERY = 3


def effective_max_enemies(config: GameConfig, level: int) -> int:
    gp = config.gameplay
    return gp.base_max_enemies + (level - 1) * gp.max_enemies_increase_per_level


def effective_spawn_interval(config: GameConfig, level: int) -> float:
    gp = config.gameplay
    decayed = gp.base_enemy_spawn_interval * gp.spawn_interval_reduction_factor_per_level ** (level - 1)
    return max(gp.min_enemy_spawn_interval, decayed)


def should_level_up(player: Player) -> bool:
    return player.experience >= player.next_level_exp


def level_up(ctx: SimulationContext) -> None:
    """Advance one level and freeze the session in LEVEL_UP."""
    player = ctx.player
    gp = ctx.config.gameplay

    player.level += 1
    player.experience = max(0.0, player.experience - player.next_level_exp)
    # Floored, but never shrinks and never drops below 1
    grown = math.floor(player.next_level_exp * gp.level_up_exp_multiplier)
    player.next_level_exp = max(player.next_level_exp, grown, 1)
    player.attack_cooldown = max(
        gp.min_attack_cooldown,
        player.attack_cooldown * (1 - gp.attack_speed_increase_per_level),
    )
    if player.level % EXTRA_ATTACK_EVERY == 0:
        player.number_of_attacks += 1

    ctx.effective_max_enemies = effective_max_enemies(ctx.config, player.level)
    ctx.effective_spawn_interval = effective_spawn_interval(ctx.config, player.level)
    ctx.state = GameState.LEVEL_UP
    ctx.events.level_ups += 1

    logger.info(
        "Level %d reached (next at %s exp, %d attacks, cap %d enemies, spawn every %.2fs)",
        player.level, player.next_level_exp, player.number_of_attacks,
        ctx.effective_max_enemies, ctx.effective_spawn_interval,
    )


def apply_upgrade(player: Player, option: UpgradeOption) -> None:
    """Apply one level-up choice; health is re-clamped afterwards."""
    kind = option.kind
    amount = option.amount

    if kind is UpgradeKind.MAX_HEALTH_PERCENT:
        player.max_health *= 1 + amount / 100
    elif kind is UpgradeKind.MAX_HEALTH_FLAT:
        player.max_health += amount
    elif kind is UpgradeKind.DAMAGE_FLAT:
        player.damage += amount
    elif kind is UpgradeKind.DAMAGE_PERCENT:
        player.damage *= 1 + amount / 100
    elif kind is UpgradeKind.SPEED_FLAT:
        player.speed += amount
    elif kind is UpgradeKind.ATTACK_COOLDOWN_PERCENT:
        player.attack_cooldown *= max(0.0, 1 - amount / 100)
    elif kind is UpgradeKind.MAGNET_RADIUS_FLAT:
        player.base_magnet_radius += amount
        player.current_magnet_radius += amount
    elif kind is UpgradeKind.HEAL_FLAT:
        player.health += amount
    elif kind is UpgradeKind.EXTRA_ATTACK:
        player.number_of_attacks += max(1, int(amount))
    else:
        raise ValueError(f"Unhandled upgrade kind: {kind}")

    player.max_health = max(1.0, player.max_health)
    player.health = min(max(0.0, player.health), player.max_health)


def confirm_level_up(ctx: SimulationContext, choice: int = 0) -> bool:
    """
    Leave LEVEL_UP with exactly one upgrade applied.

    Returns False (and changes nothing) outside LEVEL_UP. An out-of-range
    choice falls back to the first option; with no options configured the
    session simply resumes. If the carried-over experience already covers
    the new threshold the next level-up starts straight away.
    """
    if ctx.state is not GameState.LEVEL_UP:
        return False

    options = ctx.config.level_up_options
    if options:
        option = options[choice] if 0 <= choice < len(options) else options[0]
        apply_upgrade(ctx.player, option)
        logger.info("Upgrade chosen: %s", option.name)
        # Cooldown floor holds for upgrades too
        ctx.player.attack_cooldown = max(ctx.config.gameplay.min_attack_cooldown, ctx.player.attack_cooldown)

    ctx.state = GameState.PLAYING
    if should_level_up(ctx.player):
        level_up(ctx)
    return True
