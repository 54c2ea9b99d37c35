"""Tests for levelling, the difficulty curve and upgrade choices."""

import random

import pytest

from game.arena import progression
from game.arena.config import UpgradeKind, UpgradeOption
from game.arena.context import GameState, new_context


class TestLevelUp:

    def test_level_up_math(self, ctx):
        p = ctx.player
        p.experience = 130
        progression.level_up(ctx)
        assert p.level == 2
        assert p.experience == 30
        assert p.next_level_exp == 150
        assert ctx.state is GameState.LEVEL_UP
        assert ctx.events.level_ups == 1

    def test_threshold_is_floored(self, ctx):
        p = ctx.player
        p.next_level_exp = 150
        p.experience = 150
        progression.level_up(ctx)
        assert p.next_level_exp == 225
        progression.level_up(ctx)
        assert p.next_level_exp == 337  # floor(337.5)

    def test_attack_cooldown_shrinks_to_floor(self, ctx):
        p = ctx.player
        start = p.attack_cooldown
        progression.level_up(ctx)
        assert p.attack_cooldown == pytest.approx(start * (1 - ctx.config.gameplay.attack_speed_increase_per_level))

        p.attack_cooldown = 0.051
        progression.level_up(ctx)
        assert p.attack_cooldown == ctx.config.gameplay.min_attack_cooldown

    def test_extra_attack_every_third_level(self, ctx):
        p = ctx.player
        counts = []
        for _ in range(8):
            p.experience = p.next_level_exp
            progression.level_up(ctx)
            counts.append(p.number_of_attacks)
        # levels 2..9
        assert counts == [1, 2, 2, 2, 3, 3, 3, 4]

    def test_difficulty_knobs_recomputed(self, make_config):
        cfg = make_config(gameplay={
            "baseMaxEnemies": 10,
            "maxEnemiesIncreasePerLevel": 4,
            "baseEnemySpawnInterval": 2.0,
            "minEnemySpawnInterval": 0.5,
            "spawnIntervalReductionFactorPerLevel": 0.5,
        })
        ctx = new_context(cfg, random.Random(0))
        assert ctx.effective_max_enemies == 10
        assert ctx.effective_spawn_interval == 2.0

        progression.level_up(ctx)  # level 2
        assert ctx.effective_max_enemies == 14
        assert ctx.effective_spawn_interval == pytest.approx(1.0)

        progression.level_up(ctx)  # level 3: 2 * 0.25 = 0.5
        assert ctx.effective_spawn_interval == pytest.approx(0.5)

        progression.level_up(ctx)  # level 4: 0.25, floored
        assert ctx.effective_max_enemies == 22
        assert ctx.effective_spawn_interval == 0.5

    def test_threshold_never_shrinks(self, make_config):
        cfg = make_config(gameplay={"levelUpExpMultiplier": 1.0})
        ctx = new_context(cfg, random.Random(0))
        p = ctx.player
        p.next_level_exp = 100.5
        p.experience = 100.5
        progression.level_up(ctx)
        assert p.next_level_exp >= 100.5

    def test_threshold_never_reaches_zero(self, ctx):
        p = ctx.player
        p.next_level_exp = 0.5
        p.experience = 1.0
        progression.level_up(ctx)
        assert p.next_level_exp == 1
        assert p.experience == 0.5

        # Chaining stops once the surplus falls short
        assert progression.confirm_level_up(ctx) is True
        assert ctx.state is GameState.PLAYING
        assert p.level == 2

    def test_experience_never_negative(self, ctx):
        p = ctx.player
        p.experience = 10
        progression.level_up(ctx)
        assert p.experience == 0


class TestDifficultyCurve:

    def test_level_one_is_base(self, config):
        assert progression.effective_max_enemies(config, 1) == config.gameplay.base_max_enemies
        assert progression.effective_spawn_interval(config, 1) == pytest.approx(
            max(config.gameplay.min_enemy_spawn_interval, config.gameplay.base_enemy_spawn_interval))

    def test_interval_never_below_floor(self, make_config):
        cfg = make_config(gameplay={"baseEnemySpawnInterval": 2.0, "minEnemySpawnInterval": 0.3})
        intervals = [progression.effective_spawn_interval(cfg, lvl) for lvl in range(1, 60)]
        assert min(intervals) == 0.3
        assert intervals == sorted(intervals, reverse=True)


class TestApplyUpgrade:

    @pytest.mark.parametrize("kind,amount,attr,expected", [
        (UpgradeKind.MAX_HEALTH_PERCENT, 10, "max_health", 110),
        (UpgradeKind.MAX_HEALTH_FLAT, 25, "max_health", 125),
        (UpgradeKind.DAMAGE_FLAT, 5, "damage", 15),
        (UpgradeKind.DAMAGE_PERCENT, 50, "damage", 15),
        (UpgradeKind.SPEED_FLAT, 50, "speed", 200),
        (UpgradeKind.ATTACK_COOLDOWN_PERCENT, 20, "attack_cooldown", 0.4),
        (UpgradeKind.EXTRA_ATTACK, 1, "number_of_attacks", 2),
    ])
    def test_dispatch(self, ctx, kind, amount, attr, expected):
        progression.apply_upgrade(ctx.player, UpgradeOption(name="u", kind=kind, amount=amount))
        assert getattr(ctx.player, attr) == pytest.approx(expected)

    def test_magnet_upgrade_raises_base_and_current(self, ctx):
        p = ctx.player
        base = p.base_magnet_radius
        progression.apply_upgrade(p, UpgradeOption(name="m", kind=UpgradeKind.MAGNET_RADIUS_FLAT, amount=40))
        assert p.base_magnet_radius == base + 40
        assert p.current_magnet_radius == base + 40

    def test_heal_is_clamped_to_max(self, ctx):
        p = ctx.player
        p.health = 95
        progression.apply_upgrade(p, UpgradeOption(name="h", kind=UpgradeKind.HEAL_FLAT, amount=50))
        assert p.health == p.max_health

    def test_max_health_increase_does_not_heal(self, ctx):
        p = ctx.player
        p.health = 40
        progression.apply_upgrade(p, UpgradeOption(name="v", kind=UpgradeKind.MAX_HEALTH_FLAT, amount=50))
        assert p.health == 40
        assert p.max_health == 150


class TestConfirmLevelUp:

    def test_ignored_outside_level_up(self, ctx):
        assert progression.confirm_level_up(ctx) is False
        assert ctx.state is GameState.PLAYING

    def test_applies_chosen_option_and_resumes(self, ctx):
        p = ctx.player
        p.experience = 100
        progression.level_up(ctx)
        # Bundled options: 0 max health %, 1 damage flat, 2 speed flat
        assert progression.confirm_level_up(ctx, choice=1) is True
        assert p.damage == 15
        assert p.max_health == 100
        assert ctx.state is GameState.PLAYING

    def test_out_of_range_choice_uses_first_option(self, ctx):
        p = ctx.player
        progression.level_up(ctx)
        progression.confirm_level_up(ctx, choice=99)
        assert p.max_health == pytest.approx(110)

    def test_no_options_just_resumes(self, make_config):
        cfg = make_config(ui={"levelUpOptions": []})
        ctx = new_context(cfg, random.Random(0))
        progression.level_up(ctx)
        assert progression.confirm_level_up(ctx) is True
        assert ctx.state is GameState.PLAYING

    def test_carried_experience_chains_next_level(self, ctx):
        p = ctx.player
        p.experience = 260  # 100 for level 2, leaves 160 >= 150
        progression.level_up(ctx)
        assert p.level == 2 and p.experience == 160

        progression.confirm_level_up(ctx)
        assert p.level == 3
        assert p.experience == 10
        assert p.next_level_exp == 225
        assert ctx.state is GameState.LEVEL_UP

        progression.confirm_level_up(ctx)
        assert ctx.state is GameState.PLAYING
        assert p.experience < p.next_level_exp
