"""
Simulation - the frame clock and game state machine
---------------------------------------------------
States:

    TITLE --start--> PLAYING <--confirm-- LEVEL_UP
                        |  +--level up------^
                        +--health 0--> GAME_OVER --restart--> PLAYING

Only PLAYING advances entities. The elapsed-time counter runs in every
state except TITLE (HUD blink timers hang off it).

One ``update(dt)`` is one frame, with no sub-stepping; a huge dt after a
stall is processed as-is. Per-frame order while PLAYING:

    player movement -> camera -> player combat (buffs, firing)
    -> projectiles -> enemies -> gems -> items -> collisions -> spawner

Everything the UI needs comes from ``snapshot()``; the live registries
are never handed out.
"""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from . import combat, progression, spawner
from .camera import Camera, compute_camera
from .config import GameConfig, default_config
from .context import FrameEvents, GameState, SimulationContext, new_context
from .entities import Player, Enemy, Projectile, ExperienceGem, Item
from .utils import clamp, normalize

logger = logging.getLogger("game.arena.simulation")


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only copy of everything rendering / HUD code may look at"""
    state: GameState
    player: Optional[Player]
    enemies: Tuple[Enemy, ...]
    projectiles: Tuple[Projectile, ...]
    gems: Tuple[ExperienceGem, ...]
    items: Tuple[Item, ...]
    camera: Camera
    elapsed: float
    final_survival_time: float

    @property
    def level(self) -> int:
        return self.player.level if self.player else 1

    @property
    def experience(self) -> float:
        return self.player.experience if self.player else 0.0

    @property
    def next_level_exp(self) -> float:
        return self.player.next_level_exp if self.player else 0.0

    @property
    def health(self) -> float:
        return self.player.health if self.player else 0.0

    @property
    def max_health(self) -> float:
        return self.player.max_health if self.player else 0.0

    @property
    def enemy_count(self) -> int:
        return len(self.enemies)


class Simulation:
    """Owns the session context and drives it one frame at a time"""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None, seed: Optional[int] = None):
        self.config = config if config is not None else default_config()
        self.rng = rng if rng is not None else random.Random(seed)
        self.ctx: Optional[SimulationContext] = None
        self._direction = (0.0, 0.0)
        self._last_time: Optional[float] = None
        self._idle_events = FrameEvents()

    # ----------------------------
    # State
    # ----------------------------

    @property
    def state(self) -> GameState:
        return self.ctx.state if self.ctx is not None else GameState.TITLE

    @property
    def events(self) -> FrameEvents:
        return self.ctx.events if self.ctx is not None else self._idle_events

    # ----------------------------
    # Signals
    # ----------------------------

    def start(self) -> bool:
        """Begin a fresh session (from TITLE or GAME_OVER)."""
        if self.state not in (GameState.TITLE, GameState.GAME_OVER):
            logger.debug("Ignoring start in state %s", self.state.value)
            return False

        ctx = new_context(self.config, self.rng)
        self.ctx = ctx
        self._update_camera()
        for _ in range(self.config.gameplay.initial_enemy_count):
            spawner.spawn_single_enemy(ctx, initial=True)
        ctx.player.dx, ctx.player.dy = self._direction
        ctx.state = GameState.PLAYING
        logger.info("New session: %d enemies on a %.0fx%.0f map",
                    len(ctx.enemies), self.config.canvas.map_width, self.config.canvas.map_height)
        return True

    def restart(self) -> bool:
        return self.start()

    def set_direction(self, dx: float, dy: float) -> None:
        """Direction from the currently held movement keys; zero means stand still."""
        self._direction = normalize(dx, dy)
        if self.ctx is not None:
            self.ctx.player.dx, self.ctx.player.dy = self._direction

    def fire(self) -> bool:
        """Manual volley; ignored outside PLAYING or during the radial burst."""
        ctx = self.ctx
        if ctx is None or not ctx.playing or ctx.player.is_special_attacking:
            logger.debug("Ignoring fire in state %s", self.state.value)
            return False
        combat.fire_aimed_volley(ctx)
        ctx.player.current_attack_cooldown = ctx.player.attack_cooldown
        return True

    def confirm_level_up(self, choice: int = 0) -> bool:
        if self.ctx is None or self.ctx.state is not GameState.LEVEL_UP:
            logger.debug("Ignoring level-up confirm in state %s", self.state.value)
            return False
        return progression.confirm_level_up(self.ctx, choice)

    # ----------------------------
    # Frame loop
    # ----------------------------

    def tick(self, now: float) -> None:
        """Advance using the wall-clock delta since the previous tick (seconds)."""
        dt = 0.0 if self._last_time is None else max(0.0, now - self._last_time)
        self._last_time = now
        self.update(dt)

    def update(self, dt: float) -> None:
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")

        ctx = self.ctx
        if ctx is None or ctx.state is GameState.TITLE:
            return

        ctx.events = FrameEvents()
        ctx.dt = dt
        ctx.elapsed += dt
        if not ctx.playing:
            return

        self._move_player(dt)
        self._update_camera()
        combat.update_player_combat(ctx, dt)
        combat.update_projectiles(ctx, dt)
        combat.update_enemies(ctx, dt)
        combat.update_gems(ctx, dt)
        combat.update_items(ctx, dt)
        combat.resolve_collisions(ctx)
        if not ctx.playing:
            return
        spawner.try_spawn_enemy(ctx, dt)

    def _move_player(self, dt: float) -> None:
        player = self.ctx.player
        canvas = self.config.canvas
        player.x += player.dx * player.speed * dt
        player.y += player.dy * player.speed * dt
        half = player.size / 2
        player.x = clamp(player.x, half, canvas.map_width - half)
        player.y = clamp(player.y, half, canvas.map_height - half)

    def _update_camera(self) -> None:
        canvas = self.config.canvas
        player = self.ctx.player
        self.ctx.camera = compute_camera(
            player.x, player.y, canvas.width, canvas.height, canvas.map_width, canvas.map_height)

    # ----------------------------
    # Output
    # ----------------------------

    def snapshot(self) -> FrameSnapshot:
        ctx = self.ctx
        if ctx is None:
            return FrameSnapshot(
                state=self.state, player=None, enemies=(), projectiles=(), gems=(), items=(),
                camera=Camera(), elapsed=0.0, final_survival_time=0.0,
            )
        return FrameSnapshot(
            state=ctx.state,
            player=copy.copy(ctx.player),
            enemies=tuple(copy.copy(e) for e in ctx.enemies),
            projectiles=tuple(copy.copy(p) for p in ctx.projectiles),
            gems=tuple(copy.copy(g) for g in ctx.gems),
            items=tuple(copy.copy(i) for i in ctx.items),
            camera=copy.copy(ctx.camera),
            elapsed=ctx.elapsed,
            final_survival_time=ctx.final_survival_time,
        )
