"""
ArenaEnv - headless Gymnasium wrapper around the survival-arena simulation
--------------------------------------------------------------------------
- Gymnasium API over ``Simulation`` (no rendering)
- 1 agent: moves in 8 directions, may request a manual volley
- Auto-attack, radial bursts, pickups and levelling run as in the game
- Level-ups are confirmed automatically with one configured upgrade, so an
  episode is a single uninterrupted run
- Vector observation: player state + top-K nearest enemies + top-M nearest
  gems + top-M nearest items (positions relative to the player)
- MultiDiscrete action space: [move(9), fire(2)]
"""

from __future__ import annotations

import math
import random
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig, default_config
from .context import GameState
from .simulation import Simulation
from .utils import clamp, dist_sq, seed_everything

# move: 0 stay, 1..8 compass directions starting east, counter-clockwise on screen
_MOVE_DIRS = [(0.0, 0.0)] + [
    (math.cos(-i * math.pi / 4), math.sin(-i * math.pi / 4)) for i in range(8)
]

DEFAULT_REWARDS = {
    "R_KILL": 1.0,
    "R_GEM": 0.2,
    "R_ITEM": 0.5,
    "R_LEVEL": 2.0,
    "R_DAMAGE": 0.05,  # per point of health lost
    "R_TIME": 0.001,
    "R_DEATH": 5.0,
}


class ArenaEnv(gym.Env):
    """Survival arena as a Gymnasium environment"""

    metadata = {"render_modes": [], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        dt: float = 1 / 30,
        max_steps: int = 5400,  # 3 minutes at 30 FPS
        k_enemies: int = 5,
        m_pickups: int = 3,
        upgrade_choice: int = 0,
        rewards: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        self.config = config if config is not None else default_config()
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_pickups = m_pickups
        self.upgrade_choice = upgrade_choice
        self.rewards = dict(DEFAULT_REWARDS)
        if rewards:
            self.rewards.update(rewards)

        self.action_space = spaces.MultiDiscrete([len(_MOVE_DIRS), 2])

        # Player: pos(2) dir(2) health(1) cooldown(1) exp(1) special(1) magnet(1)
        # Each enemy: rel pos(2); each gem / item: rel pos(2)
        obs_dim = 9 + self.k_enemies * 2 + self.m_pickups * 2 * 2
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self.sim: Optional[Simulation] = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        # Python RNG seeded from the env's numpy generator keeps episodes reproducible
        rng_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.sim = Simulation(self.config, rng=random.Random(rng_seed))
        self.sim.start()
        self._step_count = 0

        return self._get_obs(), self._get_info()

    def step(self, action):
        sim = self.sim
        move, fire = int(action[0]), int(action[1])

        dx, dy = _MOVE_DIRS[move % len(_MOVE_DIRS)]
        sim.set_direction(dx, dy)
        if fire:
            sim.fire()

        sim.update(self.dt)
        events = sim.events
        while sim.state is GameState.LEVEL_UP:
            sim.confirm_level_up(self.upgrade_choice)

        reward = self._compute_reward(events)

        terminated = sim.state is GameState.GAME_OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self):
        return None

    def close(self):
        self.sim = None

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        ctx = self.sim.ctx
        p = ctx.player
        canvas = self.config.canvas
        w, h = canvas.map_width, canvas.map_height

        cooldown = p.current_attack_cooldown / max(1e-6, p.attack_cooldown)
        exp_frac = p.experience / max(1e-6, p.next_level_exp)

        obs_parts: List[float] = [
            (p.x / w) * 2 - 1, (p.y / h) * 2 - 1,
            p.dx, p.dy,
            (p.health / max(1e-6, p.max_health)) * 2 - 1,
            clamp(cooldown, 0, 1) * 2 - 1,
            clamp(exp_frac, 0, 1) * 2 - 1,
            1.0 if p.is_special_attacking else -1.0,
            1.0 if p.magnet_effect_timer > 0 else -1.0,
        ]

        # Relative positions are scaled by the viewport so "on screen" fills [-1, 1]
        half_w, half_h = canvas.width / 2, canvas.height / 2

        def nearest(entities, count):
            ordered = sorted(entities, key=lambda e: dist_sq(e.x, e.y, p.x, p.y))
            parts = []
            for i in range(count):
                if i < len(ordered):
                    e = ordered[i]
                    parts += [clamp((e.x - p.x) / half_w, -1, 1), clamp((e.y - p.y) / half_h, -1, 1)]
                else:
                    parts += [0.0, 0.0]
            return parts

        obs_parts += nearest(ctx.enemies, self.k_enemies)
        obs_parts += nearest(ctx.gems, self.m_pickups)
        obs_parts += nearest(ctx.items, self.m_pickups)

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_KILL"] * events.kills
        reward += r["R_GEM"] * events.gems
        reward += r["R_ITEM"] * events.items
        reward += r["R_LEVEL"] * events.level_ups
        reward -= r["R_DAMAGE"] * events.damage_taken
        reward -= r["R_TIME"]
        if self.sim.state is GameState.GAME_OVER:
            reward -= r["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        snap = self.sim.snapshot()
        events = self.sim.events
        return {
            "state": snap.state.value,
            "health": snap.health,
            "level": snap.level,
            "experience": snap.experience,
            "num_enemies": snap.enemy_count,
            "num_projectiles": len(snap.projectiles),
            "num_gems": len(snap.gems),
            "num_items": len(snap.items),
            "elapsed": snap.elapsed,
            "kills": events.kills,
            "damage_taken": events.damage_taken,
            "step": self._step_count,
        }
