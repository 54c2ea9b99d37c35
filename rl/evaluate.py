"""
Evaluation script for baseline policies on the survival arena
Runs the random policy and/or a kiting heuristic and reports survival,
kills and levels reached.
"""

import os
import csv
import math
import argparse
import numpy as np
from typing import Callable, Dict, List, Optional

from game.arena import ArenaEnv, load_config, default_config
from game.arena.utils import dist_sq
from rl.configs.arena_config import ENV_CONFIG, REWARD_CONFIG, EVAL_CONFIG


def make_random_policy(env: ArenaEnv) -> Callable:
    def policy(obs):
        return env.action_space.sample()
    return policy


def make_kite_policy(env: ArenaEnv, danger_radius: float = 150.0) -> Callable:
    """
    Heuristic baseline: run from the nearest enemy when it gets close,
    otherwise walk to the nearest gem or item. Auto-attack does the shooting.
    """
    def policy(obs):
        ctx = env.sim.ctx
        p = ctx.player

        tx, ty = 0.0, 0.0
        threat = min(ctx.enemies, key=lambda e: dist_sq(e.x, e.y, p.x, p.y), default=None)
        if threat is not None and dist_sq(threat.x, threat.y, p.x, p.y) < danger_radius ** 2:
            tx, ty = p.x - threat.x, p.y - threat.y
        else:
            pickups = list(ctx.gems) + list(ctx.items)
            target = min(pickups, key=lambda g: dist_sq(g.x, g.y, p.x, p.y), default=None)
            if target is not None:
                tx, ty = target.x - p.x, target.y - p.y

        if tx == 0.0 and ty == 0.0:
            return np.array([0, 0], dtype=np.int64)

        # Snap to the closest of the 8 move directions (screen y points down)
        angle = math.atan2(-ty, tx)
        sector = int(round(angle / (math.pi / 4))) % 8
        return np.array([sector + 1, 0], dtype=np.int64)

    return policy


POLICIES = {
    "random": make_random_policy,
    "kite": make_kite_policy,
}


def evaluate_policy(
    name: str,
    n_episodes: int = 10,
    seed: Optional[int] = None,
    config_path: Optional[str] = None,
    csv_path: Optional[str] = None,
):
    """
    Evaluate a baseline policy

    Args:
        name: Policy name ('random' or 'kite')
        n_episodes: Number of episodes to evaluate
        seed: Random seed for the first episode (incremented per episode)
        config_path: Optional game data JSON; bundled defaults otherwise
        csv_path: Optional CSV file for per-episode metrics
    """
    if name not in POLICIES:
        raise ValueError(f"Unknown policy: {name}")

    config = load_config(config_path) if config_path else default_config()
    env = ArenaEnv(config=config, rewards=REWARD_CONFIG, **ENV_CONFIG)
    if name == "kite":
        policy = make_kite_policy(env, EVAL_CONFIG["danger_radius"])
    else:
        policy = POLICIES[name](env)

    rows: List[Dict] = []

    for episode in range(n_episodes):
        episode_seed = seed + episode if seed is not None else None
        obs, info = env.reset(seed=episode_seed)
        env.action_space.seed(episode_seed)

        terminated = False
        truncated = False
        total_reward = 0.0
        kills = 0
        steps = 0

        while not (terminated or truncated):
            action = policy(obs)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            kills += info["kills"]
            steps += 1

        rows.append({
            "episode": episode,
            "reward": total_reward,
            "length": steps,
            "survival_time": info["elapsed"],
            "level": info["level"],
            "kills": kills,
            "died": int(terminated),
        })

        print(f"[{name}] Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Survived = {info['elapsed']:.1f}s, "
              f"Level = {info['level']}, Kills = {kills}")

    env.close()

    if csv_path:
        os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
        with open(csv_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print(f"Metrics written to {csv_path}")

    rewards = np.array([r["reward"] for r in rows])
    survival = np.array([r["survival_time"] for r in rows])
    levels = np.array([r["level"] for r in rows])

    results = {
        "policy": name,
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_survival": float(np.mean(survival)),
        "mean_level": float(np.mean(levels)),
        "death_rate": float(np.mean([r["died"] for r in rows])),
        "episodes": rows,
    }

    print("\n" + "="*50)
    print(f"{name} policy ({n_episodes} episodes):")
    print(f"Mean Reward: {results['mean_reward']:.2f} ± {results['std_reward']:.2f}")
    print(f"Mean Survival: {results['mean_survival']:.1f}s")
    print(f"Mean Level: {results['mean_level']:.2f}")
    print(f"Death Rate: {results['death_rate']:.0%}")
    print("="*50)

    return results


def main():
    parser = argparse.ArgumentParser(description="Evaluate baseline policies on the survival arena")
    parser.add_argument(
        "--policy",
        type=str,
        default=None,
        choices=list(POLICIES),
        help="Policy to evaluate (default: all configured policies)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_episodes"],
        help=f"Number of evaluation episodes (default: {EVAL_CONFIG['n_episodes']})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seed"],
        help=f"Random seed (default: {EVAL_CONFIG['seed']})",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a game data JSON file",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Write per-episode metrics to the log directory",
    )

    args = parser.parse_args()

    policies = [args.policy] if args.policy else EVAL_CONFIG["policies"]
    summaries = []
    for name in policies:
        csv_path = os.path.join(EVAL_CONFIG["log_dir"], f"{name}_eval.csv") if args.csv else None
        summaries.append(evaluate_policy(
            name,
            n_episodes=args.n_episodes,
            seed=args.seed,
            config_path=args.config,
            csv_path=csv_path,
        ))

    if len(summaries) > 1:
        print("\nSummary:")
        for s in summaries:
            print(f"  {s['policy']:10} | survival {s['mean_survival']:7.1f}s | level {s['mean_level']:5.2f}")


if __name__ == "__main__":
    main()
