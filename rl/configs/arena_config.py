"""
Evaluation configuration for the survival arena environment
"""

# Environment parameters (game data itself comes from game.arena's defaults
# or a JSON file passed on the command line)
ENV_CONFIG = {
    "dt": 1/30,
    "max_steps": 5400,  # 3 minutes at 30 FPS
    "k_enemies": 5,
    "m_pickups": 3,
    "upgrade_choice": 0,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "R_KILL": 1.0,       # Reward for killing an enemy
    "R_GEM": 0.2,        # Reward per experience gem collected
    "R_ITEM": 0.5,       # Reward per item picked up
    "R_LEVEL": 2.0,      # Reward per level gained
    "R_DAMAGE": 0.05,    # Penalty per point of health lost
    "R_TIME": 0.001,     # Small time penalty
    "R_DEATH": 5.0,      # Death penalty
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "n_episodes": 10,
    "seed": 42,
    "policies": ["random", "kite"],
    "log_dir": "./logs",
    # Kiting heuristic: flee anything closer than this, otherwise chase pickups
    "danger_radius": 150.0,
}
