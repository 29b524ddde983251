"""
Training configuration for the Starfall environment
Reward shaping variants plus PPO settings
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # rendering is far too slow with parallel envs
    "width": 400,
    "height": 550,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 5,
    "m_bullets": 3,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Baseline: the env defaults
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced scoring vs. survival",
    "R_SCORE": 0.1,      # Per point of score (normal kill = 10 points)
    "R_POWER_UP": 1.0,   # Collecting a power-up
    "R_HIT": 3.0,        # Penalty per life lost
    "R_MISS": 0.5,       # Penalty per enemy that slips past
    "R_SHOT": 0.0,       # Firing is free
    "R_TIME": 0.0,
    "R_DEATH": 5.0,      # Run ended
}

# Survival: dodge first
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Higher hit/death penalties, lower scoring reward",
    "R_SCORE": 0.05,
    "R_POWER_UP": 0.5,
    "R_HIT": 6.0,
    "R_MISS": 0.2,
    "R_SHOT": 0.0,
    "R_TIME": -0.001,    # Small bonus for every frame alive
    "R_DEATH": 10.0,
}

# Aggressive: clear the screen, accept hits
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Higher scoring and miss penalties, lower hit penalty",
    "R_SCORE": 0.2,
    "R_POWER_UP": 2.0,
    "R_HIT": 1.5,
    "R_MISS": 1.0,
    "R_SHOT": 0.0,
    "R_TIME": 0.0,
    "R_DEATH": 3.0,
}

REWARD_CONFIGS = {
    "baseline": REWARD_CONFIG_BASELINE,
    "survival": REWARD_CONFIG_SURVIVAL,
    "aggressive": REWARD_CONFIG_AGGRESSIVE,
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
