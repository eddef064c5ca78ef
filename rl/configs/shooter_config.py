"""
Training configuration for the Raider environment
Reward shaping variants and algorithm hyperparameters
"""

# Environment parameters (passed straight to RaiderEnv)
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_enemies": 5,
    "m_bullets": 5,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# BASELINE: balanced between scoring and staying alive
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced reward shaping",
    "R_HIT": 0.1,        # Bullet connected
    "R_KILL": 1.0,       # Enemy destroyed, scaled by points / 30
    "R_DAMAGE": 2.0,     # Per 100 health lost
    "R_SHOT": 0.01,      # Per bullet fired
    "R_ALIVE": 0.001,    # Per surviving step
    "R_DEATH": 5.0,      # Game over
}

# SURVIVAL: dodge first, shoot second
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - higher damage/death penalties, lower combat rewards",
    "R_HIT": 0.05,
    "R_KILL": 0.5,
    "R_DAMAGE": 5.0,
    "R_SHOT": 0.02,
    "R_ALIVE": 0.005,
    "R_DEATH": 10.0,
}

# AGGRESSIVE: chase score
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize score - higher kill rewards, lower penalties",
    "R_HIT": 0.3,
    "R_KILL": 2.0,
    "R_DAMAGE": 1.0,
    "R_SHOT": 0.0,
    "R_ALIVE": 0.0,
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

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 1024,
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

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 500_000,
    "save_freq": 10_000,
    "eval_freq": 5_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}


def get_env_kwargs(reward_name: str = "baseline") -> dict:
    """ENV_CONFIG plus the named reward weights"""
    if reward_name not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_name}")
    return {**ENV_CONFIG, "reward_config": REWARD_CONFIGS[reward_name]}
