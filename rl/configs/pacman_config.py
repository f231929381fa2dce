"""
Training configuration for the pacman environment
Reward shaping variants, algorithm hyperparameters and training settings
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "dt": 1/60,
    "frame_skip": 4,       # engine ticks per env step
    "max_steps": 5000,
    "k_pursuers": 4,
    "m_pickups": 5,
}

# ==============================================================================
# REWARD SHAPING CONFIGURATIONS
# ==============================================================================

# Reward Config 1: BASELINE (balanced)
REWARD_CONFIG_BASELINE = {
    "name": "baseline",
    "description": "Balanced reward shaping",
    "R_PICKUP": 0.1,     # Reward per pickup eaten
    "R_POWER": 0.5,      # Reward per power-pickup eaten
    "R_CAPTURE": 2.0,    # Reward per vulnerable pursuer captured
    "R_DEATH": 5.0,      # Penalty per life lost
    "R_TIME": 0.001,     # Small time penalty
    "R_CLEAR": 10.0,     # Bonus for clearing the maze
}

# Reward Config 2: SURVIVAL (stay away from pursuers)
REWARD_CONFIG_SURVIVAL = {
    "name": "survival",
    "description": "Prioritize survival - heavy life-loss penalty, lower eating rewards",
    "R_PICKUP": 0.05,
    "R_POWER": 0.2,
    "R_CAPTURE": 1.0,
    "R_DEATH": 15.0,
    "R_TIME": 0.0005,
    "R_CLEAR": 10.0,
}

# Reward Config 3: AGGRESSIVE (hunt vulnerable pursuers)
REWARD_CONFIG_AGGRESSIVE = {
    "name": "aggressive",
    "description": "Prioritize power-pickups and captures - accept risk",
    "R_PICKUP": 0.1,
    "R_POWER": 1.0,
    "R_CAPTURE": 5.0,
    "R_DEATH": 3.0,
    "R_TIME": 0.002,
    "R_CLEAR": 10.0,
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

# SAC hyperparameters (continuous action approximation)
SAC_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 256,
    "tau": 0.005,
    "gamma": 0.99,
    "train_freq": 1,
    "gradient_steps": 1,
    "ent_coef": "auto",
    "target_entropy": "auto",
    "verbose": 1,
}

ALGO_CONFIGS = {
    "ppo": PPO_CONFIG,
    "dqn": DQN_CONFIG,
    "sac": SAC_CONFIG,
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
