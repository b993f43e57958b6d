"""
Training configuration for the arcade environments
Environment, algorithm and training settings per game
"""

# Environment parameters
FLAPPY_ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training
    "dt": 1/60,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "reward_pass": 1.0,
    "reward_alive": 0.01,
    "penalty_death": 1.0,
    "width": 400,
    "height": 600,
    "gravity": 0.35,
    "flap_strength": -6.0,
    "pipe_speed": 1.5,
    "pipe_interval": 90,
}

PACMAN_ENV_CONFIG = {
    "dt": 1/60,
    "max_steps": 3600,
    "m_cherries": 3,
    "reward_scale": 1.0,
    "penalty_time": 0.001,
    "penalty_death": 5.0,
    "width": 500,
    "height": 500,
    "num_ghosts": 3,
    "num_cherries": 5,
    "chase_radius": 150.0,
    "vulnerable_duration": 10.0,
}

ENV_CONFIGS = {
    "flappy": FLAPPY_ENV_CONFIG,
    "pacman": PACMAN_ENV_CONFIG,
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

ALGO_CONFIGS = {
    "ppo": PPO_CONFIG,
    "dqn": DQN_CONFIG,
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
