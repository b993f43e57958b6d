"""
Training script for the arcade environments using Stable-Baselines3
Supports PPO and DQN on either game with metrics tracking.
"""

import os
import argparse
from typing import Optional

from stable_baselines3 import PPO, DQN
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.flappy import FlappyEnv
from game.pacman import PacmanEnv
from rl.configs.arcade_config import ENV_CONFIGS, ALGO_CONFIGS, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback

ENVS = {
    "flappy": FlappyEnv,
    "pacman": PacmanEnv,
}

ALGOS = {
    "ppo": PPO,
    "dqn": DQN,
}


def make_env(game: str, render_mode: Optional[str] = None, seed: Optional[int] = None):
    """Factory function to create the environment"""
    if game not in ENVS:
        raise ValueError(f"Unknown game: {game}")

    def _init():
        env = ENVS[game](render_mode=render_mode, **ENV_CONFIGS[game])
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def train(
    game: str,
    algo: str = "ppo",
    total_timesteps: int = None,
    n_envs: int = 4,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
):
    """Train an agent on one of the games"""

    if algo not in ALGOS:
        raise ValueError(f"Unknown algorithm: {algo}")

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    run_name = f"{algo}_{game}"
    save_dir = save_dir or os.path.join(TRAINING_CONFIG["model_dir"], run_name)
    log_dir = log_dir or os.path.join(TRAINING_CONFIG["log_dir"], run_name)
    tensorboard_log = tensorboard_log or os.path.join(TRAINING_CONFIG["tensorboard_log"], run_name)

    # DQN uses a single environment
    if algo == "dqn":
        n_envs = 1

    # Create directories
    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training {algo.upper()} on {game} for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environment(s)")
    print(f"{'='*60}\n")

    # Create vectorized environments
    env = DummyVecEnv([make_env(game, seed=i) for i in range(n_envs)])
    eval_env = DummyVecEnv([make_env(game, seed=100)])

    # Normalize observations and rewards (PPO only)
    if algo == "ppo":
        env = VecNormalize(env, norm_obs=True, norm_reward=True)
        eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    # Callbacks
    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix=run_name,
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG["eval_freq"] // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        run_name=run_name,
        verbose=1,
    )

    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = ALGOS[algo](
        env=env,
        tensorboard_log=tensorboard_log,
        **ALGO_CONFIGS[algo]
    )

    # Train
    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    # Save final model
    final_path = os.path.join(save_dir, f"{run_name}_final")
    model.save(final_path)
    if isinstance(env, VecNormalize):
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"{algo.upper()} training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.2f} (best {summary['max_score']})")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on an arcade game")
    parser.add_argument(
        "game",
        type=str,
        choices=sorted(ENVS),
        help="Game to train on",
    )
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )

    args = parser.parse_args()

    if args.algo == "all":
        print("Training all algorithms sequentially...")
        for algo in ALGOS:
            train(args.game, algo, total_timesteps=args.timesteps, n_envs=args.n_envs)
    else:
        train(args.game, args.algo, total_timesteps=args.timesteps, n_envs=args.n_envs)


if __name__ == "__main__":
    main()
