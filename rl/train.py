"""
Training script for the Starfall environment using Stable-Baselines3 PPO,
with per-episode Starfall metrics written to CSV and TensorBoard.
"""

import os
import argparse
import logging
from typing import Optional

from stable_baselines3 import PPO
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.starfall import ShooterEnv
from rl.configs.shooter_config import ENV_CONFIG, PPO_CONFIG, REWARD_CONFIGS, TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


def make_env(seed: Optional[int] = None, reward_name: str = "baseline"):
    """Factory function to create the environment"""
    def _init():
        env = ShooterEnv(reward_config=REWARD_CONFIGS[reward_name], **ENV_CONFIG)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def output_dirs(algo: str = "ppo"):
    """Model, log and TensorBoard directories for `algo` under the configured roots"""
    return (
        os.path.join(TRAINING_CONFIG["model_dir"], algo),
        os.path.join(TRAINING_CONFIG["log_dir"], algo),
        os.path.join(TRAINING_CONFIG["tensorboard_log"], algo),
    )


def train_ppo(
    total_timesteps: int = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    n_envs: int = 4,
    reward_name: str = "baseline",
):
    """Train PPO agent on the Starfall environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]

    default_save, default_log, default_tb = output_dirs("ppo")
    save_dir = save_dir or default_save
    log_dir = log_dir or default_log
    tensorboard_log = tensorboard_log or default_tb

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    print(f"\n{'='*60}")
    print(f"Training PPO for {total_timesteps:,} timesteps...")
    print(f"Using {n_envs} parallel environments, reward config '{reward_name}'")
    print(f"{'='*60}\n")

    env = DummyVecEnv([make_env(seed=i, reward_name=reward_name) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100, reward_name=reward_name)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix="ppo_starfall",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG.get("eval_freq", 10_000) // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name="ppo",
        verbose=1,
    )

    tb_callback = TensorboardMetricsCallback(verbose=0)

    model = PPO(
        env=env,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )

    model.learn(
        total_timesteps=total_timesteps,
        callback=[checkpoint_callback, eval_callback, metrics_callback, tb_callback],
    )

    final_path = os.path.join(save_dir, "ppo_starfall_final")
    model.save(final_path)
    env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    print(f"\n{'='*60}")
    print(f"PPO Training complete! Model saved to {final_path}")
    summary = metrics_callback.get_summary()
    if summary:
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Score: {summary['mean_score']:.1f}")
        print(f"Total Episodes: {summary['total_episodes']}")
    print(f"{'='*60}\n")

    return model, metrics_callback


def main():
    parser = argparse.ArgumentParser(description="Train a PPO agent on Starfall")
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
        help="Number of parallel environments (default: 4)",
    )
    parser.add_argument(
        "--reward",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping config (default: baseline)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity for the game modules (default: WARNING)",
    )

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level)

    train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs, reward_name=args.reward)


if __name__ == "__main__":
    main()
