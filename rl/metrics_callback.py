"""
Custom callbacks for tracking Starfall-specific metrics during training.
Records: score, enemies killed, power-ups collected, lives lost, missed enemies.
"""

import os
import csv
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


class MetricsCallback(BaseCallback):
    """
    Callback to track and log task-specific metrics per episode.
    Saves to CSV for easy plotting.
    """

    CSV_HEADER = [
        "timestep", "episode", "reward", "length",
        "score", "kills", "power_ups", "lives_lost", "missed", "survived",
    ]

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name

        self.episode_rewards: List[float] = []
        self.episode_lengths: List[int] = []
        self.episode_scores: List[float] = []
        self.episode_kills: List[float] = []
        self.episode_power_ups: List[float] = []
        self.episode_lives_lost: List[float] = []

        self.csv_path: Optional[str] = None
        self.csv_file = None
        self.csv_writer = None

    def _on_training_start(self) -> None:
        """Initialize CSV file for logging."""
        os.makedirs(self.log_dir, exist_ok=True)
        self.csv_path = os.path.join(self.log_dir, f"{self.algo_name}_metrics.csv")

        self.csv_file = open(self.csv_path, "w", newline="")
        self.csv_writer = csv.writer(self.csv_file)
        self.csv_writer.writerow(self.CSV_HEADER)
        self.csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            # Monitor adds "episode" on the final step
            if not (done and "episode" in info):
                continue

            ep_reward = info["episode"]["r"]
            ep_length = info["episode"]["l"]
            score = info.get("score", 0)
            kills = info.get("enemies_killed", 0)
            power_ups = info.get("power_ups_collected", 0)
            lives_lost = info.get("lives_lost", 0)
            missed = info.get("enemies_missed", 0)
            survived = 1.0 if info.get("lives", 0) > 0 and not info.get("message") else 0.0

            self.episode_rewards.append(ep_reward)
            self.episode_lengths.append(ep_length)
            self.episode_scores.append(score)
            self.episode_kills.append(kills)
            self.episode_power_ups.append(power_ups)
            self.episode_lives_lost.append(lives_lost)

            if self.csv_writer:
                self.csv_writer.writerow([
                    self.num_timesteps,
                    len(self.episode_rewards),
                    ep_reward,
                    ep_length,
                    score,
                    kills,
                    power_ups,
                    lives_lost,
                    missed,
                    survived,
                ])
                self.csv_file.flush()

            if self.verbose > 0 and len(self.episode_rewards) % 10 == 0:
                avg_reward = sum(self.episode_rewards[-10:]) / 10
                print(f"[{self.algo_name}] Episode {len(self.episode_rewards)}, "
                      f"Timestep {self.num_timesteps}, "
                      f"Avg Reward (10 ep): {avg_reward:.2f}")

        return True

    def _on_training_end(self) -> None:
        """Cleanup CSV file."""
        if self.csv_file:
            self.csv_file.close()
            self.csv_file = None
            if self.verbose > 0:
                print(f"[MetricsCallback] Saved {len(self.episode_rewards)} episodes to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics."""
        if not self.episode_rewards:
            return {}

        return {
            "mean_reward": float(np.mean(self.episode_rewards)),
            "std_reward": float(np.std(self.episode_rewards)),
            "mean_length": float(np.mean(self.episode_lengths)),
            "total_episodes": len(self.episode_rewards),
            "mean_score": float(np.mean(self.episode_scores)),
            "mean_kills": float(np.mean(self.episode_kills)),
            "mean_power_ups": float(np.mean(self.episode_power_ups)),
            "mean_lives_lost": float(np.mean(self.episode_lives_lost)),
        }


class TensorboardMetricsCallback(BaseCallback):
    """
    Logs Starfall metrics to TensorBoard at the end of each episode.
    """

    def __init__(self, verbose: int = 0):
        super().__init__(verbose)

    def _on_step(self) -> bool:
        infos = self.locals.get("infos", [])
        dones = self.locals.get("dones", [])

        for info, done in zip(infos, dones):
            if done and "episode" in info and self.logger:
                self.logger.record("custom/episode_reward", info["episode"]["r"])
                self.logger.record("custom/episode_length", info["episode"]["l"])
                self.logger.record("custom/score", info.get("score", 0))
                self.logger.record("custom/kills", info.get("enemies_killed", 0))
                self.logger.record("custom/lives_lost", info.get("lives_lost", 0))

        return True
