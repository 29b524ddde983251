import os

import pytest

pytest.importorskip("stable_baselines3")

from rl.configs.shooter_config import TRAINING_CONFIG  # noqa: E402
from rl.train import output_dirs  # noqa: E402


def test_output_dirs_follow_training_config(monkeypatch):
    monkeypatch.setitem(TRAINING_CONFIG, "model_dir", "m")
    monkeypatch.setitem(TRAINING_CONFIG, "log_dir", "l")
    monkeypatch.setitem(TRAINING_CONFIG, "tensorboard_log", "tb")
    assert output_dirs("ppo") == (
        os.path.join("m", "ppo"),
        os.path.join("l", "ppo"),
        os.path.join("tb", "ppo"),
    )


def test_default_output_dirs():
    save_dir, log_dir, tb_dir = output_dirs()
    assert save_dir == os.path.join("./models", "ppo")
    assert log_dir == os.path.join("./logs", "ppo")
    assert tb_dir == os.path.join("./tensorboard_logs", "ppo")
