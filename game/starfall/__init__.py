"""Starfall - arcade shooter simulation with an Arcade front-end and a Gymnasium env"""

from .audio import AudioHooks
from .config import SimConfig
from .entities import EnemyKind
from .shooter_env import ShooterEnv, run_random_episode
from .simulation import Simulation
from .state import SimState, Snapshot

__all__ = [
    'AudioHooks',
    'EnemyKind',
    'ShooterEnv',
    'SimConfig',
    'SimState',
    'Simulation',
    'Snapshot',
    'run_random_episode',
]
