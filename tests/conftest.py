import pytest

from game.starfall.config import SimConfig
from game.starfall.simulation import Simulation
from game.starfall.state import new_state

# Enemy spawner pushed far enough out that no test ever sees it fire
QUIET = {"enemy_spawn_interval": 10**9}


@pytest.fixture
def quiet_config():
    return SimConfig(**QUIET)


@pytest.fixture
def state(quiet_config):
    """Running state on an empty, spawn-free field"""
    s = new_state(quiet_config, seed=1234)
    s.running = True
    return s


@pytest.fixture
def sim(quiet_config):
    """Started simulation on a spawn-free field with shooting off"""
    s = Simulation(quiet_config, seed=99)
    s.restart()
    s.state.shooting_enabled = False
    return s
