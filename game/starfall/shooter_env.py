"""
ShooterEnv - the Starfall simulation as a Gymnasium environment
---------------------------------------------------------------
- Same per-frame pipeline the arcade window drives (one env step = one frame)
- Gymnasium API
- MultiDiscrete action space: [move(3), shoot(2)]
- Vector observation: player state + top-K nearest enemies
  + top-M nearest enemy bullets + nearest power-up
- Reward from the per-frame event counters of the simulation

Quick test:
    python -m game.starfall.shooter_env
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import SimConfig
from .entities import ENEMY_KINDS
from .simulation import Simulation
from .utils import clamp, seed_everything

logger = logging.getLogger(__name__)

DEFAULT_REWARDS = {
    "R_SCORE": 0.1,     # per point of score
    "R_POWER_UP": 1.0,
    "R_HIT": 3.0,       # penalty per life lost
    "R_MISS": 0.5,      # penalty per enemy that got past
    "R_SHOT": 0.0,
    "R_TIME": 0.0,
    "R_DEATH": 5.0,
}

_KIND_CODE = {kind: i for i, kind in enumerate(ENEMY_KINDS)}


class ShooterEnv(gym.Env):
    """Starfall arcade shooter environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        obs_mode: str = "vector",
        width: int = 400,
        height: int = 550,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        m_bullets: int = 3,
        reward_config: Optional[Dict[str, float]] = None,
        sim_config: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()

        assert obs_mode in ("vector",), "Only 'vector' observations are implemented."
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.obs_mode = obs_mode

        self.width = width
        self.height = height
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        overrides = dict(sim_config or {})
        overrides.update(width=width, height=height)
        self.sim = Simulation(SimConfig.from_dict(overrides))

        # move: 0 stay, 1 left, 2 right
        # shoot: 0 off, 1 on
        self.action_space = spaces.MultiDiscrete([3, 2])

        # Player: x(1) lives(1) power(1) invincible(1) cooldown(1)
        # Each enemy: rel pos(2) kind(1) health(1)
        # Each enemy bullet: rel pos(2)
        # Nearest power-up: rel pos(2)
        obs_dim = 5 + (self.k_enemies * 4) + (self.m_bullets * 2) + 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self._step_count = 0
        self._totals: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        self.sim.reseed(self.np_random)
        self.sim.restart()
        self._step_count = 0
        self._totals = {"kills": 0.0, "power_ups": 0.0, "lives_lost": 0.0, "missed": 0.0}

        return self._get_obs(), self._get_info()

    def step(self, action):
        move, shoot = int(action[0]), int(action[1])
        inputs = self.sim.state.inputs
        inputs.left = move == 1
        inputs.right = move == 2
        self.sim.state.shooting_enabled = bool(shoot)

        self.sim.step()
        events = self.sim.state.events
        self._totals["kills"] += events["kill"]
        self._totals["power_ups"] += events["power_up"]
        self._totals["lives_lost"] += events["hit"]
        self._totals["missed"] += events["miss"]

        reward = self._compute_reward(events)

        terminated = self.sim.game_over
        self._step_count += 1
        truncated = self._step_count >= self.max_steps and not terminated

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        state = self.sim.state
        cfg = state.config
        p = state.player
        px, py = p.center

        obs_parts: List[float] = [
            (px / state.width) * 2 - 1,
            (p.lives / cfg.start_lives) * 2 - 1,
            (p.power_level / max(1, cfg.max_power_level)) * 2 - 1,
            1.0 if p.invincible else -1.0,
            clamp(state.shoot_cooldown / cfg.shoot_interval * 2 - 1, -1, 1),
        ]

        def rel(x: float, y: float):
            return [clamp((x - px) / state.width, -1, 1), clamp((y - py) / state.height, -1, 1)]

        def dist2(x: float, y: float) -> float:
            return (x - px) ** 2 + (y - py) ** 2

        enemies = sorted(state.enemies, key=lambda e: dist2(*e.center))
        for i in range(self.k_enemies):
            if i < len(enemies):
                e = enemies[i]
                obs_parts += rel(*e.center)
                obs_parts += [_KIND_CODE[e.kind] / 3 * 2 - 1, clamp(e.health / 2, 0, 1)]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        shots = sorted(state.enemy_bullets, key=lambda b: dist2(b.x, b.y))
        for i in range(self.m_bullets):
            if i < len(shots):
                obs_parts += rel(shots[i].x, shots[i].y)
            else:
                obs_parts += [0.0, 0.0]

        if state.power_ups:
            item = min(state.power_ups, key=lambda u: dist2(u.x, u.y))
            obs_parts += rel(item.x, item.y)
        else:
            obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self, events: Dict[str, float]) -> float:
        r = self.rewards
        reward = 0.0
        reward += r["R_SCORE"] * events.get("score", 0.0)
        reward += r["R_POWER_UP"] * events.get("power_up", 0.0)
        reward -= r["R_HIT"] * events.get("hit", 0.0)
        reward -= r["R_MISS"] * events.get("miss", 0.0)
        reward -= r["R_SHOT"] * events.get("shot", 0.0)
        reward -= r["R_TIME"]
        if self.sim.game_over:
            reward -= r["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        snap = self.sim.snapshot()
        return {
            "score": snap.score,
            "lives": snap.lives,
            "power_level": snap.power_level,
            "enemies_missed": snap.enemies_missed,
            "enemies_killed": self._totals.get("kills", 0.0),
            "power_ups_collected": self._totals.get("power_ups", 0.0),
            "lives_lost": self._totals.get("lives_lost", 0.0),
            "num_enemies": len(self.sim.state.enemies),
            "num_enemy_bullets": len(self.sim.state.enemy_bullets),
            "message": self.sim.state.message,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import ShooterWindow

            self._window = ShooterWindow(
                self.sim, self.width, self.height,
                title="Starfall - ShooterEnv",
                interactive=False,
                visible=self.render_mode == "human",
            )
            self._window.overlay_text = None

        self._window.switch_to()
        self._window.dispatch_events()
        self._window.starfield.advance()
        self._window.on_draw()

        if self.render_mode == "human":
            self._window.flip()
            return None
        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        import arcade

        image = arcade.get_image(0, 0, self.width, self.height)
        return np.asarray(image.convert("RGB"), dtype=np.uint8)

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: int = 42) -> float:
    """Run a random episode and return its total reward"""
    env = ShooterEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    logger.info("Random episode: return %.2f, score %d, %s",
                total, info["score"], info["message"] or "truncated")
    env.close()
    return total


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_random_episode(render=True)
