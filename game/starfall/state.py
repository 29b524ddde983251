"""
Simulation state shared by every subsystem
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .audio import AudioHooks
from .config import SimConfig
from .entities import Bullet, Enemy, EnemyBullet, Particle, Player, PowerUp
from .utils import clamp, make_rng

logger = logging.getLogger(__name__)

EVENT_KEYS = ("shot", "kill", "score", "power_up", "hit", "miss")


def empty_events() -> Dict[str, float]:
    return {key: 0.0 for key in EVENT_KEYS}


@dataclass(frozen=True)
class Snapshot:
    """Read-only status handed to the HUD after each frame"""
    score: int
    lives: int
    power_level: int
    max_power_level: int
    enemies_missed: int
    max_enemies_missed: int
    shooting_enabled: bool

    def status_lines(self) -> List[str]:
        power = "MAX" if self.power_level >= self.max_power_level else str(self.power_level)
        return [
            f"Score: {self.score} | Lives: {self.lives} | Power: {power}",
            f"Missed: {self.enemies_missed}/{self.max_enemies_missed} | "
            f"Shooting: {'ON' if self.shooting_enabled else 'OFF'}",
        ]


@dataclass
class InputState:
    left: bool = False
    right: bool = False
    pointer_active: bool = False


@dataclass
class SimState:
    """Everything one run mutates; passed explicitly to each subsystem"""
    config: SimConfig
    rng: np.random.Generator
    audio: AudioHooks
    width: float
    height: float
    player: Player
    bullets: List[Bullet] = field(default_factory=list)
    enemy_bullets: List[EnemyBullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    power_ups: List[PowerUp] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    inputs: InputState = field(default_factory=InputState)
    score: int = 0
    enemies_missed: int = 0
    enemy_spawn_timer: int = 0
    shoot_cooldown: int = 0
    shooting_enabled: bool = True
    running: bool = False
    game_over: bool = False
    message: Optional[str] = None
    final_score: Optional[int] = None
    tick: int = 0
    # per-step counters, cleared by the orchestrator
    events: Dict[str, float] = field(default_factory=empty_events)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            score=self.score,
            lives=self.player.lives,
            power_level=self.player.power_level,
            max_power_level=self.config.max_power_level,
            enemies_missed=self.enemies_missed,
            max_enemies_missed=self.config.max_enemies_missed,
            shooting_enabled=self.shooting_enabled,
        )


def new_player(config: SimConfig, width: float, height: float) -> Player:
    return Player(
        x=width / 2 - config.player_width / 2,
        y=height - config.player_bottom_offset,
        width=config.player_width,
        height=config.player_height,
        speed=config.player_speed,
        lives=config.start_lives,
    )


def new_state(
    config: Optional[SimConfig] = None,
    rng: Optional[np.random.Generator] = None,
    audio: Optional[AudioHooks] = None,
    seed: Optional[int] = None,
) -> SimState:
    """Fresh, not-yet-running state sized to the configured playfield"""
    config = config or SimConfig()
    return SimState(
        config=config,
        rng=rng if rng is not None else make_rng(seed),
        audio=audio or AudioHooks(),
        width=config.width,
        height=config.height,
        player=new_player(config, config.width, config.height),
    )


def reset_state(state: SimState):
    """Full reset for a new run; keeps bounds, generator and collaborators"""
    state.player = new_player(state.config, state.width, state.height)
    state.bullets.clear()
    state.enemy_bullets.clear()
    state.enemies.clear()
    state.power_ups.clear()
    state.particles.clear()
    state.score = 0
    state.enemies_missed = 0
    state.enemy_spawn_timer = 0
    state.shoot_cooldown = 0
    state.shooting_enabled = True
    state.game_over = False
    state.message = None
    state.final_score = None
    state.tick = 0
    state.events = empty_events()


def resize(state: SimState, width: float, height: float):
    """Apply new playfield bounds and pull the player back inside them"""
    state.width = width
    state.height = height
    p = state.player
    p.x = clamp(p.x, 0.0, max(0.0, width - p.width))
    p.y = height - state.config.player_bottom_offset


def terminate(state: SimState, message: str) -> bool:
    """End the run once; returns False if it had already ended"""
    if state.game_over:
        return False
    state.game_over = True
    state.running = False
    state.message = message
    state.final_score = state.score
    logger.info("Run over at tick %d: %s (score %d)", state.tick, message, state.score)
    return True
