"""
Simulation - the per-frame orchestrator
---------------------------------------
Owns one SimState and runs the fixed pipeline each frame:

    input motion -> shoot -> bullets -> power-ups -> spawn enemies
    -> enemies -> enemy bullets -> collisions -> particles

Rendering happens outside, after `step` returns. When a phase ends the
run, the remaining phases of that frame are skipped and no further frame
does any work until `restart`.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np

from .audio import AudioHooks
from .behavior import (
    move_player_to,
    update_bullets,
    update_enemies,
    update_enemy_bullets,
    update_player,
    update_power_ups,
)
from .collisions import check_collisions
from .config import SimConfig
from .effects import update_particles
from .spawner import fire_player_shots, tick_enemy_spawner
from .state import SimState, Snapshot, empty_events, new_state, reset_state, resize
from .utils import make_rng

logger = logging.getLogger(__name__)

GameOverCallback = Callable[[str, int], None]

PIPELINE = (
    update_player,
    fire_player_shots,
    update_bullets,
    update_power_ups,
    tick_enemy_spawner,
    update_enemies,
    update_enemy_bullets,
    check_collisions,
    update_particles,
)

KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_TOGGLE = "toggle"
KEY_RESTART = "restart"


class Simulation:
    """One game session that can be restarted any number of times"""

    def __init__(
        self,
        config: Optional[SimConfig] = None,
        seed: Optional[int] = None,
        audio: Optional[AudioHooks] = None,
        on_game_over: Optional[GameOverCallback] = None,
    ):
        self.config = config or SimConfig()
        self.state: SimState = new_state(self.config, audio=audio, seed=seed)
        self.on_game_over = on_game_over

    # ----------------------------
    # Run control
    # ----------------------------

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def game_over(self) -> bool:
        return self.state.game_over

    def reseed(self, seed_or_rng=None):
        """Swap the generator; accepts a seed or a numpy Generator"""
        if isinstance(seed_or_rng, np.random.Generator):
            self.state.rng = seed_or_rng
        else:
            self.state.rng = make_rng(seed_or_rng)

    def set_audio(self, audio: AudioHooks):
        self.state.audio = audio

    def restart(self):
        """Start (or start over) a run with everything reset"""
        reset_state(self.state)
        self.state.running = True
        logger.info("Run started (%dx%d)", self.state.width, self.state.height)

    def step(self, width: Optional[float] = None, height: Optional[float] = None) -> bool:
        """Advance one frame; returns whether the run is still going"""
        state = self.state
        if not state.running:
            return False

        if width is not None and height is not None and (width, height) != (state.width, state.height):
            resize(state, width, height)

        state.events = empty_events()
        state.tick += 1
        for phase in PIPELINE:
            phase(state)
            if not state.running:
                break

        # only the frame that ended the run gets here with running=False
        if state.game_over and self.on_game_over is not None:
            self.on_game_over(state.message, state.final_score)
        return state.running

    # ----------------------------
    # Presentation / input
    # ----------------------------

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()

    @property
    def final_message(self) -> Optional[str]:
        if self.state.message is None:
            return None
        return f"{self.state.message}\nFinal score: {self.state.final_score}"

    def resize(self, width: float, height: float):
        """Apply new bounds without advancing the simulation"""
        resize(self.state, width, height)

    def key_down(self, key: str):
        state = self.state
        if key == KEY_RESTART:
            if not state.running:
                self.restart()
            return
        if not state.running:
            return
        if key == KEY_LEFT:
            state.inputs.left = True
        elif key == KEY_RIGHT:
            state.inputs.right = True
        elif key == KEY_TOGGLE:
            state.shooting_enabled = not state.shooting_enabled

    def key_up(self, key: str):
        if key == KEY_LEFT:
            self.state.inputs.left = False
        elif key == KEY_RIGHT:
            self.state.inputs.right = False

    def pointer_move(self, x) -> bool:
        """Absolute pointer x in playfield pixels; ignored unless a run is live"""
        state = self.state
        try:
            x = float(x)
        except (TypeError, ValueError):
            return False
        if not math.isfinite(x) or not state.running:
            return False
        state.inputs.pointer_active = True
        move_player_to(state, x)
        return True

    def pointer_leave(self):
        self.state.inputs.pointer_active = False

