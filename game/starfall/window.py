"""
Arcade front-end: rendering, input mapping and sound for a Simulation.

The simulation works in top-left, y-down playfield coordinates; arcade
draws bottom-left, y-up, so every draw call flips y against the window
height.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Optional

import arcade
import numpy as np

from .audio import AudioHooks
from .effects import particle_alpha
from .entities import DashState, EnemyKind
from .simulation import KEY_LEFT, KEY_RESTART, KEY_RIGHT, KEY_TOGGLE, Simulation

logger = logging.getLogger(__name__)


class ArcadeAudio(AudioHooks):
    """Plays arcade's bundled sounds; silent until `initialize` succeeds"""

    SOUNDS = {
        "shot": ":resources:sounds/laser1.wav",
        "enemy_destroyed": ":resources:sounds/explosion2.wav",
        "power_up": ":resources:sounds/upgrade1.wav",
        "player_hit": ":resources:sounds/hit3.wav",
    }
    VOLUMES = {"shot": 0.15, "enemy_destroyed": 0.4, "power_up": 0.5, "player_hit": 0.5}

    def __init__(self):
        self._sounds = {}
        self.initialized = False

    def initialize(self) -> bool:
        if self.initialized:
            return True
        try:
            self._sounds = {name: arcade.load_sound(path) for name, path in self.SOUNDS.items()}
        except Exception as exc:
            logger.warning("Audio disabled: %s", exc)
            self._sounds = {}
            return False
        self.initialized = True
        return True

    def _play(self, name: str):
        sound = self._sounds.get(name)
        if sound is not None:
            arcade.play_sound(sound, volume=self.VOLUMES[name])

    def shot(self):
        self._play("shot")

    def enemy_destroyed(self):
        self._play("enemy_destroyed")

    def power_up(self):
        self._play("power_up")

    def player_hit(self):
        self._play("player_hit")


class Starfield:
    """Background stars drifting down and wrapping to the top"""

    def __init__(self, width: float, height: float, count: int = 100, speed: float = 0.5,
                 rng: Optional[np.random.Generator] = None):
        self.count = count
        self.speed = speed
        self.rng = rng if rng is not None else np.random.default_rng()
        self.reset(width, height)

    def reset(self, width: float, height: float):
        self.width = width
        self.height = height
        self.x = self.rng.random(self.count) * width
        self.y = self.rng.random(self.count) * height
        self.radius = self.rng.random(self.count) * 1.5
        self.alpha = self.rng.random(self.count) * 0.5 + 0.5

    def advance(self):
        self.y += self.speed
        wrapped = self.y > self.height
        self.y[wrapped] = 0.0
        self.x[wrapped] = self.rng.random(int(wrapped.sum())) * self.width


class ShooterWindow(arcade.Window):
    """Arcade window that renders a Simulation and, when interactive, drives it"""

    BG = (10, 10, 26)
    HUD_C = (220, 220, 220)
    OVERLAY_C = (0, 0, 0, 170)
    PLAYER_COLORS = {0: (76, 175, 80), 1: (102, 187, 106), 2: (129, 199, 132)}
    COCKPIT_C = (135, 206, 235)
    DOME_C = (255, 255, 255)

    def __init__(self, sim: Simulation, width: Optional[int] = None, height: Optional[int] = None,
                 title: str = "Starfall", interactive: bool = True, visible: bool = True,
                 audio: Optional[ArcadeAudio] = None):
        width = int(width or sim.state.width)
        height = int(height or sim.state.height)
        super().__init__(width, height, title, resizable=interactive, visible=visible)
        self.sim = sim
        self.interactive = interactive
        self.audio = audio
        self.starfield = Starfield(width, height)
        self.overlay_text: Optional[str] = "Press ENTER or click to start"
        if interactive:
            sim.on_game_over = self._show_game_over
            self.set_mouse_visible(True)
        sim.resize(width, height)

    # ----------------------------
    # Frame
    # ----------------------------

    def on_update(self, delta_time: float):
        if not self.interactive or not self.sim.running:
            return
        self.starfield.advance()
        self.sim.step(self.width, self.height)

    def on_draw(self):
        self.clear(color=self.BG)
        self._draw_stars()

        state = self.sim.state
        if state.running or state.game_over:
            self._draw_player()
            self._draw_bullets()
            self._draw_power_ups()
            self._draw_enemies()
            self._draw_enemy_bullets()
            self._draw_particles()
        self._draw_hud()
        if self.overlay_text:
            self._draw_overlay(self.overlay_text)

    def _sy(self, y: float) -> float:
        return self.height - y

    def _draw_stars(self):
        sf = self.starfield
        for x, y, r, a in zip(sf.x, sf.y, sf.radius, sf.alpha):
            if r > 0.05:
                arcade.draw_circle_filled(float(x), self._sy(float(y)), float(r), (255, 255, 255, int(a * 255)))

    def _draw_player(self):
        p = self.sim.state.player
        if p.invincible and (p.invincible_timer // 10) % 2 == 0:
            return  # blink
        color = self.PLAYER_COLORS.get(p.power_level, self.PLAYER_COLORS[2])
        arcade.draw_triangle_filled(
            p.x + p.width / 2, self._sy(p.y),
            p.x, self._sy(p.y + p.height),
            p.x + p.width, self._sy(p.y + p.height),
            color,
        )
        arcade.draw_circle_filled(p.x + p.width / 2, self._sy(p.y + p.height * 0.6), p.width * 0.2, self.COCKPIT_C)

    def _draw_bullets(self):
        color = self.sim.config.bullet_color
        for b in self.sim.state.bullets:
            arcade.draw_circle_filled(b.x, self._sy(b.y), b.radius, color)

    def _draw_power_ups(self):
        color = self.sim.config.power_up_color
        for item in self.sim.state.power_ups:
            arcade.draw_circle_filled(item.x, self._sy(item.y), item.radius, color)
            arcade.draw_text("P", item.x, self._sy(item.y), arcade.color.WHITE, 8,
                             anchor_x="center", anchor_y="center", bold=True)

    def _draw_enemies(self):
        pulse = abs(math.sin(time.time() * 5))
        for e in self.sim.state.enemies:
            cx, cy = e.center
            sy = self._sy(cy)
            arcade.draw_ellipse_filled(cx, sy, e.width, e.height * 2 / 3, e.color)
            arcade.draw_ellipse_filled(cx, sy + 3, e.width / 2, e.height / 3, self.DOME_C)
            if e.kind is EnemyKind.DASHER and e.motion.state is DashState.CHARGING:
                border = 1 + pulse * 2
                arcade.draw_ellipse_outline(
                    cx, sy, e.width + border * 2, e.height * 2 / 3 + border * 2,
                    (255, 152, 0, int((0.3 + pulse * 0.4) * 255)), border,
                )

    def _draw_enemy_bullets(self):
        color = self.sim.config.enemy_bullet_color
        for b in self.sim.state.enemy_bullets:
            arcade.draw_circle_filled(b.x, self._sy(b.y), b.radius, color)

    def _draw_particles(self):
        for p in self.sim.state.particles:
            alpha = int(particle_alpha(p) * 255)
            if alpha > 0:
                arcade.draw_circle_filled(p.x, self._sy(p.y), p.radius, (*p.color, alpha))

    def _draw_hud(self):
        lines = self.sim.snapshot().status_lines()
        for i, line in enumerate(lines):
            arcade.draw_text(line, 8, self.height - 18 - i * 16, self.HUD_C, 11)

    def _draw_overlay(self, text: str):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.OVERLAY_C)
        arcade.draw_text(
            text, self.width / 2, self.height / 2, arcade.color.WHITE, 16,
            anchor_x="center", anchor_y="center", align="center",
            multiline=True, width=int(self.width * 0.9),
        )

    # ----------------------------
    # Events
    # ----------------------------

    def _show_game_over(self, message: str, score: int):
        self.overlay_text = f"{message}\nFinal score: {score}\n\nPress ENTER to play again"
        self.set_mouse_visible(True)

    def _start(self):
        if self.audio is not None:
            self.audio.initialize()
        self.sim.key_down(KEY_RESTART)
        if self.sim.running:
            self.overlay_text = None
            self.set_mouse_visible(False)

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol in (arcade.key.ENTER, arcade.key.RETURN):
            self._start()
        elif symbol == arcade.key.LEFT:
            self.sim.key_down(KEY_LEFT)
        elif symbol == arcade.key.RIGHT:
            self.sim.key_down(KEY_RIGHT)
        elif symbol == arcade.key.SPACE:
            self.sim.key_down(KEY_TOGGLE)
        elif symbol == arcade.key.ESCAPE:
            self.close()

    def on_key_release(self, symbol: int, modifiers: int):
        if symbol == arcade.key.LEFT:
            self.sim.key_up(KEY_LEFT)
        elif symbol == arcade.key.RIGHT:
            self.sim.key_up(KEY_RIGHT)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if self.interactive and not self.sim.running:
            self._start()

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        if self.interactive:
            self.sim.pointer_move(x)

    def on_mouse_leave(self, x: int, y: int):
        self.sim.pointer_leave()

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        self.sim.resize(width, height)
        self.starfield.reset(width, height)


def run_game(sim: Optional[Simulation] = None, width: int = 400, height: int = 550, mute: bool = False):
    """Open the interactive window and hand control to arcade's loop"""
    sim = sim or Simulation()
    audio = None if mute else ArcadeAudio()
    if audio is not None:
        sim.set_audio(audio)
    ShooterWindow(sim, width, height, audio=audio)
    arcade.run()
