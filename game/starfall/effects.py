"""
Explosion particles: burst creation and per-tick decay
"""

from __future__ import annotations

import math

from .entities import Particle
from .state import SimState
from .utils import hsl_to_rgb

FRICTION = 0.97
MIN_RADIUS = 0.5
FADE_LIFE = 30.0


def create_explosion(state: SimState, x: float, y: float) -> int:
    """Spawn a ring of 20-29 particles at (x, y); returns how many"""
    rng = state.rng
    count = 20 + int(math.floor(rng.random() * 10))
    step = math.pi * 2 / count
    for i in range(count):
        radius = rng.random() * 3.5 + 1.5
        hue = rng.random() * 60
        lightness = 0.60 + rng.random() * 0.30
        speed = rng.random() * 3.5 + 1.5
        angle = step * i + (rng.random() - 0.5) * 0.6
        life = 25 + rng.random() * 15
        decay = 0.96 + rng.random() * 0.02
        state.particles.append(Particle(
            x=x, y=y,
            radius=radius,
            color=hsl_to_rgb(hue, 1.0, lightness),
            speed=speed,
            angle=angle,
            life=life,
            decay=decay,
        ))
    return count


def update_particles(state: SimState):
    for p in state.particles:
        p.x += math.cos(p.angle) * p.speed
        p.y += math.sin(p.angle) * p.speed
        p.speed *= FRICTION
        p.life -= 1
        p.radius *= p.decay

    state.particles = [p for p in state.particles if p.life > 0 and p.radius >= MIN_RADIUS]


def particle_alpha(p: Particle) -> float:
    """Opacity in [0, 1]; full until the last FADE_LIFE ticks"""
    return min(1.0, max(0.0, p.life / FADE_LIFE))
