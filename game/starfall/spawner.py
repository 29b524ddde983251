"""
Creation of enemies, player volleys, enemy bullets and power-up drops
"""

from __future__ import annotations

import bisect
from itertools import accumulate
from typing import List, Sequence

import numpy as np

from .audio import safe_trigger
from .entities import (
    ENEMY_KINDS,
    Bullet,
    DasherMotion,
    Enemy,
    EnemyBullet,
    EnemyKind,
    NormalMotion,
    PowerUp,
    ShooterMotion,
    WaverMotion,
)
from .state import SimState


def roll_enemy_kind(rng: np.random.Generator, weights: Sequence[float]) -> EnemyKind:
    """One uniform draw against the cumulative weight thresholds"""
    thresholds = list(accumulate(weights))
    idx = bisect.bisect_right(thresholds, rng.random())
    return ENEMY_KINDS[min(idx, len(ENEMY_KINDS) - 1)]


def make_enemy(state: SimState, kind: EnemyKind, x: float, y: float) -> Enemy:
    """Build an enemy of `kind`, drawing its randomized parameters"""
    cfg = state.config
    rng = state.rng
    base = cfg.enemy_speed_base
    color = cfg.enemy_colors[kind.value]

    if kind is EnemyKind.NORMAL:
        health, speed = 1, base + rng.random() * 1.0
        motion = NormalMotion()
    elif kind is EnemyKind.SHOOTER:
        health, speed = 2, base + rng.random() * 0.8
        motion = ShooterMotion(shoot_cooldown=rng.random() * 100 + 50)
    elif kind is EnemyKind.WAVER:
        health, speed = 1, base * 0.9 + rng.random() * 0.4
        motion = WaverMotion(
            initial_x=x,
            amplitude=30 + rng.random() * 30,
            frequency=0.02 + rng.random() * 0.015,
        )
    elif kind is EnemyKind.DASHER:
        health, speed = 1, base * 0.6
        motion = DasherMotion(
            dash_speed=base * 4.5,
            charge_time=80 + rng.random() * 50,
            original_color=color,
        )
    else:
        raise ValueError(f"Unknown enemy kind: {kind!r}")

    return Enemy(
        x=x, y=y,
        kind=kind,
        health=health,
        color=color,
        speed=speed,
        motion=motion,
        width=cfg.enemy_width,
        height=cfg.enemy_height,
    )


def spawn_enemy(state: SimState) -> Enemy:
    """Drop one enemy just above the top edge at a random column"""
    cfg = state.config
    x = state.rng.random() * (state.width - cfg.enemy_width)
    y = -cfg.enemy_height
    kind = roll_enemy_kind(state.rng, cfg.enemy_weights)
    enemy = make_enemy(state, kind, x, y)
    state.enemies.append(enemy)
    return enemy


def tick_enemy_spawner(state: SimState):
    if not state.running or state.game_over:
        return
    state.enemy_spawn_timer += 1
    if state.enemy_spawn_timer >= state.config.enemy_spawn_interval:
        spawn_enemy(state)
        state.enemy_spawn_timer = 0


def fire_player_shots(state: SimState) -> List[Bullet]:
    """Fire one volley if allowed; the spread widens with power level"""
    if not state.running or not state.shooting_enabled or state.shoot_cooldown > 0 or state.game_over:
        return []

    cfg = state.config
    p = state.player
    cx = p.x + p.width / 2

    def bullet(x: float, angle: float = 0.0) -> Bullet:
        return Bullet(x=x, y=p.y, radius=cfg.bullet_radius, speed=cfg.bullet_speed, angle=angle)

    if p.power_level <= 0:
        volley = [bullet(cx)]
    elif p.power_level == 1:
        volley = [bullet(cx - 5, -0.05), bullet(cx + 5, 0.05)]
    else:
        volley = [bullet(cx), bullet(cx - 8, -0.15), bullet(cx + 8, 0.15)]

    state.bullets.extend(volley)
    state.shoot_cooldown = cfg.shoot_interval
    state.events["shot"] += 1
    safe_trigger(state.audio.shot)
    return volley


def spawn_enemy_bullet(state: SimState, enemy: Enemy) -> EnemyBullet:
    cfg = state.config
    shot = EnemyBullet(
        x=enemy.x + enemy.width / 2,
        y=enemy.y + enemy.height,
        radius=cfg.enemy_bullet_radius,
        speed=cfg.enemy_bullet_speed,
    )
    state.enemy_bullets.append(shot)
    return shot


def maybe_drop_power_up(state: SimState, enemy: Enemy) -> bool:
    """Roll the drop for a destroyed enemy; only shooters ever drop"""
    if enemy.kind is not EnemyKind.SHOOTER:
        return False
    if state.rng.random() >= state.config.power_up_drop_chance:
        return False
    cx, cy = enemy.center
    state.power_ups.append(PowerUp(
        x=cx, y=cy,
        radius=state.config.power_up_radius,
        speed=state.config.power_up_speed,
    ))
    return True
