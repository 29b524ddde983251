"""
Per-tick motion rules for the player, projectiles, power-ups and the
four enemy kinds.

Enemy kinds are small state machines:
- normal:  constant descent
- shooter: constant descent, fires on an independent cooldown
- waver:   constant descent, x follows a sine of its own y
- dasher:  slow charge, then a one-way switch to a fast dash that
           flashes white for its first ticks
"""

from __future__ import annotations

import math

from .entities import DashState, Enemy, EnemyKind
from .spawner import spawn_enemy_bullet
from .state import SimState, terminate
from .utils import clamp


def update_player(state: SimState):
    """Keyboard movement plus the invincibility countdown"""
    p = state.player
    inputs = state.inputs
    if not inputs.pointer_active:
        max_x = max(0.0, state.width - p.width)
        if inputs.left and p.x > 0:
            p.x = clamp(p.x - p.speed, 0.0, max_x)
        if inputs.right and p.x < max_x:
            p.x = clamp(p.x + p.speed, 0.0, max_x)

    if p.invincible:
        p.invincible_timer -= 1
        if p.invincible_timer <= 0:
            p.invincible_timer = 0
            p.invincible = False


def move_player_to(state: SimState, pointer_x: float):
    """Centre the player under an absolute pointer x, kept inside the bounds"""
    p = state.player
    p.x = clamp(pointer_x - p.width / 2, 0.0, max(0.0, state.width - p.width))


def update_bullets(state: SimState):
    if state.shoot_cooldown > 0:
        state.shoot_cooldown -= 1

    drift = state.config.drift_factor
    for b in state.bullets:
        if b.angle:
            b.x += math.sin(b.angle) * b.speed * drift
        b.y -= b.speed

    state.bullets = [b for b in state.bullets if b.y >= -b.radius]


def update_power_ups(state: SimState):
    for item in state.power_ups:
        item.y += item.speed
    state.power_ups = [i for i in state.power_ups if i.y <= state.height + i.radius]


def update_enemy_bullets(state: SimState):
    for b in state.enemy_bullets:
        b.y += b.speed
    state.enemy_bullets = [b for b in state.enemy_bullets if b.y <= state.height + b.radius]


# ----------------------------
# Enemies
# ----------------------------

def _move_shooter(state: SimState, enemy: Enemy):
    enemy.y += enemy.speed
    motion = enemy.motion
    motion.shoot_cooldown -= 1
    if motion.shoot_cooldown <= 0 and not state.game_over:
        spawn_enemy_bullet(state, enemy)
        motion.shoot_cooldown = 100 + state.rng.random() * 50


def _move_waver(state: SimState, enemy: Enemy):
    motion = enemy.motion
    enemy.y += enemy.speed
    x = motion.initial_x + math.sin(enemy.y * motion.frequency) * motion.amplitude
    enemy.x = clamp(x, 0.0, max(0.0, state.width - enemy.width))


def _move_dasher(state: SimState, enemy: Enemy):
    motion = enemy.motion
    if motion.state is DashState.CHARGING:
        enemy.y += enemy.speed
        motion.charge_time -= 1
        if motion.charge_time <= 0:
            motion.state = DashState.DASHING
            motion.flash_timer = state.config.dasher_flash_ticks
            motion.transitions += 1
    else:
        if motion.flash_timer > 0:
            if (motion.flash_timer // 3) % 2 == 0:
                enemy.color = state.config.flash_color
            else:
                enemy.color = motion.original_color
            motion.flash_timer -= 1
            if motion.flash_timer == 0:
                enemy.color = motion.original_color
        enemy.y += motion.dash_speed


def move_enemy(state: SimState, enemy: Enemy):
    """Advance one enemy by one tick according to its kind"""
    if enemy.kind is EnemyKind.WAVER:
        _move_waver(state, enemy)
    elif enemy.kind is EnemyKind.DASHER:
        _move_dasher(state, enemy)
    elif enemy.kind is EnemyKind.SHOOTER:
        _move_shooter(state, enemy)
    else:
        enemy.y += enemy.speed


def update_enemies(state: SimState):
    """Move every enemy, last-first, and retire the ones that got past"""
    enemies = state.enemies
    for i in range(len(enemies) - 1, -1, -1):
        enemy = enemies[i]
        move_enemy(state, enemy)

        if enemy.y > state.height + enemy.height:
            del enemies[i]
            if not state.game_over:
                state.enemies_missed += 1
                state.events["miss"] += 1
                if state.enemies_missed >= state.config.max_enemies_missed:
                    terminate(state, state.config.missed_text)
