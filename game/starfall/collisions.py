"""
Collision passes, run once per tick in a fixed order:

1. player bullets vs enemies
2. power-ups vs player
3. enemies vs player        (skipped while invincible)
4. enemy bullets vs player  (skipped while invincible)
"""

from __future__ import annotations

from .audio import safe_trigger
from .effects import create_explosion
from .entities import EnemyKind
from .spawner import maybe_drop_power_up
from .state import SimState, terminate
from .utils import circle_rect_overlap, rects_overlap, within_distance

# Kinds that are destroyed by ramming the player
RAMMING_KINDS = (EnemyKind.DASHER, EnemyKind.WAVER)


def player_hit(state: SimState) -> bool:
    """Apply one hit to the player; returns False while invincible"""
    p = state.player
    if p.invincible:
        return False

    p.lives = max(0, p.lives - 1)
    p.invincible = True
    p.invincible_timer = state.config.invincible_duration
    if p.power_level > 0:
        p.power_level -= 1

    state.events["hit"] += 1
    safe_trigger(state.audio.player_hit)

    if p.lives <= 0:
        terminate(state, state.config.game_over_message)
    return True


def _bullets_vs_enemies(state: SimState):
    bullets = state.bullets
    enemies = state.enemies
    for i in range(len(bullets) - 1, -1, -1):
        b = bullets[i]
        for j in range(len(enemies) - 1, -1, -1):
            e = enemies[j]
            if not circle_rect_overlap(b.x, b.y, b.radius, e.x, e.y, e.width, e.height):
                continue

            del bullets[i]
            e.health -= 1
            if e.health <= 0:
                del enemies[j]
                points = state.config.scores.get(e.kind.value, 10)
                state.score += points
                state.events["kill"] += 1
                state.events["score"] += points
                create_explosion(state, *e.center)
                safe_trigger(state.audio.enemy_destroyed)
                maybe_drop_power_up(state, e)
            break


def _power_ups_vs_player(state: SimState):
    p = state.player
    px, py = p.center
    items = state.power_ups
    for i in range(len(items) - 1, -1, -1):
        item = items[i]
        if within_distance(px, py, item.x, item.y, p.width / 2 + item.radius):
            del items[i]
            if p.power_level < state.config.max_power_level:
                p.power_level += 1
            state.events["power_up"] += 1
            safe_trigger(state.audio.power_up)


def _enemies_vs_player(state: SimState):
    p = state.player
    enemies = state.enemies
    for i in range(len(enemies) - 1, -1, -1):
        e = enemies[i]
        if rects_overlap(p.x, p.y, p.width, p.height, e.x, e.y, e.width, e.height):
            player_hit(state)
            create_explosion(state, *p.center)
            if e.kind in RAMMING_KINDS:
                create_explosion(state, *e.center)
                del enemies[i]
            break


def _enemy_bullets_vs_player(state: SimState):
    p = state.player
    px, py = p.center
    shots = state.enemy_bullets
    for i in range(len(shots) - 1, -1, -1):
        b = shots[i]
        if within_distance(px, py, b.x, b.y, p.width / 2.5 + b.radius):
            del shots[i]
            player_hit(state)
            create_explosion(state, *p.center)
            break


def check_collisions(state: SimState):
    _bullets_vs_enemies(state)
    _power_ups_vs_player(state)

    if state.player.invincible:
        return

    _enemies_vs_player(state)
    _enemy_bullets_vs_player(state)
