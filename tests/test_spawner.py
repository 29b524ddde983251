from collections import Counter

import pytest

from game.starfall.config import SimConfig
from game.starfall.entities import DashState, EnemyKind
from game.starfall.spawner import (
    fire_player_shots,
    make_enemy,
    maybe_drop_power_up,
    roll_enemy_kind,
    spawn_enemy,
    spawn_enemy_bullet,
    tick_enemy_spawner,
)
from game.starfall.state import new_state
from game.starfall.utils import make_rng

WEIGHTS = SimConfig().enemy_weights


def test_enemy_kind_distribution_matches_weights():
    rng = make_rng(2024)
    n = 20_000
    counts = Counter(roll_enemy_kind(rng, WEIGHTS) for _ in range(n))
    expected = {
        EnemyKind.NORMAL: 0.35,
        EnemyKind.SHOOTER: 0.25,
        EnemyKind.WAVER: 0.20,
        EnemyKind.DASHER: 0.20,
    }
    for kind, weight in expected.items():
        assert counts[kind] / n == pytest.approx(weight, abs=0.02)


class _FixedRng:
    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


@pytest.mark.parametrize("roll, kind", [
    (0.0, EnemyKind.NORMAL),
    (0.3499, EnemyKind.NORMAL),
    (0.35, EnemyKind.SHOOTER),
    (0.5999, EnemyKind.SHOOTER),
    (0.6001, EnemyKind.WAVER),
    (0.8001, EnemyKind.DASHER),
    (0.9999, EnemyKind.DASHER),
])
def test_enemy_kind_thresholds(roll, kind):
    assert roll_enemy_kind(_FixedRng(roll), WEIGHTS) is kind


def test_spawned_enemy_starts_above_field_and_inside_columns(state):
    for _ in range(200):
        e = spawn_enemy(state)
        assert e.y == -state.config.enemy_height
        assert 0 <= e.x <= state.width - e.width
    assert len(state.enemies) == 200


def test_per_kind_parameters(state):
    for _ in range(50):
        normal = make_enemy(state, EnemyKind.NORMAL, 10, 0)
        assert normal.health == 1 and 1.5 <= normal.speed < 2.5

        shooter = make_enemy(state, EnemyKind.SHOOTER, 10, 0)
        assert shooter.health == 2 and 1.5 <= shooter.speed < 2.3
        assert 50 <= shooter.motion.shoot_cooldown < 150

        waver = make_enemy(state, EnemyKind.WAVER, 10, 0)
        assert waver.health == 1 and 1.35 <= waver.speed < 1.75
        assert waver.motion.initial_x == 10
        assert 30 <= waver.motion.amplitude < 60
        assert 0.02 <= waver.motion.frequency < 0.035

        dasher = make_enemy(state, EnemyKind.DASHER, 10, 0)
        assert dasher.health == 1
        assert dasher.speed == pytest.approx(0.9)
        assert dasher.motion.dash_speed == pytest.approx(6.75)
        assert 80 <= dasher.motion.charge_time < 130
        assert dasher.motion.state is DashState.CHARGING
        assert dasher.motion.original_color == dasher.color


def test_spawner_fires_on_interval():
    s = new_state(seed=5)
    s.running = True
    interval = s.config.enemy_spawn_interval
    for _ in range(interval - 1):
        tick_enemy_spawner(s)
    assert s.enemies == []
    tick_enemy_spawner(s)
    assert len(s.enemies) == 1
    assert s.enemy_spawn_timer == 0


def test_spawner_idle_when_not_running():
    s = new_state(seed=5)
    for _ in range(500):
        tick_enemy_spawner(s)
    assert s.enemies == [] and s.enemy_spawn_timer == 0


def test_full_power_volley(state):
    p = state.player
    p.power_level = 2
    volley = fire_player_shots(state)

    cx = p.x + p.width / 2
    assert len(volley) == 3
    offsets = {round(b.x - cx, 6): b.angle for b in volley}
    assert offsets == {-8.0: -0.15, 0.0: 0.0, 8.0: 0.15}
    assert all(b.y == p.y for b in volley)
    assert state.shoot_cooldown == state.config.shoot_interval


def test_power_level_one_volley(state):
    state.player.power_level = 1
    volley = fire_player_shots(state)
    cx = state.player.x + state.player.width / 2
    assert sorted((round(b.x - cx, 6), b.angle) for b in volley) == [(-5.0, -0.05), (5.0, 0.05)]


def test_single_shot_at_power_zero(state):
    volley = fire_player_shots(state)
    assert len(volley) == 1
    assert volley[0].angle == 0.0


@pytest.mark.parametrize("setup", [
    lambda s: setattr(s, "shoot_cooldown", 3),
    lambda s: setattr(s, "shooting_enabled", False),
    lambda s: setattr(s, "running", False),
    lambda s: setattr(s, "game_over", True),
])
def test_volley_blocked(state, setup):
    setup(state)
    assert fire_player_shots(state) == []
    assert state.bullets == []


def test_enemy_bullet_leaves_from_bottom_centre(state):
    e = make_enemy(state, EnemyKind.SHOOTER, 100, 40)
    shot = spawn_enemy_bullet(state, e)
    assert (shot.x, shot.y) == (115, 70)
    assert state.enemy_bullets == [shot]


def test_power_up_drop_rate_converges():
    s = new_state(seed=7)
    shooter = make_enemy(s, EnemyKind.SHOOTER, 100, 100)
    drops = sum(maybe_drop_power_up(s, shooter) for _ in range(1000))
    assert drops == len(s.power_ups)
    assert drops / 1000 == pytest.approx(0.2, abs=0.04)
    item = s.power_ups[0]
    assert (item.x, item.y) == shooter.center


@pytest.mark.parametrize("kind", [EnemyKind.NORMAL, EnemyKind.WAVER, EnemyKind.DASHER])
def test_only_shooters_drop(state, kind):
    e = make_enemy(state, kind, 100, 100)
    assert not any(maybe_drop_power_up(state, e) for _ in range(200))
    assert state.power_ups == []


def test_spawn_uses_configured_weights():
    s = new_state(SimConfig(enemy_weights=(0.0, 0.0, 0.0, 1.0)), seed=3)
    kinds = {spawn_enemy(s).kind for _ in range(50)}
    assert kinds == {EnemyKind.DASHER}
