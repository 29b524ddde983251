from game.starfall.collisions import check_collisions, player_hit
from game.starfall.entities import Bullet, EnemyBullet, EnemyKind, PowerUp
from game.starfall.spawner import make_enemy


def _enemy_on_player(state, kind):
    p = state.player
    return make_enemy(state, kind, p.x, p.y)


def test_bullet_kills_normal_in_one_step(sim):
    state = sim.state
    state.bullets.append(Bullet(x=200, y=100))
    state.enemies.append(make_enemy(state, EnemyKind.NORMAL, 185, 80))

    sim.step()

    assert state.bullets == []
    assert state.enemies == []
    assert state.score == 10
    assert 20 <= len(state.particles) <= 29


def test_shooter_takes_two_hits(state):
    shooter = make_enemy(state, EnemyKind.SHOOTER, 100, 100)
    state.enemies.append(shooter)
    state.bullets.append(Bullet(x=115, y=115))
    check_collisions(state)

    assert shooter.health == 1
    assert state.enemies == [shooter]
    assert state.bullets == []
    assert state.score == 0

    state.bullets.append(Bullet(x=115, y=115))
    check_collisions(state)
    assert state.enemies == []
    assert state.score == 12


def test_dasher_is_worth_fifteen(state):
    state.enemies.append(make_enemy(state, EnemyKind.DASHER, 100, 100))
    state.bullets.append(Bullet(x=115, y=115))
    check_collisions(state)
    assert state.score == 15


def test_one_bullet_hits_one_enemy(state):
    state.enemies.append(make_enemy(state, EnemyKind.NORMAL, 100, 100))
    state.enemies.append(make_enemy(state, EnemyKind.NORMAL, 105, 100))
    state.bullets.append(Bullet(x=118, y=115))
    check_collisions(state)
    assert len(state.enemies) == 1
    assert state.enemies[0].x == 100  # last-first: the later enemy takes the hit


def test_bullet_touching_edge_does_not_hit(state):
    state.enemies.append(make_enemy(state, EnemyKind.NORMAL, 100, 100))
    state.bullets.append(Bullet(x=96, y=115))  # right edge of bullet exactly at x=100
    check_collisions(state)
    assert len(state.enemies) == 1 and len(state.bullets) == 1


def test_power_up_pickup_is_clamped(state):
    p = state.player
    cx, cy = p.center
    state.power_ups = [PowerUp(x=cx, y=cy)]
    check_collisions(state)
    assert p.power_level == 1
    assert state.power_ups == []

    p.power_level = state.config.max_power_level
    state.power_ups = [PowerUp(x=cx + 20, y=cy)]  # 20 < 15 + 8
    check_collisions(state)
    assert p.power_level == state.config.max_power_level
    assert state.power_ups == []


def test_power_up_just_out_of_reach(state):
    cx, cy = state.player.center
    state.power_ups = [PowerUp(x=cx + 23, y=cy)]
    check_collisions(state)
    assert len(state.power_ups) == 1


def test_normal_and_shooter_survive_ramming(state):
    for kind in (EnemyKind.NORMAL, EnemyKind.SHOOTER):
        state.player.invincible = False
        state.particles.clear()
        enemy = _enemy_on_player(state, kind)
        state.enemies = [enemy]
        lives = state.player.lives

        check_collisions(state)

        assert state.player.lives == lives - 1
        assert state.enemies == [enemy]
        assert 20 <= len(state.particles) <= 29


def test_dasher_and_waver_die_ramming(state):
    for kind in (EnemyKind.DASHER, EnemyKind.WAVER):
        state.player.invincible = False
        state.particles.clear()
        state.enemies = [_enemy_on_player(state, kind)]

        check_collisions(state)

        assert state.enemies == []
        assert 40 <= len(state.particles) <= 58
    assert state.score == 0


def test_only_first_ramming_enemy_resolves(state):
    first = _enemy_on_player(state, EnemyKind.DASHER)
    second = _enemy_on_player(state, EnemyKind.DASHER)
    state.enemies = [first, second]
    check_collisions(state)
    assert state.enemies == [first]
    assert state.player.lives == 2


def test_enemy_bullet_uses_tighter_hitbox(state):
    cx, cy = state.player.center
    # threshold is 30 / 2.5 + 5 = 17
    state.enemy_bullets = [EnemyBullet(x=cx + 18, y=cy)]
    check_collisions(state)
    assert state.player.lives == 3
    assert len(state.enemy_bullets) == 1

    state.enemy_bullets = [EnemyBullet(x=cx + 16, y=cy)]
    check_collisions(state)
    assert state.player.lives == 2
    assert state.enemy_bullets == []


def test_invincible_player_ignores_enemies_and_shots(state):
    state.player.invincible = True
    state.player.invincible_timer = 50
    cx, cy = state.player.center
    state.enemies = [_enemy_on_player(state, EnemyKind.DASHER)]
    state.enemy_bullets = [EnemyBullet(x=cx, y=cy)]

    check_collisions(state)

    assert state.player.lives == 3
    assert len(state.enemies) == 1
    assert len(state.enemy_bullets) == 1
    assert state.particles == []


def test_player_hit_drops_power_and_starts_invincibility(state):
    p = state.player
    p.power_level = 2
    assert player_hit(state)
    assert p.lives == 2 and p.power_level == 1
    assert p.invincible and p.invincible_timer == state.config.invincible_duration
    assert not player_hit(state)
    assert p.lives == 2 and p.power_level == 1


def test_last_life_terminates_once(state):
    p = state.player
    p.lives = 1
    player_hit(state)
    assert p.lives == 0
    assert state.game_over and not state.running
    assert state.message == state.config.game_over_message
    final = state.final_score

    p.invincible = False
    state.score += 100
    player_hit(state)
    assert p.lives == 0
    assert state.message == state.config.game_over_message
    assert state.final_score == final
