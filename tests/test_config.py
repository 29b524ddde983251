import pytest

from game.starfall.config import SimConfig


def test_defaults_match_reference_game():
    cfg = SimConfig()
    assert (cfg.width, cfg.height) == (400, 550)
    assert cfg.enemy_spawn_interval == 80
    assert cfg.shoot_interval == 15
    assert cfg.invincible_duration == 120
    assert cfg.max_enemies_missed == 100
    assert cfg.scores == {"normal": 10, "shooter": 12, "waver": 10, "dasher": 15}
    assert cfg.missed_text == "100 enemies got past you!"


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"height": -5},
    {"start_lives": 0},
    {"enemy_spawn_interval": 0},
    {"enemy_weights": (0.5, 0.5, 0.5, 0.5)},
    {"enemy_weights": (0.5, 0.5)},
    {"power_up_drop_chance": 1.5},
])
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValueError):
        SimConfig(**kwargs)


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ValueError, match="bogus"):
        SimConfig.from_dict({"width": 300, "bogus": 1})


def test_from_dict_accepts_list_weights():
    cfg = SimConfig.from_dict({"enemy_weights": [0.25, 0.25, 0.25, 0.25], "width": 320})
    assert cfg.enemy_weights == (0.25, 0.25, 0.25, 0.25)
    assert cfg.width == 320
