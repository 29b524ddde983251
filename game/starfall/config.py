"""
Game constants for the Starfall simulation
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Tuple

Color = Tuple[int, int, int]


def _default_scores() -> Dict[str, int]:
    return {"normal": 10, "shooter": 12, "waver": 10, "dasher": 15}


def _default_enemy_colors() -> Dict[str, Color]:
    return {
        "normal": (244, 67, 54),
        "shooter": (156, 39, 176),
        "waver": (33, 150, 243),
        "dasher": (255, 152, 0),
    }


@dataclass(frozen=True)
class SimConfig:
    """All tunable numbers of the simulation, in pixels and ticks"""

    # Playfield
    width: int = 400
    height: int = 550

    # Player
    player_width: float = 30.0
    player_height: float = 30.0
    player_speed: float = 5.0
    player_bottom_offset: float = 50.0
    start_lives: int = 3
    invincible_duration: int = 120  # ticks
    max_power_level: int = 2

    # Player bullets
    bullet_speed: float = 7.0
    bullet_radius: float = 4.0
    shoot_interval: int = 15  # ticks between volleys
    drift_factor: float = 0.3

    # Power-up items
    power_up_radius: float = 8.0
    power_up_speed: float = 2.0
    power_up_drop_chance: float = 0.2

    # Enemies
    enemy_width: float = 30.0
    enemy_height: float = 30.0
    enemy_speed_base: float = 1.5
    enemy_spawn_interval: int = 80  # ticks
    # normal, shooter, waver, dasher
    enemy_weights: Tuple[float, float, float, float] = (0.35, 0.25, 0.20, 0.20)
    dasher_flash_ticks: int = 15
    max_enemies_missed: int = 100

    # Enemy bullets
    enemy_bullet_speed: float = 4.0
    enemy_bullet_radius: float = 5.0

    scores: Dict[str, int] = field(default_factory=_default_scores)

    # Palette
    bullet_color: Color = (255, 235, 59)
    enemy_bullet_color: Color = (255, 152, 0)
    power_up_color: Color = (0, 188, 212)
    flash_color: Color = (255, 255, 255)
    enemy_colors: Dict[str, Color] = field(default_factory=_default_enemy_colors)

    # Termination messages
    game_over_message: str = "Game over!"
    missed_message: str = "{max_missed} enemies got past you!"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Playfield must be positive, got {self.width}x{self.height}")
        if self.player_width <= 0 or self.player_height <= 0:
            raise ValueError("Player size must be positive")
        if self.start_lives < 1:
            raise ValueError(f"start_lives must be >= 1, got {self.start_lives}")
        if self.max_power_level < 0:
            raise ValueError(f"max_power_level must be >= 0, got {self.max_power_level}")
        if self.enemy_spawn_interval < 1 or self.shoot_interval < 1:
            raise ValueError("Spawn and shoot intervals must be at least one tick")
        if len(self.enemy_weights) != 4 or any(w < 0 for w in self.enemy_weights):
            raise ValueError(f"enemy_weights needs four non-negative entries, got {self.enemy_weights}")
        if abs(sum(self.enemy_weights) - 1.0) > 1e-6:
            raise ValueError(f"enemy_weights must sum to 1, got {sum(self.enemy_weights)}")
        if not 0.0 <= self.power_up_drop_chance <= 1.0:
            raise ValueError(f"power_up_drop_chance must be a probability, got {self.power_up_drop_chance}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SimConfig":
        """Build a config from a plain mapping, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        values = dict(data)
        if "enemy_weights" in values:
            values["enemy_weights"] = tuple(values["enemy_weights"])
        return cls(**values)

    @property
    def missed_text(self) -> str:
        return self.missed_message.format(max_missed=self.max_enemies_missed)
