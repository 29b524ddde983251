"""
Game entity dataclasses
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

Color = Tuple[int, int, int]


class EnemyKind(str, Enum):
    NORMAL = "normal"
    SHOOTER = "shooter"
    WAVER = "waver"
    DASHER = "dasher"


# Draw order of the weighted spawn roll
ENEMY_KINDS: Tuple[EnemyKind, ...] = (
    EnemyKind.NORMAL,
    EnemyKind.SHOOTER,
    EnemyKind.WAVER,
    EnemyKind.DASHER,
)


class DashState(str, Enum):
    CHARGING = "charging"
    DASHING = "dashing"


@dataclass
class Player:
    """Player ship, top-left anchored"""
    x: float
    y: float
    width: float = 30.0
    height: float = 30.0
    speed: float = 5.0
    lives: int = 3
    invincible: bool = False
    invincible_timer: int = 0
    power_level: int = 0

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2


@dataclass
class Bullet:
    """Player projectile, centre anchored"""
    x: float
    y: float
    radius: float = 4.0
    speed: float = 7.0
    angle: float = 0.0  # horizontal drift for spread shots


@dataclass
class EnemyBullet:
    x: float
    y: float
    radius: float = 5.0
    speed: float = 4.0


@dataclass
class PowerUp:
    """Collectible that raises the player's power level"""
    x: float
    y: float
    radius: float = 8.0
    speed: float = 2.0


@dataclass
class Particle:
    """Explosion fragment moving in polar form"""
    x: float
    y: float
    radius: float
    color: Color
    speed: float
    angle: float
    life: float
    decay: float


# ----------------------------
# Enemy payloads
# ----------------------------

@dataclass
class NormalMotion:
    pass


@dataclass
class ShooterMotion:
    shoot_cooldown: float


@dataclass
class WaverMotion:
    initial_x: float
    amplitude: float
    frequency: float


@dataclass
class DasherMotion:
    dash_speed: float
    charge_time: float
    original_color: Color
    state: DashState = DashState.CHARGING
    flash_timer: int = 0
    transitions: int = 0


EnemyMotion = Union[NormalMotion, ShooterMotion, WaverMotion, DasherMotion]


@dataclass
class Enemy:
    """Descending enemy, top-left anchored; `motion` holds the kind-specific state"""
    x: float
    y: float
    kind: EnemyKind
    health: int
    color: Color
    speed: float
    motion: EnemyMotion
    width: float = 30.0
    height: float = 30.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.x + self.width / 2, self.y + self.height / 2
