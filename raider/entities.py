"""
Game entity dataclasses
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Player:
    """Player ship. (x, y) is the top-left corner"""
    x: float
    y: float
    width: float = 24.0
    height: float = 10.0
    speed: float = 4.0
    health: int = 100
    color: str = "#88aaff"


@dataclass
class Bullet:
    """Projectile; the owning collection decides which way it flies"""
    x: float
    y: float
    width: float
    height: float
    speed: float
    color: str
    alive: bool = True


@dataclass(frozen=True)
class EnemyArchetype:
    """Fixed parameter preset shared by every enemy of one kind"""
    name: str
    width: float
    height: float
    speed: float
    health: int
    points: int
    fire_chance: float  # probability per tick
    spawn_margin: float
    color: str


SMALL = EnemyArchetype("small", 16, 8, 3, 1, 10, 0.002, 10, "#ff5555")
MEDIUM = EnemyArchetype("medium", 24, 12, 2, 2, 20, 0.004, 15, "#ffaa55")
LARGE = EnemyArchetype("large", 36, 20, 1, 4, 30, 0.008, 20, "#ff5599")

ARCHETYPES: Tuple[EnemyArchetype, ...] = (SMALL, MEDIUM, LARGE)


@dataclass
class Enemy:
    """Enemy ship flying right to left"""
    x: float
    y: float
    width: float
    height: float
    speed: float
    health: int
    points: int
    fire_chance: float
    color: str
    archetype: EnemyArchetype
    alive: bool = True

    @classmethod
    def from_archetype(cls, archetype: EnemyArchetype, x: float, y: float) -> "Enemy":
        return cls(
            x=x,
            y=y,
            width=archetype.width,
            height=archetype.height,
            speed=archetype.speed,
            health=archetype.health,
            points=archetype.points,
            fire_chance=archetype.fire_chance,
            color=archetype.color,
            archetype=archetype,
        )


@dataclass
class Star:
    """Decorative background star, never collides"""
    x: float
    y: float
    size: float
    speed: float
