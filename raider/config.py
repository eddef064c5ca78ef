"""
Game configuration
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass(frozen=True)
class GameConfig:
    """Fixed rules of one game. Times are in milliseconds"""

    # Viewport (logical pixels)
    width: int = 320
    height: int = 240

    # Timers
    spawn_interval_ms: float = 1500.0
    fire_cooldown_ms: float = 250.0

    # Damage / health
    max_health: int = 100
    bullet_damage: int = 10
    collision_damage: int = 20

    # Player
    player_start_x: float = 40.0
    player_width: float = 24.0
    player_height: float = 10.0
    player_speed: float = 4.0
    player_margin: float = 10.0  # min distance from top/bottom/left edge

    # Projectiles
    bullet_width: float = 10.0
    bullet_height: float = 2.0
    bullet_speed: float = 7.0
    enemy_bullet_width: float = 8.0
    enemy_bullet_height: float = 2.0
    enemy_bullet_speed: float = 5.0

    # Background
    num_stars: int = 30

    def __post_init__(self):
        positive = (
            "width", "height", "spawn_interval_ms", "max_health",
            "bullet_damage", "collision_damage", "player_width",
            "player_height", "bullet_speed", "enemy_bullet_speed",
        )
        for name in positive:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.fire_cooldown_ms < 0:
            raise ValueError("fire_cooldown_ms must not be negative")
        if self.num_stars < 0:
            raise ValueError("num_stars must not be negative")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_CONFIG = GameConfig()
