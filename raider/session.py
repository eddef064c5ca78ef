"""
GameSession - one play-through of the shooter
---------------------------------------------
- Lifecycle: IDLE -> RUNNING -> OVER, OVER -> RUNNING on restart
- tick(now) advances the world by one frame while RUNNING
- Brute-force AABB collisions between player, bullets, enemy bullets, enemies
- Score / health / game-over published to subscribers

The session never schedules itself. Whoever drives it (the Arcade window,
the Gymnasium env, a test) calls ``tick`` with a monotonic millisecond clock.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, Optional

from .config import DEFAULT_CONFIG, GameConfig
from .controls import InputState
from .entities import Bullet, Enemy, Player, Star
from .spawner import maybe_spawn
from .utils import clamp, rects_overlap

logger = logging.getLogger(__name__)

EVENT_NAMES = ("score", "health", "game_over", "state")
TICK_COUNTERS = ("shots", "hits", "kills", "damage", "points")

PLAYER_BULLET_COLOR = "#88ffff"
ENEMY_BULLET_COLOR = "#ff8888"


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


class SessionStateError(RuntimeError):
    """A lifecycle command was issued in a state that does not accept it"""


class GameSession:
    """Holds every entity collection plus score/health for one session"""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or DEFAULT_CONFIG
        self.rng = rng if rng is not None else random.Random()

        self.state = SessionState.IDLE
        self.score = 0
        self.controls = InputState()

        # World state
        self.player = self._new_player()
        self.bullets: List[Bullet] = []
        self.enemy_bullets: List[Bullet] = []
        self.enemies: List[Enemy] = []
        self.stars: List[Star] = []

        # Timers (ms); -inf lets the first tick spawn and fire right away
        self._last_spawn = float("-inf")
        self._last_shot = float("-inf")

        # Counters for the most recent tick
        self.events: Dict[str, int] = dict.fromkeys(TICK_COUNTERS, 0)

        self._listeners: Dict[str, List[Callable]] = {name: [] for name in EVENT_NAMES}

        self._init_stars()

    @property
    def viewport(self):
        return self.config.width, self.config.height

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    # ----------------------------
    # Events
    # ----------------------------

    def subscribe(self, event: str, callback: Callable) -> None:
        """Register ``callback`` for one of score/health/game_over/state"""
        if event not in self._listeners:
            raise KeyError(f"Unknown session event: {event!r}")
        self._listeners[event].append(callback)

    def _emit(self, event: str, value) -> None:
        for callback in self._listeners[event]:
            callback(value)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def start(self) -> None:
        if self.state is not SessionState.IDLE:
            raise SessionStateError(f"start() needs an idle session, state is {self.state.value}")
        self._begin()

    def restart(self) -> None:
        if self.state is not SessionState.OVER:
            raise SessionStateError(f"restart() needs a finished session, state is {self.state.value}")
        self._begin()

    def _begin(self) -> None:
        self.score = 0
        self.player = self._new_player()
        self.bullets = []
        self.enemy_bullets = []
        self.enemies = []
        self.stars = []
        self._init_stars()
        self._last_spawn = float("-inf")
        self._last_shot = float("-inf")
        self.events = dict.fromkeys(TICK_COUNTERS, 0)

        self._set_state(SessionState.RUNNING)
        self._emit("score", self.score)
        self._emit("health", self.player.health)

    def _game_over(self) -> None:
        logger.info("Game over with score %d", self.score)
        self._set_state(SessionState.OVER)
        self._emit("game_over", self.score)

    def _set_state(self, state: SessionState) -> None:
        logger.info("Session %s -> %s", self.state.value, state.value)
        self.state = state
        self._emit("state", state)

    # ----------------------------
    # Tick
    # ----------------------------

    def tick(self, now: float) -> bool:
        """Advance one frame. Returns False (and does nothing) unless running"""
        self.events = dict.fromkeys(TICK_COUNTERS, 0)
        if self.state is not SessionState.RUNNING:
            return False

        self._update_player(now)
        self._update_bullets()
        self._update_enemy_bullets()
        self._spawn_enemies(now)
        self._update_enemies()
        self._update_stars()
        return True

    def fire_ready(self, now: float) -> bool:
        return now - self._last_shot > self.config.fire_cooldown_ms

    # ----------------------------
    # Core mechanics
    # ----------------------------

    def _update_player(self, now: float):
        p = self.player
        keys = self.controls
        cfg = self.config

        if keys.up:
            p.y -= p.speed
        if keys.down:
            p.y += p.speed
        if keys.left:
            p.x -= p.speed
        if keys.right:
            p.x += p.speed

        # Player stays in the left half of the screen
        p.x = clamp(p.x, cfg.player_margin, cfg.width / 2)
        p.y = clamp(p.y, cfg.player_margin, cfg.height - cfg.player_margin)

        if keys.fire and self.fire_ready(now):
            self.bullets.append(Bullet(
                x=p.x + p.width,
                y=p.y + p.height / 2,
                width=cfg.bullet_width,
                height=cfg.bullet_height,
                speed=cfg.bullet_speed,
                color=PLAYER_BULLET_COLOR,
            ))
            self._last_shot = now
            self.events["shots"] += 1

    def _update_bullets(self):
        for b in self.bullets:
            b.x += b.speed
            if b.x > self.config.width:
                b.alive = False

        self.bullets = [b for b in self.bullets if b.alive]

    def _update_enemy_bullets(self):
        for b in reversed(self.enemy_bullets):
            b.x -= b.speed

            # Hit test first so a bullet is never both a hit and off-screen
            if rects_overlap(b, self.player):
                b.alive = False
                self._damage_player(self.config.bullet_damage)
                continue

            if b.x < 0:
                b.alive = False

        self.enemy_bullets = [b for b in self.enemy_bullets if b.alive]

    def _spawn_enemies(self, now: float):
        enemy = maybe_spawn(
            now, self._last_spawn, self.rng, self.viewport,
            interval=self.config.spawn_interval_ms,
        )
        if enemy is not None:
            self.enemies.append(enemy)
            self._last_spawn = now

    def _update_enemies(self):
        cfg = self.config

        # Newest first, same for bullets below
        for e in reversed(self.enemies):
            e.x -= e.speed

            if self.rng.random() < e.fire_chance:
                self.enemy_bullets.append(Bullet(
                    x=e.x,
                    y=e.y + e.height / 2,
                    width=cfg.enemy_bullet_width,
                    height=cfg.enemy_bullet_height,
                    speed=cfg.enemy_bullet_speed,
                    color=ENEMY_BULLET_COLOR,
                ))

            # Bullets before the player: a destroyed enemy cannot also ram
            for b in reversed(self.bullets):
                if not b.alive or not rects_overlap(b, e):
                    continue
                e.health -= 1
                b.alive = False
                self.events["hits"] += 1
                if e.health <= 0:
                    e.alive = False
                    self._award(e)
                    break

            if not e.alive:
                continue

            if rects_overlap(e, self.player):
                e.alive = False
                self._damage_player(cfg.collision_damage)
                continue

            if e.x + e.width < 0:
                e.alive = False

        self.bullets = [b for b in self.bullets if b.alive]
        self.enemies = [e for e in self.enemies if e.alive]

    def _update_stars(self):
        for s in self.stars:
            s.x -= s.speed
            if s.x < 0:
                s.x = self.config.width
                s.y = self.rng.random() * self.config.height

    # ----------------------------
    # Effects
    # ----------------------------

    def _award(self, enemy: Enemy):
        self.score += enemy.points
        self.events["kills"] += 1
        self.events["points"] += enemy.points
        logger.debug("Destroyed %s enemy (+%d), score %d", enemy.archetype.name, enemy.points, self.score)
        self._emit("score", self.score)

    def _damage_player(self, amount: int):
        self.player.health -= amount
        self.events["damage"] += amount
        logger.debug("Player hit for %d, health %d", amount, self.player.health)
        self._emit("health", self.player.health)

        # Only the first lethal hit ends the session
        if self.player.health <= 0 and self.state is SessionState.RUNNING:
            self._game_over()

    # ----------------------------
    # Setup helpers
    # ----------------------------

    def _new_player(self) -> Player:
        cfg = self.config
        return Player(
            x=cfg.player_start_x,
            y=cfg.height / 2,
            width=cfg.player_width,
            height=cfg.player_height,
            speed=cfg.player_speed,
            health=cfg.max_health,
        )

    def _init_stars(self):
        w, h = self.viewport
        for _ in range(self.config.num_stars):
            self.stars.append(Star(
                x=self.rng.random() * w,
                y=self.rng.random() * h,
                size=self.rng.random() * 2 + 1,
                speed=self.rng.random() * 2 + 1,
            ))
