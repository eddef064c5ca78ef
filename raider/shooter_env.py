"""
RaiderEnv - Gymnasium wrapper around a GameSession
--------------------------------------------------
- One step = one game tick on a virtual clock (1000 / render_fps ms)
- Action space MultiDiscrete([3, 3, 2]): vertical, horizontal, fire
- Vector observation: player state + top-K nearest enemies + top-M nearest
  enemy bullets, all in [-1, 1]
- Reward shaped from the session's per-tick counters
- Episode terminates at game over, truncates after max_steps

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m raider.shooter_env
"""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .controls import InputState
from .entities import ARCHETYPES
from .renderer import frame_rects, rasterize
from .session import GameSession, SessionState
from .utils import clamp

DEFAULT_REWARDS = {
    "R_HIT": 0.1,      # per bullet that connects
    "R_KILL": 1.0,     # scaled by points / 30
    "R_DAMAGE": 2.0,   # per 100 health lost
    "R_SHOT": 0.01,    # per bullet fired
    "R_ALIVE": 0.001,  # per surviving step
    "R_DEATH": 5.0,
}

_ARCHETYPE_CODE = {a.name: i for i, a in enumerate(ARCHETYPES)}


class RaiderEnv(gym.Env):
    """Side-scrolling shooter environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_enemies: int = 5,
        m_bullets: int = 5,
        reward_config: Optional[Dict[str, float]] = None,
        render_scale: int = 1,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")
        self.render_mode = render_mode
        self.config = config or GameConfig()
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.m_bullets = m_bullets
        self.render_scale = render_scale
        self.frame_ms = 1000.0 / self.metadata["render_fps"]

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Player: pos(2) health(1) fire-ready(1)
        # Each enemy: rel pos(2) health fraction(1) archetype(1)
        # Each enemy bullet: rel pos(2)
        obs_dim = 4 + self.k_enemies * 4 + self.m_bullets * 2
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None
        self.session: GameSession = None  # type: ignore

        self._now = 0.0
        self._step_count = 0
        self._totals: Dict[str, int] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.session = GameSession(self.config, rng=rng)
        self.session.start()
        if self._window is not None:
            self._window.attach(self.session)

        self._now = 0.0
        self._step_count = 0
        self._totals = {"shots": 0, "hits": 0, "kills": 0, "damage": 0}

        return self._get_obs(), self._get_info()

    def step(self, action):
        self.session.controls = InputState.from_action(action)

        self._now += self.frame_ms
        self.session.tick(self._now)

        for key in self._totals:
            self._totals[key] += self.session.events[key]

        reward = self._compute_reward()

        terminated = self.session.state is SessionState.OVER
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        s = self.session
        w, h = s.viewport
        p = s.player
        px = p.x + p.width / 2
        py = p.y + p.height / 2

        obs_parts: List[float] = [
            px / w * 2 - 1,
            py / h * 2 - 1,
            clamp(p.health / self.config.max_health, 0.0, 1.0) * 2 - 1,
            1.0 if s.fire_ready(self._now + self.frame_ms) else -1.0,
        ]

        def nearest(items):
            return sorted(
                items,
                key=lambda o: (o.x + o.width / 2 - px) ** 2 + (o.y + o.height / 2 - py) ** 2,
            )

        enemies = nearest(s.enemies)
        for i in range(self.k_enemies):
            if i < len(enemies):
                e = enemies[i]
                code = _ARCHETYPE_CODE[e.archetype.name] / max(1, len(ARCHETYPES) - 1)
                obs_parts += [
                    clamp((e.x + e.width / 2 - px) / w, -1, 1),
                    clamp((e.y + e.height / 2 - py) / h, -1, 1),
                    e.health / e.archetype.health,
                    code * 2 - 1,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        bullets = nearest(s.enemy_bullets)
        for i in range(self.m_bullets):
            if i < len(bullets):
                b = bullets[i]
                obs_parts += [
                    clamp((b.x + b.width / 2 - px) / w, -1, 1),
                    clamp((b.y + b.height / 2 - py) / h, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _compute_reward(self) -> float:
        r = self.rewards
        events = self.session.events

        reward = 0.0
        reward += r["R_HIT"] * events["hits"]
        reward += r["R_KILL"] * events["points"] / 30.0
        reward -= r["R_DAMAGE"] * events["damage"] / 100.0
        reward -= r["R_SHOT"] * events["shots"]

        if self.session.state is SessionState.OVER:
            reward -= r["R_DEATH"]
        else:
            reward += r["R_ALIVE"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "health": s.player.health,
            "enemies_killed": self._totals["kills"],
            "damage_taken": self._totals["damage"],
            "shots_fired": self._totals["shots"],
            "num_enemies": len(s.enemies),
            "num_enemy_bullets": len(s.enemy_bullets),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(
                frame_rects(self.session),
                self.config.width,
                self.config.height,
                scale=self.render_scale,
            )

        if self._window is None:
            # arcade needs a display; headless runs never import it
            from .window import RaiderWindow
            self._window = RaiderWindow(self.session, scale=max(self.render_scale, 2))

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True):
    """Run a random episode for testing"""
    env = RaiderEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=42)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... close the window to exit early.")

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}, score: {info['score']}")
    env.close()


if __name__ == "__main__":
    run_random_episode(render=True)
