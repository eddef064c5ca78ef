import pytest

from raider.config import GameConfig
from raider.session import GameSession


class ScriptedRandom:
    """Deterministic stand-in for random.Random.

    ``values`` feed ``random()`` and ``choices`` feed ``randrange()``; once
    a script runs out it falls back to ``default`` / index 0.
    """

    def __init__(self, values=(), choices=(), default=0.5):
        self.values = list(values)
        self.choices = list(choices)
        self.default = default
        self.randrange_calls = 0

    def random(self):
        return self.values.pop(0) if self.values else self.default

    def randrange(self, n):
        self.randrange_calls += 1
        index = self.choices.pop(0) if self.choices else 0
        assert 0 <= index < n
        return index


@pytest.fixture
def config():
    return GameConfig(num_stars=0)


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def session(config, rng):
    """Running session after one warm-up tick at t=0.

    The warm-up tick consumes the immediate first spawn, so ticks with
    0 < now <= 1500 neither spawn nor see any enemy.
    """
    s = GameSession(config, rng=rng)
    s.start()
    s.tick(0)
    s.enemies.clear()
    s.enemy_bullets.clear()
    return s
