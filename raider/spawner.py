"""
Timer-gated enemy spawning
"""

from __future__ import annotations

from typing import Optional, Tuple

from .config import DEFAULT_CONFIG
from .entities import ARCHETYPES, Enemy


def maybe_spawn(
    now: float,
    last_spawn_time: float,
    rng,
    viewport: Tuple[float, float],
    interval: float = DEFAULT_CONFIG.spawn_interval_ms,
) -> Optional[Enemy]:
    """Create a random enemy at the right edge once the interval has passed.

    ``rng`` needs ``randrange`` and ``random`` (``random.Random`` works).
    Returns None while the interval is still running. The caller stores
    ``now`` as the new spawn time when an enemy comes back.
    """
    if now - last_spawn_time <= interval:
        return None

    width, height = viewport
    archetype = ARCHETYPES[rng.randrange(len(ARCHETYPES))]

    # keep the whole body on screen vertically
    margin = archetype.spawn_margin
    y = rng.random() * (height - 2 * margin) + margin

    return Enemy.from_archetype(archetype, x=width, y=y)
