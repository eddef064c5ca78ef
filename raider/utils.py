"""
Utility functions for game mechanics
"""

from __future__ import annotations
import logging
from typing import Union


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(a, b) -> bool:
    """Check if two axis-aligned boxes intersect (touching edges do not count).

    Both arguments need ``x``, ``y``, ``width`` and ``height`` attributes,
    with ``(x, y)`` the top-left corner.
    """
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )


def setup_logging(level: Union[int, str] = logging.INFO) -> None:
    """Configure root logging once for the command line entry points"""
    if isinstance(level, str):
        level = getattr(logging, level.upper())
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logging.getLogger().setLevel(level)
