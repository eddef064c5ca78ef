"""
Frame description and rasterization

``frame_rects`` turns a session into the list of filled rectangles that make
up one frame (top-left origin, logical pixels). Backends only have to know
how to fill a rectangle: the Arcade window draws them on screen and
``rasterize`` writes them into a numpy image for ``rgb_array`` rendering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .entities import LARGE, MEDIUM, SMALL

BACKGROUND = "#000033"
STAR_COLOR = "#ffffff"

# (height fractions, mark width) of the gun marks on each enemy's right edge
_ENEMY_MARKS = {
    SMALL.name: ((0.5,), 3),
    MEDIUM.name: ((1 / 3, 2 / 3), 4),
    LARGE.name: ((0.25, 0.5, 0.75), 5),
}


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    color: str


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """'#rrggbb' -> (r, g, b)"""
    value = color.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def frame_rects(session) -> List[Rect]:
    """Describe the current frame, back to front"""
    w, h = session.viewport
    rects = [Rect(0, 0, w, h, BACKGROUND)]

    for s in session.stars:
        rects.append(Rect(s.x, s.y, s.size, s.size, STAR_COLOR))

    p = session.player
    rects.append(Rect(p.x, p.y, p.width, p.height, p.color))
    # Exhaust on the trailing edge
    rects.append(Rect(p.x - 4, p.y + p.height / 2 - 1, 4, 2, p.color))

    for b in session.bullets:
        rects.append(Rect(b.x, b.y, b.width, b.height, b.color))

    for b in session.enemy_bullets:
        rects.append(Rect(b.x, b.y, b.width, b.height, b.color))

    for e in session.enemies:
        rects.append(Rect(e.x, e.y, e.width, e.height, e.color))
        offsets, mark_w = _ENEMY_MARKS[e.archetype.name]
        for frac in offsets:
            y = e.y + e.height * frac
            if len(offsets) == 1:
                y -= 1  # centre the single mark
            rects.append(Rect(e.x + e.width, y, mark_w, 2, e.color))

    return rects


def rasterize(rects: List[Rect], width: int, height: int, scale: int = 1) -> np.ndarray:
    """Fill ``rects`` into an (H*scale, W*scale, 3) uint8 image.

    Rectangles are clipped to the surface; fractional edges are truncated
    the way a canvas snaps to whole pixels.
    """
    out_h, out_w = height * scale, width * scale
    frame = np.zeros((out_h, out_w, 3), dtype=np.uint8)

    for r in rects:
        x0 = max(0, int(r.x * scale))
        y0 = max(0, int(r.y * scale))
        x1 = min(out_w, int((r.x + r.width) * scale))
        y1 = min(out_h, int((r.y + r.height) * scale))
        if x1 <= x0 or y1 <= y0:
            continue
        frame[y0:y1, x0:x1] = hex_to_rgb(r.color)

    return frame
