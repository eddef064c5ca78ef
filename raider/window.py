"""
Arcade front end: display, keyboard and pointer input, HUD and start / game-over screens
"""

from __future__ import annotations

import argparse
import logging
import time
from typing import Optional

import arcade

from .renderer import frame_rects, hex_to_rgb
from .session import GameSession, SessionState
from .ui import KEY_BINDINGS, START_KEYS, Hud, PointerControls, default_buttons, handle_key, to_logical
from .utils import setup_logging

logger = logging.getLogger(__name__)

# arcade key code -> key name understood by ui.handle_key
KEY_NAMES = {getattr(arcade.key, name): name for name in (*KEY_BINDINGS, *START_KEYS)}


class RaiderWindow(arcade.Window):
    """Arcade window scaling the logical viewport by an integer factor"""

    def __init__(self, session: GameSession, scale: int = 3, title: str = "Raider"):
        width, height = session.viewport
        super().__init__(width * scale, height * scale, title)
        self.scale = scale

        # Colors
        self.HUD_C = (220, 220, 220)
        self.OVERLAY_C = (0, 0, 0, 170)
        self.BUTTON_C = (255, 255, 255, 50)
        self.BUTTON_HELD_C = (255, 255, 255, 110)

        self.hud = Hud()
        self.pointer = PointerControls(default_buttons(width, height))
        self.attach(session)

    def attach(self, session: GameSession):
        """Show ``session`` from now on (the RL env swaps sessions on reset)"""
        self.session = session
        self.pointer.active = None
        self.hud.attach(session)
        session.subscribe("game_over", self._on_game_over)

    def _on_game_over(self, score: int):
        self.session.controls.release_all()
        self.pointer.active = None

    # ----------------------------
    # Keyboard
    # ----------------------------

    def on_key_press(self, key, modifiers):
        if key == arcade.key.ESCAPE:
            self.close()
        elif key in KEY_NAMES:
            handle_key(self.session, KEY_NAMES[key], pressed=True)

    def on_key_release(self, key, modifiers):
        if key in KEY_NAMES:
            handle_key(self.session, KEY_NAMES[key], pressed=False)

    # ----------------------------
    # Pointer
    # ----------------------------

    def _logical(self, x, y):
        return to_logical(x, y, self.scale, self.session.viewport[1])

    def on_mouse_press(self, x, y, button, modifiers):
        self.pointer.press(self.session, *self._logical(x, y))

    def on_mouse_release(self, x, y, button, modifiers):
        self.pointer.release(self.session)

    def on_mouse_motion(self, x, y, dx, dy):
        self.pointer.move(self.session, *self._logical(x, y))

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        self.pointer.move(self.session, *self._logical(x, y))

    def on_mouse_leave(self, x, y):
        self.pointer.release(self.session)

    # ----------------------------
    # Frame
    # ----------------------------

    def on_update(self, delta_time: float):
        self.session.tick(time.monotonic() * 1000.0)

    def _fill(self, x, y, w, h, color):
        # Arcade's origin is bottom-left
        s = self.scale
        left = x * s
        top = (self.session.viewport[1] - y) * s
        arcade.draw_lrbt_rectangle_filled(left, left + w * s, top - h * s, top, color)

    def on_draw(self):
        self.clear()

        for r in frame_rects(self.session):
            self._fill(r.x, r.y, r.width, r.height, hex_to_rgb(r.color))

        arcade.draw_text(self.hud.score_text, 8, self.height - 24, self.HUD_C, 14)
        arcade.draw_text(
            self.hud.health_text, self.width - 8, self.height - 24, self.HUD_C, 14,
            anchor_x="right",
        )

        if self.session.state is SessionState.RUNNING:
            self._draw_buttons()
        elif self.session.state is SessionState.IDLE:
            self._draw_overlay("RAIDER", "Press ENTER or click to start")
        else:
            self._draw_overlay("GAME OVER", self.hud.final_score_text, "Press ENTER or click to restart")

    def _draw_buttons(self):
        for b in self.pointer.buttons:
            color = self.BUTTON_HELD_C if b is self.pointer.active else self.BUTTON_C
            self._fill(b.x, b.y, b.width, b.height, color)
            cx = (b.x + b.width / 2) * self.scale
            cy = (self.session.viewport[1] - b.y - b.height / 2) * self.scale
            arcade.draw_text(b.label, cx, cy, self.HUD_C, 12, anchor_x="center", anchor_y="center")

    def _draw_overlay(self, title: str, *lines: str):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, self.OVERLAY_C)
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text(title, cx, cy + 30, self.HUD_C, 28, anchor_x="center")
        for i, line in enumerate(lines):
            arcade.draw_text(line, cx, cy - 10 - i * 26, self.HUD_C, 16, anchor_x="center")


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description="Play Raider")
    parser.add_argument(
        "--scale",
        type=int,
        default=3,
        help="Integer window scale of the 320x240 viewport (default: 3)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    if args.scale < 1:
        parser.error("--scale must be at least 1")

    window = RaiderWindow(GameSession(), scale=args.scale)
    logger.info("Window %dx%d, press ENTER to start", window.width, window.height)
    arcade.run()


if __name__ == "__main__":
    main()
