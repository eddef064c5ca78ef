"""
Display-independent front-end logic: key dispatch, on-screen buttons, HUD text

Coordinates here are logical viewport pixels with a top-left origin, the
same space the renderer uses. The Arcade window converts its events into
key names and logical points and hands them over.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .session import SessionState

# Arcade key names (attributes of ``arcade.key``) -> control
KEY_BINDINGS = {
    "UP": "up",
    "W": "up",
    "DOWN": "down",
    "S": "down",
    "LEFT": "left",
    "A": "left",
    "RIGHT": "right",
    "D": "right",
    "SPACE": "fire",
}

START_KEYS = ("ENTER", "RETURN")


def start_or_restart(session) -> bool:
    """Start an idle session or restart a finished one"""
    if session.state is SessionState.IDLE:
        session.start()
    elif session.state is SessionState.OVER:
        session.restart()
    else:
        return False
    return True


def handle_key(session, key_name: str, pressed: bool) -> bool:
    """Apply one key event. Returns True when the key is bound to something"""
    control = KEY_BINDINGS.get(key_name)
    if control is not None:
        if pressed:
            session.controls.press(control)
        else:
            session.controls.release(control)
        return True
    if key_name in START_KEYS:
        if pressed:
            start_or_restart(session)
        return True
    return False


def to_logical(x: float, y: float, scale: float, height: float) -> Tuple[float, float]:
    """Window point (bottom-left origin, scaled) -> logical viewport point"""
    return x / scale, height - y / scale


@dataclass(frozen=True)
class TouchButton:
    control: str
    label: str
    x: float
    y: float
    width: float
    height: float

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


def default_buttons(width: float, height: float) -> Tuple[TouchButton, ...]:
    """D-pad in the bottom-left corner, fire button in the bottom-right"""
    size = 22
    return (
        TouchButton("up", "^", 32, height - 76, size, size),
        TouchButton("left", "<", 8, height - 52, size, size),
        TouchButton("right", ">", 56, height - 52, size, size),
        TouchButton("down", "v", 32, height - 28, size, size),
        TouchButton("fire", "FIRE", width - 40, height - 44, 32, 32),
    )


def button_at(buttons: Sequence[TouchButton], x: float, y: float) -> Optional[TouchButton]:
    for button in buttons:
        if button.contains(x, y):
            return button
    return None


class PointerControls:
    """Pointer (mouse / touch) source for the control flags.

    A press on a button holds its control until the pointer is released or
    leaves that button. While the session is not running any press acts as
    the start / restart button.
    """

    def __init__(self, buttons: Sequence[TouchButton]):
        self.buttons = tuple(buttons)
        self.active: Optional[TouchButton] = None

    def press(self, session, x: float, y: float) -> bool:
        if session.state is not SessionState.RUNNING:
            return start_or_restart(session)

        button = button_at(self.buttons, x, y)
        if button is None:
            return False
        self.release(session)
        session.controls.press(button.control)
        self.active = button
        return True

    def move(self, session, x: float, y: float):
        if self.active is not None and not self.active.contains(x, y):
            self.release(session)

    def release(self, session):
        if self.active is not None:
            session.controls.release(self.active.control)
            self.active = None


class Hud:
    """Score / health / final-score text kept current from session events"""

    def __init__(self, session=None):
        self.score_text = ""
        self.health_text = ""
        self.final_score_text = ""
        if session is not None:
            self.attach(session)

    def attach(self, session):
        self.score_text = f"Score: {session.score}"
        self.health_text = f"Health: {session.player.health}%"
        self.final_score_text = ""

        session.subscribe("score", self._on_score)
        session.subscribe("health", self._on_health)
        session.subscribe("game_over", self._on_game_over)

    def _on_score(self, score: int):
        self.score_text = f"Score: {score}"

    def _on_health(self, health: int):
        self.health_text = f"Health: {health}%"

    def _on_game_over(self, score: int):
        self.final_score_text = f"Your score: {score}"
