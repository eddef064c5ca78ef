"""
Control flags consumed by the simulation
"""

from dataclasses import dataclass, fields
from typing import Sequence

CONTROLS = ("up", "down", "left", "right", "fire")


@dataclass
class InputState:
    """Current state of the five logical controls.

    Input collaborators (keyboard, on-screen pointer buttons, an RL policy)
    flip these flags; the session only ever reads them.
    """
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    fire: bool = False

    def press(self, control: str):
        self._set(control, True)

    def release(self, control: str):
        self._set(control, False)

    def release_all(self):
        for f in fields(self):
            setattr(self, f.name, False)

    def _set(self, control: str, value: bool):
        if control not in CONTROLS:
            raise KeyError(f"Unknown control: {control!r}")
        setattr(self, control, value)

    @classmethod
    def from_action(cls, action: Sequence[int]) -> "InputState":
        """Build flags from a ``[vertical, horizontal, fire]`` action.

        vertical: 0 none, 1 up, 2 down
        horizontal: 0 none, 1 left, 2 right
        fire: 0/1
        """
        vertical, horizontal, fire = int(action[0]), int(action[1]), int(action[2])
        return cls(
            up=vertical == 1,
            down=vertical == 2,
            left=horizontal == 1,
            right=horizontal == 2,
            fire=fire == 1,
        )
