from __future__ import annotations

from enum import Enum


class Action(Enum):
    """Named input actions. Their meaning depends on the current phase."""

    QUIT = "quit"
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    CONFIRM = "confirm"
    CURSOR_UP = "cursor-up"
    CURSOR_DOWN = "cursor-down"
    TOGGLE = "toggle"
    START = "start"
    NOOP = "noop"

    def __str__(self) -> str:
        return self.value
