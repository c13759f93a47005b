"""Translate raw key sequences into dashboard actions.

Bindings are identical in both phases; whether an action does anything is
decided by the dispatcher.
"""

from __future__ import annotations

from collections.abc import Mapping

from relboard.dashboard.actions import Action

_SEQUENCES: Mapping[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    # Application cursor mode
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
}

KEY_BINDINGS: Mapping[str, Action] = {
    "q": Action.QUIT,
    "Q": Action.QUIT,
    "left": Action.MOVE_LEFT,
    "right": Action.MOVE_RIGHT,
    "c": Action.CONFIRM,
    "up": Action.CURSOR_UP,
    "down": Action.CURSOR_DOWN,
    "tab": Action.TOGGLE,
    "enter": Action.START,
    # Reserved, deliberately unbound: space, backspace.
}


def key_name(seq: str) -> str:
    """Name a raw sequence ("\\x1b[A" -> "up"); printable keys name themselves."""
    return _SEQUENCES.get(seq, seq)


def decode_key(seq: str) -> Action:
    return KEY_BINDINGS.get(key_name(seq), Action.NOOP)
