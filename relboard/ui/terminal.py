"""Interactive terminal session for the dashboard.

The session owns two pieces of terminal state: the tty input mode (cbreak,
so keys arrive one at a time without echo) and rich's alternate screen.
Both are released on every exit path, including exceptions raised while the
dashboard loop is running.

Usage:
    with TerminalSession() as terminal:
        run_dashboard(state, read_action=terminal.read_action, draw=terminal.draw)
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import TextIO

from rich.console import Console, ScreenContext

from relboard.core.errors import TerminalError
from relboard.dashboard.actions import Action
from relboard.dashboard.view import DashboardView

from .keys import decode_key
from .render import render_view

__all__ = ["KeyReader", "TerminalSession"]


@contextmanager
def _cbreak(stream: TextIO) -> Iterator[None]:
    if os.name == "nt":
        # msvcrt reads unbuffered keys without a mode switch.
        yield
        return

    import termios
    import tty

    fd = stream.fileno()
    try:
        old = termios.tcgetattr(fd)
        tty.setcbreak(fd)
    except termios.error as e:
        raise TerminalError(f"cannot switch terminal to key input mode: {e}") from e

    try:
        yield
    finally:
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, old)
        except termios.error as e:
            raise TerminalError(f"cannot restore terminal mode: {e}") from e


def _read_key_windows() -> str:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        arrows = {"H": "\x1b[A", "P": "\x1b[B", "M": "\x1b[C", "K": "\x1b[D"}
        return arrows.get(msvcrt.getwch(), "")
    return ch


class KeyReader:
    """Read raw key sequences from a stream, one key per call.

    Arrow keys arrive as three-character escape sequences and are returned
    whole. A bare Escape is returned on its own; the character read after it
    is held back for the next call.
    """

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending = ""

    def _next_char(self) -> str:
        if self._pending:
            ch, self._pending = self._pending, ""
            return ch
        return self._stream.read(1)

    def read(self) -> str:
        """Block for one key and return its raw sequence.

        Raises:
            TerminalError: If input is closed.
        """
        ch = self._next_char()
        if ch == "":
            raise TerminalError("terminal input closed")
        if ch != "\x1b":
            return ch

        c2 = self._next_char()
        if c2 not in ("[", "O"):
            self._pending = c2
            return ch
        return ch + c2 + self._next_char()


class TerminalSession:
    """Cbreak input plus alternate screen, scoped to a ``with`` block."""

    def __init__(self, console: Console | None = None, *, stdin: TextIO | None = None) -> None:
        self._console = console or Console()
        self._stdin = stdin or sys.stdin
        self._keys = KeyReader(self._stdin)
        self._stack = ExitStack()
        self._screen: ScreenContext | None = None

    def __enter__(self) -> TerminalSession:
        if not self._stdin.isatty() or not self._console.is_terminal:
            raise TerminalError("the dashboard requires an interactive terminal (TTY)")

        with ExitStack() as stack:
            stack.enter_context(_cbreak(self._stdin))
            try:
                self._screen = stack.enter_context(self._console.screen(hide_cursor=True))
            except OSError as e:
                raise TerminalError(f"cannot enter alternate screen: {e}") from e
            self._stack = stack.pop_all()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._screen = None
        self._stack.close()

    def read_action(self) -> Action:
        try:
            if os.name == "nt":
                seq = _read_key_windows()
            else:
                seq = self._keys.read()
        except OSError as e:
            raise TerminalError(f"cannot read from terminal: {e}") from e
        return decode_key(seq)

    def draw(self, view: DashboardView) -> None:
        if self._screen is None:
            raise TerminalError("terminal session is not active")
        try:
            self._screen.update(render_view(view))
        except OSError as e:
            raise TerminalError(f"cannot draw to terminal: {e}") from e
