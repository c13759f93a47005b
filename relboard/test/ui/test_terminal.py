"""Tests for relboard.ui.terminal module."""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from typing import TextIO

import pytest
from rich.console import Console

from relboard.core.errors import TerminalError
from relboard.dashboard.actions import Action
from relboard.dashboard.state import ApplicationState
from relboard.dashboard.view import build_view
from relboard.ui.keys import decode_key
from relboard.ui.terminal import KeyReader, TerminalSession

posix_only = pytest.mark.skipif(os.name == "nt", reason="termios is POSIX only")


class TestKeyReader:
    def test_plain_char(self) -> None:
        assert KeyReader(io.StringIO("qc")).read() == "q"

    def test_arrow_sequence_read_whole(self) -> None:
        reader = KeyReader(io.StringIO("\x1b[Ac"))
        assert reader.read() == "\x1b[A"
        assert reader.read() == "c"

    def test_bare_escape_keeps_next_key(self) -> None:
        reader = KeyReader(io.StringIO("\x1bq"))
        assert [decode_key(reader.read()), decode_key(reader.read())] == [
            Action.NOOP,
            Action.QUIT,
        ]

    def test_escape_at_end_of_input(self) -> None:
        reader = KeyReader(io.StringIO("\x1b"))
        assert reader.read() == "\x1b"
        with pytest.raises(TerminalError, match="closed"):
            reader.read()

    def test_closed_input(self) -> None:
        with pytest.raises(TerminalError, match="closed"):
            KeyReader(io.StringIO("")).read()


class TestSession:
    def test_requires_tty(self) -> None:
        console = Console(file=io.StringIO())
        with pytest.raises(TerminalError, match="TTY"):
            with TerminalSession(console, stdin=io.StringIO()):
                pass

    def test_draw_outside_session(self, state: ApplicationState) -> None:
        session = TerminalSession(Console(file=io.StringIO()), stdin=io.StringIO())
        with pytest.raises(TerminalError, match="not active"):
            session.draw(build_view(state))

    @posix_only
    def test_read_action_decodes(self) -> None:
        session = TerminalSession(Console(file=io.StringIO()), stdin=io.StringIO("\x1b[B\t"))
        assert session.read_action() is Action.CURSOR_DOWN
        assert session.read_action() is Action.TOGGLE


@posix_only
class TestTerminalModes:
    """Runs against a real pseudo-terminal."""

    @pytest.fixture
    def pty_stdin(self) -> Iterator[TextIO]:
        master, slave = os.openpty()
        stream = os.fdopen(slave, "r")
        yield stream
        stream.close()
        os.close(master)

    def test_cbreak_and_screen_restored(
        self, pty_stdin: TextIO, state: ApplicationState
    ) -> None:
        import termios

        out = io.StringIO()
        console = Console(file=out, force_terminal=True)
        before = termios.tcgetattr(pty_stdin.fileno())

        with TerminalSession(console, stdin=pty_stdin) as terminal:
            during = termios.tcgetattr(pty_stdin.fileno())
            terminal.draw(build_view(state))

        after = termios.tcgetattr(pty_stdin.fileno())
        assert during[3] & termios.ICANON == 0
        assert after == before
        assert "\x1b[?1049h" in out.getvalue()
        assert "\x1b[?1049l" in out.getvalue()

    def test_restored_when_loop_raises(self, pty_stdin: TextIO) -> None:
        import termios

        console = Console(file=io.StringIO(), force_terminal=True)
        before = termios.tcgetattr(pty_stdin.fileno())

        with pytest.raises(RuntimeError, match="boom"):
            with TerminalSession(console, stdin=pty_stdin):
                raise RuntimeError("boom")

        assert termios.tcgetattr(pty_stdin.fileno()) == before
