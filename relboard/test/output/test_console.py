"""Tests for relboard.output.console module."""

from __future__ import annotations

import pytest

from relboard.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("bad")

        assert console.messages == ["OK done", "error: bad"]
        assert console.has_error()

    def test_print_style(self) -> None:
        console = MockConsole()
        console.print("x", Style.DIM)
        assert console.outputs[0].style == Style.DIM


class TestRichConsole:
    def test_error_goes_to_stderr_without_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(stderr=True).error("[error] helper crashed")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error: [error] helper crashed" in captured.err

    def test_print_keeps_brackets(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().print("  [x] Send release mail", Style.DIM)
        assert "[x] Send release mail" in capsys.readouterr().out
