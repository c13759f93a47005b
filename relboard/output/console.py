"""Console output abstraction.

Operator-facing messages (startup errors, the post-run summary) go through
ConsoleProtocol so commands can be tested with MockConsole instead of
capturing rich output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    DIM = auto()


class ConsoleProtocol(Protocol):
    """Styled line output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        ...

    def success(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...


class RichConsole:
    """Console implementation using Rich.

    Messages are printed as plain text, never as rich markup: helper stderr
    routinely contains square brackets.
    """

    _STYLES = {
        Style.DEFAULT: "",
        Style.SUCCESS: "green",
        Style.ERROR: "red bold",
        Style.DIM: "dim",
    }

    def __init__(self, *, stderr: bool = False) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)

    def _prefixed(self, prefix: str, style: Style, message: str) -> None:
        from rich.text import Text

        self._console.print(Text.assemble((prefix, self._STYLES[style]), " ", message))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=self._STYLES[style], markup=False)

    def success(self, message: str) -> None:
        self._prefixed("OK", Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._prefixed("error:", Style.ERROR, message)


@dataclass
class OutputRecord:
    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Captures output for assertions in tests."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)
