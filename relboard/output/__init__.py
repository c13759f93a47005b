"""Operator-facing output: console abstraction and error presentation."""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style
from .errors import print_startup_error, startup_error_exit_code

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "print_startup_error",
    "startup_error_exit_code",
]
