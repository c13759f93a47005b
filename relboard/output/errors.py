"""Startup error presentation.

Centralized formatting and exit-code mapping for every error that can end a
run before (or while) the dashboard is on screen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relboard.changeset.errors import FetchError
from relboard.core.config import ConfigError
from relboard.core.errors import ErrorCode, TerminalError
from relboard.output.console import Style

if TYPE_CHECKING:
    from relboard.output.console import ConsoleProtocol

__all__ = ["StartupError", "print_startup_error", "startup_error_exit_code"]

type StartupError = ConfigError | FetchError | TerminalError


def print_startup_error(error: StartupError, console: ConsoleProtocol) -> None:
    """Print an error and any captured diagnostic text."""
    match error:
        case ConfigError(message=message, path=path):
            console.error(message)
            if path is not None:
                console.print(f"config: {path}", Style.DIM)
        case FetchError(detail=detail):
            console.error(error.summary)
            if detail:
                console.print(detail, Style.DIM)
        case TerminalError():
            console.error(str(error))


def startup_error_exit_code(error: StartupError) -> int:
    match error:
        case ConfigError():
            return int(ErrorCode.CONFIG_ERROR)
        case FetchError():
            return int(ErrorCode.FETCH_ERROR)
        case TerminalError():
            return int(ErrorCode.TERMINAL_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
