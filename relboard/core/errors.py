"""Process exit codes and shared error types.

Every fatal path in the CLI ends with one of these codes, so scripts wrapping
``relboard`` can tell a bad config apart from a failed changelog fetch.
"""

from enum import IntEnum

__all__ = ["ErrorCode", "TerminalError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success (including a normal quit from the dashboard)
    - 1: User error (bad command-line input)
    - 2: Configuration error (unreadable config, missing credential)
    - 3: Fetch error (helper failed or emitted an unexpected payload)
    - 4: Terminal error (no TTY, raw mode or screen setup failed)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    FETCH_ERROR = 3
    TERMINAL_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


class TerminalError(RuntimeError):
    """The terminal could not be set up, read from, or restored."""

