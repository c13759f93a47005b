"""Subprocess execution with Result-based error handling.

Wraps subprocess.run so the changelog helper can be invoked without
try/except at the call site: spawn failures and non-zero exits both come back
as ProcessError values carrying the captured stderr.

Usage:
    result = run(["php", "change_log_generator.php", "--format=json"])
    match result:
        case Ok(stdout):
            ...
        case Err(error):
            print(error.stderr)
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from relboard.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code, or -1 if the process could not be started.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the OS error text on spawn failure.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def spawn_failed(self) -> bool:
        return self.returncode == -1

    def __str__(self) -> str:
        # Never print the full vector: it carries the credential.
        cmd_str = " ".join(self.command[:2])
        if len(self.command) > 2:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: Sequence[str],
    *,
    cwd: Path | None = None,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command, wait for it, and return its stdout.

    There is no timeout: the call blocks until the process exits. Output is
    decoded as UTF-8 with undecodable bytes replaced.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory (inherits the current one if None).
        env: Environment variables (uses current env if None).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    command = tuple(cmd)
    try:
        proc = subprocess.run(
            command,
            cwd=str(cwd) if cwd is not None else None,
            env=env,
            capture_output=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=command, returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=command,
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)
