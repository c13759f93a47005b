"""Fetch changeset snapshots by running the changelog helper.

Usage:
    source = HelperProcessSource.from_config(config.helper)
    match fetch_pair(source, config.repository_ids, token):
        case Ok((left, right)):
            state = ApplicationState.create(left, right, labels=config.labels)
        case Err(error):
            console.error(error.summary)
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relboard.core.config import HelperConfig
from relboard.core.result import Err, Ok, Result
from relboard.platform.process import run

from .errors import FetchError
from .model import ChangesetSnapshot
from .parse import parse_snapshot

__all__ = ["ChangesetSource", "HelperProcessSource", "fetch_pair"]


class ChangesetSource(Protocol):
    """Produces one repository's snapshot, synchronously."""

    def fetch(self, repository_id: str, credential: str) -> Result[ChangesetSnapshot, FetchError]:
        ...


@dataclass(frozen=True, slots=True)
class HelperProcessSource:
    """Runs the external changelog helper once per fetch and parses its stdout."""

    command: tuple[str, ...]
    repository_flag: str
    credential_flag: str
    cwd: Path | None = None

    @classmethod
    def from_config(cls, helper: HelperConfig) -> HelperProcessSource:
        return cls(
            command=helper.command,
            repository_flag=helper.repository_flag,
            credential_flag=helper.credential_flag,
            cwd=helper.cwd,
        )

    def build_command(self, repository_id: str, credential: str) -> list[str]:
        return [
            *self.command,
            f"{self.repository_flag}{repository_id}",
            f"{self.credential_flag}{credential}",
        ]

    def fetch(self, repository_id: str, credential: str) -> Result[ChangesetSnapshot, FetchError]:
        if not credential:
            raise ValueError("credential must be non-empty")

        result = run(self.build_command(repository_id, credential), cwd=self.cwd)
        if isinstance(result, Err):
            error = result.error
            if error.spawn_failed:
                return Err(
                    FetchError(
                        kind="helper_missing",
                        repository_id=repository_id,
                        message=f"cannot start changelog helper '{self.command[0]}'",
                        detail=error.stderr.strip() or None,
                    )
                )
            return Err(
                FetchError(
                    kind="helper_failed",
                    repository_id=repository_id,
                    message=f"changelog helper exited with status {error.returncode}",
                    detail=error.stderr.strip() or None,
                )
            )

        return parse_snapshot(result.value).map_err(
            lambda reason: FetchError(
                kind="invalid_payload",
                repository_id=repository_id,
                message="changelog helper returned an unexpected payload",
                detail=reason,
            )
        )


def fetch_pair(
    source: ChangesetSource,
    repository_ids: tuple[str, str],
    credential: str,
) -> Result[tuple[ChangesetSnapshot, ChangesetSnapshot], FetchError]:
    """Fetch both repositories concurrently and wait for both.

    Results are paired by request position, not completion order. If either
    fetch fails the first failure in repository order is returned and no
    partial pair is produced.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="relboard-fetch") as pool:
        futures = [pool.submit(source.fetch, repo_id, credential) for repo_id in repository_ids]
        left, right = (future.result() for future in futures)

    if isinstance(left, Err):
        return left
    if isinstance(right, Err):
        return right
    return Ok((left.value, right.value))
