"""Error types for fetching changeset snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

FetchErrorKind = Literal["helper_missing", "helper_failed", "invalid_payload"]


@dataclass(frozen=True, slots=True)
class FetchError:
    """A snapshot could not be produced for one repository.

    ``detail`` carries the helper's captured stderr for ``helper_failed``, the
    OS error for ``helper_missing`` and the offending field for
    ``invalid_payload``.
    """

    kind: FetchErrorKind
    repository_id: str
    message: str
    detail: str | None = None

    @property
    def summary(self) -> str:
        return f"{self.message} (repository {self.repository_id})"
