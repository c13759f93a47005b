from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class MergeRequestEntry:
    """One merge request waiting to ship. All fields are display strings."""

    ticket_number: str
    title: str
    link_url: str
    flags: str


@dataclass(frozen=True, slots=True)
class CommitInfo:
    hash: str
    title: str
    author_name: str

    @property
    def short_hash(self) -> str:
        return self.hash[:8]


@dataclass(frozen=True, slots=True)
class ChangesetSnapshot:
    """Point-in-time summary of one repository's pending release."""

    version: int
    timestamp: str
    pending_changes: tuple[MergeRequestEntry, ...] = ()
    latest_commit: CommitInfo | None = None

    @property
    def headline(self) -> str:
        return f"Version {self.version} ({self.timestamp})"
