"""Changeset snapshots: model, payload parsing and the helper-process source."""

from .errors import FetchError
from .model import ChangesetSnapshot, CommitInfo, MergeRequestEntry
from .parse import parse_snapshot
from .source import ChangesetSource, HelperProcessSource, fetch_pair

__all__ = [
    "ChangesetSnapshot",
    "ChangesetSource",
    "CommitInfo",
    "FetchError",
    "HelperProcessSource",
    "MergeRequestEntry",
    "fetch_pair",
    "parse_snapshot",
]
