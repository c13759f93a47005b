"""Parse the changelog helper's JSON payload into a ChangesetSnapshot.

Two payload revisions are in circulation. Newer helpers emit
``next_version_number`` and a ``commit`` table; older ones emit ``version``
(or the older ``current_version``) without a commit. Both normalize to the
same snapshot.
"""

from __future__ import annotations

import json

from relboard.core.result import Err, Ok, Result
from relboard.core.structured import StrDict, as_str_dict, get_list, get_table, get_text, get_uint

from .model import ChangesetSnapshot, CommitInfo, MergeRequestEntry

_VERSION_KEYS = ("version", "next_version_number", "current_version")


def _parse_version(data: StrDict) -> Result[int, str]:
    for key in _VERSION_KEYS:
        if key not in data:
            continue
        value = get_uint(data, key)
        if value is None:
            return Err(f"'{key}' must be a non-negative integer")
        return Ok(value)
    return Err("missing 'version' or 'next_version_number'")


def _parse_commit(data: StrDict) -> Result[CommitInfo | None, str]:
    if data.get("commit") is None:
        return Ok(None)
    table = get_table(data, "commit")
    if table is None:
        return Err("'commit' must be an object")

    commit_hash = get_text(table, "commit_hash")
    title = get_text(table, "title")
    author = get_text(table, "author_name")
    if commit_hash is None or title is None or author is None:
        return Err("'commit' requires string commit_hash, title and author_name")
    return Ok(CommitInfo(hash=commit_hash, title=title, author_name=author))


def _parse_merge_request(index: int, item: object) -> Result[MergeRequestEntry, str]:
    table = as_str_dict(item)
    if table is None:
        return Err(f"merge_requests[{index}] must be an object")

    fields: dict[str, str] = {}
    for key in ("ticket_number", "title", "github", "flags"):
        value = get_text(table, key)
        if value is None:
            return Err(f"merge_requests[{index}].{key} must be a string")
        fields[key] = value

    return Ok(
        MergeRequestEntry(
            ticket_number=fields["ticket_number"],
            title=fields["title"],
            link_url=fields["github"],
            flags=fields["flags"],
        )
    )


def parse_snapshot(text: str) -> Result[ChangesetSnapshot, str]:
    """Parse helper stdout.

    Returns:
        Ok(ChangesetSnapshot), or Err with a short description of the first
        problem found.
    """
    try:
        raw: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(f"output is not valid JSON: {e}")

    data = as_str_dict(raw)
    if data is None:
        return Err("payload root must be an object")

    version = _parse_version(data)
    if isinstance(version, Err):
        return version

    timestamp = get_text(data, "current_time")
    if timestamp is None:
        return Err("'current_time' must be a string")

    commit = _parse_commit(data)
    if isinstance(commit, Err):
        return commit

    items = get_list(data, "merge_requests")
    if items is None:
        return Err("'merge_requests' must be a list")

    entries: list[MergeRequestEntry] = []
    for index, item in enumerate(items):
        entry = _parse_merge_request(index, item)
        if isinstance(entry, Err):
            return entry
        entries.append(entry.value)

    return Ok(
        ChangesetSnapshot(
            version=version.value,
            timestamp=timestamp,
            pending_changes=tuple(entries),
            latest_commit=commit.value,
        )
    )
