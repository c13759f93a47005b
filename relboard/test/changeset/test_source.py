"""Tests for relboard.changeset.source module."""

from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

from relboard.changeset.errors import FetchError
from relboard.changeset.model import ChangesetSnapshot
from relboard.changeset.source import HelperProcessSource, fetch_pair
from relboard.core.config import HelperConfig
from relboard.core.result import Err, Ok, Result

_HELPER = """
import json
import sys

args = dict(a.split("=", 1) for a in sys.argv[1:])
project = args["--projectId"]
if args["--token"] != "secret":
    sys.stderr.write("401 Unauthorized")
    sys.exit(1)
if project == "broken":
    print("PHP Warning: something")
    sys.exit(0)
if project == "crash":
    sys.stderr.write("[error] project crash exploded")
    sys.exit(2)
print(json.dumps({
    "version": int(project),
    "current_time": "2024-05-01 10:00",
    "merge_requests": [
        {"ticket_number": "T-" + project, "title": "t", "github": "g", "flags": ""}
    ],
}))
"""


@pytest.fixture
def source(tmp_path: Path) -> HelperProcessSource:
    script = tmp_path / "change_log_generator.py"
    script.write_text(_HELPER, encoding="utf-8")
    return HelperProcessSource(
        command=(sys.executable, str(script)),
        repository_flag="--projectId=",
        credential_flag="--token=",
    )


class TestHelperProcessSource:
    def test_build_command(self) -> None:
        source = HelperProcessSource.from_config(HelperConfig(command=("php", "gen.php")))

        assert source.build_command("251", "tok") == [
            "php",
            "gen.php",
            "--projectId=251",
            "--token=tok",
        ]

    def test_fetch_success(self, source: HelperProcessSource) -> None:
        result = source.fetch("251", "secret")

        assert isinstance(result, Ok)
        assert result.value.version == 251
        assert result.value.pending_changes[0].ticket_number == "T-251"

    def test_non_zero_exit_carries_stderr(self, source: HelperProcessSource) -> None:
        result = source.fetch("crash", "secret")

        assert isinstance(result, Err)
        assert result.error.kind == "helper_failed"
        assert result.error.repository_id == "crash"
        assert result.error.detail == "[error] project crash exploded"
        assert "status 2" in result.error.message

    def test_bad_credential_is_helper_failure(self, source: HelperProcessSource) -> None:
        result = source.fetch("251", "wrong")

        assert isinstance(result, Err)
        assert result.error.detail == "401 Unauthorized"

    def test_unparseable_output(self, source: HelperProcessSource) -> None:
        result = source.fetch("broken", "secret")

        assert isinstance(result, Err)
        assert result.error.kind == "invalid_payload"
        assert result.error.detail is not None
        assert "not valid JSON" in result.error.detail

    def test_missing_helper(self) -> None:
        source = HelperProcessSource(
            command=("nonexistent_changelog_helper_12345",),
            repository_flag="--projectId=",
            credential_flag="--token=",
        )

        result = source.fetch("251", "secret")

        assert isinstance(result, Err)
        assert result.error.kind == "helper_missing"

    def test_empty_credential_rejected(self, source: HelperProcessSource) -> None:
        with pytest.raises(ValueError):
            source.fetch("251", "")


def _snapshot(version: int) -> ChangesetSnapshot:
    return ChangesetSnapshot(version=version, timestamp="t")


class _FakeSource:
    """Answers from a table; optionally holds one repository back."""

    def __init__(
        self,
        answers: dict[str, Result[ChangesetSnapshot, FetchError]],
        *,
        hold: str | None = None,
    ) -> None:
        self.answers = answers
        self.hold = hold
        self.release = threading.Event()
        self.calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def fetch(self, repository_id: str, credential: str) -> Result[ChangesetSnapshot, FetchError]:
        with self._lock:
            self.calls.append((repository_id, credential))
        if repository_id == self.hold:
            assert self.release.wait(timeout=5)
        else:
            self.release.set()
        return self.answers[repository_id]


class TestFetchPair:
    def test_pairs_by_request_not_completion(self) -> None:
        # Left is held until right has finished, so right completes first.
        source = _FakeSource({"251": Ok(_snapshot(1)), "65": Ok(_snapshot(2))}, hold="251")

        result = fetch_pair(source, ("251", "65"), "tok")

        assert result == Ok((_snapshot(1), _snapshot(2)))
        assert sorted(source.calls) == [("251", "tok"), ("65", "tok")]

    def test_either_failure_aborts(self) -> None:
        failure = FetchError(kind="helper_failed", repository_id="65", message="exit 1")
        source = _FakeSource({"251": Ok(_snapshot(1)), "65": Err(failure)})

        assert fetch_pair(source, ("251", "65"), "tok") == Err(failure)

    def test_first_failure_in_repository_order(self) -> None:
        left = FetchError(kind="invalid_payload", repository_id="251", message="bad")
        right = FetchError(kind="helper_failed", repository_id="65", message="exit 1")
        source = _FakeSource({"251": Err(left), "65": Err(right)})

        assert fetch_pair(source, ("251", "65"), "tok") == Err(left)

    def test_real_helper_pair(self, source: HelperProcessSource) -> None:
        result = fetch_pair(source, ("251", "65"), "secret")

        assert isinstance(result, Ok)
        left, right = result.value
        assert (left.version, right.version) == (251, 65)

    def test_real_helper_one_fails(self, source: HelperProcessSource) -> None:
        result = fetch_pair(source, ("251", "crash"), "secret")

        assert isinstance(result, Err)
        assert result.error.repository_id == "crash"


def test_fetch_error_summary() -> None:
    error = FetchError(kind="helper_failed", repository_id="65", message="helper exited", detail="x")
    assert error.summary == "helper exited (repository 65)"
