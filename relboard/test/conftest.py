from __future__ import annotations

import pytest

from relboard.changeset.model import ChangesetSnapshot, MergeRequestEntry
from relboard.dashboard.state import ApplicationState


@pytest.fixture
def left() -> ChangesetSnapshot:
    return ChangesetSnapshot(
        version=251,
        timestamp="2024-05-01 10:00",
        pending_changes=(MergeRequestEntry("SULU-1", "Fix menu", "https://git/1", ""),),
    )


@pytest.fixture
def right() -> ChangesetSnapshot:
    return ChangesetSnapshot(version=65, timestamp="2024-05-01 10:01")


@pytest.fixture
def state(left: ChangesetSnapshot, right: ChangesetSnapshot) -> ApplicationState:
    return ApplicationState.create(left, right, labels=("Sulu", "Sylius"))
