"""Application state for the release board.

The state is a frozen value. Transitions (see ``dispatch``) build a new
state instead of mutating a shared one, and the phase is a tagged union:
the checklist only exists once the operator has confirmed a panel and moved
on to ``Deploying``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from relboard.changeset.model import ChangesetSnapshot

from .checklist import DeploymentChecklist, default_checklist


class Panel(Enum):
    LEFT = 0
    RIGHT = 1

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class Reviewing:
    """Comparing the two changesets; the operator may switch panels."""

    selected: Panel = Panel.LEFT


@dataclass(frozen=True, slots=True)
class Deploying:
    """A panel has been confirmed; the checklist is live.

    ``started`` only ever goes from False to True.
    """

    selected: Panel
    checklist: DeploymentChecklist
    started: bool = False


type Phase = Reviewing | Deploying


@dataclass(frozen=True, slots=True)
class ApplicationState:
    """Root of the dashboard state.

    Attributes:
        panels: Left and right snapshots, fixed for the lifetime of the run.
        labels: Display labels for the two panels, same order.
        phase: Reviewing or Deploying.
        staged_checklist: Checklist handed to ``Deploying`` on confirm.
    """

    panels: tuple[ChangesetSnapshot, ChangesetSnapshot]
    labels: tuple[str, str]
    phase: Phase
    staged_checklist: DeploymentChecklist

    def __post_init__(self) -> None:
        if len(self.panels) != 2:
            raise ValueError(f"exactly two panels are required, got {len(self.panels)}")
        if len(self.labels) != 2:
            raise ValueError(f"exactly two labels are required, got {len(self.labels)}")

    @classmethod
    def create(
        cls,
        left: ChangesetSnapshot,
        right: ChangesetSnapshot,
        *,
        labels: tuple[str, str] = ("Left", "Right"),
        checklist: DeploymentChecklist | None = None,
    ) -> ApplicationState:
        return cls(
            panels=(left, right),
            labels=labels,
            phase=Reviewing(),
            staged_checklist=checklist or default_checklist(*labels),
        )

    @property
    def selected_panel(self) -> Panel:
        return self.phase.selected

    @property
    def selected_snapshot(self) -> ChangesetSnapshot:
        return self.panels[self.phase.selected.value]

    @property
    def selected_label(self) -> str:
        return self.labels[self.phase.selected.value]

    @property
    def is_reviewing(self) -> bool:
        return isinstance(self.phase, Reviewing)

    @property
    def is_deploying(self) -> bool:
        return isinstance(self.phase, Deploying)

    @property
    def checklist(self) -> DeploymentChecklist | None:
        """The live checklist, or None while still reviewing."""
        if isinstance(self.phase, Deploying):
            return self.phase.checklist
        return None

    @property
    def deployment_started(self) -> bool:
        return isinstance(self.phase, Deploying) and self.phase.started
