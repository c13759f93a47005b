"""Read-only view of the application state for renderers.

Renderers only see a DashboardView; they never touch ApplicationState.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from relboard.changeset.model import ChangesetSnapshot

from .checklist import DeploymentChecklist
from .state import ApplicationState, Panel

PhaseName = Literal["reviewing", "deploying"]

GENERATE_RELEASE_NOTES = "Generate release notes"


@dataclass(frozen=True, slots=True)
class PanelView:
    label: str
    snapshot: ChangesetSnapshot
    selected: bool


@dataclass(frozen=True, slots=True)
class OptionView:
    label: str
    enabled: bool
    under_cursor: bool


@dataclass(frozen=True, slots=True)
class DeploymentStep:
    """One line of the post-start step list; ``skipped`` when its option is off."""

    label: str
    skipped: bool = False


@dataclass(frozen=True, slots=True)
class DashboardView:
    phase: PhaseName
    panels: tuple[PanelView, PanelView]
    options: tuple[OptionView, ...]
    cursor: int | None
    deployment_started: bool
    steps: tuple[DeploymentStep, ...]

    @property
    def selected(self) -> PanelView:
        return next(p for p in self.panels if p.selected)


def deployment_steps(checklist: DeploymentChecklist) -> tuple[DeploymentStep, ...]:
    """Steps a started deployment walks through, in order.

    Release notes are always generated; every checklist option becomes a
    step that is skipped when disabled.
    """
    steps = [DeploymentStep(GENERATE_RELEASE_NOTES)]
    for option in checklist.options:
        steps.append(DeploymentStep(option.label, skipped=not option.enabled))
    return tuple(steps)


def build_view(state: ApplicationState) -> DashboardView:
    selected = state.selected_panel
    left, right = (
        PanelView(label=label, snapshot=snapshot, selected=selected is panel)
        for label, snapshot, panel in zip(state.labels, state.panels, (Panel.LEFT, Panel.RIGHT))
    )

    checklist = state.checklist
    if checklist is None:
        return DashboardView(
            phase="reviewing",
            panels=(left, right),
            options=(),
            cursor=None,
            deployment_started=False,
            steps=(),
        )

    options = tuple(
        OptionView(label=o.label, enabled=o.enabled, under_cursor=i == checklist.cursor)
        for i, o in enumerate(checklist.options)
    )
    return DashboardView(
        phase="deploying",
        panels=(left, right),
        options=options,
        cursor=checklist.cursor,
        deployment_started=state.deployment_started,
        steps=deployment_steps(checklist),
    )
