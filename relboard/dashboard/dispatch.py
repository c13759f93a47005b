"""Map one input action onto the current state.

Each phase has its own handler table. An action missing from the active
table is a no-op and returns the very same state object, so the two phases
cannot leak into each other: checklist keys do nothing while reviewing, and
panel keys do nothing once a deployment is staged.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace

from .actions import Action
from .state import ApplicationState, Deploying, Panel, Reviewing

ReviewHandler = Callable[[ApplicationState, Reviewing], ApplicationState]
DeployHandler = Callable[[ApplicationState, Deploying], ApplicationState]


def _select(panel: Panel) -> ReviewHandler:
    def handler(state: ApplicationState, phase: Reviewing) -> ApplicationState:
        if phase.selected is panel:
            return state
        return replace(state, phase=Reviewing(selected=panel))

    return handler


def _confirm(state: ApplicationState, phase: Reviewing) -> ApplicationState:
    return replace(
        state,
        phase=Deploying(selected=phase.selected, checklist=state.staged_checklist),
    )


def _cursor_up(state: ApplicationState, phase: Deploying) -> ApplicationState:
    return replace(state, phase=replace(phase, checklist=phase.checklist.move_up()))


def _cursor_down(state: ApplicationState, phase: Deploying) -> ApplicationState:
    return replace(state, phase=replace(phase, checklist=phase.checklist.move_down()))


def _toggle(state: ApplicationState, phase: Deploying) -> ApplicationState:
    return replace(state, phase=replace(phase, checklist=phase.checklist.toggle()))


def _start(state: ApplicationState, phase: Deploying) -> ApplicationState:
    if phase.started:
        return state
    return replace(state, phase=replace(phase, started=True))


REVIEW_ACTIONS: Mapping[Action, ReviewHandler] = {
    Action.MOVE_LEFT: _select(Panel.LEFT),
    Action.MOVE_RIGHT: _select(Panel.RIGHT),
    Action.CONFIRM: _confirm,
}

DEPLOY_ACTIONS: Mapping[Action, DeployHandler] = {
    Action.CURSOR_UP: _cursor_up,
    Action.CURSOR_DOWN: _cursor_down,
    Action.TOGGLE: _toggle,
    Action.START: _start,
}


def dispatch(state: ApplicationState, action: Action) -> ApplicationState:
    """Return the state after ``action``.

    Never fails. QUIT is handled by the caller's loop and is a no-op here.
    """
    phase = state.phase
    if isinstance(phase, Reviewing):
        review = REVIEW_ACTIONS.get(action)
        return state if review is None else review(state, phase)

    deploy = DEPLOY_ACTIONS.get(action)
    return state if deploy is None else deploy(state, phase)
