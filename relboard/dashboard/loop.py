from __future__ import annotations

from collections.abc import Callable

from .actions import Action
from .dispatch import dispatch
from .state import ApplicationState
from .view import DashboardView, build_view

ReadAction = Callable[[], Action]
Draw = Callable[[DashboardView], None]


def run_dashboard(
    state: ApplicationState,
    *,
    read_action: ReadAction,
    draw: Draw,
) -> ApplicationState:
    """Draw, block for one action, apply it; repeat until QUIT.

    Returns the final state. Exceptions raised by ``read_action`` or ``draw``
    (terminal I/O) propagate unchanged.
    """
    current = state
    while True:
        draw(build_view(current))
        action = read_action()
        if action is Action.QUIT:
            return current
        current = dispatch(current, action)
