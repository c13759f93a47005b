"""Dashboard core: checklist, phases, transitions and the read-only view."""

from .actions import Action
from .checklist import DeploymentChecklist, DeploymentOption, default_checklist
from .dispatch import dispatch
from .loop import run_dashboard
from .state import ApplicationState, Deploying, Panel, Reviewing
from .view import DashboardView, build_view

__all__ = [
    "Action",
    "ApplicationState",
    "DashboardView",
    "Deploying",
    "DeploymentChecklist",
    "DeploymentOption",
    "Panel",
    "Reviewing",
    "build_view",
    "default_checklist",
    "dispatch",
    "run_dashboard",
]
