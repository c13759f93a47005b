"""Render a DashboardView with rich.

Everything here is a pure function of the view; nothing reads terminal size
or state. rich handles layout and truncation.
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from relboard.changeset.model import ChangesetSnapshot
from relboard.dashboard.view import DashboardView, DeploymentStep, OptionView, PanelView

__all__ = ["render_snapshot_table", "render_view"]

SELECTED_STYLE = "yellow"

REVIEW_KEYS = (("Left/Right", "select"), ("c", "deployment view"), ("q", "quit"))
DEPLOY_KEYS = (("Up/Down", "move"), ("Tab", "toggle"), ("Enter", "start"), ("q", "quit"))


def _key_hints(keys: tuple[tuple[str, str], ...]) -> Text:
    text = Text()
    for i, (key, label) in enumerate(keys):
        if i:
            text.append("  ")
        text.append(key, style="bold")
        text.append(f" {label}", style="dim")
    return text


def _version_box(panel: PanelView) -> Panel:
    style = SELECTED_STYLE if panel.selected else ""
    return Panel(
        Text(panel.snapshot.headline, style=style),
        title=panel.label,
        title_align="left",
        border_style=style or "none",
    )


def render_snapshot_table(snapshot: ChangesetSnapshot) -> Table:
    """Pending merge requests as a table, one row per entry."""
    table = Table(expand=True, header_style="bold", show_edge=False)
    table.add_column("Ticket", no_wrap=True, width=10)
    table.add_column("Description", ratio=3)
    table.add_column("Link", ratio=2, overflow="fold")
    table.add_column("Tags", no_wrap=True, width=12)

    if not snapshot.pending_changes:
        table.add_row("", Text("No pending merge requests", style="dim"), "", "")
    for entry in snapshot.pending_changes:
        table.add_row(entry.ticket_number, entry.title, entry.link_url, entry.flags)
    return table


def _latest_commit_line(snapshot: ChangesetSnapshot) -> Text | None:
    commit = snapshot.latest_commit
    if commit is None:
        return None
    return Text.assemble(
        ("Latest commit ", "dim"),
        (commit.short_hash, "bold yellow"),
        " ",
        commit.title,
        (f" by {commit.author_name}", "dim"),
    )


def _render_review(view: DashboardView) -> RenderableType:
    left, right = view.panels
    boxes = Table.grid(expand=True, padding=(0, 1))
    boxes.add_column(ratio=1)
    boxes.add_column(ratio=1)
    boxes.add_row(_version_box(left), _version_box(right))

    snapshot = view.selected.snapshot
    body: list[RenderableType] = []
    commit_line = _latest_commit_line(snapshot)
    if commit_line is not None:
        body.append(commit_line)
    body.append(render_snapshot_table(snapshot))

    commits = Panel(
        Group(*body),
        title=f"Commit ({view.selected.label})",
        title_align="left",
        subtitle=Text("(c) Move to deployment view", style="red"),
        subtitle_align="left",
    )
    return Group(boxes, commits, _key_hints(REVIEW_KEYS))


def _option_line(option: OptionView) -> Text:
    marker = "> " if option.under_cursor else "  "
    box = "[x]" if option.enabled else "[ ]"
    style = "bold" if option.under_cursor else ""
    return Text(f"{marker}{box} {option.label}", style=style)


def _step_line(step: DeploymentStep, *, started: bool) -> Text:
    label = f"{step.label} [skipped]" if step.skipped else step.label
    if started and not step.skipped:
        return Text(f"✅ {label}", style="bold")
    return Text(f"   {label}", style="bright_black")


def _render_deployment(view: DashboardView) -> RenderableType:
    if view.deployment_started:
        start_bar = Text("Deployment running", style="black on yellow", justify="center")
    else:
        start_bar = Text("Start deployment", style="on red", justify="center")

    target = view.selected
    content = Group(
        Text(f"{target.label}: {target.snapshot.headline}", style=SELECTED_STYLE),
        Text(),
        *(_option_line(option) for option in view.options),
        Text(),
        start_bar,
        Text(),
        *(_step_line(step, started=view.deployment_started) for step in view.steps),
    )
    return Group(
        Panel(content, title="Deployment", title_align="center"),
        _key_hints(DEPLOY_KEYS),
    )


def render_view(view: DashboardView) -> RenderableType:
    if view.phase == "deploying":
        return _render_deployment(view)
    return _render_review(view)
