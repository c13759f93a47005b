from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console

from relboard import __version__
from relboard.changeset.model import ChangesetSnapshot
from relboard.changeset.source import HelperProcessSource, fetch_pair
from relboard.core.config import Config, load_config_or_default, resolve_credential
from relboard.core.errors import TerminalError
from relboard.core.result import Err
from relboard.dashboard.loop import run_dashboard
from relboard.dashboard.state import ApplicationState
from relboard.output.console import ConsoleProtocol, RichConsole, Style
from relboard.output.errors import StartupError, print_startup_error, startup_error_exit_code
from relboard.ui.render import render_snapshot_table
from relboard.ui.terminal import TerminalSession

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
    help="Compare two pending releases and stage a deployment.",
)


def _fail(error: StartupError, console: ConsoleProtocol) -> NoReturn:
    print_startup_error(error, console)
    raise typer.Exit(code=startup_error_exit_code(error))


def load_snapshots(
    config_path: Path | None, console: ConsoleProtocol
) -> tuple[Config, tuple[ChangesetSnapshot, ChangesetSnapshot]]:
    """Load config, read the credential, fetch both repositories.

    Every failure exits here, before any terminal state is touched.
    """
    config_r = load_config_or_default(config_path)
    if isinstance(config_r, Err):
        _fail(config_r.error, console)
    config = config_r.value

    token_r = resolve_credential(config)
    if isinstance(token_r, Err):
        _fail(token_r.error, console)

    source = HelperProcessSource.from_config(config.helper)
    pair_r = fetch_pair(source, config.repository_ids, token_r.value)
    if isinstance(pair_r, Err):
        _fail(pair_r.error, console)

    return config, pair_r.value


def _print_summary(state: ApplicationState, console: ConsoleProtocol) -> None:
    checklist = state.checklist
    if checklist is None or not state.deployment_started:
        return
    console.success(f"deployment flagged as started for {state.selected_label}")
    for option in checklist.options:
        console.print(f"  [{'x' if option.enabled else ' '}] {option.label}", Style.DIM)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to relboard.toml (defaults to $RELBOARD_CONFIG, then ./relboard.toml)",
    ),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    ctx.obj = config
    if ctx.invoked_subcommand is not None:
        return

    errors = RichConsole(stderr=True)
    cfg, (left, right) = load_snapshots(config, errors)
    state = ApplicationState.create(left, right, labels=cfg.labels)

    try:
        with TerminalSession() as terminal:
            final = run_dashboard(state, read_action=terminal.read_action, draw=terminal.draw)
    except TerminalError as e:
        _fail(e, errors)

    _print_summary(final, RichConsole())


@app.command()
def show(
    ctx: typer.Context,
    config: Path | None = typer.Option(None, "--config", help="Path to relboard.toml"),
) -> None:
    """Fetch both changesets and print them without the dashboard."""
    config_path: Path | None = config if config is not None else ctx.obj
    cfg, snapshots = load_snapshots(config_path, RichConsole(stderr=True))

    out = Console(highlight=False)
    for label, snapshot in zip(cfg.labels, snapshots):
        out.print()
        out.print(f"{label}: {snapshot.headline}", style="bold", markup=False)
        commit = snapshot.latest_commit
        if commit is not None:
            out.print(
                f"latest commit {commit.short_hash} {commit.title} by {commit.author_name}",
                style="dim",
                markup=False,
            )
        out.print(render_snapshot_table(snapshot))


def main() -> None:
    app()
