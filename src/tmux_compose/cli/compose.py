"""CLI commands for bringing compose sessions up and down."""

import click

from ..config import load_workspace
from ..core import ReconciliationEngine, RunReport, SessionOutcome
from ..tmux import get_tmux_driver
from .utils import (
    CliError,
    error_handler,
    output_json,
    quiet_echo,
    success_message,
    verbose_echo,
    warning_message,
)


def _build_engine(ctx: click.Context) -> ReconciliationEngine:
    settings = ctx.obj["settings"]
    return ReconciliationEngine(
        get_tmux_driver(settings.socket_name),
        settle_delay=settings.settle_delay,
    )


def _echo_steps(ctx: click.Context, report: RunReport) -> None:
    for session in report.sessions:
        for step in session.steps:
            verbose_echo(
                ctx, f"{session.name}: {step.operation} {step.target} -> {step.status.value}"
            )


def _finish(ctx: click.Context, report: RunReport, done_message: str) -> None:
    failed = report.by_outcome(SessionOutcome.FAILED)
    if failed:
        names = ", ".join(s.name for s in failed)
        raise CliError(f"{len(failed)} session(s) failed: {names}")
    if not ctx.obj.get("json"):
        quiet_echo(ctx, done_message)


@click.command()
@click.pass_context
@error_handler
def up(ctx: click.Context) -> None:
    """Create and start tmux sessions defined in the config."""
    workspace = load_workspace(ctx.obj["compose_file"])
    report = _build_engine(ctx).up(workspace)
    _echo_steps(ctx, report)

    if ctx.obj.get("json"):
        output_json(report.to_dict())
    else:
        for session in report.sessions:
            if session.outcome is SessionOutcome.SKIPPED:
                quiet_echo(ctx, f"Session '{session.name}' already exists, skipping...")
            elif session.outcome is SessionOutcome.CREATED:
                if not ctx.obj.get("quiet"):
                    success_message(f"Created session '{session.name}'")
                for step in session.warnings:
                    warning_message(step.message or f"{step.operation} failed")
            else:
                click.echo(
                    click.style(
                        f"Failed to create session '{session.name}': {session.message}",
                        fg="red",
                    ),
                    err=True,
                )

    _finish(ctx, report, "All sessions created successfully!")
    if not ctx.obj.get("json"):
        quiet_echo(ctx, "Use 'tmux attach -t SESSION_NAME' to connect to a session.")


@click.command()
@click.pass_context
@error_handler
def down(ctx: click.Context) -> None:
    """Stop and remove tmux sessions defined in the config."""
    workspace = load_workspace(ctx.obj["compose_file"])
    report = _build_engine(ctx).down(workspace)
    _echo_steps(ctx, report)

    if ctx.obj.get("json"):
        output_json(report.to_dict())
    else:
        for session in report.sessions:
            if session.outcome is SessionOutcome.SKIPPED:
                quiet_echo(ctx, f"Session '{session.name}' not found, skipping...")
            elif session.outcome is SessionOutcome.STOPPED:
                if not ctx.obj.get("quiet"):
                    success_message(f"Stopped session '{session.name}'")
            else:
                click.echo(
                    click.style(
                        f"Failed to stop session '{session.name}': {session.message}",
                        fg="red",
                    ),
                    err=True,
                )

    _finish(ctx, report, "All sessions stopped!")


@click.command(name="ls")
@click.pass_context
@error_handler
def list_sessions(ctx: click.Context) -> None:
    """List running tmux sessions."""
    settings = ctx.obj["settings"]
    sessions = get_tmux_driver(settings.socket_name).list_sessions()

    if ctx.obj.get("json"):
        output_json(
            [
                {"name": s.name, "windows": s.windows, "attached": s.attached}
                for s in sessions
            ]
        )
        return

    if not sessions:
        click.echo("No active tmux sessions.")
        return

    click.echo("Running tmux sessions:")
    for s in sessions:
        attached = " (attached)" if s.attached else ""
        click.echo(f"{s.name}: {s.windows} windows{attached}")
