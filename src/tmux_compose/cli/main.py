"""Main CLI entry point for tmux-compose."""

import shutil
from pathlib import Path

import click

from .. import __version__
from ..config import find_compose_file, load_settings
from ..utils.logging import LogContext, LogLevel, get_logger, setup_logging
from .compose import down, list_sessions, up
from .utils import CliError, error_handler

cli_logger = get_logger(__name__, LogContext.CLI)


def _print_usage(ctx: click.Context, param: click.Parameter, value: bool) -> None:
    """Print usage and exit nonzero, like the shell tool this replaces."""
    if not value or ctx.resilient_parsing:
        return
    click.echo(ctx.get_help())
    ctx.exit(1)


def check_environment() -> None:
    """Fail early when tmux itself is missing."""
    if shutil.which("tmux") is None:
        raise CliError("tmux is required but not installed. Please install tmux first.")


@click.group(
    invoke_without_command=True,
    add_help_option=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.version_option(version=__version__, prog_name="tmux-compose")
@click.option(
    "-h",
    "--help",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_print_usage,
    help="Show this help message and exit",
)
@click.option(
    "--file",
    "-f",
    "compose_file",
    metavar="FILE",
    help="Specify an alternate compose file (default: tmux-compose.yml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--json", is_flag=True, help="Output in JSON format")
# Settings override flags
@click.option("--log-level", help="Override log_level setting")
@click.option("--log-file", help="Override log_file setting")
@click.option("--socket-name", "-L", help="tmux socket name")
@click.option("--settle-delay", type=float, help="Seconds to wait before applying layouts")
@click.pass_context
@error_handler
def main(
    ctx: click.Context,
    compose_file: str | None,
    verbose: bool,
    quiet: bool,
    json: bool,
    log_level: str | None,
    log_file: str | None,
    socket_name: str | None,
    settle_delay: float | None,
) -> None:
    """Define and manage tmux sessions with a YAML compose file.

    Commands:
    - up: create and start the sessions defined in the config
    - down: stop and remove the sessions defined in the config
    - ls: list running tmux sessions
    """
    if ctx.invoked_subcommand is None:
        click.echo(click.style("Error: No command given", fg="red"), err=True)
        click.echo(ctx.get_help(), err=True)
        ctx.exit(1)

    if verbose and quiet:
        raise click.UsageError("Cannot use both --verbose and --quiet options")

    if verbose and log_level is None:
        log_level = LogLevel.INFO.value

    settings = load_settings(
        {
            "compose_file": compose_file,
            "log_level": log_level,
            "log_file": log_file,
            "socket_name": socket_name,
            "settle_delay": settle_delay,
        }
    )
    setup_logging(
        settings.log_level,
        Path(settings.log_file).expanduser() if settings.log_file else None,
        enable_structured=settings.structured_logs,
    )

    check_environment()

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json
    ctx.obj["settings"] = settings
    ctx.obj["compose_file"] = find_compose_file(settings.compose_file)
    cli_logger.debug(
        "Using compose file",
        path=str(ctx.obj["compose_file"]),
        socket_name=settings.socket_name,
        settle_delay=settings.settle_delay,
    )


main.add_command(up)
main.add_command(down)
main.add_command(list_sessions)


if __name__ == "__main__":
    main()
