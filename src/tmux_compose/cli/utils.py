"""CLI utilities for output formatting and common functionality."""

import json
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from ..utils.logging import TmuxComposeException


class CliError(Exception):
    """Exception for CLI errors."""

    def __init__(self, message: str, exit_code: int = 1):
        """Initialize CLI error.

        Args:
            message: Error message
            exit_code: Exit code for the CLI
        """
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator for handling CLI errors."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except CliError as e:
            click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
            sys.exit(e.exit_code)
        except TmuxComposeException as e:
            click.echo(click.style(f"Error: {e.message}", fg="red"), err=True)
            sys.exit(1)
        except (click.ClickException, click.exceptions.Exit, click.Abort):
            raise
        except Exception as e:
            click.echo(click.style(f"Unexpected error: {e}", fg="red"), err=True)
            sys.exit(1)

    return wrapper


def success_message(message: str) -> None:
    """Display a success message."""
    click.echo(click.style(f"✓ {message}", fg="green"))


def warning_message(message: str) -> None:
    """Display a warning message."""
    click.echo(click.style(f"Warning: {message}", fg="yellow"), err=True)


def output_json(data: Any) -> None:
    """Output data as JSON."""
    click.echo(json.dumps(data, indent=2))


def verbose_echo(ctx: click.Context, message: str) -> None:
    """Echo message only if verbose mode is enabled."""
    if ctx.obj and ctx.obj.get("verbose"):
        click.echo(click.style(f"[VERBOSE] {message}", fg="blue"), err=True)


def quiet_echo(ctx: click.Context, message: str) -> None:
    """Echo message only if not in quiet mode."""
    if not (ctx.obj and ctx.obj.get("quiet")):
        click.echo(message)
