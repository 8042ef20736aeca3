"""Logging utilities for tmux operations."""

from typing import Any

from ..utils.logging import LogContext, get_logger

# Create tmux logger
tmux_logger = get_logger("tmux_compose.tmux", LogContext.TMUX)


def log_tmux_command(args: tuple[str, ...]) -> None:
    """Log a raw tmux invocation."""
    tmux_logger.debug(f"tmux {' '.join(args)}", tmux_args=list(args))


def log_session_operation(
    operation: str, session_name: str, status: str, context: dict[str, Any] | None = None
) -> None:
    """Log session operation."""
    message = f"Session {operation} {status} - {session_name}"
    if context:
        message += f" - {context}"

    if status == "error":
        tmux_logger.error(message, session_name=session_name)
    else:
        tmux_logger.info(message, session_name=session_name)


def log_window_created(session_name: str, window_name: str) -> None:
    """Log window creation."""
    tmux_logger.info(
        f"Window created - {session_name}:{window_name}",
        session_name=session_name,
        window_name=window_name,
    )


def log_pane_split(target: str, direction: str) -> None:
    """Log a pane split."""
    tmux_logger.info(f"Pane split - {target} ({direction})", target=target)


def log_layout_setup(target: str, layout: str) -> None:
    """Log layout application."""
    tmux_logger.info(f"Layout applied - {target} (layout: {layout})", target=target)


def log_session_list(sessions: list[str]) -> None:
    """Log session listing."""
    tmux_logger.debug(f"Sessions listed - count: {len(sessions)}")
