"""
Tmux access for tmux-compose.

This package provides the driver the reconciliation engine uses to talk to
tmux: session checks, session/window creation, pane splits, keystrokes,
selection, layouts, teardown and listing.
"""

from ..utils.logging import TmuxError
from .driver import (
    SessionSummary,
    TmuxDriver,
    WindowHandle,
    get_tmux_driver,
    reset_tmux_driver,
)

__all__ = [
    "SessionSummary",
    "TmuxDriver",
    "TmuxError",
    "WindowHandle",
    "get_tmux_driver",
    "reset_tmux_driver",
]
