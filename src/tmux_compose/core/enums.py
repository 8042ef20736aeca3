"""Shared enums for tmux-compose."""

from enum import Enum


class StepStatus(Enum):
    """Outcome of a single tmux operation."""

    OK = "ok"
    WARNING = "warning"
    FATAL = "fatal"


class SessionOutcome(Enum):
    """Outcome of reconciling one session."""

    CREATED = "created"
    STOPPED = "stopped"
    SKIPPED = "skipped"
    FAILED = "failed"


class AddressMode(Enum):
    """How the pane that receives the next command is addressed."""

    BY_INDEX = "by-index"  # the base pane, by its pane id
    BY_NAME = "by-name"  # the window, i.e. its active pane
