"""Reconciliation results."""

from dataclasses import dataclass, field
from typing import Any

from .enums import SessionOutcome, StepStatus


@dataclass
class StepResult:
    """Result of one tmux operation issued by the engine."""

    status: StepStatus
    operation: str
    target: str
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "operation": self.operation,
            "target": self.target,
            "message": self.message,
        }


@dataclass
class SessionReport:
    """What happened to one declared session."""

    name: str
    outcome: SessionOutcome
    steps: list[StepResult] = field(default_factory=list)
    message: str | None = None

    @property
    def warnings(self) -> list[StepResult]:
        return [s for s in self.steps if s.status is StepStatus.WARNING]

    def count(self, operation: str) -> int:
        """Number of successful steps for ``operation``."""
        return sum(
            1
            for s in self.steps
            if s.operation == operation and s.status is StepStatus.OK
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "outcome": self.outcome.value,
            "message": self.message,
            "steps": [s.to_dict() for s in self.steps],
        }


@dataclass
class RunReport:
    """Result of an ``up`` or ``down`` run."""

    command: str
    sessions: list[SessionReport] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(s.outcome is SessionOutcome.FAILED for s in self.sessions)

    def by_outcome(self, outcome: SessionOutcome) -> list[SessionReport]:
        return [s for s in self.sessions if s.outcome is outcome]

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "ok": self.ok,
            "sessions": [s.to_dict() for s in self.sessions],
        }


class SessionAborted(Exception):
    """Raised inside the engine when a critical step fails."""

    def __init__(self, step: StepResult):
        super().__init__(step.message)
        self.step = step
