"""Core reconciliation functionality."""

from .engine import ReconciliationEngine
from .enums import AddressMode, SessionOutcome, StepStatus
from .results import RunReport, SessionReport, StepResult
from .targets import PaneCursor, RuntimeTarget

__all__ = [
    "AddressMode",
    "PaneCursor",
    "ReconciliationEngine",
    "RunReport",
    "RuntimeTarget",
    "SessionOutcome",
    "SessionReport",
    "StepResult",
    "StepStatus",
]
