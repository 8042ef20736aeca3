"""
Reconciliation engine.

Materializes (``up``) or tears down (``down``) the sessions described by a
WorkspaceSpec by issuing tmux operations one at a time, in order. A split
changes which pane is active, so the order of operations is part of the
contract. Windows and base panes are addressed by the ids tmux reports when
they are created, never by name or positional index.

Failure policy:
- critical steps (session/window creation, splits, keystrokes) abort the
  current session; reconciliation continues with the next session
- best-effort steps (pane reselect, layout, final window select) record a
  warning and reconciliation of the session continues
"""

import time
from collections.abc import Callable
from functools import partial
from typing import Any

from ..config.loader import DEFAULT_SETTLE_DELAY
from ..config.models import SessionSpec, WindowSpec, WorkspaceSpec
from ..tmux.driver import TmuxDriver
from ..utils.logging import LogContext, TmuxError, get_logger, log_performance
from .enums import SessionOutcome, StepStatus
from .results import RunReport, SessionAborted, SessionReport, StepResult
from .targets import PaneCursor, RuntimeTarget

engine_logger = get_logger(__name__, LogContext.ENGINE)


class ReconciliationEngine:
    """Drives a TmuxDriver towards the state described by a WorkspaceSpec."""

    def __init__(self, driver: TmuxDriver, settle_delay: float = DEFAULT_SETTLE_DELAY):
        """Initialize the engine.

        Args:
            driver: tmux driver that receives every operation
            settle_delay: seconds to wait before applying a window layout
        """
        self._driver = driver
        self._settle_delay = settle_delay

    @log_performance(LogContext.ENGINE)
    def up(self, workspace: WorkspaceSpec) -> RunReport:
        """Create every declared session that does not exist yet."""
        report = RunReport(command="up")
        for session in workspace.sessions:
            report.sessions.append(self._create_session(session))
        return report

    @log_performance(LogContext.ENGINE)
    def down(self, workspace: WorkspaceSpec) -> RunReport:
        """Kill every declared session that exists."""
        report = RunReport(command="down")
        for session in workspace.sessions:
            report.sessions.append(self._destroy_session(session))
        return report

    def _step(
        self,
        report: SessionReport,
        operation: str,
        target: RuntimeTarget,
        action: Callable[[], Any],
        critical: bool = True,
    ) -> Any:
        """Run one driver call, record its result on ``report`` and return
        whatever the driver returned (None when a best-effort step failed).

        Raises:
            SessionAborted: If a critical step fails
        """
        try:
            value = action()
        except TmuxError as e:
            status = StepStatus.FATAL if critical else StepStatus.WARNING
            result = StepResult(status, operation, str(target), e.message)
            report.steps.append(result)
            if critical:
                raise SessionAborted(result)
            engine_logger.warning(
                f"{operation} failed on {target}, continuing",
                session_name=report.name,
                operation=operation,
                error=e.message,
            )
            return None

        report.steps.append(StepResult(StepStatus.OK, operation, str(target)))
        return value

    def _create_session(self, spec: SessionSpec) -> SessionReport:
        if self._driver.session_exists(spec.name):
            engine_logger.info(
                f"Session '{spec.name}' already exists, skipping",
                session_name=spec.name,
            )
            return SessionReport(spec.name, SessionOutcome.SKIPPED, message="already exists")

        report = SessionReport(spec.name, SessionOutcome.CREATED)
        first_window = spec.windows[0]
        session_target = RuntimeTarget(spec.name)
        engine_logger.info(f"Creating session: {spec.name}", session_name=spec.name)

        try:
            # new-session always creates one window, so window 0 comes with it
            handle = self._step(
                report,
                "new-session",
                RuntimeTarget(spec.name, first_window.name),
                partial(self._driver.create_session, spec.name, first_window.name),
            )
            first = RuntimeTarget(
                spec.name, first_window.name, tmux_id=handle.window_id
            )
            for index, window in enumerate(spec.windows):
                if index > 0:
                    handle = self._step(
                        report,
                        "new-window",
                        session_target,
                        partial(
                            self._driver.create_window, session_target.address, window.name
                        ),
                    )
                cursor = PaneCursor(
                    spec.name, window.name, handle.window_id, handle.pane_id
                )
                self._build_window(report, cursor, window)
        except SessionAborted as e:
            report.outcome = SessionOutcome.FAILED
            report.message = f"{e.step.operation} on {e.step.target} failed: {e.step.message}"
            engine_logger.error(
                f"Aborted session '{spec.name}'",
                session_name=spec.name,
                operation=e.step.operation,
                target=e.step.target,
                error=e.step.message,
            )
            return report

        self._step(
            report,
            "select-window",
            first,
            partial(self._driver.select_window, first.address),
            critical=False,
        )
        return report

    def _build_window(
        self, report: SessionReport, cursor: PaneCursor, window: WindowSpec
    ) -> None:
        """Send the window command, build the panes and apply the layout."""
        if window.command:
            target = cursor.window_target()
            self._step(
                report,
                "send-keys",
                target,
                partial(self._driver.send_keys, target.address, window.command),
            )

        for position, pane in enumerate(window.panes):
            if position > 0:
                target = cursor.window_target()
                self._step(
                    report,
                    "split-window",
                    target,
                    partial(self._driver.split_pane, target.address, pane.split),
                )
                cursor.advance()

            if pane.command:
                target = cursor.command_target()
                self._step(
                    report,
                    "send-keys",
                    target,
                    partial(self._driver.send_keys, target.address, pane.command),
                )

        if window.applies_layout:
            self._apply_layout(report, cursor, window.layout)

    def _apply_layout(self, report: SessionReport, cursor: PaneCursor, layout: str) -> None:
        # tmux needs a moment to finish pane bookkeeping after the last split
        if self._settle_delay > 0:
            time.sleep(self._settle_delay)

        base = cursor.base_target()
        self._step(
            report,
            "select-pane",
            base,
            partial(self._driver.select_pane, base.address),
            critical=False,
        )

        target = cursor.window_target()
        self._step(
            report,
            "select-layout",
            target,
            partial(self._driver.select_layout, target.address, layout),
            critical=False,
        )
        result = report.steps[-1]
        if result.status is StepStatus.WARNING:
            result.message = f"Failed to apply layout '{layout}': {result.message}"

    def _destroy_session(self, spec: SessionSpec) -> SessionReport:
        if not self._driver.session_exists(spec.name):
            engine_logger.info(
                f"Session '{spec.name}' not found, skipping", session_name=spec.name
            )
            return SessionReport(spec.name, SessionOutcome.SKIPPED, message="not found")

        report = SessionReport(spec.name, SessionOutcome.STOPPED)
        engine_logger.info(f"Stopping session: {spec.name}", session_name=spec.name)
        try:
            self._step(
                report,
                "kill-session",
                RuntimeTarget(spec.name),
                partial(self._driver.kill_session, spec.name),
            )
        except SessionAborted as e:
            report.outcome = SessionOutcome.FAILED
            report.message = e.step.message
        return report
