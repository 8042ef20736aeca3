"""
Tmux driver.

Thin imperative adapter over libtmux. Every mutating operation takes a tmux
target string and is issued as a single tmux command, so the caller stays in
control of addressing and ordering. Creating a session or window reports the
ids tmux assigned to the new window and its base pane. Failures raise
TmuxError.
"""

from dataclasses import dataclass

import libtmux
from libtmux import exc as libtmux_exc

from ..config.models import SplitDirection
from ..utils.logging import TmuxError
from .logging_utils import (
    log_layout_setup,
    log_pane_split,
    log_session_list,
    log_session_operation,
    log_tmux_command,
    log_window_created,
    tmux_logger,
)

ENTER_KEY = "C-m"

# Printed by new-window -P
WINDOW_FORMAT = "#{window_id} #{pane_id}"

SPLIT_FLAGS = {
    SplitDirection.VERTICAL: "-v",
    SplitDirection.HORIZONTAL: "-h",
}


@dataclass
class SessionSummary:
    """A running tmux session as reported by ``ls``."""

    name: str
    windows: int
    attached: bool


@dataclass(frozen=True)
class WindowHandle:
    """Ids of a newly created window and of its base pane."""

    window_id: str
    pane_id: str


class TmuxDriver:
    """Issues tmux commands against one tmux server."""

    def __init__(self, socket_name: str | None = None):
        """Initialize tmux driver.

        Args:
            socket_name: Optional tmux socket name, as with ``tmux -L``
        """
        self.socket_name = socket_name
        self._server = libtmux.Server(socket_name=socket_name)
        tmux_logger.debug("Tmux driver initialized", socket_name=socket_name)

    def _run(self, *args: str, session_name: str | None = None) -> list[str]:
        """Run a tmux command and return its stdout lines.

        Raises:
            TmuxError: If tmux is unavailable or reports an error
        """
        log_tmux_command(args)
        try:
            proc = self._server.cmd(*args)
        except libtmux_exc.LibTmuxException as e:
            raise TmuxError(f"tmux {args[0]} failed: {e}", session_name=session_name)

        if proc.stderr:
            raise TmuxError(
                f"tmux {args[0]} failed: {' '.join(proc.stderr)}",
                session_name=session_name,
                context={"args": list(args)},
            )
        return proc.stdout

    def session_exists(self, session_name: str) -> bool:
        """Check if a tmux session exists under exactly this name."""
        try:
            return self._server.has_session(session_name, exact=True)
        except libtmux_exc.LibTmuxException as e:
            tmux_logger.debug(f"Session check failed for {session_name}: {e}")
            return False

    def create_session(self, session_name: str, window_name: str) -> WindowHandle:
        """Create a detached session whose first window is ``window_name``."""
        log_session_operation("create", session_name, "starting")
        try:
            session = self._server.new_session(
                session_name=session_name,
                window_name=window_name,
                attach=False,
            )
            window = session.windows[0]
            handle = WindowHandle(window.window_id, window.panes[0].pane_id)
        except libtmux_exc.LibTmuxException as e:
            log_session_operation("create", session_name, "error", {"error": str(e)})
            raise TmuxError(
                f"Failed to create session {session_name}: {e}",
                session_name=session_name,
            )
        log_session_operation(
            "create", session_name, "success", {"window_id": handle.window_id}
        )
        return handle

    def create_window(self, target: str, window_name: str) -> WindowHandle:
        """Append a window named ``window_name`` to the session in ``target``."""
        lines = self._run(
            "new-window", "-d", "-P", "-F", WINDOW_FORMAT, "-t", target, "-n", window_name
        )
        try:
            window_id, pane_id = lines[0].split()
        except (IndexError, ValueError):
            raise TmuxError(f"tmux new-window did not report the new window: {lines}")
        log_window_created(target.rstrip(":"), window_name)
        return WindowHandle(window_id, pane_id)

    def split_pane(self, target: str, direction: SplitDirection) -> None:
        """Split the active pane of ``target``; the new pane becomes active."""
        self._run("split-window", SPLIT_FLAGS[SplitDirection(direction)], "-t", target)
        log_pane_split(target, SplitDirection(direction).value)

    def send_keys(self, target: str, keys: str) -> None:
        """Type ``keys`` into ``target`` followed by Enter."""
        self._run("send-keys", "-t", target, keys, ENTER_KEY)

    def select_pane(self, target: str) -> None:
        self._run("select-pane", "-t", target)

    def select_window(self, target: str) -> None:
        self._run("select-window", "-t", target)

    def select_layout(self, target: str, layout: str) -> None:
        """Arrange the panes of ``target`` with a named tmux layout."""
        self._run("select-layout", "-t", target, layout)
        log_layout_setup(target, layout)

    def kill_session(self, session_name: str) -> None:
        """Kill a session and, with it, all of its windows and panes."""
        self._run("kill-session", "-t", f"={session_name}", session_name=session_name)
        log_session_operation("destroy", session_name, "success")

    def list_sessions(self) -> list[SessionSummary]:
        """List all sessions on the server; empty when no server is running."""
        try:
            sessions = [
                SessionSummary(
                    name=session.session_name,
                    windows=int(session.session_windows or 0),
                    attached=int(session.session_attached or 0) > 0,
                )
                for session in self._server.sessions
            ]
        except libtmux_exc.LibTmuxException as e:
            tmux_logger.debug(f"Could not list sessions: {e}")
            return []

        log_session_list([s.name for s in sessions])
        return sessions


# Global tmux driver instance
_tmux_driver: TmuxDriver | None = None


def get_tmux_driver(socket_name: str | None = None) -> TmuxDriver:
    """Get the global tmux driver for ``socket_name``."""
    global _tmux_driver
    if _tmux_driver is None or _tmux_driver.socket_name != socket_name:
        _tmux_driver = TmuxDriver(socket_name=socket_name)
    return _tmux_driver


def reset_tmux_driver() -> None:
    """Drop the global tmux driver."""
    global _tmux_driver
    _tmux_driver = None
