"""
Pytest configuration and shared fixtures for tmux-compose tests.
"""

import itertools
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tmux_compose.config import ConfigTree, resolve_workspace
from tmux_compose.tmux import SessionSummary, TmuxError, WindowHandle


class FakeTmuxDriver:
    """In-memory stand-in for TmuxDriver that records every call.

    It models just enough tmux behaviour to check addressing. Windows and
    panes get tmux-style ids (``@N`` and ``%N``), and only those ids are
    accepted as targets. Each window tracks its panes and its active pane,
    and the keys typed into every pane are kept in ``typed``.
    """

    def __init__(self, existing: list[str] | None = None):
        self.calls: list[tuple] = []
        self.sessions: dict[str, list[dict]] = {}
        self.typed: dict[str, list[str]] = {}
        self.fail_on: dict[str, str] = {}
        self._window_ids = itertools.count()
        self._pane_ids = itertools.count()
        for name in existing or []:
            self._add_window(name, "window1")

    def _add_window(self, session_name: str, window_name: str) -> WindowHandle:
        window = {
            "id": f"@{next(self._window_ids)}",
            "name": window_name,
            "panes": [],
            "active": None,
        }
        self.sessions.setdefault(session_name, []).append(window)
        return WindowHandle(window["id"], self._add_pane(window))

    def _add_pane(self, window: dict) -> str:
        pane_id = f"%{next(self._pane_ids)}"
        window["panes"].append(pane_id)
        window["active"] = pane_id
        self.typed[pane_id] = []
        return pane_id

    def _resolve(self, target: str) -> tuple[str, dict, str]:
        """Return the session name, window and pane id a target reaches."""
        for session_name, windows in self.sessions.items():
            for window in windows:
                if target == window["id"]:
                    return session_name, window, window["active"]
                if target in window["panes"]:
                    return session_name, window, target
        raise TmuxError(f"can't find pane: {target}")

    def _label(self, target: str) -> str:
        """Render a target as session:window or session:window.pane."""
        session_name, window, pane_id = self._resolve(target)
        label = f"{session_name}:{window['name']}"
        if target.startswith("%"):
            label += f".{window['panes'].index(pane_id)}"
        return label

    def _maybe_fail(self, operation: str, label: str) -> None:
        marker = self.fail_on.get(operation)
        if marker is not None and marker in label:
            raise TmuxError(f"tmux {operation} failed: can't find {label}")

    @property
    def mutating_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] not in ("session_exists", "list_sessions")]

    def operations(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]

    def pane_keys(self, session_name: str, window_index: int) -> list[list[str]]:
        """Keys typed into each pane of a window, in pane order."""
        window = self.sessions[session_name][window_index]
        return [self.typed[pane_id] for pane_id in window["panes"]]

    def session_exists(self, session_name: str) -> bool:
        self.calls.append(("session_exists", session_name))
        return session_name in self.sessions

    def create_session(self, session_name: str, window_name: str) -> WindowHandle:
        self.calls.append(("create_session", session_name, window_name))
        self._maybe_fail("create_session", session_name)
        return self._add_window(session_name, window_name)

    def create_window(self, target: str, window_name: str) -> WindowHandle:
        self.calls.append(("create_window", target, window_name))
        self._maybe_fail("create_window", f"{target}{window_name}")
        session_name = target.rstrip(":")
        if session_name not in self.sessions:
            raise TmuxError(f"can't find session: {session_name}")
        return self._add_window(session_name, window_name)

    def split_pane(self, target: str, direction) -> None:
        self.calls.append(("split_pane", target, direction.value))
        self._maybe_fail("split_pane", self._label(target))
        _, window, _ = self._resolve(target)
        self._add_pane(window)

    def send_keys(self, target: str, keys: str) -> None:
        self.calls.append(("send_keys", target, keys))
        self._maybe_fail("send_keys", self._label(target))
        _, _, pane_id = self._resolve(target)
        self.typed[pane_id].append(keys)

    def select_pane(self, target: str) -> None:
        self.calls.append(("select_pane", target))
        self._maybe_fail("select_pane", self._label(target))
        _, window, pane_id = self._resolve(target)
        window["active"] = pane_id

    def select_window(self, target: str) -> None:
        self.calls.append(("select_window", target))
        self._maybe_fail("select_window", self._label(target))

    def select_layout(self, target: str, layout: str) -> None:
        self.calls.append(("select_layout", target, layout))
        self._maybe_fail("select_layout", self._label(target))

    def kill_session(self, session_name: str) -> None:
        self.calls.append(("kill_session", session_name))
        self._maybe_fail("kill_session", session_name)
        del self.sessions[session_name]

    def list_sessions(self) -> list[SessionSummary]:
        self.calls.append(("list_sessions",))
        return [
            SessionSummary(name=name, windows=len(windows), attached=False)
            for name, windows in self.sessions.items()
        ]


def build_workspace(data: dict):
    """Resolve a raw compose document into a WorkspaceSpec."""
    return resolve_workspace(ConfigTree(data))


@pytest.fixture
def fake_driver():
    """Empty tmux server."""
    return FakeTmuxDriver()


@pytest.fixture
def dev_document():
    """Compose document with an editor window and a three-pane server window."""
    return {
        "version": "1",
        "sessions": [
            {
                "name": "dev",
                "windows": [
                    {"name": "editor", "command": "vim"},
                    {
                        "name": "server",
                        "panes": [
                            {"command": "npm run dev"},
                            {"command": "npm run test:watch", "split": "horizontal"},
                            {"command": "tail -f logs/app.log", "split": "horizontal"},
                        ],
                        "layout": "main-vertical",
                    },
                ],
            }
        ],
    }


@pytest.fixture
def dev_workspace(dev_document):
    return build_workspace(dev_document)


@pytest.fixture
def compose_file(tmp_path, dev_document):
    """Write the dev document to a compose file."""
    import yaml

    path = tmp_path / "tmux-compose.yml"
    path.write_text(yaml.safe_dump(dev_document))
    return path


@pytest.fixture
def driver_factory():
    """Build fake drivers with pre-existing sessions."""
    return FakeTmuxDriver


@pytest.fixture
def workspace_factory():
    """Resolve raw documents into WorkspaceSpecs."""
    return build_workspace
