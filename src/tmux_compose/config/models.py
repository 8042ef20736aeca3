"""Typed models for the compose document."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# tmux uses these to separate session, window and pane in a target
RESERVED_NAME_CHARS = (":", ".")


class SplitDirection(str, Enum):
    """Direction used when splitting a new pane off the active one."""

    VERTICAL = "vertical"  # new pane stacked below
    HORIZONTAL = "horizontal"  # new pane beside


def _validate_target_name(kind: str, value: str) -> str:
    if not value:
        raise ValueError(f"{kind} name must not be empty")
    for char in RESERVED_NAME_CHARS:
        if char in value:
            raise ValueError(f"{kind} name {value!r} must not contain {char!r}")
    return value


class PaneSpec(BaseModel):
    """A pane inside a window."""

    model_config = ConfigDict(frozen=True)

    command: str | None = Field(default=None, description="Command sent to the pane")
    split: SplitDirection = Field(
        default=SplitDirection.VERTICAL,
        description="Split direction, ignored for the window's first pane",
    )

    @field_validator("split", mode="before")
    @classmethod
    def validate_split(cls, value):
        """Accept split directions case-insensitively."""
        if isinstance(value, str):
            return value.strip().lower()
        return value


class WindowSpec(BaseModel):
    """A window inside a session. ``name`` is already resolved."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Window name")
    command: str | None = Field(default=None, description="Command for the base pane")
    panes: tuple[PaneSpec, ...] = Field(default=())
    layout: str | None = Field(default=None, description="tmux layout name")

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Reject names tmux cannot address."""
        return _validate_target_name("Window", value)

    @property
    def applies_layout(self) -> bool:
        """A layout only applies to a window that declares panes."""
        return bool(self.layout) and len(self.panes) > 0


class SessionSpec(BaseModel):
    """A tmux session and its windows."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Unique session name")
    windows: tuple[WindowSpec, ...] = Field(default=())

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Reject names tmux cannot address."""
        return _validate_target_name("Session", value)

    @model_validator(mode="before")
    @classmethod
    def ensure_first_window(cls, data):
        """tmux always creates a session with one window."""
        if isinstance(data, dict) and not data.get("windows"):
            data = {**data, "windows": [{"name": "window1"}]}
        return data


class WorkspaceSpec(BaseModel):
    """Root of the compose document."""

    model_config = ConfigDict(frozen=True)

    version: str | None = None
    sessions: tuple[SessionSpec, ...] = Field(default=())

    @model_validator(mode="after")
    def validate_unique_sessions(self) -> "WorkspaceSpec":
        """Session names key tmux sessions, so they must be unique."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for session in self.sessions:
            if session.name in seen and session.name not in duplicates:
                duplicates.append(session.name)
            seen.add(session.name)
        if duplicates:
            raise ValueError(f"Duplicate session names: {', '.join(duplicates)}")
        return self

    @property
    def session_names(self) -> list[str]:
        return [session.name for session in self.sessions]
