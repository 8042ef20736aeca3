"""Compose file and settings management module."""

from .loader import (
    ComposeSettings,
    find_compose_file,
    load_compose_file,
    load_settings,
    load_workspace,
    resolve_workspace,
)
from .models import PaneSpec, SessionSpec, SplitDirection, WindowSpec, WorkspaceSpec
from .tree import ConfigTree

__all__ = [
    "ComposeSettings",
    "ConfigTree",
    "PaneSpec",
    "SessionSpec",
    "SplitDirection",
    "WindowSpec",
    "WorkspaceSpec",
    "find_compose_file",
    "load_compose_file",
    "load_settings",
    "load_workspace",
    "resolve_workspace",
]
