"""Compose file loading and application settings."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..utils.logging import ConfigurationError, LogContext, get_logger
from .models import WorkspaceSpec
from .tree import ConfigTree

config_logger = get_logger("tmux_compose.config", LogContext.CONFIG)

DEFAULT_COMPOSE_FILES = ("tmux-compose.yml", "tmux-compose.yaml")
DEFAULT_SETTLE_DELAY = 0.2
MAX_SETTLE_DELAY = 5.0


class ComposeSettings(BaseModel):
    """Runtime settings for tmux-compose."""

    compose_file: str | None = Field(
        default=None, description="Path to the compose file"
    )
    settle_delay: float = Field(
        default=DEFAULT_SETTLE_DELAY,
        ge=0.0,
        le=MAX_SETTLE_DELAY,
        description="Seconds to wait for tmux before applying a layout",
    )
    socket_name: str | None = Field(default=None, description="tmux socket name (-L)")

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    log_file: str | None = Field(default=None, description="Log file path")
    structured_logs: bool = Field(default=False, description="Emit JSON log lines")


def load_env_vars() -> dict[str, Any]:
    """Load settings from environment variables."""
    config: dict[str, Any] = {}
    prefix = "TMUX_COMPOSE_"

    env_mappings = {
        f"{prefix}FILE": "compose_file",
        f"{prefix}SETTLE_DELAY": "settle_delay",
        f"{prefix}SOCKET_NAME": "socket_name",
        f"{prefix}LOG_LEVEL": "log_level",
        f"{prefix}LOG_FILE": "log_file",
        f"{prefix}STRUCTURED_LOGS": "structured_logs",
    }

    for env_var, config_key in env_mappings.items():
        if env_var in os.environ:
            env_value = os.environ[env_var]
            if config_key == "settle_delay":
                try:
                    config[config_key] = float(env_value)
                except ValueError:
                    config_logger.warning(
                        "Ignoring non-numeric environment value",
                        variable=env_var,
                        value=env_value,
                    )
                    continue
            elif config_key == "structured_logs":
                config[config_key] = env_value.lower() in ("true", "1", "yes", "on")
            else:
                config[config_key] = env_value

    return config


def load_settings(cli_overrides: dict[str, Any] | None = None) -> ComposeSettings:
    """Build settings from environment variables and CLI flags.

    Precedence order (highest to lowest):
    1. CLI flag overrides
    2. Environment variables
    3. Default values
    """
    config_data = load_env_vars()

    if cli_overrides:
        config_data.update({k: v for k, v in cli_overrides.items() if v is not None})

    try:
        return ComposeSettings(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}")


def find_compose_file(custom_path: str | None = None) -> Path:
    """Resolve the compose file path.

    An explicit path must exist. Otherwise the working directory is searched
    for ``tmux-compose.yml`` and then ``tmux-compose.yaml``.
    """
    if custom_path:
        path = Path(custom_path).expanduser()
        if path.is_file():
            return path
        raise ConfigurationError(
            f"Config file '{custom_path}' not found.", {"path": custom_path}
        )

    for name in DEFAULT_COMPOSE_FILES:
        path = Path.cwd() / name
        if path.is_file():
            return path

    raise ConfigurationError(
        f"Config file '{DEFAULT_COMPOSE_FILES[0]}' not found.",
        {"path": DEFAULT_COMPOSE_FILES[0]},
    )


def load_compose_file(config_path: Path) -> ConfigTree:
    """Parse a compose file into a queryable tree."""
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {config_path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {config_path} must contain a mapping at the top level"
        )
    return ConfigTree(data)


def _text(tree: ConfigTree, path: str) -> str | None:
    """Read an optional scalar as text, treating '' as absent.

    Raises:
        ConfigurationError: If the value is a list or a mapping
    """
    value = tree.get(path)
    if value is None:
        return None
    if isinstance(value, (list, dict)):
        raise ConfigurationError(
            f"Expected a single value at {path}, got {type(value).__name__}",
            {"path": path},
        )
    text = str(value)
    return text if text else None


def resolve_workspace(tree: ConfigTree) -> WorkspaceSpec:
    """Resolve every field of the document once, applying defaults.

    Defaults:
    - window name: ``window<N>`` with N the 1-based declared position
    - pane split: ``vertical``
    - command and layout: absent, also when given as an empty string
    """
    sessions = []
    for i in range(tree.length("sessions")):
        base = f"sessions[{i}]"
        name = _text(tree, f"{base}.name")
        if name is None:
            raise ConfigurationError(
                f"Session at position {i + 1} has no name", {"path": f"{base}.name"}
            )

        windows = []
        for w in range(tree.length(f"{base}.windows")):
            window_base = f"{base}.windows[{w}]"
            panes = [
                {
                    "command": _text(tree, f"{window_base}.panes[{p}].command"),
                    "split": tree.get(f"{window_base}.panes[{p}].split", "vertical"),
                }
                for p in range(tree.length(f"{window_base}.panes"))
            ]
            windows.append(
                {
                    "name": _text(tree, f"{window_base}.name") or f"window{w + 1}",
                    "command": _text(tree, f"{window_base}.command"),
                    "panes": panes,
                    "layout": _text(tree, f"{window_base}.layout"),
                }
            )

        sessions.append({"name": name, "windows": windows})

    try:
        return WorkspaceSpec(version=_text(tree, "version"), sessions=sessions)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid compose file: {e}")


def load_workspace(config_path: Path) -> WorkspaceSpec:
    """Load and resolve a compose file."""
    workspace = resolve_workspace(load_compose_file(config_path))
    config_logger.info(
        "Compose file loaded",
        path=str(config_path),
        sessions=workspace.session_names,
    )
    return workspace
