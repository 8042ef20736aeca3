"""Read-only, path-addressed queries over a parsed compose document."""

import re
from typing import Any

from ..utils.logging import ConfigurationError

_TOKEN = re.compile(r"([^.\[\]]+)|\[(\d+)\]")


class ConfigTree:
    """Query a parsed YAML document with paths like ``sessions[0].windows[1].name``."""

    def __init__(self, data: Any):
        self._data = data

    @staticmethod
    def parse_path(path: str) -> list[str | int]:
        """Split a path into mapping keys and sequence indices."""
        parts: list[str | int] = []
        position = 0
        for match in _TOKEN.finditer(path):
            key, index = match.groups()
            # Keys after the first are dot-separated, indices follow directly
            separator = "." if key is not None and parts else ""
            if path[position : match.start()] != separator:
                raise ValueError(f"Invalid config path: {path!r}")
            parts.append(int(index) if index is not None else key)
            position = match.end()
        if path[position:]:
            raise ValueError(f"Invalid config path: {path!r}")
        return parts

    def _lookup(self, path: str) -> Any:
        node = self._data
        for part in self.parse_path(path):
            if isinstance(part, int):
                if not isinstance(node, list) or part >= len(node):
                    return None
            elif not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get(self, path: str, default: Any = None) -> Any:
        """Return the value at ``path``, or ``default`` when absent or null."""
        value = self._lookup(path)
        return default if value is None else value

    def length(self, path: str) -> int:
        """Return the length of the list at ``path``, 0 when absent or null.

        Raises:
            ConfigurationError: If the value at ``path`` is not a list
        """
        value = self._lookup(path)
        if value is None:
            return 0
        if not isinstance(value, list):
            raise ConfigurationError(
                f"Expected a list at {path}, got {type(value).__name__}", {"path": path}
            )
        return len(value)
