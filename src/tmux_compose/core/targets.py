"""Tmux target addressing."""

from dataclasses import dataclass

from .enums import AddressMode

BASE_PANE_INDEX = 0


@dataclass(frozen=True)
class RuntimeTarget:
    """A tmux target derived from the compose tree.

    ``window`` and ``pane`` locate the target in the compose tree (pane 0 is
    the window's base pane) and are what reports show. ``tmux_id`` is the
    window (``@N``) or pane (``%N``) id tmux assigned at creation. Commands
    are sent to the id whenever there is one, never to a window name or a
    positional index.
    """

    session: str
    window: str | None = None
    pane: int | None = None
    tmux_id: str | None = None

    def __str__(self) -> str:
        if self.window is None:
            # Trailing colon lets new-window append to the session
            return f"{self.session}:"
        if self.pane is None:
            return f"{self.session}:{self.window}"
        return f"{self.session}:{self.window}.{self.pane}"

    @property
    def address(self) -> str:
        """The string passed to tmux ``-t``."""
        return self.tmux_id or str(self)


@dataclass
class PaneCursor:
    """Tracks pane addressing inside one window while it is being built.

    tmux does not let panes be named. A split always makes the new pane the
    active one, and that pane gets the next positional index. Until the
    first split the base pane is addressed explicitly by its pane id; after
    it, commands go to the window id, which tmux resolves to the active pane.
    """

    session: str
    window: str
    window_id: str
    base_pane_id: str
    next_index: int = BASE_PANE_INDEX + 1
    active_index: int = BASE_PANE_INDEX

    @property
    def mode(self) -> AddressMode:
        if self.active_index == BASE_PANE_INDEX:
            return AddressMode.BY_INDEX
        return AddressMode.BY_NAME

    def window_target(self) -> RuntimeTarget:
        """The window itself, which tmux resolves to its active pane."""
        return RuntimeTarget(self.session, self.window, tmux_id=self.window_id)

    def base_target(self) -> RuntimeTarget:
        return RuntimeTarget(
            self.session, self.window, BASE_PANE_INDEX, tmux_id=self.base_pane_id
        )

    def command_target(self) -> RuntimeTarget:
        """Target for the pane the cursor currently points at."""
        if self.mode is AddressMode.BY_INDEX:
            return self.base_target()
        return self.window_target()

    def advance(self) -> int:
        """Record a successful split and return the new pane's index."""
        self.active_index = self.next_index
        self.next_index += 1
        return self.active_index
