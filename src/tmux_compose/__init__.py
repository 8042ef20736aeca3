"""tmux-compose: define and manage tmux sessions with a YAML compose file."""

__version__ = "0.1.0"

from .config import WorkspaceSpec, load_workspace
from .core import ReconciliationEngine
from .tmux import TmuxDriver

__all__ = [
    "ReconciliationEngine",
    "TmuxDriver",
    "WorkspaceSpec",
    "load_workspace",
    "__version__",
]
