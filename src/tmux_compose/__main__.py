"""Allow running tmux-compose with ``python -m tmux_compose``."""

from .cli.main import main

main(prog_name="tmux-compose")
