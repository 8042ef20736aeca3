"""Command line interface for tmux-compose."""
