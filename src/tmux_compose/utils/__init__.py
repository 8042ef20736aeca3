"""Shared utilities for tmux-compose."""
