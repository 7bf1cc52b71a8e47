"""Workspace manager for multi-repo git worktrees."""

__version__ = "0.3.2"