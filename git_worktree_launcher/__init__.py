"""
git-worktree-launcher - git worktrees, a todo list and tmux sessions in one TUI
"""

from .__version__ import __version__
from .core import WorktreeLauncher
from .cli.main import main

__all__ = ["WorktreeLauncher", "main", "__version__"]
