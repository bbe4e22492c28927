"""Data models for git-worktree-launcher"""

from .todo import Todo, TodoStatus, TmuxWindow
from .worktree import Worktree

__all__ = ["Todo", "TodoStatus", "TmuxWindow", "Worktree"]
