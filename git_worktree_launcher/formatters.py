"""Formatting utilities shared by the TUI and the CLI."""

from git_worktree_launcher.constants import DELETED_MARKER, SYMBOL_DONE, SYMBOL_PENDING
from git_worktree_launcher.models import Todo, TmuxWindow


def format_checkbox(todo: Todo) -> str:
    """
    Format the status checkbox of a todo.

    Args:
        todo: Todo to format

    Returns:
        "[✓] " for done todos, "[ ] " otherwise
    """
    return SYMBOL_DONE if todo.is_done else SYMBOL_PENDING


def format_worktree_link(todo: Todo, dangling: bool) -> str:
    """
    Format the worktree a todo points at.

    Args:
        todo: Todo to format
        dangling: True if the linked worktree no longer exists

    Returns:
        " (name)", " (name) [deleted]" or "" for an unlinked todo
    """
    if todo.worktree is None:
        return ""
    if dangling:
        return f" ({todo.worktree}) {DELETED_MARKER}"
    return f" ({todo.worktree})"


def format_window(window: TmuxWindow) -> str:
    """Format one window plan entry as "name: command"."""
    return f"{window.name}: {window.command or '(shell)'}"
