"""Custom exceptions for git-worktree-launcher"""

from typing import Optional


class WorktreeLauncherError(Exception):
    """Base exception for all git-worktree-launcher errors."""
    pass


class GitOperationError(WorktreeLauncherError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, worktree: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.worktree = worktree
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if worktree:
            error_msg += f" for worktree '{worktree}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class DirectoryError(GitOperationError):
    """Exception raised when worktrees cannot be queried (e.g. not inside a repository)."""
    pass


class CreateError(GitOperationError):
    """Exception raised when a worktree cannot be created."""

    def __init__(self, worktree: str, message: Optional[str] = None):
        super().__init__("create_worktree", worktree, message)


class DeleteError(GitOperationError):
    """Exception raised when a worktree cannot be removed."""

    def __init__(self, worktree: str, message: Optional[str] = None):
        super().__init__("delete_worktree", worktree, message)


class WorktreeNotFoundError(GitOperationError):
    """Exception raised when a worktree is not found."""

    def __init__(self, worktree: str):
        super().__init__("find_worktree", worktree, "Worktree not found")


class SessionError(WorktreeLauncherError):
    """Exception raised for errors in tmux operations."""

    def __init__(self, operation: str, session: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.session = session
        self.message = message

        error_msg = f"tmux operation '{operation}' failed"
        if session:
            error_msg += f" for session '{session}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class TmuxNotAvailableError(SessionError):
    """Exception raised when tmux is not installed or not on PATH."""

    def __init__(self):
        super().__init__("check_available", message="tmux is not installed or not in PATH")


class ConfigError(WorktreeLauncherError):
    """Exception raised when the config file cannot be read, parsed or written."""
    pass


class TodoStoreError(WorktreeLauncherError):
    """Exception raised when the todo file cannot be read, parsed or written."""
    pass
