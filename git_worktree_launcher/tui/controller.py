"""Runs the commands produced by the state handlers."""

from contextlib import nullcontext
from typing import Callable, ContextManager, List, Optional, Sequence

from git_worktree_launcher.core import WorktreeLauncher
from git_worktree_launcher.exceptions import WorktreeLauncherError
from git_worktree_launcher.logging_config import get_logger
from git_worktree_launcher.tui.state import (
    AppState,
    Command,
    CreateWorktree,
    DeleteWorktree,
    InputMode,
    InspectDeletion,
    Quit,
    Refresh,
    StartSession,
    apply_snapshot,
    close_wizard,
    select_index,
)

logger = get_logger(__name__)


class Controller:
    """Executes commands against the launcher and writes results back into the state.

    Every failure ends up in ``state.error_message``; nothing is retried.
    """

    def __init__(
        self,
        state: AppState,
        launcher: WorktreeLauncher,
        suspend: Optional[Callable[[], ContextManager]] = None,
    ):
        """Initialize the controller.

        Args:
            state: State shared with the UI
            launcher: Facade over git, tmux and the todo file
            suspend: Returns a context manager that releases the terminal
                while a tmux session is attached
        """
        self.state = state
        self.launcher = launcher
        self.suspend = suspend or nullcontext
        self.warnings: List[str] = []

    def execute(self, commands: Sequence[Command]) -> bool:
        """Run commands in order.

        Returns:
            False when the UI loop must end (quit or session hand-off)
        """
        for command in commands:
            if isinstance(command, Quit):
                return False
            if isinstance(command, Refresh):
                self.refresh()
            elif isinstance(command, StartSession):
                if self.start_session(command):
                    return False
            elif isinstance(command, InspectDeletion):
                self.inspect_deletion(command)
            elif isinstance(command, DeleteWorktree):
                self.delete_worktree(command)
            elif isinstance(command, CreateWorktree):
                self.create_worktree(command)
        return True

    def refresh(self) -> bool:
        """Re-list worktrees and reload todos."""
        try:
            worktrees = self.launcher.list_worktrees()
            todos = self.launcher.load_todos().todos
        except WorktreeLauncherError as e:
            logger.error(f"Refresh failed: {e}")
            self.state.error_message = str(e)
            return False
        apply_snapshot(self.state, worktrees, todos)
        return True

    def start_session(self, command: StartSession) -> bool:
        """Hand the terminal to tmux; True if the session was reached."""
        try:
            with self.suspend():
                warnings = self.launcher.start_session(command.worktree)
        except WorktreeLauncherError as e:
            logger.error(f"Could not start session for {command.worktree.name}: {e}")
            self.state.mode = InputMode.NORMAL
            self.state.error_message = str(e)
            return False
        self.warnings.extend(warnings)
        return True

    def inspect_deletion(self, command: InspectDeletion) -> None:
        try:
            is_dirty = self.launcher.is_dirty(command.worktree)
        except WorktreeLauncherError as e:
            self.state.error_message = str(e)
            return
        self.state.pending_delete = command.worktree
        self.state.delete_is_dirty = is_dirty
        self.state.mode = InputMode.CONFIRM_DELETE

    def delete_worktree(self, command: DeleteWorktree) -> None:
        try:
            warnings = self.launcher.delete_worktree(command.worktree, force=command.force)
        except WorktreeLauncherError as e:
            logger.error(f"Failed to delete worktree {command.worktree.name}: {e}")
            self.state.mode = InputMode.NORMAL
            self.state.error_message = f"Failed to delete worktree: {e}"
            return

        self.warnings.extend(warnings)
        self.state.mode = InputMode.NORMAL
        if self.refresh() and warnings:
            self.state.error_message = "; ".join(warnings)

    def create_worktree(self, command: CreateWorktree) -> None:
        """Create the worktree, then record its todo; stays in the wizard on failure."""
        try:
            self.launcher.create_worktree(command.name)
        except WorktreeLauncherError as e:
            logger.error(f"Failed to create worktree {command.name}: {e}")
            self.state.error_message = f"Failed to create worktree: {e}"
            return

        # The worktree exists from here on; a failed save is reported, not undone
        try:
            self.launcher.record_todo(command.description, command.name)
        except WorktreeLauncherError as e:
            logger.error(f"Worktree {command.name} created but todo was not saved: {e}")
            close_wizard(self.state)
            self.refresh()
            self.state.error_message = f"Worktree '{command.name}' created but todo was not saved: {e}"
            return

        close_wizard(self.state)
        self.refresh()
        # Newest first: the new todo sits at the head, not at the last index
        for index, todo in enumerate(self.state.todos):
            if todo.worktree == command.name:
                select_index(self.state, index)
                break
