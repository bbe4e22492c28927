"""Core functionality for git-worktree-launcher"""

from pathlib import Path
from typing import List, Optional, Union

from git_worktree_launcher.config import Config
from git_worktree_launcher.constants import TODO_FILE_NAME
from git_worktree_launcher.exceptions import SessionError, TodoStoreError
from git_worktree_launcher.logging_config import get_logger
from git_worktree_launcher.models import Worktree
from git_worktree_launcher.services.tmux_service import TmuxService, sanitize_session_name
from git_worktree_launcher.services.todo_store import TodoStore
from git_worktree_launcher.services.worktree_service import WorktreeService

logger = get_logger(__name__)


class WorktreeLauncher:
    """Ties worktrees, the todo list and tmux sessions together.

    Each of the three systems can fail independently; nothing here rolls
    back a step that already succeeded.
    """

    def __init__(
        self,
        config: Config,
        repo_path: Union[str, Path] = ".",
        worktree_service: Optional[WorktreeService] = None,
        tmux_service: Optional[TmuxService] = None,
    ):
        """Initialize WorktreeLauncher.

        Args:
            config: Loaded configuration (window plan)
            repo_path: Any path inside the repository
            worktree_service: Override for tests
            tmux_service: Override for tests
        """
        self.config = config
        self.repo_path = Path(repo_path)
        self.worktrees = worktree_service or WorktreeService(self.repo_path)
        self.tmux = tmux_service or TmuxService()

    def todo_path(self) -> Path:
        """The todo file lives at the main worktree's root."""
        return self.worktrees.repo_root() / TODO_FILE_NAME

    def load_todos(self) -> TodoStore:
        return TodoStore.load(self.todo_path())

    def list_worktrees(self) -> List[Worktree]:
        return self.worktrees.list_worktrees()

    def current_worktree_name(self, cwd: Union[str, Path]) -> Optional[str]:
        return self.worktrees.current_worktree_for(cwd)

    def is_dirty(self, worktree: Worktree) -> bool:
        return self.worktrees.is_dirty(worktree.path)

    def create_worktree(self, name: str) -> Path:
        """Create a worktree whose branch has the same name."""
        return self.worktrees.create(name, branch=name)

    def record_todo(self, description: str, worktree_name: str) -> TodoStore:
        """Add a todo for a worktree and persist the list."""
        store = self.load_todos()
        store.add(description, worktree_name)
        store.save()
        return store

    def start_session(self, worktree: Worktree) -> List[str]:
        """Open (or join) the tmux session for a worktree.

        Returns:
            Non-fatal warnings from building the session
        """
        logger.info(f"Starting session for {worktree.name} at {worktree.path}")
        return self.tmux.start_session(worktree.name, worktree.path, self.config.windows)

    def delete_worktree(self, worktree: Worktree, force: bool) -> List[str]:
        """Remove a worktree, mark its todo done and kill its session if it is ours.

        Returns:
            Non-fatal warnings (todo not updated, session not killed)
        """
        current_session = self.tmux.current_session_name()

        self.worktrees.delete(worktree.path, force=force)

        warnings = []
        # The worktree is gone from here on; a failed todo update is reported, not undone
        try:
            store = self.load_todos()
            if store.mark_done(worktree.name):
                store.save()
        except TodoStoreError as e:
            logger.error(f"Worktree {worktree.name} deleted but todo was not updated: {e}")
            warnings.append(f"Worktree '{worktree.name}' deleted but todo was not updated: {e}")

        if current_session and current_session == sanitize_session_name(worktree.name):
            try:
                self.tmux.kill_session(worktree.name)
            except SessionError as e:
                logger.warning(f"Could not kill session for {worktree.name}: {e}")
                warnings.append(str(e))
        return warnings

    def jump_to_worktree(self, name: str) -> List[str]:
        """Open the session for a worktree by name, bypassing the UI.

        Raises:
            WorktreeNotFoundError: If no current worktree has that name
        """
        worktree = self.worktrees.find(name)
        return self.start_session(worktree)
