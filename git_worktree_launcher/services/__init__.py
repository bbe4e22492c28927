"""Services for git-worktree-launcher"""

from .todo_store import TodoStore
from .tmux_service import TmuxService, sanitize_session_name
from .worktree_service import WorktreeService, parse_worktree_list

__all__ = [
    "TodoStore",
    "TmuxService",
    "WorktreeService",
    "parse_worktree_list",
    "sanitize_session_name",
]
