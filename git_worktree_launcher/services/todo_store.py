"""Todo list persistence for git-worktree-launcher."""

from pathlib import Path
from typing import Iterator, List, Optional, Union

import yaml

from git_worktree_launcher.exceptions import TodoStoreError
from git_worktree_launcher.logging_config import get_logger
from git_worktree_launcher.models import Todo, TodoStatus

logger = get_logger(__name__)


def _status_from_value(value) -> TodoStatus:
    try:
        return TodoStatus(value)
    except ValueError:
        logger.warning(f"Unknown todo status {value!r}, treating as pending")
        return TodoStatus.PENDING


class TodoStore:
    """Ordered todo list, most recent first.

    New todos are inserted at the head and the order is kept exactly when
    saving and loading. Todos are never removed; marking one done only
    flips its status.
    """

    def __init__(self, todos: Optional[List[Todo]] = None, path: Optional[Union[str, Path]] = None):
        self.todos: List[Todo] = list(todos) if todos else []
        self.path = Path(path) if path else None

    def __len__(self) -> int:
        return len(self.todos)

    def __iter__(self) -> Iterator[Todo]:
        return iter(self.todos)

    def add(self, description: str, worktree_name: Optional[str]) -> Todo:
        """Insert a pending todo at the head of the list."""
        todo = Todo(description=description, status=TodoStatus.PENDING, worktree=worktree_name)
        self.todos.insert(0, todo)
        logger.debug(f"Added todo {description!r} for {worktree_name}")
        return todo

    def mark_done(self, worktree_name: str) -> bool:
        """Mark the first todo linked to worktree_name as done.

        Returns:
            True if a todo was updated, False when none is linked (not an error)
        """
        for todo in self.todos:
            if todo.worktree == worktree_name:
                todo.status = TodoStatus.DONE
                logger.info(f"Marked todo {todo.description!r} done")
                return True
        logger.debug(f"No todo linked to {worktree_name}")
        return False

    def get_for_worktree(self, worktree_name: str) -> Optional[Todo]:
        for todo in self.todos:
            if todo.worktree == worktree_name:
                return todo
        return None

    def to_dict(self) -> dict:
        return {
            "todos": [
                {
                    "description": todo.description,
                    "status": todo.status.value,
                    "worktree": todo.worktree,
                }
                for todo in self.todos
            ]
        }

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, text: str, path: Optional[Union[str, Path]] = None) -> "TodoStore":
        """Parse a todo file.

        Raises:
            TodoStoreError: If the text is not valid YAML or has the wrong shape
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise TodoStoreError(f"Invalid todo file: {e}") from e

        if data is None:
            return cls(path=path)
        if not isinstance(data, dict):
            raise TodoStoreError("Invalid todo file: expected a mapping with a 'todos' list")

        entries = data.get("todos") or []
        if not isinstance(entries, list):
            raise TodoStoreError("Invalid todo file: 'todos' must be a list")

        todos = []
        for entry in entries:
            if not isinstance(entry, dict) or "description" not in entry:
                raise TodoStoreError(f"Invalid todo entry: {entry!r}")
            worktree = entry.get("worktree")
            todos.append(
                Todo(
                    description=str(entry["description"]),
                    status=_status_from_value(entry.get("status", TodoStatus.PENDING.value)),
                    worktree=str(worktree) if worktree is not None else None,
                )
            )
        return cls(todos, path=path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "TodoStore":
        """Load todos from path; an absent file is an empty list."""
        todo_path = Path(path)
        if not todo_path.exists():
            logger.debug(f"No todo file at {todo_path}, starting empty")
            return cls(path=todo_path)

        try:
            text = todo_path.read_text(encoding="utf-8")
        except OSError as e:
            raise TodoStoreError(f"Could not read {todo_path}: {e}") from e

        store = cls.from_yaml(text, path=todo_path)
        logger.debug(f"Loaded {len(store)} todos from {todo_path}")
        return store

    def save(self, path: Optional[Union[str, Path]] = None) -> None:
        """Write the whole list, creating parent directories as needed."""
        target = Path(path) if path else self.path
        if target is None:
            raise TodoStoreError("No path to save todos to")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.to_yaml(), encoding="utf-8")
        except OSError as e:
            raise TodoStoreError(f"Could not write {target}: {e}") from e
        logger.debug(f"Saved {len(self)} todos to {target}")
