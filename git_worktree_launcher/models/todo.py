"""Todo model and related enums"""
from enum import Enum
from dataclasses import dataclass
from typing import Optional


class TodoStatus(Enum):
    """Status of a todo."""
    PENDING = "pending"
    DONE = "done"


@dataclass
class Todo:
    """A tracked task, optionally linked to a worktree by name."""
    description: str
    status: TodoStatus = TodoStatus.PENDING
    worktree: Optional[str] = None  # Weak link; may dangle after deletion

    @property
    def is_done(self) -> bool:
        return self.status == TodoStatus.DONE


@dataclass
class TmuxWindow:
    """One entry of the session window plan."""
    name: str
    command: Optional[str] = None  # None means a plain shell
