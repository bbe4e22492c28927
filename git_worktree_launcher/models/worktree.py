"""Worktree data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Worktree:
    """A checked-out working copy of the repository."""

    name: str  # Final path segment
    path: Path
    branch: str  # Empty when HEAD is detached

    def __str__(self) -> str:
        """String representation of worktree."""
        branch = self.branch or "(detached)"
        return f"{self.name} [{branch}] @ {self.path}"
