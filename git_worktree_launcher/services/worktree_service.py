"""Worktree operations service for git-worktree-launcher."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import git

from git_worktree_launcher.exceptions import (
    CreateError,
    DeleteError,
    DirectoryError,
    WorktreeNotFoundError,
)
from git_worktree_launcher.logging_config import get_logger
from git_worktree_launcher.models import Worktree

logger = get_logger(__name__)


def _describe_git_error(command: str, e: git.exc.GitCommandError) -> str:
    """Build a one-line message from a GitCommandError."""
    stderr = (e.stderr if hasattr(e, "stderr") else str(e)).strip()
    status = e.status if hasattr(e, "status") else "unknown"

    # GitPython wraps stderr as "\n  stderr: '...'"
    if stderr.startswith("stderr: "):
        stderr = stderr[len("stderr: "):].strip("'")
    stderr = stderr.strip()

    if stderr:
        return f"{command} failed (exit {status}): {stderr}"
    return f"{command} failed with exit code {status}"


def _record_to_worktree(record: Dict[str, Any]) -> Optional[Worktree]:
    path = record.get("path")
    if not path or record.get("bare") or record.get("prunable"):
        return None
    worktree_path = Path(path)
    return Worktree(
        name=worktree_path.name,
        path=worktree_path,
        branch=record.get("branch", ""),
    )


def parse_worktree_list(output: str) -> List[Worktree]:
    """Parse `git worktree list --porcelain` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached")
        (blank line between worktrees)

    Records without a path, bare records and records git marks as
    prunable are skipped; a missing trailing blank line is fine.
    """
    worktrees = []
    current: Dict[str, Any] = {}

    for line in output.split("\n"):
        line = line.strip()

        if not line:
            # Empty line marks end of worktree entry
            if current:
                worktree = _record_to_worktree(current)
                if worktree:
                    worktrees.append(worktree)
                current = {}
            continue

        if line.startswith("worktree "):
            # A new record without a separating blank line
            if current:
                worktree = _record_to_worktree(current)
                if worktree:
                    worktrees.append(worktree)
            current = {"path": line.split(" ", 1)[1]}
        elif line.startswith("HEAD "):
            current["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith("refs/heads/"):
                current["branch"] = branch_ref[len("refs/heads/"):]
            else:
                current["branch"] = branch_ref
        elif line == "detached":
            current["branch"] = ""
        elif line == "bare":
            current["bare"] = True
        elif line == "prunable" or line.startswith("prunable "):
            current["prunable"] = True

    # Handle last entry if no trailing blank line
    if current:
        worktree = _record_to_worktree(current)
        if worktree:
            worktrees.append(worktree)

    return worktrees


class WorktreeService:
    """Service for managing git worktrees."""

    def __init__(self, repo_path: Union[str, Path] = "."):
        """Initialize the worktree service.

        Args:
            repo_path: Any path inside the git repository
        """
        self.repo_path = str(repo_path)

    def _get_repo(self) -> git.Repo:
        """Get a git.Repo instance for the configured path.

        Raises:
            DirectoryError: If the path is not inside a git repository
        """
        try:
            return git.Repo(self.repo_path, search_parent_directories=True)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise DirectoryError("open_repository", message=f"not a git repository: {e}") from e

    def list_worktrees(self) -> List[Worktree]:
        """List all worktrees of the repository, main worktree first.

        Raises:
            DirectoryError: If git fails (e.g. not inside a repository)
        """
        repo = self._get_repo()
        try:
            output = repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            error_msg = _describe_git_error("git worktree list", e)
            logger.error(f"Could not list worktrees: {error_msg}")
            raise DirectoryError("list_worktrees", message=error_msg) from e

        worktrees = []
        for worktree in parse_worktree_list(output):
            # Directory removed outside git, not yet pruned
            if not worktree.path.exists():
                logger.debug(f"Skipping orphaned worktree {worktree.path}")
                continue
            worktrees.append(worktree)
        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def repo_root(self) -> Path:
        """Path of the main worktree.

        The first porcelain record is always the main worktree, so the result
        is the same from inside any linked worktree.
        """
        try:
            worktrees = self.list_worktrees()
        except DirectoryError:
            worktrees = []
        if worktrees:
            return worktrees[0].path

        repo = self._get_repo()
        if repo.working_tree_dir is None:
            raise DirectoryError("repo_root", message="repository has no working tree")
        return Path(repo.working_tree_dir)

    def find(self, name: str) -> Worktree:
        """Find a worktree by name.

        Raises:
            WorktreeNotFoundError: If no worktree has that name
        """
        for worktree in self.list_worktrees():
            if worktree.name == name:
                return worktree
        raise WorktreeNotFoundError(name)

    def create(self, name: str, branch: Optional[str] = None) -> Path:
        """Create a worktree next to the repository root.

        Args:
            name: Directory name of the new worktree
            branch: Branch to create for it (git picks one from the name if None)

        Returns:
            Path of the new worktree

        Raises:
            CreateError: On any git failure (name collision, invalid branch, ...)
        """
        try:
            root = self.repo_root()
        except DirectoryError as e:
            raise CreateError(name, str(e)) from e

        path = root.parent / name
        args = ["add"]
        if branch:
            args.extend(["-b", branch])
        args.append(str(path))

        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = _describe_git_error("git worktree add", e)
            logger.error(f"Failed to create worktree {name}: {error_msg}")
            raise CreateError(name, error_msg) from e

        logger.info(f"Created worktree at {path}")
        return path

    def delete(self, path: Union[str, Path], force: bool = False) -> None:
        """Remove the worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Must be True when the worktree has uncommitted changes

        Raises:
            DeleteError: If git refuses or fails
        """
        args = ["remove"]
        if force:
            args.append("--force")
        args.append(str(path))

        try:
            self._get_repo().git.worktree(*args)
        except DirectoryError as e:
            raise DeleteError(Path(path).name, str(e)) from e
        except git.exc.GitCommandError as e:
            error_msg = _describe_git_error("git worktree remove", e)
            logger.error(f"Failed to remove worktree at {path}: {error_msg}")
            raise DeleteError(Path(path).name, error_msg) from e

        logger.info(f"Removed worktree at {path}")

    def is_dirty(self, path: Union[str, Path]) -> bool:
        """Check whether a worktree has uncommitted changes.

        True iff `git status --porcelain` in that worktree prints anything.

        Raises:
            DirectoryError: If the status query fails
        """
        try:
            status = self._get_repo().git.execute(["git", "-C", str(path), "status", "--porcelain"])
        except git.exc.GitCommandError as e:
            error_msg = _describe_git_error("git status", e)
            logger.warning(f"Could not check worktree status for {path}: {error_msg}")
            raise DirectoryError("is_dirty", Path(path).name, error_msg) from e

        return bool(status.strip())

    def current_worktree_for(self, cwd: Union[str, Path]) -> Optional[str]:
        """Name of the worktree containing cwd, if any.

        The deepest matching worktree wins (linked worktrees may live inside
        the main one). Only used to preselect a list entry, so failures
        return None.
        """
        try:
            worktrees = self.list_worktrees()
        except DirectoryError as e:
            logger.debug(f"Could not resolve worktree for {cwd}: {e}")
            return None

        return match_worktree(worktrees, cwd)


def match_worktree(worktrees: List[Worktree], cwd: Union[str, Path]) -> Optional[str]:
    """Name of the worktree whose path is the longest prefix of cwd."""
    cwd_path = Path(cwd).resolve()
    best: Optional[Worktree] = None
    for worktree in worktrees:
        worktree_path = worktree.path.resolve()
        if cwd_path == worktree_path or worktree_path in cwd_path.parents:
            if best is None or len(worktree_path.parts) > len(best.path.resolve().parts):
                best = worktree
    return best.name if best else None
