"""Pytest fixtures for git-worktree-launcher tests"""
import subprocess
import tempfile
from pathlib import Path
from typing import List, Optional

import pytest
import git

from git_worktree_launcher.config import Config
from git_worktree_launcher.core import WorktreeLauncher
from git_worktree_launcher.exceptions import (
    CreateError,
    DeleteError,
    DirectoryError,
    SessionError,
    WorktreeNotFoundError,
)
from git_worktree_launcher.models import Todo, TodoStatus, TmuxWindow, Worktree


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def git_repo(temp_dir):
    """Create a real Git repository for testing."""
    repo_path = temp_dir / "test_repo"
    repo_path.mkdir()

    # Initialize repository
    repo = git.Repo.init(repo_path)

    # Configure git user for commits
    repo.config_writer().set_value("user", "name", "Test User").release()
    repo.config_writer().set_value("user", "email", "test@example.com").release()

    # Create initial commit on main branch
    test_file = repo_path / "README.md"
    test_file.write_text("# Test Repository\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    # Rename master to main if needed
    try:
        repo.git.branch('-M', 'main')
    except git.exc.GitCommandError:
        pass

    yield repo

    # Cleanup
    repo.close()


class FakeWorktreeService:
    """In-memory stand-in for WorktreeService."""

    def __init__(self, root: Path, names: Optional[List[str]] = None):
        self.root = root
        self.worktrees = [Worktree(root.name, root, "main")]
        for name in names or []:
            self.worktrees.append(Worktree(name, root.parent / name, name))
        self.dirty = set()
        self.fail_list = False
        self.fail_create = False
        self.fail_delete = False
        self.created = []
        self.deleted = []

    def list_worktrees(self):
        if self.fail_list:
            raise DirectoryError("list_worktrees", message="not a git repository")
        return list(self.worktrees)

    def repo_root(self):
        return self.root

    def find(self, name):
        for worktree in self.worktrees:
            if worktree.name == name:
                return worktree
        raise WorktreeNotFoundError(name)

    def create(self, name, branch=None):
        if self.fail_create or any(wt.name == name for wt in self.worktrees):
            raise CreateError(name, f"'{name}' already exists")
        path = self.root.parent / name
        self.worktrees.append(Worktree(name, path, branch or name))
        self.created.append((name, branch))
        return path

    def delete(self, path, force=False):
        if self.fail_delete:
            raise DeleteError(Path(path).name, "worktree is locked")
        path = Path(path)
        if path.name in self.dirty and not force:
            raise DeleteError(path.name, "contains modified or untracked files, use --force")
        self.worktrees = [wt for wt in self.worktrees if wt.path != path]
        self.deleted.append((path, force))

    def is_dirty(self, path):
        return Path(path).name in self.dirty

    def current_worktree_for(self, cwd):
        for worktree in self.worktrees:
            if str(cwd).startswith(str(worktree.path)):
                return worktree.name
        return None


class FakeTmuxService:
    """In-memory stand-in for TmuxService."""

    def __init__(self, current_session: Optional[str] = None):
        self.sessions = {}
        self.current_session = current_session
        self.started = []
        self.killed = []
        self.fail_start = False
        self.fail_kill = False

    def is_available(self):
        return True

    def session_exists(self, name):
        return name in self.sessions

    def start_session(self, name, working_dir, windows):
        if self.fail_start:
            raise SessionError("new_session", name, "server exited")
        self.started.append((name, Path(working_dir), list(windows)))
        self.sessions.setdefault(name, [w.name for w in windows])
        return []

    def kill_session(self, name):
        if self.fail_kill:
            raise SessionError("kill_session", name, "no server running")
        self.sessions.pop(name, None)
        self.killed.append(name)

    def current_session_name(self):
        return self.current_session


class FakeTmux:
    """Replacement for subprocess.run that behaves like a tmux server."""

    def __init__(self):
        self.sessions = {}
        self.calls = []
        self.fail_windows = set()
        self.fail_new_session = False
        self.fail_attach = False
        self.base_index = 0
        self.next_index = {}

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        args = list(cmd[1:])
        command = args[0]

        if command == "-V":
            return self._result(stdout="tmux 3.4\n")
        if command == "has-session":
            name = args[args.index("-t") + 1].lstrip("=")
            return self._result(0 if name in self.sessions else 1)
        if command == "new-session":
            if self.fail_new_session:
                return self._result(1, stderr="duplicate session")
            name = args[args.index("-s") + 1]
            window = args[args.index("-n") + 1] if "-n" in args else "0"
            self.sessions[name] = [window]
            self.next_index[name] = self.base_index + 1
            return self._result(stdout=f"{self.base_index}\n")
        if command == "new-window":
            name = args[args.index("-n") + 1]
            if name in self.fail_windows:
                return self._result(1, stderr=f"cannot create {name}")
            session = args[args.index("-t") + 1].rstrip(":")
            self.sessions[session].append(name)
            index = self.next_index[session]
            self.next_index[session] += 1
            return self._result(stdout=f"{index}\n")
        if command == "kill-session":
            self.sessions.pop(args[args.index("-t") + 1].lstrip("="), None)
            return self._result()
        if command in ("attach-session", "switch-client"):
            return self._result(1 if self.fail_attach else 0)
        if command == "list-sessions":
            if not self.sessions:
                return self._result(1, stderr="no server running")
            return self._result(stdout="".join(f"{name}\n" for name in self.sessions))
        if command == "display-message":
            return self._result(stdout="current\n")
        return self._result()

    @staticmethod
    def _result(returncode=0, stdout="", stderr=""):
        return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr=stderr)

    def commands(self, name):
        return [call for call in self.calls if call[1] == name]


@pytest.fixture
def fake_tmux():
    return FakeTmux()


@pytest.fixture
def sample_todos():
    """Create sample todos, most recent first."""
    return [
        Todo("Add login flow", TodoStatus.PENDING, "add-login-flow"),
        Todo("Fix bug", TodoStatus.DONE, "bugfix-1"),
        Todo("Write docs", TodoStatus.PENDING, None),
    ]


@pytest.fixture
def sample_config():
    return Config(windows=[
        TmuxWindow("editor", "vim ."),
        TmuxWindow("server", None),
        TmuxWindow("shell", None),
    ])


@pytest.fixture
def fake_worktrees(temp_dir):
    root = temp_dir / "repo"
    root.mkdir()
    return FakeWorktreeService(root, ["add-login-flow"])


@pytest.fixture
def fake_session_manager():
    return FakeTmuxService()


@pytest.fixture
def launcher(sample_config, fake_worktrees, fake_session_manager):
    """WorktreeLauncher wired to the in-memory services."""
    return WorktreeLauncher(
        sample_config,
        fake_worktrees.root,
        worktree_service=fake_worktrees,
        tmux_service=fake_session_manager,
    )
