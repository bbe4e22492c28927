"""tmux session service for git-worktree-launcher.

Every call shells out to the ``tmux`` binary once; nothing is retried.
Session names are sanitised because tmux rejects dots in them.
"""

import os
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from git_worktree_launcher.exceptions import SessionError, TmuxNotAvailableError
from git_worktree_launcher.logging_config import get_logger
from git_worktree_launcher.models import TmuxWindow

logger = get_logger(__name__)

WINDOW_INDEX_FORMAT = "#{window_index}"


def sanitize_session_name(name: str) -> str:
    """tmux does not allow '.' (or ':') in session names."""
    return name.replace(".", "_").replace(":", "_")


def in_tmux() -> bool:
    return bool(os.environ.get("TMUX"))


class TmuxService:
    """Service for managing tmux sessions rooted at worktrees."""

    def __init__(self, tmux_binary: str = "tmux"):
        self.tmux_binary = tmux_binary

    def _run(self, *args: str, capture: bool = True) -> subprocess.CompletedProcess:
        """Run a tmux command without raising on a non-zero exit."""
        cmd = [self.tmux_binary, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        if capture:
            return subprocess.run(cmd, capture_output=True, text=True, check=False)
        # Attach needs the real terminal
        return subprocess.run(cmd, check=False)

    @staticmethod
    def _stderr(result: subprocess.CompletedProcess) -> str:
        stderr = getattr(result, "stderr", None) or ""
        return stderr.strip() or f"exit code {result.returncode}"

    def is_available(self) -> bool:
        """Check whether the tmux binary can be executed."""
        try:
            result = self._run("-V")
        except OSError as e:
            logger.debug(f"tmux not available: {e}")
            return False
        return result.returncode == 0

    def session_exists(self, name: str) -> bool:
        session = sanitize_session_name(name)
        try:
            result = self._run("has-session", "-t", f"={session}")
        except OSError as e:
            raise TmuxNotAvailableError() from e
        return result.returncode == 0

    def list_sessions(self) -> List[str]:
        """Names of all running sessions (empty when no server is running)."""
        try:
            result = self._run("list-sessions", "-F", "#{session_name}")
        except OSError as e:
            raise TmuxNotAvailableError() from e
        if result.returncode != 0:
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def current_session_name(self) -> Optional[str]:
        """Name of the session this process runs in, if any (best effort)."""
        if not in_tmux():
            return None
        try:
            result = self._run("display-message", "-p", "#{session_name}")
        except OSError:
            return None
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def kill_session(self, name: str) -> None:
        """Terminate a session; a missing session is not an error."""
        session = sanitize_session_name(name)
        if not self.session_exists(session):
            logger.debug(f"Session {session} does not exist, nothing to kill")
            return

        result = self._run("kill-session", "-t", f"={session}")
        if result.returncode != 0:
            raise SessionError("kill_session", session, self._stderr(result))
        logger.info(f"Killed tmux session {session}")

    def attach(self, name: str) -> None:
        """Attach in the foreground, or switch the client when already inside tmux."""
        session = sanitize_session_name(name)
        if in_tmux():
            result = self._run("switch-client", "-t", f"={session}", capture=False)
            operation = "switch_client"
        else:
            result = self._run("attach-session", "-t", f"={session}", capture=False)
            operation = "attach_session"

        if result.returncode != 0:
            raise SessionError(operation, session, f"exit code {result.returncode}")

    def _set_window_title(self, session: str, index: str, window: str) -> Optional[str]:
        """Set the terminal title for the window at index; returns a warning on failure."""
        result = self._run("set-option", "-t", session, "set-titles", "on")
        if result.returncode != 0:
            return f"Failed to enable terminal titles for {session}: {self._stderr(result)}"

        result = self._run("set-option", "-t", f"{session}:{index}", "set-titles-string", window)
        if result.returncode != 0:
            return f"Failed to set title for window {window}: {self._stderr(result)}"
        return None

    def start_session(
        self,
        name: str,
        working_dir: Union[str, Path],
        windows: Sequence[TmuxWindow],
    ) -> List[str]:
        """Create (if needed) and attach to a session for a worktree.

        An existing session is only attached to, so calling this twice never
        duplicates windows. Otherwise the first window of the plan seeds the
        session and every other entry becomes an extra window; a failing extra
        window is a warning and creation carries on.

        Args:
            name: Session name (usually the worktree name)
            working_dir: Directory every window starts in
            windows: Window plan

        Returns:
            Warnings collected while building the session

        Raises:
            TmuxNotAvailableError: If tmux is not installed
            SessionError: If the session itself cannot be created or attached
        """
        if not self.is_available():
            raise TmuxNotAvailableError()

        session = sanitize_session_name(name)
        if self.session_exists(session):
            logger.info(f"Session {session} already exists, attaching")
            self.attach(session)
            return []

        warnings: List[str] = []
        path_str = str(working_dir)

        # -P prints the new window's index; base-index is user-configurable
        args = ["new-session", "-d", "-P", "-F", WINDOW_INDEX_FORMAT, "-s", session, "-c", path_str]
        first = windows[0] if windows else None
        if first is not None:
            args.extend(["-n", first.name])
            if first.command:
                args.append(first.command)

        result = self._run(*args)
        if result.returncode != 0:
            raise SessionError("new_session", session, self._stderr(result))
        logger.info(f"Created tmux session {session} in {path_str}")

        created = [(result.stdout.strip(), first.name)] if first is not None else []
        for window in windows[1:]:
            window_args = [
                "new-window", "-P", "-F", WINDOW_INDEX_FORMAT,
                "-t", f"{session}:", "-c", path_str, "-n", window.name,
            ]
            if window.command:
                window_args.append(window.command)

            result = self._run(*window_args)
            if result.returncode != 0:
                warning = f"Failed to create window {window.name}: {self._stderr(result)}"
                logger.warning(warning)
                warnings.append(warning)
                continue
            created.append((result.stdout.strip(), window.name))

        for index, window_name in created:
            warning = self._set_window_title(session, index, window_name)
            if warning:
                logger.warning(warning)
                warnings.append(warning)

        self.attach(session)
        return warnings
