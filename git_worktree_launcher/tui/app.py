"""Interactive TUI for git-worktree-launcher using Textual."""

from typing import List, Optional

from textual.app import App, ComposeResult

from git_worktree_launcher.__version__ import __version__
from git_worktree_launcher.core import WorktreeLauncher
from git_worktree_launcher.logging_config import get_logger
from git_worktree_launcher.tui.controller import Controller
from git_worktree_launcher.tui.state import AppState, preselect_worktree
from git_worktree_launcher.tui.widgets import LauncherView, NonExpandingHeader

logger = get_logger(__name__)


class WorktreeLauncherApp(App):
    """Interactive TUI for git-worktree-launcher."""

    ENABLE_COMMAND_PALETTE = False
    TITLE = "Git Worktree Launcher"
    SUB_TITLE = f"v{__version__}"

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(self, launcher: WorktreeLauncher, initial_worktree: Optional[str] = None):
        super().__init__()
        self.launcher = launcher
        self.initial_worktree = initial_worktree
        self.state = AppState()
        self.controller = Controller(self.state, launcher, suspend=self.suspend)

    @property
    def warnings(self) -> List[str]:
        """Warnings collected from tmux hand-offs and deletions."""
        return self.controller.warnings

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield NonExpandingHeader(show_clock=True, icon="")
        yield LauncherView(self.state, self.controller, id="launcher")

    def on_mount(self) -> None:
        """Load the first snapshot and focus the list."""
        if self.controller.refresh():
            preselect_worktree(self.state, self.initial_worktree)
        logger.debug(
            f"Loaded {len(self.state.worktrees)} worktrees and {len(self.state.todos)} todos"
        )
        self.query_one(LauncherView).focus()
