"""Custom widgets for the git-worktree-launcher TUI."""

from typing import List, Optional

from rich.console import RenderableType
from rich.text import Text
from textual import events
from textual.app import ComposeResult, RenderResult
from textual.events import Click
from textual.widget import Widget
from textual.widgets import Header
from textual.widgets._header import HeaderIcon, HeaderTitle, HeaderClockSpace

from git_worktree_launcher.__version__ import __version__
from git_worktree_launcher.tui.controller import Controller
from git_worktree_launcher.tui.render import Frame, hit_test, render_frame
from git_worktree_launcher.tui.state import AppState, Command, KeyPress, handle_key, handle_pointer


class VersionDisplay(HeaderClockSpace):
    """Custom widget to display version in place of clock."""

    DEFAULT_CSS = """
    VersionDisplay {
        width: auto;
        dock: right;
        padding: 0 1;
        background: $foreground 5%;
        color: $text;
        text-align: center;
        text-opacity: 85%;
    }
    """

    def render(self) -> RenderResult:
        """Render the version string."""
        return Text(f"v{__version__}")


class NonExpandingHeader(Header):
    """Header widget that doesn't expand/contract on click and shows version instead of clock."""

    def compose(self) -> ComposeResult:
        """Compose the header with custom version display."""
        yield HeaderIcon().data_bind(Header.icon)
        yield HeaderTitle()
        yield VersionDisplay() if self._show_clock else HeaderClockSpace()

    def on_click(self, event: Click) -> None:
        """Override to disable click-to-expand behavior."""
        event.stop()  # Stop event propagation to prevent default toggle behavior


class LauncherView(Widget, can_focus=True):
    """The whole launcher screen, drawn from AppState on every refresh.

    Keys and clicks go straight to the state handlers; the resulting
    commands run through the controller before the next redraw.
    """

    DEFAULT_CSS = """
    LauncherView {
        height: 1fr;
        width: 1fr;
    }
    """

    def __init__(self, state: AppState, controller: Controller, **kwargs):
        super().__init__(**kwargs)
        self.state = state
        self.controller = controller
        self.frame: Optional[Frame] = None

    def render(self) -> RenderableType:
        self.frame = render_frame(self.state, self.size.width, self.size.height)
        return self.frame.renderable

    def on_key(self, event: events.Key) -> None:
        # Every key belongs to the state machine, including Tab
        event.stop()
        event.prevent_default()
        self._run(handle_key(self.state, KeyPress(event.key, event.character)))

    def on_click(self, event: Click) -> None:
        if event.button != 1 or self.frame is None:
            return
        event.stop()
        target = hit_test(self.frame, event.x, event.y, len(self.state.todos))
        self._run(handle_pointer(self.state, target))

    def _run(self, commands: List[Command]) -> None:
        if not self.controller.execute(commands):
            self.app.exit()
            return
        self.refresh()
