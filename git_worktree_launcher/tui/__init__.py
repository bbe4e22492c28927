"""Interactive terminal UI for git-worktree-launcher.

State transitions live in ``state``, side effects in ``controller`` and
drawing in ``render``; ``app`` wires them into a Textual application.
"""

from .state import AppState, InputMode, handle_key, handle_pointer
from .render import Frame, hit_test, render_frame

__all__ = ["AppState", "InputMode", "Frame", "handle_key", "handle_pointer", "hit_test", "render_frame"]
