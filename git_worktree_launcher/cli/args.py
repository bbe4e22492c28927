"""Command-line argument parsing for git-worktree-launcher."""

import argparse
from typing import List, Optional

from git_worktree_launcher.__version__ import __version__


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-worktree-launcher",
        description="Manage git worktrees, a todo list and tmux sessions from one TUI",
        epilog="Run without arguments for the interactive UI, or pass a worktree name "
        "to jump straight into its tmux session.",
    )
    parser.add_argument(
        "worktree",
        nargs="?",
        help="Worktree to open a tmux session for (skips the interactive UI)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"git-worktree-launcher {__version__}")
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Config file holding the tmux window plan "
        "(default: $XDG_CONFIG_HOME/git-worktree-launcher/config.yaml)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )

    return parser.parse_args(argv)
