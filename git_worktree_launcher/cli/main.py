"""Command-line interface for git-worktree-launcher"""

import os
import sys
from typing import List, Optional

from rich.console import Console

from git_worktree_launcher.cli.args import parse_args
from git_worktree_launcher.config import Config
from git_worktree_launcher.core import WorktreeLauncher
from git_worktree_launcher.exceptions import WorktreeLauncherError
from git_worktree_launcher.formatters import format_window
from git_worktree_launcher.logging_config import get_log_file, setup_logging

console = Console(stderr=True)


def _print_warnings(warnings: List[str]) -> None:
    for warning in warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]", highlight=False)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)
        use_interactive = parsed_args.worktree is None

        # The TUI owns the terminal, so log to file only
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=use_interactive)

        config = Config.load(parsed_args.config)
        if parsed_args.debug and not use_interactive:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"[yellow]Log file:[/yellow] {get_log_file()}", highlight=False)
            console.print("[yellow]Window plan:[/yellow]")
            for window in config.windows:
                console.print(f"  {format_window(window)}", highlight=False)

        launcher = WorktreeLauncher(config, os.getcwd())

        if not use_interactive:
            _print_warnings(launcher.jump_to_worktree(parsed_args.worktree))
            return 0

        from git_worktree_launcher.tui.app import WorktreeLauncherApp
        app = WorktreeLauncherApp(launcher, initial_worktree=launcher.current_worktree_name(os.getcwd()))
        app.run()
        _print_warnings(app.warnings)
        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 130
    except WorktreeLauncherError as e:
        console.print(f"[red]Error: {e}[/red]", highlight=False)
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
