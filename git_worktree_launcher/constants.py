"""Shared constants for git-worktree-launcher."""

# Persisted files
CONFIG_DIR_NAME = "git-worktree-launcher"
CONFIG_FILE_NAME = "config.yaml"
TODO_FILE_NAME = ".worktree-todos.yaml"


# Symbol constants
SYMBOL_DONE = "[✓] "
SYMBOL_PENDING = "[ ] "
SYMBOL_HIGHLIGHT = ">> "
DELETED_MARKER = "[deleted]"
BUTTON_LABEL = "[ New ]"


# Layout
HELP_AREA_PERCENT = 80  # Bottom row split: help text / New button
BOTTOM_ROW_HEIGHT = 3
ERROR_PANEL_HEIGHT = 3
CONFIRM_PANEL_HEIGHT = 8
INPUT_PANEL_HEIGHT = 3


# Titles
LIST_TITLE = "Todos & Worktrees (↑↓/jk to navigate, Tab to toggle, Enter to select)"
HELP_TITLE = "Help"
CONFIRM_TITLE = "Confirm Delete"
DESCRIPTION_TITLE = "Description"
ERROR_TITLE = "Error"
KEYS_TITLE = "Keys"
WORKTREE_TITLE = "Worktree Name (auto-generated)"


# Help text by available width of the help area
HELP_TEXT_FULL = "q: Quit | n: New | d: Delete | r: Refresh | Tab: Toggle | Enter: Select | ?: Help"
HELP_TEXT_MEDIUM = "q: Quit | n: New | d: Delete | r: Refresh | Tab: Toggle | ?: Help"
HELP_TEXT_SHORT = "q: Quit | n: New | d: Del | r: Refresh | ?: Help"
HELP_TEXT_MINIMAL = "q: Quit | n: New | d: Del | ?: Help"

HELP_WIDTH_FULL = 90
HELP_WIDTH_MEDIUM = 70
HELP_WIDTH_SHORT = 50

INPUT_HELP_READY = "Enter: Create | Esc: Cancel"
INPUT_HELP_EMPTY = "Type a description to continue | Esc: Cancel"

VALIDATION_ERROR = "Description and worktree name cannot be empty"

HELP_FOOTER = "Press ? or Esc to close"


# Full help screen: (section, [(keys, description)])
HELP_SECTIONS = [
    ("Navigation", [
        ("↑/k", "Move selection up"),
        ("↓/j", "Move selection down"),
        ("Tab", "Toggle between list and New button"),
        ("Enter", "Select worktree or activate button"),
    ]),
    ("Actions", [
        ("n/c", "Create new worktree"),
        ("d", "Delete selected worktree"),
        ("r", "Refresh worktree list"),
        ("?", "Toggle this help screen"),
        ("q/Esc", "Quit application"),
    ]),
]


# Delete confirmation
CONFIRM_DIRTY_WARNING = "⚠ WARNING: "
CONFIRM_DIRTY_MESSAGE = "This worktree has uncommitted changes!"


# Colors (Rich color names)
COLORS = {
    "done": "green",
    "pending": "yellow",
    "deleted": "red",
    "worktree": "cyan",
    "highlight": "bold reverse",
    "border": "blue",
    "border_focused": "bright_yellow",
    "error": "red",
    "warning": "yellow",
}


# Default session window plan: (name, command)
DEFAULT_WINDOWS = [
    ("editor", "${EDITOR:-vi} ."),
    ("server", None),
    ("shell", None),
]


CONFIG_HEADER = """\
# git-worktree-launcher configuration
#
# windows: the tmux windows created for a new worktree session, in order.
# The first entry names the session's initial window; every other entry
# becomes an additional window. "command" is optional; leave it out (or
# set it to null) for a plain shell.
#
# Default plan:
#   editor  runs ${EDITOR:-vi} .
#   server  plain shell
#   shell   plain shell
"""
