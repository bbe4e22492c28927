"""Pure rendering of the application state into rich renderables.

``render_frame`` is called on every redraw with the current terminal size
and returns the renderable together with the regions clicks are tested
against, so the regions always match what is on screen.
"""

from dataclasses import dataclass
from typing import List, Optional

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from git_worktree_launcher.constants import (
    BOTTOM_ROW_HEIGHT,
    BUTTON_LABEL,
    COLORS,
    CONFIRM_DIRTY_MESSAGE,
    CONFIRM_DIRTY_WARNING,
    CONFIRM_PANEL_HEIGHT,
    CONFIRM_TITLE,
    DELETED_MARKER,
    DESCRIPTION_TITLE,
    ERROR_PANEL_HEIGHT,
    ERROR_TITLE,
    HELP_AREA_PERCENT,
    HELP_FOOTER,
    HELP_SECTIONS,
    HELP_TEXT_FULL,
    HELP_TEXT_MEDIUM,
    HELP_TEXT_MINIMAL,
    HELP_TEXT_SHORT,
    HELP_TITLE,
    HELP_WIDTH_FULL,
    HELP_WIDTH_MEDIUM,
    HELP_WIDTH_SHORT,
    INPUT_HELP_EMPTY,
    INPUT_HELP_READY,
    INPUT_PANEL_HEIGHT,
    KEYS_TITLE,
    LIST_TITLE,
    SYMBOL_HIGHLIGHT,
    WORKTREE_TITLE,
)
from git_worktree_launcher.formatters import format_checkbox, format_worktree_link
from git_worktree_launcher.tui.state import AppState, ClickButton, ClickItem, InputMode, PointerTarget

MIN_LIST_HEIGHT = 3


@dataclass
class Region:
    """A rectangle in widget coordinates."""
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclass
class Frame:
    """Output of one render pass."""
    renderable: RenderableType
    list_region: Optional[Region] = None
    button_region: Optional[Region] = None
    list_offset: int = 0


def help_text_for_width(width: int) -> str:
    """Choose the key help line that fits the help area."""
    if width >= HELP_WIDTH_FULL:
        return HELP_TEXT_FULL
    if width >= HELP_WIDTH_MEDIUM:
        return HELP_TEXT_MEDIUM
    if width >= HELP_WIDTH_SHORT:
        return HELP_TEXT_SHORT
    return HELP_TEXT_MINIMAL


def list_offset(selected: Optional[int], visible_rows: int) -> int:
    """First visible row so that the selection stays on screen."""
    if selected is None or visible_rows <= 0:
        return 0
    return max(0, selected - (visible_rows - 1))


def _spacer(lines: int) -> RenderableType:
    return Text("\n" * (lines - 1)) if lines > 0 else Group()


def _todo_row(state: AppState, index: int) -> Text:
    todo = state.todos[index]
    highlighted = index == state.selected and not state.button_focused

    row = Text(no_wrap=True, overflow="ellipsis")
    row.append(SYMBOL_HIGHLIGHT if highlighted else " " * len(SYMBOL_HIGHLIGHT))
    row.append(format_checkbox(todo), style=COLORS["done"])
    row.append(todo.description, style="dim" if todo.is_done else "")

    dangling = state.is_dangling(todo)
    link = format_worktree_link(todo, dangling)
    if dangling:
        row.append(link[:-len(DELETED_MARKER)], style="dim")
        row.append(DELETED_MARKER, style=COLORS["deleted"])
    elif link:
        row.append(link, style="dim")

    if highlighted:
        row.stylize(COLORS["highlight"])
    return row


def render_list(state: AppState, height: int) -> tuple:
    """Todo list panel; returns (panel, scroll offset)."""
    visible = max(height - 2, 0)
    offset = list_offset(None if state.button_focused else state.selected, visible)

    rows: List[Text] = [
        _todo_row(state, index)
        for index in range(offset, min(offset + visible, len(state.todos)))
    ]
    body = Text("\n", no_wrap=True, overflow="ellipsis").join(rows)

    border = COLORS["border"] if state.button_focused else COLORS["border_focused"]
    panel = Panel(body, title=Text(LIST_TITLE), title_align="left", border_style=border, height=height)
    return panel, offset


def render_bottom_row(state: AppState, width: int) -> tuple:
    """Help line and New button side by side; returns (grid, help width)."""
    help_width = width * HELP_AREA_PERCENT // 100
    button_width = width - help_width

    help_panel = Panel(
        Text(help_text_for_width(help_width), style="bright_black", no_wrap=True, overflow="ellipsis"),
        title=Text(KEYS_TITLE),
        title_align="left",
        height=BOTTOM_ROW_HEIGHT,
    )
    button_style = "bold " + COLORS["done"]
    if state.button_focused:
        button_style += " reverse"
    button_panel = Panel(
        Text(BUTTON_LABEL, style=button_style, justify="center", no_wrap=True),
        border_style=COLORS["border_focused"] if state.button_focused else COLORS["border"],
        height=BOTTOM_ROW_HEIGHT,
    )

    grid = Table.grid(padding=0)
    grid.add_column(width=help_width)
    grid.add_column(width=button_width)
    grid.add_row(help_panel, button_panel)
    return grid, help_width


def render_error(message: str) -> Panel:
    return Panel(
        Text(message, style=COLORS["error"], no_wrap=True, overflow="ellipsis"),
        title=Text(ERROR_TITLE),
        title_align="left",
        border_style=COLORS["error"],
        height=ERROR_PANEL_HEIGHT,
    )


def render_confirm_delete(state: AppState) -> Panel:
    worktree = state.pending_delete
    name = worktree.name if worktree else ""

    lines = []
    if state.delete_is_dirty:
        warning = Text()
        warning.append(CONFIRM_DIRTY_WARNING, style="bold " + COLORS["error"])
        warning.append(CONFIRM_DIRTY_MESSAGE, style=COLORS["warning"])
        lines.extend([warning, Text("")])

    question = Text("Delete worktree '")
    question.append(name, style="bold " + COLORS["worktree"])
    question.append("'?")
    lines.extend([question, Text("")])

    answer = Text()
    answer.append("Y", style="bold green")
    answer.append("es (force delete) | " if state.delete_is_dirty else "es | ")
    answer.append("N", style="bold red")
    answer.append("o / Esc")
    lines.append(answer)

    return Panel(
        Text("\n").join(lines),
        title=Text(CONFIRM_TITLE),
        title_align="left",
        height=CONFIRM_PANEL_HEIGHT,
    )


def render_full_help(height: int) -> Panel:
    lines = []
    for section, entries in HELP_SECTIONS:
        if lines:
            lines.append(Text(""))
        lines.append(Text(section, style="bold cyan"))
        lines.append(Text(""))
        for keys, description in entries:
            line = Text(f"  {keys:<11}", style="yellow")
            line.append(description, style="bright_black")
            lines.append(line)
    return Panel(Text("\n").join(lines), title=Text(HELP_TITLE), title_align="left", height=height)


def _render_normal(state: AppState, width: int, height: int) -> Frame:
    error_height = ERROR_PANEL_HEIGHT if state.error_message else 0
    list_height = max(height - BOTTOM_ROW_HEIGHT - error_height, MIN_LIST_HEIGHT)

    list_panel, offset = render_list(state, list_height)
    bottom, help_width = render_bottom_row(state, width)

    parts: List[RenderableType] = [list_panel]
    if state.error_message:
        parts.append(render_error(state.error_message))
    parts.append(bottom)

    bottom_y = list_height + error_height
    return Frame(
        renderable=Group(*parts),
        list_region=Region(0, 0, width, list_height),
        button_region=Region(help_width, bottom_y, width - help_width, BOTTOM_ROW_HEIGHT),
        list_offset=offset,
    )


def _render_confirm(state: AppState, width: int, height: int) -> Frame:
    list_height = max(height - CONFIRM_PANEL_HEIGHT, MIN_LIST_HEIGHT)
    list_panel, offset = render_list(state, list_height)
    return Frame(
        renderable=Group(list_panel, render_confirm_delete(state)),
        list_region=Region(0, 0, width, list_height),
        list_offset=offset,
    )


def _render_creating(state: AppState, width: int, height: int) -> Frame:
    parts: List[RenderableType] = [
        Panel(
            Text(state.description_input, style=COLORS["warning"], no_wrap=True, overflow="ellipsis"),
            title=Text(DESCRIPTION_TITLE),
            title_align="left",
            height=INPUT_PANEL_HEIGHT,
        ),
        Panel(
            Text(state.worktree_input, style="bright_black", no_wrap=True, overflow="ellipsis"),
            title=Text(WORKTREE_TITLE),
            title_align="left",
            height=INPUT_PANEL_HEIGHT,
        ),
    ]
    used = 2 * INPUT_PANEL_HEIGHT
    if state.error_message:
        parts.append(render_error(state.error_message))
        used += ERROR_PANEL_HEIGHT

    parts.append(_spacer(height - used - BOTTOM_ROW_HEIGHT))
    parts.append(
        Panel(
            Text(INPUT_HELP_READY if state.can_create else INPUT_HELP_EMPTY, style="bright_black"),
            height=BOTTOM_ROW_HEIGHT,
        )
    )
    return Frame(renderable=Group(*parts))


def _render_help(state: AppState, width: int, height: int) -> Frame:
    body_height = max(height - BOTTOM_ROW_HEIGHT, MIN_LIST_HEIGHT)
    footer = Panel(Text(HELP_FOOTER, style="bright_black"), height=BOTTOM_ROW_HEIGHT)
    return Frame(renderable=Group(render_full_help(body_height), footer))


def render_frame(state: AppState, width: int, height: int) -> Frame:
    """Project the state onto a width x height frame."""
    if state.mode == InputMode.CREATING_WORKTREE:
        return _render_creating(state, width, height)
    if state.mode == InputMode.HELP:
        return _render_help(state, width, height)
    if state.mode == InputMode.CONFIRM_DELETE:
        return _render_confirm(state, width, height)
    return _render_normal(state, width, height)


def hit_test(frame: Frame, x: int, y: int, item_count: int) -> Optional[PointerTarget]:
    """Map a click in widget coordinates to a list row or the New button."""
    if frame.list_region is not None and frame.list_region.contains(x, y):
        # Skip the top border
        row = y - frame.list_region.y - 1
        if 0 <= row < frame.list_region.height - 2:
            index = frame.list_offset + row
            if index < item_count:
                return ClickItem(index)
        return None
    if frame.button_region is not None and frame.button_region.contains(x, y):
        return ClickButton()
    return None
