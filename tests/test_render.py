"""Tests for frame rendering and click hit-testing"""
import io
from pathlib import Path

import pytest
from rich.console import Console

from git_worktree_launcher.constants import (
    BOTTOM_ROW_HEIGHT,
    CONFIRM_DIRTY_MESSAGE,
    HELP_TEXT_FULL,
    HELP_TEXT_MEDIUM,
    HELP_TEXT_MINIMAL,
    HELP_TEXT_SHORT,
    INPUT_HELP_EMPTY,
    INPUT_HELP_READY,
)
from git_worktree_launcher.models import Todo, TodoStatus, Worktree
from git_worktree_launcher.tui.render import help_text_for_width, hit_test, list_offset, render_frame
from git_worktree_launcher.tui.state import AppState, ClickButton, ClickItem, InputMode, apply_snapshot

WIDTH = 120
HEIGHT = 20


def draw(state, width=WIDTH, height=HEIGHT):
    """Render a frame and return (frame, plain text)."""
    frame = render_frame(state, width, height)
    console = Console(record=True, width=width, height=height, color_system=None, file=io.StringIO())
    console.print(frame.renderable)
    return frame, console.export_text()


@pytest.fixture
def worktrees():
    return [
        Worktree("repo", Path("/w/repo"), "main"),
        Worktree("add-login-flow", Path("/w/add-login-flow"), "add-login-flow"),
    ]


@pytest.fixture
def state(worktrees, sample_todos):
    state = AppState()
    apply_snapshot(state, worktrees, sample_todos)
    return state


class TestHelpText:

    @pytest.mark.parametrize("width,expected", [
        (120, HELP_TEXT_FULL),
        (90, HELP_TEXT_FULL),
        (89, HELP_TEXT_MEDIUM),
        (70, HELP_TEXT_MEDIUM),
        (69, HELP_TEXT_SHORT),
        (50, HELP_TEXT_SHORT),
        (49, HELP_TEXT_MINIMAL),
        (10, HELP_TEXT_MINIMAL),
    ])
    def test_thresholds(self, width, expected):
        assert help_text_for_width(width) == expected

    def test_frame_uses_help_area_width(self, state):
        # 80% of the terminal goes to the help line
        _, text = draw(state, width=120)
        assert HELP_TEXT_FULL in text
        _, text = draw(state, width=100)
        assert HELP_TEXT_MEDIUM in text


class TestTodoList:

    def test_rows(self, state):
        _, text = draw(state)
        assert ">> [ ] Add login flow (add-login-flow)" in text
        assert "[✓] Fix bug (bugfix-1) [deleted]" in text
        assert "[ ] Write docs" in text
        assert "[ New ]" in text

    def test_no_highlight_when_button_focused(self, state):
        state.selected = None
        state.button_focused = True
        _, text = draw(state)
        assert ">> " not in text

    def test_error_panel(self, state):
        state.error_message = "git worktree add failed"
        _, text = draw(state)
        assert "Error" in text
        assert "git worktree add failed" in text

    def test_scroll_keeps_selection_visible(self, worktrees):
        todos = [Todo(f"Task {i}", TodoStatus.PENDING, None) for i in range(30)]
        state = AppState()
        apply_snapshot(state, worktrees, todos)
        state.selected = 25

        frame, text = draw(state)

        assert ">> [ ] Task 25" in text
        assert "Task 0 " not in text
        visible = frame.list_region.height - 2
        assert frame.list_offset == 25 - (visible - 1)

    def test_list_offset(self):
        assert list_offset(0, 5) == 0
        assert list_offset(4, 5) == 0
        assert list_offset(7, 5) == 3
        assert list_offset(None, 5) == 0


class TestRegions:

    def test_normal_layout(self, state):
        frame = render_frame(state, WIDTH, HEIGHT)
        list_height = HEIGHT - BOTTOM_ROW_HEIGHT

        assert (frame.list_region.y, frame.list_region.height) == (0, list_height)
        assert frame.button_region.x == WIDTH * 80 // 100
        assert frame.button_region.y == list_height
        assert frame.button_region.height == BOTTOM_ROW_HEIGHT

    def test_error_pushes_button_down(self, state):
        state.error_message = "boom"
        frame = render_frame(state, WIDTH, HEIGHT)
        assert frame.button_region.y == frame.list_region.height + 3

    def test_hit_rows(self, state):
        frame = render_frame(state, WIDTH, HEIGHT)
        assert hit_test(frame, 5, 1, len(state.todos)) == ClickItem(0)
        assert hit_test(frame, 5, 3, len(state.todos)) == ClickItem(2)

    def test_hit_border_and_empty_rows(self, state):
        frame = render_frame(state, WIDTH, HEIGHT)
        assert hit_test(frame, 5, 0, len(state.todos)) is None
        assert hit_test(frame, 5, 4, len(state.todos)) is None

    def test_hit_button(self, state):
        frame = render_frame(state, WIDTH, HEIGHT)
        region = frame.button_region
        assert hit_test(frame, region.x + 1, region.y + 1, len(state.todos)) == ClickButton()
        assert hit_test(frame, 0, region.y + 1, len(state.todos)) is None

    def test_hit_accounts_for_scroll(self, worktrees):
        todos = [Todo(f"Task {i}", TodoStatus.PENDING, None) for i in range(30)]
        state = AppState()
        apply_snapshot(state, worktrees, todos)
        state.selected = 25
        frame = render_frame(state, WIDTH, HEIGHT)
        assert hit_test(frame, 5, 1, len(todos)) == ClickItem(frame.list_offset)

    def test_no_regions_outside_normal(self, state):
        state.mode = InputMode.HELP
        frame = render_frame(state, WIDTH, HEIGHT)
        assert frame.list_region is None
        assert frame.button_region is None


class TestOtherModes:

    def test_confirm_clean(self, state, worktrees):
        state.mode = InputMode.CONFIRM_DELETE
        state.pending_delete = worktrees[1]
        _, text = draw(state)
        assert "Delete worktree 'add-login-flow'?" in text
        assert CONFIRM_DIRTY_MESSAGE not in text

    def test_confirm_dirty(self, state, worktrees):
        state.mode = InputMode.CONFIRM_DELETE
        state.pending_delete = worktrees[1]
        state.delete_is_dirty = True
        _, text = draw(state)
        assert "uncommitted changes" in text
        assert "force delete" in text

    def test_wizard(self, state):
        state.mode = InputMode.CREATING_WORKTREE
        _, text = draw(state)
        assert INPUT_HELP_EMPTY in text

        state.description_input = "Add Login Flow"
        _, text = draw(state)
        assert "Add Login Flow" in text
        assert "add-login-flow" in text
        assert INPUT_HELP_READY in text

    def test_full_help(self, state):
        state.mode = InputMode.HELP
        _, text = draw(state)
        assert "Navigation" in text
        assert "Actions" in text
        assert "Press ? or Esc to close" in text
