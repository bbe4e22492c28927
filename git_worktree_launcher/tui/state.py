"""Application state and pure input handlers for the worktree launcher UI.

Handlers mutate the ``AppState`` they are given and return the list of
commands the controller must run against git, tmux and the todo file.
They never touch the outside world themselves, so every transition can be
tested without a terminal.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from git_worktree_launcher.constants import VALIDATION_ERROR
from git_worktree_launcher.models import Todo, Worktree


class InputMode(Enum):
    """Modes of the UI."""
    NORMAL = "normal"
    CREATING_WORKTREE = "creating_worktree"
    HELP = "help"
    CONFIRM_DELETE = "confirm_delete"


# Commands returned by the handlers

@dataclass
class Quit:
    pass


@dataclass
class Refresh:
    pass


@dataclass
class StartSession:
    worktree: Worktree


@dataclass
class InspectDeletion:
    worktree: Worktree


@dataclass
class DeleteWorktree:
    worktree: Worktree
    force: bool


@dataclass
class CreateWorktree:
    name: str
    description: str


Command = Union[Quit, Refresh, StartSession, InspectDeletion, DeleteWorktree, CreateWorktree]


# Input events

@dataclass
class KeyPress:
    """A key event: Textual key name plus the printable character, if any."""
    key: str
    character: Optional[str] = None

    @property
    def name(self) -> str:
        """Printable keys are matched by character, the rest by key name."""
        if self.character and len(self.character) == 1 and self.character.isprintable():
            return self.character
        return self.key


@dataclass
class ClickItem:
    index: int


@dataclass
class ClickButton:
    pass


PointerTarget = Union[ClickItem, ClickButton]


def dasherize(text: str) -> str:
    """Derive a worktree/branch name: lower-cased, whitespace runs become one hyphen."""
    return "-".join(text.lower().split())


@dataclass
class AppState:
    """Everything the UI shows; transient, never persisted."""
    todos: List[Todo] = field(default_factory=list)
    worktrees: List[Worktree] = field(default_factory=list)
    mode: InputMode = InputMode.NORMAL
    selected: Optional[int] = None
    button_focused: bool = False
    remembered_index: int = 0  # List position restored when Tab leaves the button
    description_input: str = ""
    pending_delete: Optional[Worktree] = None
    delete_is_dirty: bool = False
    error_message: Optional[str] = None

    @property
    def worktree_input(self) -> str:
        return dasherize(self.description_input)

    @property
    def can_create(self) -> bool:
        return bool(self.description_input.strip()) and bool(self.worktree_input.strip())

    def worktree_named(self, name: Optional[str]) -> Optional[Worktree]:
        if not name:
            return None
        for worktree in self.worktrees:
            if worktree.name == name:
                return worktree
        return None

    def is_dangling(self, todo: Todo) -> bool:
        return todo.worktree is not None and self.worktree_named(todo.worktree) is None

    def selected_todo(self) -> Optional[Todo]:
        if self.button_focused or self.selected is None:
            return None
        if 0 <= self.selected < len(self.todos):
            return self.todos[self.selected]
        return None

    def selected_worktree(self) -> Optional[Worktree]:
        """Worktree linked to the selected todo, if it still exists."""
        todo = self.selected_todo()
        if todo is None:
            return None
        return self.worktree_named(todo.worktree)


# Focus ring

def select_index(state: AppState, index: int) -> None:
    state.selected = index
    state.remembered_index = index
    state.button_focused = False


def _focus_button(state: AppState) -> None:
    if state.selected is not None:
        state.remembered_index = state.selected
    state.selected = None
    state.button_focused = True


def move_down(state: AppState) -> None:
    count = len(state.todos)
    if count == 0:
        _focus_button(state)
    elif state.button_focused:
        select_index(state, 0)
    elif state.selected is None:
        select_index(state, 0)
    elif state.selected >= count - 1:
        _focus_button(state)
    else:
        select_index(state, state.selected + 1)


def move_up(state: AppState) -> None:
    count = len(state.todos)
    if count == 0:
        _focus_button(state)
    elif state.button_focused:
        select_index(state, count - 1)
    elif state.selected is None:
        select_index(state, 0)
    elif state.selected == 0:
        _focus_button(state)
    else:
        select_index(state, state.selected - 1)


def toggle_focus(state: AppState) -> None:
    """Swap focus between list and button, keeping the list position."""
    count = len(state.todos)
    if state.button_focused:
        if count == 0:
            return
        select_index(state, min(state.remembered_index, count - 1))
    else:
        _focus_button(state)


def clamp_selection(state: AppState) -> None:
    """Keep the cursor valid after the todo list changed size."""
    count = len(state.todos)
    if count == 0:
        state.selected = None
        state.button_focused = True
        state.remembered_index = 0
        return
    state.remembered_index = min(state.remembered_index, count - 1)
    if state.selected is not None and state.selected >= count:
        select_index(state, count - 1)


def apply_snapshot(state: AppState, worktrees: List[Worktree], todos: List[Todo]) -> None:
    """Install a freshly listed snapshot.

    If nothing was selected and the button is not focused, the first
    entry gets selected.
    """
    state.worktrees = list(worktrees)
    state.todos = list(todos)
    if state.todos and state.selected is None and not state.button_focused:
        select_index(state, 0)
    clamp_selection(state)


def preselect_worktree(state: AppState, name: Optional[str]) -> None:
    """Select the todo linked to name (the worktree we were started in)."""
    if not state.todos:
        return
    index = 0
    if name:
        for i, todo in enumerate(state.todos):
            if todo.worktree == name:
                index = i
                break
    select_index(state, index)


# Mode transitions shared with the controller

def open_wizard(state: AppState) -> None:
    state.mode = InputMode.CREATING_WORKTREE
    state.description_input = ""
    state.error_message = None


def close_wizard(state: AppState) -> None:
    state.mode = InputMode.NORMAL
    state.description_input = ""
    state.error_message = None


def clear_pending_delete(state: AppState) -> None:
    state.mode = InputMode.NORMAL
    state.pending_delete = None
    state.delete_is_dirty = False


# Key handlers, one per mode

def _handle_normal(state: AppState, key: str) -> List[Command]:
    state.error_message = None

    if key in ("q", "escape"):
        return [Quit()]
    if key in ("down", "j"):
        move_down(state)
    elif key in ("up", "k"):
        move_up(state)
    elif key == "tab":
        toggle_focus(state)
    elif key in ("n", "c"):
        open_wizard(state)
    elif key in ("d", "delete"):
        worktree = state.selected_worktree()
        if worktree is not None:
            return [InspectDeletion(worktree)]
    elif key == "r":
        return [Refresh()]
    elif key == "?":
        state.mode = InputMode.HELP
    elif key == "enter":
        if state.button_focused:
            open_wizard(state)
        else:
            # Dangling or unlinked todos are not actionable
            worktree = state.selected_worktree()
            if worktree is not None:
                return [StartSession(worktree)]
    return []


def _handle_help(state: AppState, key: str) -> List[Command]:
    if key in ("?", "q", "escape"):
        state.mode = InputMode.NORMAL
    return []


def _handle_confirm_delete(state: AppState, key: str) -> List[Command]:
    if key in ("y", "Y", "enter"):
        worktree = state.pending_delete
        force = state.delete_is_dirty
        clear_pending_delete(state)
        if worktree is not None:
            return [DeleteWorktree(worktree, force)]
    elif key in ("n", "N", "escape"):
        clear_pending_delete(state)
    return []


def _handle_creating(state: AppState, press: KeyPress) -> List[Command]:
    key = press.name
    if key == "enter":
        if not state.can_create:
            state.error_message = VALIDATION_ERROR
            return []
        return [CreateWorktree(state.worktree_input.strip(), state.description_input.strip())]
    if key == "escape":
        close_wizard(state)
    elif key == "backspace":
        state.description_input = state.description_input[:-1]
    elif press.character and key == press.character:
        state.description_input += press.character
    return []


def handle_key(state: AppState, press: KeyPress) -> List[Command]:
    """Apply a key press to the state and return the commands to run."""
    if state.mode == InputMode.NORMAL:
        return _handle_normal(state, press.name)
    if state.mode == InputMode.HELP:
        return _handle_help(state, press.name)
    if state.mode == InputMode.CONFIRM_DELETE:
        return _handle_confirm_delete(state, press.name)
    return _handle_creating(state, press)


def handle_pointer(state: AppState, target: Optional[PointerTarget]) -> List[Command]:
    """Apply a left click (already hit-tested) to the state."""
    if state.mode != InputMode.NORMAL or target is None:
        return []

    if isinstance(target, ClickItem):
        if 0 <= target.index < len(state.todos):
            state.error_message = None
            select_index(state, target.index)
    elif isinstance(target, ClickButton):
        open_wizard(state)
    return []
