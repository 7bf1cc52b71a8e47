"""Key handling of the add-repos-to-workspace screen."""

from __future__ import annotations

from space.tui.add_screen import AddStage, AddState
from space.tui.app import App, Dashboard
from space.tui.create_flow import (
    finish_progress,
    handle_branch_pick_key,
    handle_strategy_key,
    run_worktree_jobs,
)
from space.tui.textinput import Key, key_to_input_request

_UP = frozenset({"up", "k"})
_DOWN = frozenset({"down", "j"})
_DISMISS = frozenset({"enter", "esc", "q"})


def handle_add_key(app: App, key: Key) -> None:
    """Route a key press to the active stage of the add-repos screen."""
    state = app.screen
    if not isinstance(state, AddState):
        return
    match state.stage:
        case AddStage.PICK_REPOS:
            _handle_pick_repos(app, state, key)
        case AddStage.PICK_BRANCH_STRATEGY:
            handle_strategy_key(app, state, key, do_add)
        case AddStage.PICK_BRANCH:
            handle_branch_pick_key(app, state, key, do_add)
        case AddStage.CREATING:
            if key.code in _DISMISS:
                finish_progress(app, state, "Add")


def _handle_pick_repos(app: App, state: AddState, key: Key) -> None:
    picker = state.picker
    if key.code == "esc":
        app.screen = Dashboard()
    elif key.code == "enter":
        confirmed = [item.full_path for item in picker.confirmed_items()]
        if not confirmed:
            state.error = "Select at least one repo"
            return
        state.selected_repos = confirmed
        state.error = None
        state.stage = AddStage.PICK_BRANCH_STRATEGY
    elif key.code == "tab":
        picker.toggle_highlighted()
    elif key.code in _UP:
        picker.move_up()
    elif key.code in _DOWN:
        picker.move_down()
    elif key.code == "s" and key.ctrl:
        picker.cycle_scope()
    else:
        request = key_to_input_request(key)
        if request is not None:
            picker.input.handle(request)
        picker.refilter()


def do_add(app: App) -> None:
    """Add a worktree of every selected repo to the workspace."""
    state = app.screen
    if not isinstance(state, AddState):
        return
    name = state.workspace_name
    run_worktree_jobs(app, state, name, "Adding", f"Added repos to workspace '{name}'")