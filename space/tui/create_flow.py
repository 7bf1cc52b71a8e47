"""Key handling of the create-workspace screen and the worktree steps it shares."""

from __future__ import annotations

from collections.abc import Callable

from space.tui.add_screen import AddStage, AddState
from space.tui.app import App, Dashboard, build_branch_picker
from space.tui.create_screen import CreateStage, CreateState
from space.tui.textinput import Key, key_to_input_request
from space.workspace import WorkspaceError, create_worktree, list_workspaces

FlowState = CreateState | AddState

_UP = frozenset({"up", "k"})
_DOWN = frozenset({"down", "j"})
_PICK_BRANCH_IDX = 3
_BACK_FROM_STRATEGY = {
    CreateStage: CreateStage.NAME_WORKSPACE,
    AddStage: AddStage.PICK_REPOS,
}
_DISMISS = frozenset({"enter", "esc", "q"})


def handle_create_key(app: App, key: Key) -> None:
    state = app.screen
    if not isinstance(state, CreateState):
        return
    match state.stage:
        case CreateStage.PICK_REPOS:
            _handle_pick_repos(app, state, key)
        case CreateStage.NAME_WORKSPACE:
            _handle_name(state, key)
        case CreateStage.PICK_BRANCH_STRATEGY:
            handle_strategy_key(app, state, key, do_create)
        case CreateStage.PICK_BRANCH:
            handle_branch_pick_key(app, state, key, do_create)
        case CreateStage.CREATING:
            if key.code in _DISMISS:
                finish_progress(app, state, "Create")


def _handle_pick_repos(app: App, state: CreateState, key: Key) -> None:
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
        state.stage = CreateStage.NAME_WORKSPACE
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


def _handle_name(state: CreateState, key: Key) -> None:
    if key.code == "esc":
        state.stage = CreateStage.PICK_REPOS
    elif key.code == "enter":
        if not state.ws_name.value.strip():
            state.error = "Workspace name cannot be empty"
            return
        state.error = None
        state.stage = CreateStage.PICK_BRANCH_STRATEGY
    else:
        request = key_to_input_request(key)
        if request is not None:
            state.ws_name.handle(request)


def handle_strategy_key(app: App, state: FlowState, key: Key, on_confirm: Callable[[App], None]) -> None:
    """Move through the branch strategies; Enter runs `on_confirm` or opens the branch picker."""
    stages = type(state.stage)
    if key.code == "esc":
        state.error = None
        state.stage = _BACK_FROM_STRATEGY[stages]
    elif key.code in _UP:
        state.error = None
        if state.branch_strategy_idx > 0:
            state.branch_strategy_idx -= 1
    elif key.code in _DOWN:
        state.error = None
        state.branch_strategy_idx = min(state.branch_strategy_idx + 1, _PICK_BRANCH_IDX)
    elif key.code == "enter":
        if state.branch_strategy_idx != _PICK_BRANCH_IDX:
            on_confirm(app)
            return
        if not state.selected_repos:
            return
        repo_path = state.selected_repos[0]
        picker = build_branch_picker(repo_path, repo_path.name)
        if picker is None:
            state.error = f"Could not list branches for {repo_path.name}"
        else:
            state.branch_picker = picker
            state.stage = stages.PICK_BRANCH


def handle_branch_pick_key(app: App, state: FlowState, key: Key, on_confirm: Callable[[App], None]) -> None:
    """Filter and pick a branch; Enter records it and runs `on_confirm`."""
    stages = type(state.stage)
    picker = state.branch_picker
    if key.code == "esc":
        state.stage = stages.PICK_BRANCH_STRATEGY
    elif key.code in _UP:
        if picker is not None:
            picker.move_up()
    elif key.code in _DOWN:
        if picker is not None:
            picker.move_down()
    elif key.code == "enter":
        confirmed = picker.confirmed_items() if picker is not None else []
        if confirmed:
            state.picked_branch = confirmed[0].name
        on_confirm(app)
    elif picker is not None:
        request = key_to_input_request(key)
        if request is not None:
            picker.input.handle(request)
        picker.refilter()


def finish_progress(app: App, state: FlowState, label: str) -> None:
    """Leave the progress log for the dashboard, reporting any failure."""
    error = state.error
    app.screen = Dashboard()
    try:
        app.workspaces = list_workspaces(app.config.workspaces.dir)
    except OSError:
        pass
    else:
        app.selected_ws = 0
        app.load_selected_workspace_detail()
    if error is not None:
        app.set_status(f"{label} failed: {error}")


def run_worktree_jobs(app: App, state: FlowState, workspace_name: str, verb: str, done_message: str) -> None:
    """Create a worktree of every selected repo, logging progress in `state`.

    On success the dashboard is shown with `done_message`; on failure the log stays
    open. A branch that is already checked out sends the user back to pick a strategy.
    """
    stages = type(state.stage)
    strategy = state.branch_strategy()
    repos = list(state.selected_repos)
    ws_dir = app.config.workspaces.dir

    state.stage = stages.CREATING
    state.progress.clear()
    state.error = None

    for repo_path in repos:
        name = repo_path.name or "?"
        state.progress.append(f"{verb} worktree for {name}...")
        try:
            create_worktree(repo_path, ws_dir, workspace_name, strategy)
        except (WorkspaceError, OSError) as exc:
            if "already checked out" in str(exc):
                state.stage = stages.PICK_BRANCH_STRATEGY
                state.progress.clear()
                state.error = f"'{name}' is already checked out \u2014 pick a different strategy"
                return
            state.progress.append(f"  \u2717 {name}: {exc}")
            state.error = f"Failed: {exc}"
        else:
            state.progress.append(f"  \u2713 {name}")

    if state.error is not None:
        return
    try:
        app.workspaces = list_workspaces(ws_dir)
    except OSError:
        pass
    else:
        app.selected_ws = next(
            (i for i, ws in enumerate(app.workspaces) if ws.name == workspace_name), app.selected_ws
        )
        app.load_selected_workspace_detail()
    app.screen = Dashboard()
    app.set_status(done_message)


def do_create(app: App) -> None:
    state = app.screen
    if not isinstance(state, CreateState):
        return
    name = state.ws_name.value
    run_worktree_jobs(app, state, name, "Creating", f"Created workspace '{name}'")