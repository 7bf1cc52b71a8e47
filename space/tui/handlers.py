"""Key handling of the go-to, delete and search screens."""

from __future__ import annotations

from space.tui.app import App, Dashboard
from space.tui.simple_screens import DeleteState, GoState, SearchState
from space.tui.textinput import Key, key_to_input_request
from space.workspace import WorkspaceError, list_workspaces, remove_workspace

_UP = frozenset({"up", "k"})
_DOWN = frozenset({"down", "j"})


def handle_go_key(app: App, key: Key) -> None:
    """Filter workspaces; Enter sets the directory to change into and quits."""
    state = app.screen
    if not isinstance(state, GoState):
        return
    picker = state.picker
    if key.code == "esc":
        app.screen = Dashboard()
    elif key.code in _UP:
        picker.move_up()
    elif key.code in _DOWN:
        picker.move_down()
    elif key.code == "enter":
        confirmed = picker.confirmed_items()
        if confirmed:
            app.space_cd_target = confirmed[0].full_path
            app.should_quit = True
    else:
        request = key_to_input_request(key)
        if request is not None:
            picker.input.handle(request)
        picker.refilter()


def handle_delete_key(app: App, key: Key) -> None:
    """Remove the workspace on `y` or Enter; go back on `n` or Esc."""
    state = app.screen
    if not isinstance(state, DeleteState):
        return
    name = state.workspace_name
    ws_dir = app.config.workspaces.dir
    if key.code in ("y", "enter"):
        try:
            remove_workspace(ws_dir, name, True)
        except (WorkspaceError, OSError) as exc:
            app.screen = Dashboard()
            app.set_status(f"Delete failed: {exc}")
            return
        app.screen = Dashboard()
        try:
            app.workspaces = list_workspaces(ws_dir)
        except OSError:
            pass
        else:
            app.selected_ws = 0
        app.load_selected_workspace_detail()
        app.set_status(f"Deleted workspace '{name}'")
    elif key.code in ("n", "esc"):
        app.screen = Dashboard()


def handle_search_key(app: App, key: Key) -> None:
    """Filter repos; Enter selects the first workspace that holds the chosen repo."""
    state = app.screen
    if not isinstance(state, SearchState):
        return
    picker = state.picker
    if key.code == "esc":
        app.screen = Dashboard()
    elif key.code in _UP:
        picker.move_up()
    elif key.code in _DOWN:
        picker.move_down()
    elif key.code == "enter":
        confirmed = picker.confirmed_items()
        app.screen = Dashboard()
        if not confirmed:
            return
        repo_name = confirmed[0].name
        found = next(
            (i for i, ws in enumerate(app.workspaces) if any(r.name == repo_name for r in ws.repos)),
            None,
        )
        if found is None:
            app.set_status("Not in any workspace \u2014 use 'c' to create one")
        else:
            app.selected_ws = found
            app.selected_repo = 0
            app.load_selected_workspace_detail()
    else:
        request = key_to_input_request(key)
        if request is not None:
            picker.input.handle(request)
        picker.refilter()