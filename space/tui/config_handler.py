"""Key handling of the configuration editor."""

from __future__ import annotations

from space.tui.app import App, Dashboard
from space.tui.config_screen import ConfigState
from space.tui.textinput import Key, key_to_input_request


def handle_config_key(app: App, key: Key) -> None:
    """Navigate and edit fields; Ctrl-S saves and returns to the dashboard."""
    state = app.screen
    if not isinstance(state, ConfigState):
        return

    if key.code == "s" and key.ctrl:
        if state.editing:
            state.commit_edit()
        try:
            app.config = state.save_to_config(app.config, app.config_file)
        except (ValueError, OSError) as exc:
            app.set_status(f"Save failed: {exc}")
        else:
            app.set_status("Config saved")
        app.screen = Dashboard()
        return

    if state.editing:
        if key.code == "esc":
            state.cancel_edit()
        elif key.code == "enter":
            state.commit_edit()
            state.focused = min(state.focused + 1, len(state.fields) - 1)
        else:
            request = key_to_input_request(key)
            if request is not None:
                state.input.handle(request)
        return

    if key.code in ("esc", "q"):
        app.screen = Dashboard()
    elif key.code == "enter":
        state.start_editing()
    elif key.code in ("up", "k"):
        if state.focused > 0:
            state.focused -= 1
    elif key.code in ("down", "j"):
        if state.focused + 1 < len(state.fields):
            state.focused += 1