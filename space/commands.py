"""Commands that change directory into or remove a workspace."""

from __future__ import annotations

import os
from pathlib import Path

from space.config import SpaceConfig
from space.workspace import WorkspaceError, list_workspaces, remove_workspace

CD_FILE_ENV = "__SPACE_CD_FILE__"
CD_MARKER = "__SPACE_CD__"


def emit_cd_target(path: Path | str) -> None:
    """Tell the shell wrapper where to change directory.

    When the wrapper sets the cd-file variable the path is written there, which
    keeps standard output free for the interface; otherwise a marker line is printed.
    """
    cd_file = os.environ.get(CD_FILE_ENV)
    if cd_file is not None:
        try:
            Path(cd_file).write_text(str(path), encoding="utf-8")
        except OSError:
            pass
    else:
        print(f"{CD_MARKER}:{path}")


def run_go(name: str | None, config: SpaceConfig | None = None) -> None:
    """Emit the directory of the named workspace."""
    if name is None:
        raise ValueError("go requires a workspace name")
    cfg = config if config is not None else SpaceConfig.load()
    match = next((ws for ws in list_workspaces(cfg.workspaces.dir) if ws.name == name), None)
    if match is None:
        raise WorkspaceError(f"workspace '{name}' not found")
    emit_cd_target(match.path)


def run_remove(name: str, force: bool, config: SpaceConfig | None = None) -> None:
    """Remove a workspace without asking; refuses unless `force` is set."""
    if not force:
        raise ValueError(
            "use --force to remove a workspace without confirmation, "
            "or run without --force to use the interactive TUI"
        )
    cfg = config if config is not None else SpaceConfig.load()
    remove_workspace(cfg.workspaces.dir, name, True)
    print(f"Removed workspace '{name}'")