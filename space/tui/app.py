"""Application state of the terminal interface and the messages that change it."""

from __future__ import annotations

import contextlib
import time
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import TypeAlias

from space import repo
from space.config import SpaceConfig, cache_path
from space.git import GitError, list_branches
from space.tui.add_screen import AddState
from space.tui.config_screen import ConfigState
from space.tui.create_screen import CreateState
from space.tui.fuzzy_picker import FuzzyPicker, PickerItem
from space.tui.simple_screens import DeleteState, GoState, SearchState
from space.workspace import Workspace, WorkspaceError, list_workspaces, workspace_detail

STATUS_MESSAGE_TTL = 5.0


class Pane(Enum):
    LEFT = auto()
    RIGHT = auto()


class Message(Enum):
    QUIT = auto()
    FOCUS_NEXT = auto()
    SELECT_WORKSPACE_UP = auto()
    SELECT_WORKSPACE_DOWN = auto()
    SELECT_REPO_UP = auto()
    SELECT_REPO_DOWN = auto()
    GO_TO_WORKSPACE = auto()
    START_GO = auto()
    START_CREATE = auto()
    START_ADD = auto()
    START_DELETE = auto()
    START_SEARCH = auto()
    START_CONFIG = auto()
    REFRESH_REPOS = auto()


@dataclass(frozen=True)
class Dashboard:
    """The two-pane overview, shown when no other screen is open."""


Screen: TypeAlias = Dashboard | CreateState | GoState | AddState | DeleteState | SearchState | ConfigState


class App:
    """Everything the interface shows and the screen currently active."""

    def __init__(
        self, config: SpaceConfig, workspaces: Iterable[Workspace], repos_cache: Iterable[Path]
    ) -> None:
        self.config = config
        self.workspaces: list[Workspace] = list(workspaces)
        self.repos_cache: list[Path] = list(repos_cache)
        self.selected_ws = 0
        self.selected_repo = 0
        self.focus = Pane.LEFT
        self.screen: Screen = Dashboard()
        self.should_quit = False
        self.space_cd_target: Path | None = None
        self.status_message: str | None = None
        self.status_message_set_at: float | None = None
        self.cache_file: Path = cache_path()
        self.config_file: Path | None = None

    @classmethod
    def load(cls) -> App:
        """Build the app from the user's configuration, workspaces and repo cache."""
        config = SpaceConfig.load()
        workspaces = list_workspaces(config.workspaces.dir)
        app = cls(config, workspaces, repo.load_cache(cache_path()) or [])
        app.load_selected_workspace_detail()
        return app

    def selected_workspace(self) -> Workspace | None:
        if 0 <= self.selected_ws < len(self.workspaces):
            return self.workspaces[self.selected_ws]
        return None

    def available_repos(self, workspace: Workspace) -> list[Path]:
        """Cached repos not yet part of `workspace`."""
        existing = {r.name for r in workspace.repos}
        return [p for p in self.repos_cache if p.name not in existing]

    def load_selected_workspace_detail(self) -> None:
        ws = self.selected_workspace()
        if ws is None:
            return
        try:
            self.workspaces[self.selected_ws] = workspace_detail(self.config.workspaces.dir, ws.name)
        except (WorkspaceError, OSError):
            self.set_status(f"Could not load '{ws.name}' detail")

    def set_status(self, message: str, now: float | None = None) -> None:
        self.status_message = message
        self.status_message_set_at = time.monotonic() if now is None else now

    def clear_status(self) -> None:
        self.status_message = None
        self.status_message_set_at = None

    def expire_status_message(self, now: float | None = None) -> None:
        """Clear the status message once it has been shown long enough."""
        if self.status_message_set_at is None:
            return
        current = time.monotonic() if now is None else now
        if current - self.status_message_set_at >= STATUS_MESSAGE_TTL:
            self.clear_status()


def update(app: App, message: Message) -> Message | None:
    """Apply a dashboard message to the app; returns a follow-up message, if any."""
    match message:
        case Message.QUIT:
            app.should_quit = True
        case Message.FOCUS_NEXT:
            app.focus = Pane.RIGHT if app.focus is Pane.LEFT else Pane.LEFT
        case Message.SELECT_WORKSPACE_UP:
            if app.selected_ws > 0:
                app.selected_ws -= 1
                app.selected_repo = 0
                app.load_selected_workspace_detail()
        case Message.SELECT_WORKSPACE_DOWN:
            if app.selected_ws + 1 < len(app.workspaces):
                app.selected_ws += 1
                app.selected_repo = 0
                app.load_selected_workspace_detail()
        case Message.SELECT_REPO_UP:
            if app.selected_repo > 0:
                app.selected_repo -= 1
        case Message.SELECT_REPO_DOWN:
            ws = app.selected_workspace()
            last = max(len(ws.repos) - 1, 0) if ws is not None else 0
            if app.selected_repo < last:
                app.selected_repo += 1
        case Message.REFRESH_REPOS:
            found = repo.find_repos_in(app.config.repos.roots, app.config.repos.max_depth)
            with contextlib.suppress(OSError):
                repo.save_cache(app.cache_file, found)
            app.repos_cache = found
            app.set_status(f"Refreshed: {len(found)} repos found")
        case Message.GO_TO_WORKSPACE:
            ws = app.selected_workspace()
            if ws is not None:
                app.space_cd_target = ws.path
                app.should_quit = True
        case Message.START_CREATE:
            app.screen = CreateState(app.repos_cache, [])
        case Message.START_GO:
            app.screen = GoState(app.workspaces)
        case Message.START_ADD:
            ws = app.selected_workspace()
            if ws is not None:
                app.screen = AddState(ws.name, app.available_repos(ws), [])
        case Message.START_DELETE:
            ws = app.selected_workspace()
            if ws is not None:
                app.screen = DeleteState(ws.name, [r.name for r in ws.repos])
        case Message.START_SEARCH:
            app.screen = SearchState(app.repos_cache)
        case Message.START_CONFIG:
            app.screen = ConfigState.from_config(app.config)
    return None


def build_branch_picker(repo_path: Path | str, repo_name: str) -> FuzzyPicker | None:
    """A picker over the local and remote branches of a repo; None when there are none."""
    try:
        branches = list_branches(repo_path)
    except GitError:
        return None
    if not branches:
        return None
    items = [
        PickerItem(
            name=b.name,
            parent="current" if b.is_current else ("remote" if b.is_remote else "local"),
            full_path=Path(),
        )
        for b in branches
    ]
    return FuzzyPicker(f"Branch  ({repo_name})  ENTER=select  ESC=back", items, False)