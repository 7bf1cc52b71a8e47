"""State of the delete, go-to and search screens."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from space.tui.fuzzy_picker import FuzzyPicker, PickerItem
from space.workspace import Workspace


@dataclass
class DeleteState:
    """Confirmation of a workspace removal."""

    workspace_name: str
    repo_names: list[str] = field(default_factory=list)


class GoState:
    """Picker over workspaces to change directory into."""

    def __init__(self, workspaces: Iterable[Workspace]) -> None:
        items = [PickerItem(name=ws.name, parent="workspaces", full_path=ws.path) for ws in workspaces]
        self.picker = FuzzyPicker("Go to workspace  ENTER=go  ESC=cancel", items, False)

    def __repr__(self) -> str:
        return "GoState()"


class SearchState:
    """Picker over known repositories."""

    def __init__(self, repos: Iterable[Path | str]) -> None:
        items = [PickerItem.from_path(p) for p in repos]
        self.picker = FuzzyPicker("Search repos  ENTER=navigate  ESC=cancel", items, False)

    def __repr__(self) -> str:
        return "SearchState()"