"""State of the add-repos-to-workspace screen."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, auto
from pathlib import Path

from space.tui.fuzzy_picker import FuzzyPicker, PickerItem
from space.workspace import BranchStrategy, DetachedHead, ExistingBranch, NewBranch


class AddStage(Enum):
    PICK_REPOS = auto()
    PICK_BRANCH_STRATEGY = auto()
    PICK_BRANCH = auto()
    CREATING = auto()


class AddState:
    """Repos to add to an existing workspace, the branch strategy and progress."""

    def __init__(
        self,
        workspace_name: str,
        available_repos: Iterable[Path | str],
        initial_queries: Iterable[str] = (),
    ) -> None:
        items = [PickerItem.from_path(p) for p in available_repos]
        self.picker = FuzzyPicker("Add repos  TAB=toggle  ENTER=confirm  ESC=cancel", items, True)
        queries = list(initial_queries)
        if queries:
            self.picker.set_query(" ".join(queries))
        self.stage = AddStage.PICK_REPOS
        self.workspace_name = workspace_name
        self.selected_repos: list[Path] = []
        self.branch_strategy_idx = 0
        self.branch_picker: FuzzyPicker | None = None
        self.picked_branch: str | None = None
        self.progress: list[str] = []
        self.error: str | None = None

    def __repr__(self) -> str:
        return f"AddState(stage={self.stage}, workspace_name={self.workspace_name!r})"

    def branch_strategy(self) -> BranchStrategy:
        name = self.workspace_name
        match self.branch_strategy_idx:
            case 1:
                return ExistingBranch(name)
            case 2:
                return DetachedHead()
            case 3:
                return ExistingBranch(self.picked_branch if self.picked_branch is not None else name)
            case _:
                return NewBranch(name)