"""State of the create-workspace screen."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum, auto
from pathlib import Path

from space.tui.fuzzy_picker import FuzzyPicker, PickerItem
from space.tui.textinput import TextInput
from space.workspace import BranchStrategy, DetachedHead, ExistingBranch, NewBranch


class CreateStage(Enum):
    PICK_REPOS = auto()
    NAME_WORKSPACE = auto()
    PICK_BRANCH_STRATEGY = auto()
    PICK_BRANCH = auto()
    CREATING = auto()


class CreateState:
    """Repos picked, the workspace name, the branch strategy and progress of creation."""

    def __init__(self, all_repos: Iterable[Path | str], initial_queries: Iterable[str] = ()) -> None:
        items = [PickerItem.from_path(p) for p in all_repos]
        self.picker = FuzzyPicker("Select repos  TAB=toggle  ENTER=confirm  ESC=cancel", items, True)
        queries = list(initial_queries)
        if queries:
            self.picker.set_query(" ".join(queries))
        self.stage = CreateStage.PICK_REPOS
        self.ws_name = TextInput()
        self.selected_repos: list[Path] = []
        # 0 = new branch, 1 = existing, 2 = detached, 3 = pick a branch
        self.branch_strategy_idx = 0
        self.branch_picker: FuzzyPicker | None = None
        self.picked_branch: str | None = None
        self.progress: list[str] = []
        self.error: str | None = None

    def __repr__(self) -> str:
        return (
            f"CreateState(stage={self.stage}, ws_name={self.ws_name.value!r}, "
            f"selected_repos={self.selected_repos!r}, branch_strategy_idx={self.branch_strategy_idx}, "
            f"picked_branch={self.picked_branch!r}, progress={self.progress!r}, error={self.error!r})"
        )

    def branch_strategy(self) -> BranchStrategy:
        name = self.ws_name.value
        match self.branch_strategy_idx:
            case 1:
                return ExistingBranch(name)
            case 2:
                return DetachedHead()
            case 3:
                return ExistingBranch(self.picked_branch if self.picked_branch is not None else name)
            case _:
                return NewBranch(name)