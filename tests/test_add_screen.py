from pathlib import Path

import pytest

from space.tui.add_screen import AddStage, AddState
from space.workspace import DetachedHead, ExistingBranch, NewBranch

REPOS = [Path("/work/acme/acme-api"), Path("/work/widgets/widget-ui")]


def test_starts_picking_repos():
    state = AddState("alpha", REPOS, [])
    assert state.stage is AddStage.PICK_REPOS
    assert state.workspace_name == "alpha"
    assert state.picker.multi is True
    assert len(state.picker.filtered) == len(REPOS)
    assert state.picker.prompt == "Add repos  TAB=toggle  ENTER=confirm  ESC=cancel"


def test_initial_query_filters():
    state = AddState("alpha", REPOS, ["widget"])
    assert state.picker.query() == "widget"
    assert [i.name for i in state.picker.confirmed_items()] == ["widget-ui"]


@pytest.mark.parametrize(
    "idx, expected",
    [
        (0, NewBranch("alpha")),
        (1, ExistingBranch("alpha")),
        (2, DetachedHead()),
        (3, ExistingBranch("alpha")),
        (5, NewBranch("alpha")),
    ],
)
def test_branch_strategy(idx, expected):
    state = AddState("alpha", REPOS)
    state.branch_strategy_idx = idx
    assert state.branch_strategy() == expected


def test_picked_branch_used_for_pick_strategy():
    state = AddState("alpha", REPOS)
    state.branch_strategy_idx = 3
    state.picked_branch = "hotfix"
    assert state.branch_strategy() == ExistingBranch("hotfix")


def test_no_repos_available():
    state = AddState("alpha", [])
    assert state.picker.confirmed_items() == []
    assert state.picker.available_scopes == []