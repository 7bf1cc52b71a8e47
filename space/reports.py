"""Plain-text listings of workspaces for the command line."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from space.config import SpaceConfig
from space.workspace import Workspace, WorkspaceError, list_workspaces, workspace_detail

_BOLD = "1"
_GREEN = "32"
_YELLOW = "33"
_CYAN = "36"


def _color_enabled() -> bool:
    if os.environ.get("CLICOLOR_FORCE", "0") != "0":
        return True
    if "NO_COLOR" in os.environ or os.environ.get("CLICOLOR") == "0":
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled():
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _count_worktrees(path: Path) -> int:
    try:
        return sum(1 for child in path.iterdir() if child.is_dir() and (child / ".git").exists())
    except OSError:
        return 0


def run_list(verbose: bool = False, config: SpaceConfig | None = None) -> None:
    """Print the workspaces, with per-repo detail when `verbose`."""
    cfg = config if config is not None else SpaceConfig.load()
    ws_dir = cfg.workspaces.dir
    workspaces = list_workspaces(ws_dir)
    if not workspaces:
        print("No workspaces. Use `space create` to make one.")
        return

    for ws in workspaces:
        if verbose:
            try:
                detail = workspace_detail(ws_dir, ws.name)
            except (WorkspaceError, OSError):
                detail = Workspace(name=ws.name, path=ws.path)
            print(f"{_paint(ws.name, _CYAN, _BOLD)}  ({len(detail.repos)} repos)")
            for repo in detail.repos:
                if repo.status.modified + repo.status.staged > 0:
                    label = _paint("modified", _YELLOW)
                else:
                    label = _paint("clean", _GREEN)
                print(f"  {repo.name:<30} {_paint(repo.branch, _GREEN)}  [{label}]")
        else:
            print(f"{_paint(ws.name, _CYAN, _BOLD)}  ({_count_worktrees(ws.path)} repos)")


def run_status(name: str, config: SpaceConfig | None = None) -> None:
    """Print branch, status and tracking detail for every repo of a workspace."""
    cfg = config if config is not None else SpaceConfig.load()
    ws = workspace_detail(cfg.workspaces.dir, name)

    print(f"{_paint('Workspace:', _BOLD)} {_paint(ws.name, _CYAN, _BOLD)}")
    print(f"{_paint('Path:     ', _BOLD)} {ws.path}")

    if not ws.repos:
        print("\n  (no repos)")
        return

    print()
    for repo in ws.repos:
        status = repo.status
        print(f"  {_paint(repo.name, _CYAN, _BOLD)}")
        print(f"    Branch: {_paint(repo.branch, _GREEN)}")
        if status.modified + status.staged + status.untracked == 0:
            print(f"    Status: {_paint('clean', _GREEN)}")
        else:
            summary = f"{status.modified} modified, {status.staged} staged, {status.untracked} untracked"
            print(f"    Status: {_paint(summary, _YELLOW)}")
        if repo.ahead != 0 or repo.behind != 0:
            print(
                f"    Tracking: ahead {_paint(str(repo.ahead), _YELLOW)}, "
                f"behind {_paint(str(repo.behind), _YELLOW)}"
            )
        print()