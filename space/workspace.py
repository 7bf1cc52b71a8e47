"""Workspaces: directories holding git worktrees of several repositories."""

from __future__ import annotations

import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from space import git
from space.git import RepoStatus


class WorkspaceError(Exception):
    """A workspace operation failed."""


@dataclass
class WorkspaceRepo:
    name: str
    path: Path
    branch: str
    status: RepoStatus
    ahead: int
    behind: int


@dataclass
class Workspace:
    name: str
    path: Path
    repos: list[WorkspaceRepo] = field(default_factory=list)


class BranchStrategy:
    """How the worktree's branch is chosen."""

    __slots__ = ()


@dataclass(frozen=True)
class NewBranch(BranchStrategy):
    """Create this branch off the repo's default branch (or reuse it if present)."""

    branch: str


@dataclass(frozen=True)
class ExistingBranch(BranchStrategy):
    """Check out an existing local or `origin/` remote-tracking branch."""

    branch: str


@dataclass(frozen=True)
class DetachedHead(BranchStrategy):
    """Detached HEAD at the default branch."""


def _subdirs(path: Path) -> list[os.DirEntry[str]]:
    with os.scandir(path) as it:
        return [e for e in it if e.is_dir(follow_symlinks=False)]


def list_workspaces(ws_dir: Path | str) -> list[Workspace]:
    """List the workspace directories in `ws_dir`, sorted by name."""
    ws_dir = Path(ws_dir)
    if not ws_dir.exists():
        return []
    workspaces = [Workspace(name=e.name, path=Path(e.path)) for e in _subdirs(ws_dir)]
    workspaces.sort(key=lambda w: w.name)
    return workspaces


def workspace_detail(ws_dir: Path | str, name: str) -> Workspace:
    """Return a workspace with branch, status and ahead/behind of each repo."""
    ws_path = Path(ws_dir) / name
    if not ws_path.exists():
        raise WorkspaceError(f"workspace '{name}' not found")
    repos = []
    for entry in _subdirs(ws_path):
        repo_path = Path(entry.path)
        if not (repo_path / ".git").exists():
            continue
        try:
            branch = git.current_branch(repo_path)
        except git.GitError:
            branch = "?"
        try:
            status = git.repo_status(repo_path)
        except git.GitError:
            status = RepoStatus()
        try:
            ahead, behind = git.ahead_behind(repo_path)
        except git.GitError:
            ahead, behind = 0, 0
        repos.append(WorkspaceRepo(entry.name, repo_path, branch, status, ahead, behind))
    repos.sort(key=lambda r: r.name)
    return Workspace(name=name, path=ws_path, repos=repos)


def _git_worktree_add(args: list[str], cwd: Path) -> None:
    """Run git; on failure raise with the most telling line of its stderr."""
    try:
        out = subprocess.run(
            ["git", *args], cwd=cwd, capture_output=True, text=True, encoding="utf-8", errors="replace"
        )
    except OSError as exc:
        raise WorkspaceError("failed to spawn git") from exc
    if out.returncode == 0:
        return
    lines = out.stderr.splitlines()
    message = next((line.removeprefix("fatal:").strip() for line in lines if line.startswith("fatal:")), None)
    if message is None:
        message = next(
            (
                stripped
                for stripped in (line.strip() for line in lines)
                if stripped
                and not stripped.startswith("Preparing worktree")
                and not stripped.startswith("HEAD is now")
            ),
            "git worktree add failed",
        )
    raise WorkspaceError(message)


def _ref_exists(repo_path: Path, ref: str) -> bool:
    try:
        proc = subprocess.run(["git", "rev-parse", "--verify", ref], cwd=repo_path, capture_output=True)
    except OSError:
        return False
    return proc.returncode == 0


def create_worktree(
    repo_path: Path | str, ws_dir: Path | str, ws_name: str, strategy: BranchStrategy
) -> Path:
    """Create a worktree of `repo_path` at `ws_dir/ws_name/<repo name>` and return its path."""
    repo_path = Path(repo_path)
    wt_path = Path(ws_dir) / ws_name / repo_path.name
    wt_path.parent.mkdir(parents=True, exist_ok=True)
    base_branch = git.detect_base_branch(repo_path)
    wt = str(wt_path)

    # Fetch failures are ignored so the tool works offline.
    try:
        subprocess.run(
            ["git", "fetch", "--quiet", "origin"],
            cwd=repo_path,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError:
        pass

    match strategy:
        case NewBranch(branch):
            remote_ref = f"origin/{branch}"
            if _ref_exists(repo_path, branch):
                _git_worktree_add(["worktree", "add", wt, branch], repo_path)
            elif _ref_exists(repo_path, remote_ref):
                _git_worktree_add(["worktree", "add", "--track", "-b", branch, wt, remote_ref], repo_path)
            else:
                _git_worktree_add(["worktree", "add", "-b", branch, wt, base_branch], repo_path)
        case ExistingBranch(branch):
            if branch.startswith("origin/"):
                local = branch.removeprefix("origin/")
                _git_worktree_add(["worktree", "add", "--track", "-b", local, wt, branch], repo_path)
            else:
                _git_worktree_add(["worktree", "add", wt, branch], repo_path)
        case DetachedHead():
            _git_worktree_add(["worktree", "add", "--detach", wt, base_branch], repo_path)
        case _:
            raise TypeError(f"unknown branch strategy: {strategy!r}")
    return wt_path


def remove_workspace(ws_dir: Path | str, name: str, force: bool) -> None:
    """Remove each worktree through git, then delete the workspace directory."""
    ws_path = Path(ws_dir) / name
    if not ws_path.exists():
        raise WorkspaceError(f"workspace '{name}' not found")
    for entry in _subdirs(ws_path):
        wt_path = Path(entry.path)
        if not (wt_path / ".git").exists():
            continue
        args = ["git", "worktree", "remove"]
        if force:
            args.append("--force")
        args.append(str(wt_path))
        main_repo = find_main_repo(wt_path)
        if main_repo is not None:
            try:
                subprocess.run(args, cwd=main_repo, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
            except OSError:
                pass
    if ws_path.exists():
        try:
            shutil.rmtree(ws_path)
        except OSError as exc:
            raise WorkspaceError(f"removing workspace directory {ws_path}: {exc}") from exc


def find_main_repo(wt_path: Path | str) -> Path | None:
    """Find the main repository root of a worktree from its `.git` file."""
    git_file = Path(wt_path) / ".git"
    if not git_file.is_file():
        return None
    try:
        content = git_file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None
    if not content.startswith("gitdir: "):
        return None
    gitdir = Path(content.removeprefix("gitdir: "))
    for candidate in (gitdir, *gitdir.parents):
        if candidate.name == ".git" and (candidate / "config").exists():
            return candidate.parent
    return None