"""Queries against git repositories."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path

_STAGED = frozenset("AMDR")
_MODIFIED = frozenset("MDR")


class GitError(Exception):
    """A git query failed."""


@dataclass
class RepoStatus:
    modified: int = 0
    staged: int = 0
    untracked: int = 0


@dataclass
class BranchInfo:
    name: str
    is_remote: bool
    is_current: bool


def _run(repo_path: Path | str, *args: str) -> subprocess.CompletedProcess[str]:
    path = Path(repo_path)
    if not path.is_dir():
        raise GitError(f"not a git repository: {path}")
    # Stop git from discovering an enclosing repository above repo_path.
    env = dict(
        os.environ,
        GIT_CEILING_DIRECTORIES=str(path.resolve().parent),
        GIT_OPTIONAL_LOCKS="0",
    )
    try:
        return subprocess.run(
            ["git", *args],
            cwd=path,
            env=env,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        raise GitError(f"failed to run git: {exc}") from exc


def _git(repo_path: Path | str, *args: str) -> str:
    proc = _run(repo_path, *args)
    if proc.returncode != 0:
        raise GitError(proc.stderr.strip() or f"git {args[0]} failed in {repo_path}")
    return proc.stdout


def _head_shorthand(repo_path: Path | str) -> str | None:
    try:
        name = _git(repo_path, "rev-parse", "--abbrev-ref", "HEAD").strip()
    except GitError:
        return None
    return name or None


def detect_base_branch(repo_path: Path | str) -> str:
    """Return the branch HEAD points at, or "main" when that cannot be told."""
    return _head_shorthand(repo_path) or "main"


def repo_status(repo_path: Path | str) -> RepoStatus:
    """Count modified, staged and untracked files."""
    out = _git(repo_path, "status", "--porcelain=v1", "-z", "--untracked-files=all")
    result = RepoStatus()
    tokens = iter(out.split("\0"))
    for token in tokens:
        if len(token) < 2:
            continue
        index, worktree = token[0], token[1]
        if index in "RC":
            next(tokens, None)  # the rename source path
        if index == "?" and worktree == "?":
            result.untracked += 1
            continue
        if index in _STAGED:
            result.staged += 1
        if worktree in _MODIFIED:
            result.modified += 1
    return result


def list_branches(repo_path: Path | str) -> list[BranchInfo]:
    """List local and remote branches, locals first; remote HEAD refs are left out."""
    out = _git(repo_path, "for-each-ref", "--format=%(refname)", "refs/heads", "refs/remotes")
    head_name = _head_shorthand(repo_path)
    branches = []
    for ref in out.splitlines():
        if ref.startswith("refs/heads/"):
            name, is_remote = ref.removeprefix("refs/heads/"), False
        elif ref.startswith("refs/remotes/"):
            name, is_remote = ref.removeprefix("refs/remotes/"), True
        else:
            continue
        if name.endswith("/HEAD"):
            continue
        branches.append(BranchInfo(name=name, is_remote=is_remote, is_current=name == head_name))
    branches.sort(key=lambda b: (b.is_remote, b.name))
    return branches


def current_branch(repo_path: Path | str) -> str:
    """Return the checked-out branch, or "(<short hash>)" for a detached HEAD."""
    oid = _git(repo_path, "rev-parse", "--verify", "HEAD").strip()
    proc = _run(repo_path, "symbolic-ref", "-q", "--short", "HEAD")
    if proc.returncode == 0 and proc.stdout.strip():
        return proc.stdout.strip()
    return f"({oid[:8]})"


def ahead_behind(repo_path: Path | str) -> tuple[int, int]:
    """Return (ahead, behind) relative to origin's branch of the same name."""
    local = _git(repo_path, "rev-parse", "--verify", "HEAD").strip()
    branch = _head_shorthand(repo_path)
    if not branch:
        return (0, 0)
    upstream = _run(repo_path, "rev-parse", "--verify", "--quiet", f"refs/remotes/origin/{branch}")
    if upstream.returncode != 0 or not upstream.stdout.strip():
        return (0, 0)
    counts = _git(
        repo_path, "rev-list", "--left-right", "--count", f"{local}...{upstream.stdout.strip()}"
    ).split()
    if len(counts) != 2:
        raise GitError(f"unexpected rev-list output: {' '.join(counts)}")
    return int(counts[0]), int(counts[1])