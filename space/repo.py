"""Discovering git repositories on disk and caching the result."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from space import fuzzy


def _git_dirs(root: Path, max_depth: int) -> Iterator[Path]:
    """Yield parents of `.git` directories within `max_depth` levels of `root`."""
    if root.name == ".git" and root.is_dir() and not root.is_symlink():
        yield root.parent
        return

    def walk(directory: Path, depth: int) -> Iterator[Path]:
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            return
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if entry.name == ".git" and is_dir:
                yield directory
                continue
            if is_dir and depth < max_depth:
                yield from walk(Path(entry.path), depth + 1)

    if max_depth >= 1:
        yield from walk(root, 1)


def find_repos_in(roots: Iterable[Path | str], max_depth: int) -> list[Path]:
    """Find repositories under each root, leaving out repos nested inside others."""
    repos: list[Path] = []
    for root in map(Path, roots):
        if not root.exists():
            continue
        found = list(_git_dirs(root, max_depth))
        repos.extend(
            r for r in found if not any(other != r and r.is_relative_to(other) for other in found)
        )
    return repos


def fuzzy_match(query: str, repos: Iterable[Path]) -> list[Path]:
    """Return the repos matching `query`, best first."""
    repos = list(repos)
    if not query:
        return repos
    scored = [(s, p) for p in repos if (s := fuzzy.score(query, str(p))) is not None]
    scored.sort(key=lambda item: item[0], reverse=True)
    return [p for _, p in scored]


def load_cache(path: Path | str) -> list[Path] | None:
    """Read a newline-delimited cache file; None when it cannot be read."""
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    lines = (line.removesuffix("\r") for line in content.split("\n"))
    return [Path(line) for line in lines if line]


def save_cache(path: Path | str, repos: Iterable[Path | str]) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text("\n".join(str(p) for p in repos), encoding="utf-8")