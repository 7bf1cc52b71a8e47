"""Loading and saving the user's configuration file."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import platformdirs
import tomli_w

APP_NAME = "space"
_U32_MAX = 2**32 - 1
_U64_MAX = 2**64 - 1


def _home() -> Path:
    try:
        return Path.home()
    except RuntimeError:
        return Path(".")


def config_dir() -> Path:
    """Directory holding the configuration and the repo cache."""
    return Path(platformdirs.user_config_dir()) / APP_NAME


def config_path() -> Path:
    """Path of the TOML configuration file."""
    return config_dir() / "config.toml"


def cache_path() -> Path:
    """Path of the newline-delimited repo cache."""
    return config_dir() / "repos.cache"


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if not isinstance(value, dict):
        raise ValueError(f"missing table [{key}]")
    return value


def _uint(table: dict[str, Any], key: str, section: str, limit: int) -> int:
    value = table.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{section}.{key} must be an integer")
    if not 0 <= value <= limit:
        raise ValueError(f"{section}.{key} is out of range: {value}")
    return value


def _string(table: dict[str, Any], key: str, section: str) -> str:
    value = table.get(key)
    if not isinstance(value, str):
        raise ValueError(f"{section}.{key} must be a string")
    return value


@dataclass
class RepoConfig:
    """Where to look for repositories."""

    roots: list[Path]
    max_depth: int
    cache_age_secs: int


@dataclass
class WorkspaceConfig:
    """Where workspaces are kept."""

    dir: Path


@dataclass
class SpaceConfig:
    """The whole configuration."""

    repos: RepoConfig
    workspaces: WorkspaceConfig = field(default_factory=lambda: WorkspaceConfig(_home() / "workspaces"))

    @classmethod
    def default(cls) -> SpaceConfig:
        home = _home()
        return cls(
            repos=RepoConfig(roots=[home / "projects"], max_depth=3, cache_age_secs=3600),
            workspaces=WorkspaceConfig(dir=home / "workspaces"),
        )

    @classmethod
    def from_toml(cls, text: str) -> SpaceConfig:
        """Parse a configuration from TOML text; raises ValueError when invalid."""
        data = tomllib.loads(text)
        repos = _table(data, "repos")
        workspaces = _table(data, "workspaces")
        roots = repos.get("roots")
        if not isinstance(roots, list) or not all(isinstance(r, str) for r in roots):
            raise ValueError("repos.roots must be a list of strings")
        return cls(
            repos=RepoConfig(
                roots=[Path(r) for r in roots],
                max_depth=_uint(repos, "max_depth", "repos", _U32_MAX),
                cache_age_secs=_uint(repos, "cache_age_secs", "repos", _U64_MAX),
            ),
            workspaces=WorkspaceConfig(dir=Path(_string(workspaces, "dir", "workspaces"))),
        )

    def to_toml(self) -> str:
        return tomli_w.dumps(
            {
                "repos": {
                    "roots": [str(p) for p in self.repos.roots],
                    "max_depth": self.repos.max_depth,
                    "cache_age_secs": self.repos.cache_age_secs,
                },
                "workspaces": {"dir": str(self.workspaces.dir)},
            }
        )

    @classmethod
    def load(cls, path: Path | str | None = None) -> SpaceConfig:
        """Load from the configuration file, falling back to defaults."""
        target = Path(path) if path is not None else config_path()
        if target.exists():
            return cls.from_toml(target.read_text(encoding="utf-8"))
        return cls.default()

    def save(self, path: Path | str | None = None) -> None:
        target = Path(path) if path is not None else config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_toml(), encoding="utf-8")