"""State of the configuration editor screen."""

from __future__ import annotations

import copy
import re
from dataclasses import dataclass, field
from pathlib import Path

from space.config import SpaceConfig
from space.tui.textinput import TextInput

_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


def _home() -> str | None:
    try:
        return str(Path.home())
    except RuntimeError:
        return None


def tilde_collapse(path: str) -> str:
    """Replace a leading home directory with `~` for display."""
    home = _home()
    if home is not None and path.startswith(home):
        return "~" + path[len(home):]
    return path


def tilde_expand(path: str) -> str:
    """Expand a leading `~` to the home directory for saving."""
    if path.startswith("~/") or path == "~":
        home = _home()
        if home is not None:
            return home + path[1:]
    return path


def _parse_max_depth(value: str) -> int:
    if _UNSIGNED.fullmatch(value):
        number = int(value)
        if number <= _U32_MAX:
            return number
    raise ValueError(f"Max depth must be a number, got: '{value}'")


@dataclass
class ConfigField:
    label: str
    hint: str
    value: str


@dataclass
class ConfigState:
    """Editable fields of the configuration, one of them focused."""

    fields: list[ConfigField]
    focused: int = 0
    editing: bool = False
    input: TextInput = field(default_factory=TextInput)

    @classmethod
    def from_config(cls, config: SpaceConfig) -> ConfigState:
        roots = ", ".join(tilde_collapse(str(p)) for p in config.repos.roots)
        return cls(
            fields=[
                ConfigField("Workspaces dir", "", tilde_collapse(str(config.workspaces.dir))),
                ConfigField("Repo roots", "(comma-separated)", roots),
                ConfigField("Max depth", "(integer)", str(config.repos.max_depth)),
            ]
        )

    def start_editing(self) -> None:
        self.input.set_value(self.fields[self.focused].value)
        self.editing = True

    def commit_edit(self) -> None:
        self.fields[self.focused].value = self.input.value
        self.editing = False

    def cancel_edit(self) -> None:
        self.editing = False

    def save_to_config(self, base: SpaceConfig, path: Path | str | None = None) -> SpaceConfig:
        """Apply the fields to a copy of `base`, save it and return it.

        Raises ValueError when the max depth is not a number.
        """
        config = copy.deepcopy(base)
        if len(self.fields) > 0:
            config.workspaces.dir = Path(tilde_expand(self.fields[0].value.strip()))
        if len(self.fields) > 1:
            config.repos.roots = [Path(tilde_expand(part.strip())) for part in self.fields[1].value.split(",")]
        if len(self.fields) > 2:
            config.repos.max_depth = _parse_max_depth(self.fields[2].value)
        config.save(path)
        return config