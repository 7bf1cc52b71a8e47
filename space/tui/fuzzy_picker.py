"""A fuzzy-filtered list with optional multi-selection and directory scopes."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from space import fuzzy
from space.tui.textinput import TextInput


@dataclass
class PickerItem:
    name: str
    parent: str
    full_path: Path

    @classmethod
    def from_path(cls, path: Path | str) -> PickerItem:
        """Item named after the last path component, grouped by its parent directory."""
        path = Path(path)
        return cls(name=path.name, parent=path.parent.name, full_path=path)


class FuzzyPicker:
    """Items filtered by a query; a `dir/` prefix in the query limits them to a scope."""

    def __init__(self, prompt: str, items: Iterable[PickerItem], multi: bool) -> None:
        self.prompt = prompt
        self.input = TextInput()
        self.all_items: list[PickerItem] = list(items)
        self.filtered: list[int] = list(range(len(self.all_items)))
        self.highlighted = 0
        self.toggled: set[int] = set()
        self.multi = multi
        self.scope: str | None = None
        self.available_scopes: list[str] = sorted({item.parent for item in self.all_items})
        self.scope_idx = 0
        self.match_indices: list[list[int]] = []
        self.refilter()

    def __repr__(self) -> str:
        return f"FuzzyPicker(prompt={self.prompt!r}, query={self.query()!r}, matched={len(self.filtered)})"

    def query(self) -> str:
        return self.input.value

    def set_query(self, text: str) -> None:
        """Replace the query and refilter."""
        self.input.set_value(text)
        self.refilter()

    def _fuzzy_query(self) -> str:
        return self.query().rpartition("/")[2]

    def query_scope(self) -> str | None:
        """The directory name given before the last `/` of the query, if any."""
        query = self.query()
        if "/" not in query:
            return None
        scope_part = query.rpartition("/")[0]
        if not scope_part:
            return None
        return scope_part.rpartition("/")[2]

    def _in_scope(self, item: PickerItem, scope: str | None) -> bool:
        if scope is None:
            return True
        needle = scope.lower()
        return needle in item.parent.lower() or f"/{needle}/" in str(item.full_path).lower()

    def refilter(self) -> None:
        """Recompute the filtered items from the query and scope, best match first."""
        scope = self.query_scope()
        if scope is None:
            scope = self.scope
        query = self._fuzzy_query()
        scoped = [i for i, item in enumerate(self.all_items) if self._in_scope(item, scope)]

        if not query:
            self.filtered = scoped
            self.match_indices = [[] for _ in scoped]
        else:
            scored: list[tuple[int, int, list[int]]] = []
            for i in scoped:
                item = self.all_items[i]
                display = f"{item.name} {item.parent}"
                found = fuzzy.score(query, display)
                if found is None:
                    continue
                scored.append((found, i, fuzzy.match_indices(query, display) or []))
            scored.sort(key=lambda entry: entry[0], reverse=True)
            self.filtered = [i for _, i, _ in scored]
            self.match_indices = [indices for _, _, indices in scored]

        if self.highlighted >= len(self.filtered):
            self.highlighted = max(len(self.filtered) - 1, 0)

    def cycle_scope(self) -> None:
        """Step through the parent directories as scopes, then back to no scope."""
        if not self.available_scopes:
            return
        self.scope_idx = (self.scope_idx + 1) % (len(self.available_scopes) + 1)
        self.scope = None if self.scope_idx == 0 else self.available_scopes[self.scope_idx - 1]
        self.refilter()

    def toggle_highlighted(self) -> None:
        if self.highlighted < len(self.filtered):
            self.toggled ^= {self.filtered[self.highlighted]}

    def confirmed_items(self) -> list[PickerItem]:
        """Toggled items sorted by name, or else the highlighted item."""
        if self.multi and self.toggled:
            return sorted((self.all_items[i] for i in self.toggled), key=lambda item: item.name)
        if self.highlighted < len(self.filtered):
            return [self.all_items[self.filtered[self.highlighted]]]
        return []

    def move_up(self) -> None:
        if self.highlighted > 0:
            self.highlighted -= 1

    def move_down(self) -> None:
        if self.highlighted + 1 < len(self.filtered):
            self.highlighted += 1