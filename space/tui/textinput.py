"""Single-line text editing driven by key presses."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from typing import ClassVar

_ACTIONS = frozenset(
    {
        "insert_char",
        "delete_prev_char",
        "delete_next_char",
        "go_to_prev_char",
        "go_to_next_char",
        "go_to_prev_word",
        "go_to_next_word",
        "delete_line",
        "delete_prev_word",
        "delete_next_word",
        "delete_till_end",
        "go_to_start",
        "go_to_end",
    }
)


@dataclass(frozen=True)
class Key:
    """A key press: a named key ("enter", "left", "backspace", ...) or a single character."""

    code: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False


@dataclass(frozen=True)
class InputRequest:
    """An editing action for a TextInput; `char` is used by "insert_char" only."""

    action: str
    char: str = ""

    INSERT_CHAR: ClassVar[str] = "insert_char"
    DELETE_PREV_CHAR: ClassVar[InputRequest]
    DELETE_NEXT_CHAR: ClassVar[InputRequest]
    GO_TO_PREV_CHAR: ClassVar[InputRequest]
    GO_TO_NEXT_CHAR: ClassVar[InputRequest]
    GO_TO_PREV_WORD: ClassVar[InputRequest]
    GO_TO_NEXT_WORD: ClassVar[InputRequest]
    DELETE_LINE: ClassVar[InputRequest]
    DELETE_PREV_WORD: ClassVar[InputRequest]
    DELETE_NEXT_WORD: ClassVar[InputRequest]
    DELETE_TILL_END: ClassVar[InputRequest]
    GO_TO_START: ClassVar[InputRequest]
    GO_TO_END: ClassVar[InputRequest]

    def __post_init__(self) -> None:
        if self.action not in _ACTIONS:
            raise ValueError(f"unknown input action: {self.action!r}")
        if self.action == "insert_char" and len(self.char) != 1:
            raise ValueError("insert_char needs exactly one character")


InputRequest.DELETE_PREV_CHAR = InputRequest("delete_prev_char")
InputRequest.DELETE_NEXT_CHAR = InputRequest("delete_next_char")
InputRequest.GO_TO_PREV_CHAR = InputRequest("go_to_prev_char")
InputRequest.GO_TO_NEXT_CHAR = InputRequest("go_to_next_char")
InputRequest.GO_TO_PREV_WORD = InputRequest("go_to_prev_word")
InputRequest.GO_TO_NEXT_WORD = InputRequest("go_to_next_word")
InputRequest.DELETE_LINE = InputRequest("delete_line")
InputRequest.DELETE_PREV_WORD = InputRequest("delete_prev_word")
InputRequest.DELETE_NEXT_WORD = InputRequest("delete_next_word")
InputRequest.DELETE_TILL_END = InputRequest("delete_till_end")
InputRequest.GO_TO_START = InputRequest("go_to_start")
InputRequest.GO_TO_END = InputRequest("go_to_end")

_R = InputRequest
_KEY_TABLE: dict[tuple[str, str], InputRequest] = {
    ("backspace", "none"): _R.DELETE_PREV_CHAR,
    ("h", "ctrl"): _R.DELETE_PREV_CHAR,
    ("delete", "none"): _R.DELETE_NEXT_CHAR,
    ("left", "none"): _R.GO_TO_PREV_CHAR,
    ("b", "ctrl"): _R.GO_TO_PREV_CHAR,
    ("left", "ctrl"): _R.GO_TO_PREV_WORD,
    ("b", "alt"): _R.GO_TO_PREV_WORD,
    ("right", "none"): _R.GO_TO_NEXT_CHAR,
    ("f", "ctrl"): _R.GO_TO_NEXT_CHAR,
    ("right", "ctrl"): _R.GO_TO_NEXT_WORD,
    ("f", "alt"): _R.GO_TO_NEXT_WORD,
    ("u", "ctrl"): _R.DELETE_LINE,
    ("w", "ctrl"): _R.DELETE_PREV_WORD,
    ("delete", "ctrl"): _R.DELETE_NEXT_WORD,
    ("k", "ctrl"): _R.DELETE_TILL_END,
    ("a", "ctrl"): _R.GO_TO_START,
    ("home", "none"): _R.GO_TO_START,
    ("e", "ctrl"): _R.GO_TO_END,
    ("end", "none"): _R.GO_TO_END,
}


def _modifier_name(key: Key) -> str | None:
    mods = (key.ctrl, key.alt, key.shift)
    return {
        (False, False, False): "none",
        (True, False, False): "ctrl",
        (False, True, False): "alt",
        (False, False, True): "shift",
    }.get(mods)


def key_to_input_request(key: Key) -> InputRequest | None:
    """Map a key press to an editing action, or None when it edits nothing."""
    mods = _modifier_name(key)
    if mods is None:
        return None
    request = _KEY_TABLE.get((key.code, mods))
    if request is not None:
        return request
    if len(key.code) == 1 and mods in ("none", "shift"):
        return InputRequest("insert_char", key.code)
    return None


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _prev_word_start(value: str, cursor: int) -> int:
    i = cursor
    while i > 0 and not value[i - 1].isalnum():
        i -= 1
    while i > 0 and value[i - 1].isalnum():
        i -= 1
    return i


def _next_word_start(value: str, cursor: int) -> int:
    i, n = cursor, len(value)
    while i < n and value[i].isalnum():
        i += 1
    while i < n and not value[i].isalnum():
        i += 1
    return i


def _next_word_end(value: str, cursor: int) -> int:
    i, n = cursor, len(value)
    while i < n and not value[i].isalnum():
        i += 1
    while i < n and value[i].isalnum():
        i += 1
    return i


@dataclass
class TextInput:
    """An editable line of text with a cursor counted in characters."""

    value: str = ""
    cursor: int = field(init=False)

    def __post_init__(self) -> None:
        self.cursor = len(self.value)

    def set_value(self, value: str) -> None:
        """Replace the text and put the cursor at its end."""
        self.value = value
        self.cursor = len(value)

    def handle(self, request: InputRequest) -> bool:
        """Apply an editing action; return whether the text or cursor changed."""
        value = self.value
        cursor = max(0, min(self.cursor, len(value)))
        before = (self.value, self.cursor)
        match request.action:
            case "insert_char":
                value = value[:cursor] + request.char + value[cursor:]
                cursor += 1
            case "delete_prev_char":
                if cursor > 0:
                    value = value[: cursor - 1] + value[cursor:]
                    cursor -= 1
            case "delete_next_char":
                if cursor < len(value):
                    value = value[:cursor] + value[cursor + 1 :]
            case "go_to_prev_char":
                cursor = max(cursor - 1, 0)
            case "go_to_next_char":
                cursor = min(cursor + 1, len(value))
            case "go_to_prev_word":
                cursor = _prev_word_start(value, cursor)
            case "go_to_next_word":
                cursor = _next_word_start(value, cursor)
            case "delete_line":
                value, cursor = "", 0
            case "delete_prev_word":
                start = _prev_word_start(value, cursor)
                value = value[:start] + value[cursor:]
                cursor = start
            case "delete_next_word":
                value = value[:cursor] + value[_next_word_end(value, cursor) :]
            case "delete_till_end":
                value = value[:cursor]
            case "go_to_start":
                cursor = 0
            case "go_to_end":
                cursor = len(value)
        self.value, self.cursor = value, cursor
        return (value, cursor) != before

    def visual_cursor(self) -> int:
        """Display columns taken by the text before the cursor."""
        return sum(_char_width(ch) for ch in self.value[: self.cursor])