"""Fuzzy matching of a query against text.

The query is split on whitespace into atoms; every atom must match as a
subsequence. Matching is case-insensitive unless an atom has an upper-case
letter, and accents are ignored unless an atom contains non-ASCII text.
"""

from __future__ import annotations

import unicodedata

SCORE_MATCH = 16
GAP_START = 3
GAP_EXTENSION = 1
BONUS_BOUNDARY = 8
BONUS_CAMEL = 7
BONUS_CONSECUTIVE = 4
BONUS_FIRST_CHAR_MULTIPLIER = 2

_DELIMITERS = frozenset("/\\-_.,:;|")


def _strip_accent(char: str) -> str:
    decomposed = unicodedata.normalize("NFD", char)
    return decomposed[0] if decomposed else char


def _bonus(text: str, j: int) -> int:
    if j == 0:
        return BONUS_BOUNDARY
    prev, cur = text[j - 1], text[j]
    if prev.isspace() or prev in _DELIMITERS:
        return BONUS_BOUNDARY
    if prev.islower() and cur.isupper():
        return BONUS_CAMEL
    if not prev.isalnum() and cur.isalnum():
        return BONUS_BOUNDARY
    return 0


def _align(atom: str, text: str) -> tuple[int, list[int]] | None:
    case_sensitive = any(c.isupper() for c in atom)
    normalize = all(ord(c) < 128 for c in atom)

    def prepare(char: str) -> str:
        if normalize:
            char = _strip_accent(char)
        return char if case_sensitive else char.lower()

    needle = [prepare(c) for c in atom]
    hay = [prepare(c) for c in text]
    m = len(hay)
    if len(needle) > m:
        return None
    bonuses = [_bonus(text, j) for j in range(m)]

    rows: list[list[int]] = []
    prev: list[int | None] = []
    for i, ch in enumerate(needle):
        cur: list[int | None] = [None] * m
        back = [-1] * m
        run_best: int | None = None
        run_k = -1
        for j in range(m):
            if i > 0 and j >= 2 and prev[j - 2] is not None:
                value = prev[j - 2] + GAP_EXTENSION * (j - 2)
                if run_best is None or value > run_best:
                    run_best, run_k = value, j - 2
            if hay[j] != ch:
                continue
            bonus = bonuses[j]
            if i == 0:
                cur[j] = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
                continue
            best: int | None = None
            best_k = -1
            if j >= 1 and prev[j - 1] is not None:
                best = prev[j - 1] + SCORE_MATCH + max(bonus, BONUS_CONSECUTIVE)
                best_k = j - 1
            if run_best is not None:
                candidate = run_best - GAP_EXTENSION * (j - 2) - GAP_START + SCORE_MATCH + bonus
                if best is None or candidate > best:
                    best, best_k = candidate, run_k
            if best is not None:
                cur[j] = best
                back[j] = best_k
        if all(s is None for s in cur):
            return None
        rows.append(back)
        prev = cur

    end = max((j for j in range(m) if prev[j] is not None), key=lambda j: (prev[j], -j))
    total = prev[end]
    indices = []
    j = end
    for back in reversed(rows):
        indices.append(j)
        j = back[j]
    indices.reverse()
    return total, indices


def _match(query: str, text: str) -> tuple[int, list[int]] | None:
    total = 0
    positions: set[int] = set()
    for atom in query.split():
        found = _align(atom, text)
        if found is None:
            return None
        total += found[0]
        positions.update(found[1])
    return total, sorted(positions)


def score(query: str, text: str) -> int | None:
    """Score `text` against `query`; None when it does not match. Higher is better."""
    found = _match(query, text)
    return None if found is None else found[0]


def match_indices(query: str, text: str) -> list[int] | None:
    """Sorted character positions in `text` matched by `query`, or None."""
    found = _match(query, text)
    return None if found is None else found[1]