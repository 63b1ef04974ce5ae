"""Backslash escape handling shared by the LaTeX and bibliography scanners."""
from __future__ import annotations

COMMENT_MARKER = "%"


def is_escaped(preceding_text: str) -> bool:
    """Return True when the character after ``preceding_text`` is escaped.

    Escaping is decided by parity: ``\\%`` escapes the marker, ``\\\\%`` is an
    escaped backslash followed by a live marker.
    """

    count = len(preceding_text) - len(preceding_text.rstrip("\\"))
    return count % 2 == 1


def find_unescaped(text: str, marker: str = COMMENT_MARKER) -> int:
    """Return the index of the first unescaped ``marker`` in ``text`` or -1."""
    start = 0
    while True:
        index = text.find(marker, start)
        if index == -1:
            return -1
        if not is_escaped(text[:index]):
            return index
        start = index + 1
