"""ANSI escape sequences used by the prompt engine."""

from __future__ import annotations

import re

from rich.cells import cell_len

ESC = "\x1b["
BELL = "\x07"

CURSOR_HIDE = f"{ESC}?25l"
CURSOR_SHOW = f"{ESC}?25h"
CURSOR_PREV_LINE = f"{ESC}1F"
ERASE_LINE = f"{ESC}2K"

_ANSI_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"  # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC
    r"|\x1b[@-Z\\-_]"  # two-byte escapes
    r"|[\x00-\x08\x0b-\x1f\x7f]"  # remaining control characters
)
_NEWLINE_RE = re.compile(r"\r?\n")


def cursor_to(column: int) -> str:
    """Move the cursor to the zero-based ``column`` of the current row."""
    return f"{ESC}{column + 1}G"


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def visible_width(text: str) -> int:
    """Number of terminal cells ``text`` occupies once escapes are removed."""
    return cell_len(strip_ansi(text))


def count_rows(text: str, columns: int) -> int:
    """Rows ``text`` occupies on a terminal ``columns`` cells wide, counting soft wraps."""
    rows = 0
    for line in _NEWLINE_RE.split(text):
        rows += 1 + max(visible_width(line) - 1, 0) // columns
    return rows


def erase_lines(count: int) -> str:
    """Erase ``count`` rows upwards from the cursor and return to column 0."""
    if count <= 0:
        return ""
    return (ERASE_LINE + CURSOR_PREV_LINE) * (count - 1) + ERASE_LINE + cursor_to(0)


def clear(text: str, columns: int = 0) -> str:
    """Sequence that erases exactly the rows previously used to print ``text``."""
    if not columns:
        return ERASE_LINE + cursor_to(0)
    return erase_lines(count_rows(text, columns))
