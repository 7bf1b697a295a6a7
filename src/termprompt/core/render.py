"""Pure helpers used to compose a prompt frame."""

from __future__ import annotations

from typing import Any, Callable

StyleFn = Callable[[str], str]


def is_value(value: Any) -> bool:
    """True for anything except ``None`` and the empty string."""
    return value is not None and not (isinstance(value, str) and value == "")


def first(*values: Any) -> Any:
    """Return the first meaningful value, or ``None``."""
    for value in values:
        if is_value(value):
            return value
    return None


def resolve_value(prompt: Any, value: Any, *args: Any) -> Any:
    """Call ``value`` with the prompt when it is a provider, else return it as is."""
    if callable(value):
        return value(prompt, *args)
    return value


def to_text(value: Any) -> str:
    return "" if value is None else str(value)


def pad(text: str, style: StyleFn) -> str:
    """Style ``text`` and surround it with single spaces; empty stays empty."""
    if not text:
        return ""
    return f" {style(text)} "


def blend(typed: str, initial: Any, style: StyleFn) -> str:
    """Show ``typed`` with the untyped remainder of ``initial`` as a styled preview."""
    typed = typed or ""
    initial_text = to_text(initial)
    if not initial_text:
        return typed
    if initial_text.startswith(typed):
        remainder = initial_text[len(typed):]
        return typed + (style(remainder) if remainder else "")
    return typed


def newline_left(text: str) -> str:
    return f"\n{text}" if text else ""


def header_line(header: Any) -> str:
    text = to_text(header)
    return f"{text}\n" if text else ""
