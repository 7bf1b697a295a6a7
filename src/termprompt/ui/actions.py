"""Map decoded key events to semantic action names."""

from __future__ import annotations

from typing import Mapping

from termprompt.ui.keypress import KeyEvent

DEFAULT_KEYMAP: dict[str, str] = {
    "enter": "submit",
    "ctrl+c": "cancel",
    "escape": "cancel",
    "tab": "tab",
    "shift+tab": "shift_tab",
    "up": "up",
    "down": "down",
    "left": "left",
    "right": "right",
    "shift+up": "shift_up",
    "shift+down": "shift_down",
    "home": "first",
    "end": "last",
    "pageup": "page_up",
    "pagedown": "page_down",
    "backspace": "delete",
    "delete": "delete_forward",
    "space": "space",
    "ctrl+a": "first",
    "ctrl+e": "last",
    "ctrl+d": "delete_forward",
    "ctrl+g": "reset",
    "ctrl+l": "redraw",
    "ctrl+u": "undo",
}
"""Key combo (see ``KeyEvent.combo``) to action name."""


def resolve_action(key: KeyEvent, keymap: Mapping[str, str | None] | None = None) -> str | None:
    """Return the action bound to ``key`` or ``None`` when the key is unbound.

    ``keymap`` entries override the defaults; mapping a combo to ``None``
    unbinds it. Printable digits resolve to ``number`` unless explicitly bound.
    """
    bindings: dict[str, str | None] = {**DEFAULT_KEYMAP, **(keymap or {})}
    combo = key.combo
    if combo in bindings:
        return bindings[combo]
    if key.printable and key.name.isdigit():
        return "number"
    return None
