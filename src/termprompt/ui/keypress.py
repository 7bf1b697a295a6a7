"""Decode raw terminal input into normalized key events.

Byte sequences are parsed with prompt_toolkit's VT100 parser; the resulting
``KeyPress`` objects are mapped onto :class:`KeyEvent`, which carries a plain
key name and modifier flags that the action resolver can match against.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from prompt_toolkit.input.vt100_parser import Vt100Parser
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

# prompt_toolkit names that do not follow the "c-x" / "s-x" pattern.
_SPECIAL_KEYS: dict[str, tuple[str, bool, bool]] = {
    Keys.ControlM.value: ("enter", False, False),
    Keys.ControlJ.value: ("enter", False, False),
    Keys.ControlI.value: ("tab", False, False),
    Keys.ControlH.value: ("backspace", False, False),
    Keys.BackTab.value: ("tab", False, True),
    Keys.ControlAt.value: ("space", True, False),
}


@dataclass(frozen=True)
class KeyEvent:
    """A single decoded key press."""

    name: str
    sequence: str = ""
    ctrl: bool = False
    shift: bool = False
    meta: bool = False
    printable: bool = False
    action: str | None = None

    @property
    def combo(self) -> str:
        """Modifier-qualified name used for keymap lookups, e.g. ``ctrl+c``."""
        parts = []
        if self.ctrl:
            parts.append("ctrl")
        if self.meta:
            parts.append("meta")
        if self.shift and not self.printable:
            parts.append("shift")
        parts.append(self.name)
        return "+".join(parts)

    def with_action(self, action: str | None) -> "KeyEvent":
        return replace(self, action=action)


def _from_key_name(value: str, data: str) -> KeyEvent:
    special = _SPECIAL_KEYS.get(value)
    if special is not None:
        name, ctrl, shift = special
        return KeyEvent(name=name, sequence=data, ctrl=ctrl, shift=shift)

    ctrl = shift = False
    name = value
    if name.startswith("c-s-"):
        ctrl, shift, name = True, True, name[4:]
    elif name.startswith("c-") and len(name) > 2:
        ctrl, name = True, name[2:]
    elif name.startswith("s-") and len(name) > 2:
        shift, name = True, name[2:]
    return KeyEvent(name=name, sequence=data, ctrl=ctrl, shift=shift)


def _from_character(char: str, data: str) -> KeyEvent:
    if char == " ":
        return KeyEvent(name="space", sequence=data or char, printable=True)
    if len(char) == 1 and char.isalpha():
        return KeyEvent(
            name=char.lower(),
            sequence=data or char,
            shift=char.isupper(),
            printable=True,
        )
    return KeyEvent(name=char, sequence=data or char, printable=char.isprintable())


def from_key_press(key_press: KeyPress) -> KeyEvent:
    """Convert a prompt_toolkit ``KeyPress`` into a :class:`KeyEvent`."""
    key = key_press.key
    data = key_press.data or ""
    if isinstance(key, Keys):
        return _from_key_name(key.value, data)
    return _from_character(key, data)


def parse_keys(data: str) -> list[KeyPress]:
    """Parse a complete input chunk into key presses.

    The parser is flushed at the end, so a lone ESC byte yields the escape key
    instead of waiting for a longer sequence.
    """
    presses: list[KeyPress] = []
    parser = Vt100Parser(presses.append)
    parser.feed(data)
    parser.flush()
    return presses


def decode_key(input: str = "", event: Any = None) -> KeyEvent:
    """Normalize ``input``/``event`` into a :class:`KeyEvent`.

    ``event`` may already be a ``KeyEvent`` or a prompt_toolkit ``KeyPress``;
    otherwise ``input`` is parsed and its first key is used.
    """
    if isinstance(event, KeyEvent):
        return event
    if isinstance(event, KeyPress):
        return from_key_press(event)
    if not input:
        return KeyEvent(name="")
    presses = parse_keys(input)
    if not presses:
        return KeyEvent(name="", sequence=input)
    return replace(from_key_press(presses[0]), sequence=input)
