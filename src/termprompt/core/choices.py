"""Selectable entries held by a prompt."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping


@dataclass
class Choice:
    name: str
    message: str = ""
    value: Any = None
    hint: str | None = None
    disabled: bool = False

    def __post_init__(self) -> None:
        if not self.message:
            self.message = self.name
        if self.value is None:
            self.value = self.name


def to_choice(item: Any) -> Choice:
    """Build a :class:`Choice` from a string, mapping or existing choice."""
    if isinstance(item, Choice):
        return item
    if isinstance(item, Mapping):
        name = item.get("name") or item.get("message") or item.get("value")
        if name is None:
            raise ValueError(f"Choice mapping needs a name, message or value: {item!r}")
        return Choice(
            name=str(name),
            message=str(item.get("message") or name),
            value=item.get("value"),
            hint=item.get("hint"),
            disabled=bool(item.get("disabled", False)),
        )
    return Choice(name=str(item))


def normalize_choices(items: Iterable[Any] | None) -> list[Choice]:
    if not items:
        return []
    return [to_choice(item) for item in items]
