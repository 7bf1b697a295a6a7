"""Named text styles rendered to ANSI with rich."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from rich.color import ColorSystem
from rich.errors import StyleSyntaxError
from rich.style import Style

from termprompt.core.exceptions import PromptConfigError

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_STYLES: dict[str, str] = {
    "bold": "bold",
    "dim": "dim",
    "strong": "bold",
    "em": "underline",
    "primary": "cyan",
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "danger": "red",
    "hint": "dim",
    "muted": "dim",
    "placeholder": "dim",
    "disabled": "dim italic",
    "heading": "bold underline",
    "submitted": "cyan",
    "cancelled": "red",
}


class Styles:
    """Resolves style names to rich styles and renders text with them.

    ``overrides`` maps a style name to a rich style definition such as
    ``"bold magenta"``; unknown names are added to the table.
    """

    def __init__(self, overrides: Mapping[str, str] | None = None, *, color: bool = True) -> None:
        merged = {**DEFAULT_STYLES, **(overrides or {})}
        try:
            self._styles = {name: Style.parse(definition) for name, definition in merged.items()}
        except StyleSyntaxError as exc:
            raise PromptConfigError("Invalid style definition", str(exc)) from exc
        self._color_system = ColorSystem.STANDARD if color else None

    @property
    def color(self) -> bool:
        return self._color_system is not None

    def names(self) -> list[str]:
        return sorted(self._styles)

    def render(self, name: str, text: str) -> str:
        """Wrap ``text`` in the escapes for style ``name``; plain when colour is off."""
        style = self._styles.get(name)
        if style is None:
            raise PromptConfigError(f"Unknown style '{name}'")
        return style.render(text, color_system=self._color_system)

    def __getitem__(self, name: str) -> "Callable[[str], str]":
        def _apply(text: str) -> str:
            return self.render(name, text)

        return _apply
