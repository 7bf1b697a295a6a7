"""Status glyph tables for prompt prefixes and separators."""

from __future__ import annotations

from dataclasses import dataclass, field

from termprompt.constants import (
    STATUS_ANSWERED,
    STATUS_CANCELLED,
    STATUS_COMPLETING,
    STATUS_PENDING,
)


@dataclass(frozen=True)
class SymbolTable:
    prefix: dict[str, str] = field(default_factory=dict)
    separator: dict[str, str] = field(default_factory=dict)
    default_separator: str = ""
    pointer: str = ""
    bullet: str = ""

    def prefix_for(self, status: str) -> str:
        return self.prefix.get(status, "")

    def separator_for(self, status: str) -> str:
        return self.separator.get(status) or self.default_separator


UNICODE_SYMBOLS = SymbolTable(
    prefix={
        STATUS_PENDING: "?",
        STATUS_COMPLETING: "…",
        STATUS_ANSWERED: "✔",
        STATUS_CANCELLED: "✖",
    },
    separator={
        STATUS_PENDING: "›",
        STATUS_COMPLETING: "…",
        STATUS_ANSWERED: "·",
        STATUS_CANCELLED: "·",
    },
    default_separator="›",
    pointer="❯",
    bullet="•",
)

ASCII_SYMBOLS = SymbolTable(
    prefix={
        STATUS_PENDING: "?",
        STATUS_COMPLETING: "...",
        STATUS_ANSWERED: "√",
        STATUS_CANCELLED: "×",
    },
    separator={
        STATUS_PENDING: "»",
        STATUS_COMPLETING: "...",
        STATUS_ANSWERED: ".",
        STATUS_CANCELLED: ".",
    },
    default_separator="»",
    pointer=">",
    bullet="*",
)


def get_symbols(ascii_only: bool = False) -> SymbolTable:
    return ASCII_SYMBOLS if ascii_only else UNICODE_SYMBOLS
