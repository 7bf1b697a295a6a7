"""Mutable per-run prompt state."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class PromptState:
    """State owned by a single prompt run.

    ``terminal`` holds exactly the text written since the last clear, which is
    what the next ``clear()`` has to erase.
    """

    name: str = ""
    message: str = ""
    initial: Any = None
    is_listening: bool = False
    has_rendered: bool = False
    terminal: str = ""
    submitted: bool = False
    answered: bool = False
    cancelled: bool = False
    completing: bool = False
    closed: bool = False
    value: Any = None
    typed: str = ""
    error: Any = None
    hint: Any = None
    limit: int | None = None
    index: int = 0
    rows: int | None = None
    cols: int | None = None

    @property
    def is_settled(self) -> bool:
        return self.answered or self.cancelled

    def snapshot(self) -> dict[str, Any]:
        return asdict(self)
