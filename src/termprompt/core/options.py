"""Per-prompt configuration."""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

TextOption = str | Callable[..., Any] | None
"""A literal string or a provider called with the prompt at render time."""


class PromptOptions(BaseModel):
    """Immutable options for one prompt.

    Any extra keyword whose value is callable is treated as a handler override
    for the action of the same name, so ``PromptOptions(submit=fn)`` replaces
    the built-in submit handler. Overrides are called as ``fn(prompt, input, key)``.
    """

    name: str = ""
    message: TextOption = None
    initial: Any = None
    header: TextOption = None
    footer: TextOption = None
    hint: TextOption = None
    prefix: TextOption = None
    separator: TextOption = None
    styles: dict[str, str] = Field(default_factory=dict)
    show: bool | None = None
    rows: int | None = Field(default=None, ge=1)
    cols: int | None = Field(default=None, ge=1)
    limit: int | None = Field(default=None, ge=0)
    choices: list[Any] | None = None
    keymap: dict[str, str | None] = Field(default_factory=dict)
    handlers: dict[str, Callable[..., Any]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    @model_validator(mode="before")
    @classmethod
    def _collect_handler_overrides(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        known = set(cls.model_fields)
        overrides = {
            key: value for key, value in data.items() if key not in known and callable(value)
        }
        if not overrides:
            return data
        normalized = {key: value for key, value in data.items() if key not in overrides}
        normalized["handlers"] = {**overrides, **dict(normalized.get("handlers") or {})}
        return normalized
