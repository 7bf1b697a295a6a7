"""
Core prompt engine.

Public API:
- `Prompt`: lifecycle, dispatch and render engine
- `PromptOptions`: per-prompt configuration
- `PromptState`: mutable per-run state
- `Choice`: a selectable entry
- `EventEmitter`: notification channel used by the engine

Exports are resolved lazily to avoid circular imports during package init.
"""

from typing import TYPE_CHECKING


def __getattr__(name: str):
    if name == "Prompt":
        from .prompt import Prompt

        return Prompt
    elif name == "PromptOptions":
        from .options import PromptOptions

        return PromptOptions
    elif name == "PromptState":
        from .state import PromptState

        return PromptState
    elif name == "Choice":
        from .choices import Choice

        return Choice
    elif name == "EventEmitter":
        from .events import EventEmitter

        return EventEmitter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from .choices import Choice as Choice  # noqa: F401
    from .events import EventEmitter as EventEmitter  # noqa: F401
    from .options import PromptOptions as PromptOptions  # noqa: F401
    from .prompt import Prompt as Prompt  # noqa: F401
    from .state import PromptState as PromptState  # noqa: F401

__all__ = ["Choice", "EventEmitter", "Prompt", "PromptOptions", "PromptState"]
