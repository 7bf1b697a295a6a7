"""Echo decoded key presses and the actions they resolve to."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

import typer

from termprompt.api import create_prompt
from termprompt.config import get_settings
from termprompt.core.exceptions import PromptCancelledError
from termprompt.core.logging.logger import configure_logging
from termprompt.core.prompt import ActionHandler, Prompt
from termprompt.ui.console import console

if TYPE_CHECKING:
    from termprompt.ui.keypress import KeyEvent


class KeyEchoPrompt(Prompt):
    """Prompt whose catch-all handler shows every key it receives.

    Only ``cancel`` keeps its built-in handler, so escape / ctrl+c end the run.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.last_key = ""
        self.seen = 0

    def _builtin_handlers(self) -> dict[str, ActionHandler]:
        return {"cancel": self._cancel_key}

    def dispatch(self, input: str, key: "KeyEvent") -> None:
        self.seen += 1
        self.last_key = f"{key.combo} -> {key.action or '(unbound)'} {input!r}"
        self.render()

    def render_help(self, help: Any = None) -> str:
        return super().render_help(help if help is not None else self.last_key)


def keys_command() -> None:
    """Show how each key press is decoded until escape or ctrl+c."""
    settings = get_settings()
    configure_logging(settings.logger_level)

    engine = create_prompt(
        prompt_class=KeyEchoPrompt,
        settings=settings,
        name="keys",
        message="Press keys",
        hint="(escape or ctrl+c to quit)",
    )
    try:
        asyncio.run(engine.run())
    except PromptCancelledError:
        console.print(f"[dim]{engine.seen} key(s) decoded[/dim]")
