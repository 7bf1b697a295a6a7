"""Convenience entry point that runs a prompt on the process terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from termprompt.config import PromptSettings, get_settings
from termprompt.core.prompt import Prompt
from termprompt.ui.terminal import create_terminal_input, create_terminal_output

if TYPE_CHECKING:
    from termprompt.core.io import InputSource, OutputSink
    from termprompt.core.options import PromptOptions


def create_prompt(
    options: "PromptOptions | None" = None,
    *,
    prompt_class: type[Prompt] = Prompt,
    input: "InputSource | None" = None,
    output: "OutputSink | None" = None,
    settings: PromptSettings | None = None,
    **kwargs: Any,
) -> Prompt:
    """Build ``prompt_class`` wired to the given streams or the process terminal."""
    settings = settings or get_settings()
    return prompt_class(
        options,
        input=input or create_terminal_input(escape_timeout=settings.escape_timeout),
        output=output or create_terminal_output(),
        settings=settings,
        **kwargs,
    )


async def prompt(
    options: "PromptOptions | None" = None,
    *,
    prompt_class: type[Prompt] = Prompt,
    input: "InputSource | None" = None,
    output: "OutputSink | None" = None,
    settings: PromptSettings | None = None,
    **kwargs: Any,
) -> Any:
    """Run a single prompt and return its answer.

    Raises :class:`~termprompt.core.exceptions.PromptCancelledError` (or the
    exception passed to ``cancel()``) when the prompt is cancelled.
    """
    engine = create_prompt(
        options,
        prompt_class=prompt_class,
        input=input,
        output=output,
        settings=settings,
        **kwargs,
    )
    return await engine.run()
