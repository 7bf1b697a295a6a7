"""Pick one entry from a list, built purely from options and handler overrides."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Annotated, Any

import typer

from termprompt.api import create_prompt
from termprompt.config import get_settings
from termprompt.core.exceptions import PromptCancelledError, TermPromptError
from termprompt.core.logging.logger import configure_logging
from termprompt.core.options import PromptOptions
from termprompt.ui.console import console, error_console

if TYPE_CHECKING:
    from termprompt.core.prompt import Prompt
    from termprompt.ui.keypress import KeyEvent


def render_choice_list(prompt: "Prompt") -> str:
    """Footer provider listing the visible choices with a pointer on the focused one."""
    lines = []
    for index, choice in enumerate(prompt.visible):
        if index == prompt.state.index:
            lines.append(f"{prompt.symbols.pointer} {prompt.styles.render('primary', choice.message)}")
        else:
            lines.append(f"  {choice.message}")
    return "\n".join(lines)


def _select_number(prompt: "Prompt", input: str, key: "KeyEvent") -> None:
    position = int(key.name) - 1
    if not 0 <= position < len(prompt.visible):
        prompt.alert()
        return
    prompt.state.index = position
    prompt.render()


def _submit_focused(prompt: "Prompt", input: str, key: "KeyEvent") -> None:
    focused = prompt.focused
    prompt.submit(focused.value if focused is not None else None)


def build_choose_options(
    message: str,
    choices: list[str],
    *,
    hint: str | None = None,
    header: str | None = None,
) -> PromptOptions:
    return PromptOptions(
        name="choice",
        message=message,
        choices=choices,
        hint=hint,
        header=header,
        footer=render_choice_list,
        up=lambda prompt, input, key: prompt.prev(),
        down=lambda prompt, input, key: prompt.next(),
        number=_select_number,
        submit=_submit_focused,
    )


def choose_command(
    message: Annotated[str, typer.Argument(help="Question shown to the user.")],
    choice: Annotated[
        list[str],
        typer.Option("--choice", "-c", help="Selectable entry (repeat for more)."),
    ],
    initial: Annotated[
        str | None,
        typer.Option("--initial", "-i", help="Entry focused when the prompt opens."),
    ] = None,
    hint: Annotated[str | None, typer.Option("--hint", help="Hint shown after the message.")] = None,
    header: Annotated[str | None, typer.Option("--header", help="Line printed above the prompt.")] = None,
) -> None:
    """Ask the user to pick one of the given choices and print it."""
    settings = get_settings()
    configure_logging(settings.logger_level)

    options = build_choose_options(message, choice, hint=hint, header=header)
    try:
        engine = create_prompt(options, settings=settings)
    except TermPromptError as exc:
        error_console.print(f"Invalid prompt: {exc.message}")
        raise typer.Exit(2) from exc

    if initial is not None:
        names = [entry.name for entry in engine.visible]
        if initial not in names:
            error_console.print(f"Initial choice not found: {initial}")
            raise typer.Exit(2)
        engine.state.index = names.index(initial)

    try:
        answer: Any = asyncio.run(engine.run())
    except PromptCancelledError as exc:
        console.print("[yellow]Cancelled[/yellow]")
        raise typer.Exit(130) from exc

    typer.echo(answer)
