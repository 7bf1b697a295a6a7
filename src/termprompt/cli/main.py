"""Main CLI entry point for termprompt."""

from __future__ import annotations

import typer

from termprompt.cli.commands.choose import choose_command
from termprompt.cli.commands.keys import keys_command

app = typer.Typer(
    help="Interactive terminal prompts.",
    add_completion=False,
)

app.command("choose", help="Pick one entry from a list of choices")(choose_command)
app.command("keys", help="Echo decoded key presses and their actions")(keys_command)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
