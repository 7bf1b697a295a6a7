"""
Rich consoles used by the CLI commands.

Both write to stderr: prompt frames and the final answer own stdout, so
status lines such as "Cancelled" must not end up in a piped answer.
"""

from rich.console import Console

console = Console(
    stderr=True,
    color_system="auto",
)

error_console = Console(
    stderr=True,
    style="bold red",
)
