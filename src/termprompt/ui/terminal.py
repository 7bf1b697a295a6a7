"""Platform terminal streams for the prompt engine.

The core never opens stdin/stdout itself; callers build these with
:func:`create_terminal_input` / :func:`create_terminal_output` and pass them in.
"""

from __future__ import annotations

import asyncio
import contextlib
import shutil
import sys
from typing import TYPE_CHECKING, TextIO

from prompt_toolkit.input import create_input

from termprompt.constants import DEFAULT_COLS, DEFAULT_ESCAPE_TIMEOUT, DEFAULT_ROWS
from termprompt.core.logging.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from prompt_toolkit.input import Input
    from prompt_toolkit.key_binding import KeyPress

    from termprompt.core.io import KeyCallback

logger = get_logger(__name__)


class TerminalInput:
    """Input source backed by a prompt_toolkit ``Input`` in raw mode."""

    def __init__(self, pt_input: "Input", *, escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT) -> None:
        self._input = pt_input
        self._escape_timeout = escape_timeout

    def listen(self, on_key: "KeyCallback") -> "Callable[[], None]":
        """Attach ``on_key`` to the terminal and return a detach function.

        Must be called with a running event loop.
        """
        loop = asyncio.get_running_loop()
        flush_handle: asyncio.TimerHandle | None = None

        def _deliver(key_presses: "Iterable[KeyPress]") -> None:
            for key_press in key_presses:
                on_key(key_press.data, key_press)

        def _flush() -> None:
            _deliver(self._input.flush_keys())

        def _on_ready() -> None:
            nonlocal flush_handle
            _deliver(self._input.read_keys())
            # A lone ESC stays buffered in the parser until flushed.
            if flush_handle is not None:
                flush_handle.cancel()
            flush_handle = loop.call_later(self._escape_timeout, _flush)

        with contextlib.ExitStack() as stack:
            stack.enter_context(self._input.raw_mode())
            stack.enter_context(self._input.attach(_on_ready))
            stack = stack.pop_all()
        logger.debug("Terminal input attached")

        def detach() -> None:
            if flush_handle is not None:
                flush_handle.cancel()
            stack.close()
            logger.debug("Terminal input detached")

        return detach


class TerminalOutput:
    """Output sink writing to a text stream and reporting the terminal size."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def write(self, data: str) -> None:
        self._stream.write(data)
        self._stream.flush()

    @property
    def columns(self) -> int:
        return shutil.get_terminal_size((DEFAULT_COLS, DEFAULT_ROWS)).columns

    @property
    def rows(self) -> int:
        return shutil.get_terminal_size((DEFAULT_COLS, DEFAULT_ROWS)).lines


def create_terminal_input(
    stdin: TextIO | None = None, *, escape_timeout: float = DEFAULT_ESCAPE_TIMEOUT
) -> TerminalInput:
    return TerminalInput(create_input(stdin), escape_timeout=escape_timeout)


def create_terminal_output(stdout: TextIO | None = None) -> TerminalOutput:
    return TerminalOutput(stdout or sys.stdout)
