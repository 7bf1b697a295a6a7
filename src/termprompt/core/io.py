"""Interfaces the prompt engine expects from its input and output collaborators."""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable

KeyCallback = Callable[[str, Any], Any]
"""Receives the raw input text and the decoder's event object for one key press."""


@runtime_checkable
class InputSource(Protocol):
    def listen(self, on_key: KeyCallback) -> Callable[[], None]:
        """Subscribe ``on_key`` to key input; the returned callable detaches it."""
        ...


@runtime_checkable
class OutputSink(Protocol):
    """Anything with ``write``. ``rows``/``columns`` attributes are optional."""

    def write(self, data: str) -> Any: ...
