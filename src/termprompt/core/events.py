"""Observer-style notifications emitted by the prompt engine."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable, Literal

from termprompt.core.logging.logger import get_logger

logger = get_logger(__name__)

PromptEvent = Literal["state", "run", "submit", "cancel", "close"]
Listener = Callable[..., Any]


class EventEmitter:
    """Synchronous event emitter.

    Listeners are invoked in registration order. A listener that raises is
    logged and does not prevent delivery to the remaining listeners.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Listener, bool]]] = defaultdict(list)

    def on(self, event: PromptEvent, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a function that unregisters it."""
        entry = (listener, False)
        self._listeners[event].append(entry)
        return lambda: self._remove(event, entry)

    def once(self, event: PromptEvent, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for the next emission of ``event`` only."""
        entry = (listener, True)
        self._listeners[event].append(entry)
        return lambda: self._remove(event, entry)

    def off(self, event: PromptEvent, listener: Listener) -> None:
        self._listeners[event] = [
            entry for entry in self._listeners[event] if entry[0] is not listener
        ]

    def listener_count(self, event: PromptEvent) -> int:
        return len(self._listeners.get(event, ()))

    def emit(self, event: PromptEvent, *args: Any) -> int:
        """Call every listener of ``event`` with ``args``; returns how many ran."""
        entries = list(self._listeners.get(event, ()))
        if not entries:
            return 0
        self._listeners[event] = [entry for entry in entries if not entry[1]]
        for listener, _ in entries:
            try:
                listener(*args)
            except Exception as exc:
                logger.warning(
                    f"Listener for '{event}' raised", data={"error": repr(exc)}
                )
        return len(entries)

    def _remove(self, event: str, entry: tuple[Listener, bool]) -> None:
        listeners = self._listeners.get(event)
        if listeners and entry in listeners:
            listeners.remove(entry)
