"""
The prompt engine.

A :class:`Prompt` owns one :class:`PromptState`, turns key events into action
handler calls, redraws after state changes and settles a run with either the
final value or a cancellation. Concrete prompt variants customize it through
options (handler overrides, text providers) or by subclassing and extending
``_builtin_handlers`` / defining ``dispatch``.
"""

from __future__ import annotations

import asyncio
import contextlib
import functools
import inspect
from typing import TYPE_CHECKING, Any, Callable, Iterator

from pydantic import ValidationError

from termprompt.config import PromptSettings, get_settings
from termprompt.constants import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    STATUS_ANSWERED,
    STATUS_CANCELLED,
    STATUS_COMPLETING,
    STATUS_PENDING,
)
from termprompt.core.choices import Choice, normalize_choices
from termprompt.core.events import EventEmitter, Listener, PromptEvent
from termprompt.core.exceptions import (
    PromptCancelledError,
    PromptClosedError,
    PromptConfigError,
    StatusAssignmentError,
)
from termprompt.core.logging.logger import get_logger
from termprompt.core.options import PromptOptions
from termprompt.core.render import (
    blend,
    first,
    header_line,
    is_value,
    newline_left,
    pad,
    resolve_value,
    to_text,
)
from termprompt.core.state import PromptState
from termprompt.ui import ansi
from termprompt.ui.actions import resolve_action
from termprompt.ui.keypress import KeyEvent, decode_key
from termprompt.ui.styles import Styles
from termprompt.ui.symbols import get_symbols

if TYPE_CHECKING:
    from termprompt.core.io import InputSource, OutputSink

logger = get_logger(__name__)

ActionHandler = Callable[[str, KeyEvent], Any]


def _cancellation_exception(reason: Any) -> BaseException:
    if isinstance(reason, BaseException):
        return reason
    return PromptCancelledError(reason)


class Prompt:
    """Lifecycle and render engine shared by every prompt variant."""

    dispatch: ActionHandler | None = None
    """Catch-all handler for keys without a named handler. Variants may define it."""

    def __init__(
        self,
        options: PromptOptions | None = None,
        *,
        output: "OutputSink",
        input: "InputSource",
        settings: PromptSettings | None = None,
        **kwargs: Any,
    ) -> None:
        if options is None:
            try:
                options = PromptOptions(**kwargs)
            except ValidationError as exc:
                raise PromptConfigError("Invalid prompt options", str(exc)) from exc
        elif kwargs:
            raise PromptConfigError(
                "Pass either a PromptOptions instance or keyword options, not both",
                f"Unexpected keywords: {', '.join(sorted(kwargs))}",
            )

        self.options = options
        self.settings = settings or get_settings()
        self.output = output
        self.input = input
        self.events = EventEmitter()

        self.name = options.name
        self.initial = options.initial
        self.state = PromptState(
            name=options.name,
            message=to_text(options.message) if not callable(options.message) else "",
            initial=options.initial,
            value=options.initial,
            hint=options.hint,
            limit=options.limit,
        )
        self.choices: list[Choice] = normalize_choices(options.choices) or [
            Choice(name=self.name or "value", message=self.state.message, value=self.initial)
        ]
        self.visible: list[Choice] = list(self.choices)
        self.styles = Styles(options.styles, color=self.settings.color)
        self.symbols = get_symbols(self.settings.ascii_symbols)

        self._stop_listening: Callable[[], None] | None = None
        self._pump_task: asyncio.Task[None] | None = None
        self._result: asyncio.Future[Any] | None = None

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def status(self) -> str:
        if self.state.cancelled:
            return STATUS_CANCELLED
        if self.state.completing:
            return STATUS_COMPLETING
        if self.state.answered:
            return STATUS_ANSWERED
        return STATUS_PENDING

    @status.setter
    def status(self, value: Any) -> None:
        raise StatusAssignmentError(value)

    @property
    def answered(self) -> bool:
        return self.state.answered

    @property
    def cancelled(self) -> bool:
        return self.state.cancelled

    @property
    def message(self) -> str:
        message = resolve_value(self, self.options.message)
        if not is_value(message):
            return f"{self.name}?"
        return to_text(message)

    @property
    def show(self) -> bool:
        if self.options.show is not None:
            return self.options.show
        return self.settings.show

    @property
    def rows(self) -> int:
        return (
            self.options.rows
            or self.state.rows
            or getattr(self.output, "rows", None)
            or self.settings.rows
            or DEFAULT_ROWS
        )

    @rows.setter
    def rows(self, value: int) -> None:
        self.state.rows = value

    @property
    def cols(self) -> int:
        return (
            self.options.cols
            or self.state.cols
            or getattr(self.output, "columns", None)
            or self.settings.cols
            or DEFAULT_COLS
        )

    @cols.setter
    def cols(self, value: int) -> None:
        self.state.cols = value

    @property
    def focused(self) -> Choice | None:
        if not self.visible:
            return None
        return self.visible[self.state.index % len(self.visible)]

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def on(self, event: PromptEvent, listener: Listener) -> Callable[[], None]:
        return self.events.on(event, listener)

    def once(self, event: PromptEvent, listener: Listener) -> Callable[[], None]:
        return self.events.once(event, listener)

    def off(self, event: PromptEvent, listener: Listener) -> None:
        self.events.off(event, listener)

    def emit(self, event: PromptEvent, *args: Any) -> int:
        logger.debug(f"Prompt event '{event}'", data={"prompt": self.name})
        return self.events.emit(event, *args)

    # ------------------------------------------------------------------
    # Input dispatch
    # ------------------------------------------------------------------

    def _builtin_handlers(self) -> dict[str, ActionHandler]:
        """Built-in action table. Variants extend it by merging with ``super()``."""
        return {
            "submit": self._submit_key,
            "cancel": self._cancel_key,
            "tab": self.tab,
            "shift_tab": self.shift_tab,
        }

    def resolve_handler(self, action: str | None) -> ActionHandler | None:
        """Find the handler for ``action``: override, then built-in, then ``dispatch``."""
        if action:
            override = self.options.handlers.get(action)
            if override is not None:
                return functools.partial(override, self)
            builtin = self._builtin_handlers().get(action)
            if builtin is not None:
                return builtin
        if self.dispatch is not None:
            return self.dispatch
        return None

    async def keypress(self, input: str = "", event: Any = None) -> Any:
        """Handle one key press: decode, resolve an action and run its handler."""
        if self.state.closed:
            return None
        key = decode_key(input, event)
        key = key.with_action(resolve_action(key, self.options.keymap))
        handler = self.resolve_handler(key.action)
        if handler is None:
            logger.debug("Unhandled key", data={"key": key.combo, "action": key.action})
            self.alert()
            return None
        result = handler(input, key)
        if inspect.isawaitable(result):
            result = await result
        return result

    def _enqueue(self, queue: asyncio.Queue, input: str, event: Any) -> None:
        if self.state.closed:
            return
        queue.put_nowait((input, event))

    async def _pump(self, queue: asyncio.Queue) -> None:
        """Handle queued key presses one at a time, in arrival order."""
        while True:
            item = await queue.get()
            if item is None or self.state.closed:
                return
            input, event = item
            try:
                await self.keypress(input, event)
            except Exception as exc:
                logger.error(
                    "Key handler failed",
                    data={"prompt": self.name, "error": repr(exc)},
                )
                self._fail(exc)
                return

    def _fail(self, exc: BaseException) -> None:
        if self._result is not None and not self._result.done():
            self._result.set_exception(exc)
        self.close()

    # ------------------------------------------------------------------
    # Built-in handlers
    # ------------------------------------------------------------------

    def _submit_key(self, input: str, key: KeyEvent) -> None:
        focused = self.focused
        if self.options.choices and focused is not None:
            self.submit(focused.value)
        else:
            self.submit()

    def _cancel_key(self, input: str, key: KeyEvent) -> None:
        self.cancel()

    def tab(self, input: str = "", key: KeyEvent | None = None) -> None:
        self.next()

    def shift_tab(self, input: str = "", key: KeyEvent | None = None) -> None:
        self.prev()

    def next(self) -> None:
        if not self.visible:
            self.alert()
            return
        self.state.index = (self.state.index + 1) % len(self.visible)
        self.render()

    def prev(self) -> None:
        if not self.visible:
            self.alert()
            return
        self.state.index = (self.state.index - 1) % len(self.visible)
        self.render()

    def filter_visible(self, predicate: Callable[[Choice], bool]) -> list[Choice]:
        """Narrow ``visible`` to the choices matching ``predicate``."""
        self.visible = [choice for choice in self.choices if predicate(choice)]
        self.state.index = 0
        return self.visible

    def reset_visible(self) -> None:
        self.visible = list(self.choices)
        self.state.index = 0

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def write(self, text: str = "") -> None:
        if not self.show:
            return
        self.state.has_rendered = True
        self.output.write(text)
        self.state.terminal += text

    def clear(self, text: str | None = None) -> None:
        """Erase the last frame. Only hides the cursor before anything was drawn."""
        if not self.state.is_listening:
            return
        if not self.state.has_rendered:
            self.write(ansi.CURSOR_HIDE)
            return
        self.write(ansi.clear(self.state.terminal if text is None else text, self.cols))
        self.state.terminal = ""

    def alert(self) -> None:
        self.write(ansi.BELL)

    # ------------------------------------------------------------------
    # Render pipeline
    # ------------------------------------------------------------------

    def render_header(self) -> str:
        return header_line(resolve_value(self, self.options.header))

    def render_prefix(self) -> str:
        prefix = resolve_value(self, self.options.prefix)
        text = to_text(prefix) or self.symbols.prefix_for(self.status)
        return f"{text} " if text else ""

    def render_separator(self) -> str:
        separator = to_text(resolve_value(self, self.options.separator))
        return pad(separator or self.symbols.separator_for(self.status), self.styles["dim"])

    def render_message(self, typed: str = "", help: str = "") -> str:
        output = (
            self.render_prefix()
            + self.styles.render("bold", self.message.strip())
            + self.render_separator()
        )
        if typed:
            output += typed
        if help:
            output += help
        return output

    def render_prompt(self) -> str:
        return self.render_header() + self.render_message()

    def render_input(self) -> str:
        typed = self.state.typed
        if self.state.answered:
            answer = first(typed, self.state.value, self.initial)
            return self.styles.render("primary", to_text(answer)) if is_value(answer) else ""
        return blend(typed, self.initial, self.styles["dim"])

    def render_help(self, help: Any = None) -> str:
        """Error text, else ``help``. Nothing once answered."""
        if self.state.answered:
            return ""
        if is_value(self.state.error):
            return self.styles.render("danger", to_text(resolve_value(self, self.state.error)))
        if is_value(help):
            return self.styles.render("muted", to_text(resolve_value(self, help)))
        return ""

    def render_hint(self) -> str:
        hint = resolve_value(self, self.state.hint)
        if is_value(self.initial) or not is_value(hint):
            return ""
        return self.styles.render("hint", to_text(hint))

    def render_footer(self) -> str:
        if self.state.limit is not None and self.state.limit == len(self.visible):
            return ""
        if self.state.answered:
            return ""
        return newline_left(to_text(resolve_value(self, self.options.footer)))

    def render(self) -> None:
        """Erase the previous frame and draw the current one."""
        self.clear()
        self.write(self.render_prompt())
        typed = self.render_input()
        self.write(typed)
        help = self.render_help()
        if help:
            self.write(f" {help}" if typed else help)
        self.write(self.render_hint())
        self.write(self.render_footer())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def completing(self) -> Iterator["Prompt"]:
        """Mark the prompt as completing while an asynchronous check runs."""
        self.state.completing = True
        self.render()
        try:
            yield self
        finally:
            self.state.completing = False
            if self.state.is_listening and not self.state.is_settled:
                self.render()

    def submit(self, value: Any = None) -> None:
        if self.state.is_settled:
            return
        if is_value(value):
            self.state.value = value
        self.state.answered = True
        self.state.submitted = True
        self.state.completing = False
        self.render()
        logger.debug("Prompt answered", data={"prompt": self.name})
        self.emit("submit", self.state.value)
        self.close()

    def cancel(self, error: Any = None) -> None:
        if self.state.is_settled:
            return
        self.state.error = error
        self.state.cancelled = True
        self.state.completing = False
        self.render()
        logger.debug("Prompt cancelled", data={"prompt": self.name, "reason": repr(error)})
        self.emit("cancel", error)
        self.close()

    def close(self) -> None:
        if not self.state.is_listening:
            return
        self.state.closed = True
        self.write(f"\n{ansi.CURSOR_SHOW}")
        self.emit("close")
        self.stop_listening()

    def start_listening(self) -> None:
        if self.state.is_listening or self.state.submitted:
            return
        queue: asyncio.Queue = asyncio.Queue()
        stop = self.input.listen(functools.partial(self._enqueue, queue))
        pump = asyncio.get_running_loop().create_task(self._pump(queue))
        self.state.is_listening = True

        def stop_listening() -> None:
            self.state.is_listening = False
            stop()
            queue.put_nowait(None)

        self._stop_listening = stop_listening
        self._pump_task = pump

    def stop_listening(self) -> None:
        stop, self._stop_listening = self._stop_listening, None
        if stop is not None:
            stop()

    def initialize(self) -> None:
        self.emit("state", self.state)
        self.render()

    async def run(self) -> Any:
        """Run the prompt until it is answered or cancelled.

        Returns the final value. Cancellation raises the reason passed to
        ``cancel()`` when it is an exception, else :class:`PromptCancelledError`.
        """
        if self.state.closed or self.state.is_settled:
            raise PromptClosedError(f"Prompt '{self.name}' has already run")

        result: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._result = result

        def _resolve(value: Any) -> None:
            if not result.done():
                result.set_result(value)
            _detach()

        def _reject(reason: Any) -> None:
            if not result.done():
                result.set_exception(_cancellation_exception(reason))
            _detach()

        unsubscribe = [self.once("submit", _resolve), self.once("cancel", _reject)]

        def _detach() -> None:
            for off in unsubscribe:
                off()

        try:
            self.initialize()
            self.emit("run")
            self.start_listening()
            return await result
        finally:
            _detach()
            self.close()
