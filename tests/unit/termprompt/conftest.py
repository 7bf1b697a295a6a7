from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from termprompt.config import PromptSettings
from termprompt.core.prompt import Prompt


class FakeOutput:
    """Output sink that records every write."""

    def __init__(self, columns: int | None = 80, rows: int | None = 25) -> None:
        self.writes: list[str] = []
        if columns is not None:
            self.columns = columns
        if rows is not None:
            self.rows = rows

    def write(self, data: str) -> None:
        self.writes.append(data)

    @property
    def text(self) -> str:
        return "".join(self.writes)


class FakeInput:
    """Input source driven by the test through ``press``.

    The last callback is kept after detaching so tests can simulate late key
    events reaching a closed prompt.
    """

    def __init__(self) -> None:
        self.callback: Callable[[str, Any], Any] | None = None
        self.attached = False
        self.listen_calls = 0
        self.detach_calls = 0

    def listen(self, on_key: Callable[[str, Any], Any]) -> Callable[[], None]:
        self.callback = on_key
        self.attached = True
        self.listen_calls += 1

        def detach() -> None:
            self.attached = False
            self.detach_calls += 1

        return detach

    def press(self, data: str, event: Any = None) -> None:
        assert self.callback is not None, "input was never attached"
        self.callback(data, event)


async def settle(rounds: int = 10) -> None:
    """Give queued key presses a chance to be handled."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def fake_output() -> FakeOutput:
    return FakeOutput()


@pytest.fixture
def fake_input() -> FakeInput:
    return FakeInput()


@pytest.fixture
def plain_settings() -> PromptSettings:
    return PromptSettings(color=False)


@pytest.fixture
def make_prompt(fake_output, fake_input, plain_settings):
    def _make(prompt_class: type[Prompt] = Prompt, **kwargs: Any) -> Prompt:
        output = kwargs.pop("output", fake_output)
        input = kwargs.pop("input", fake_input)
        settings = kwargs.pop("settings", plain_settings)
        return prompt_class(output=output, input=input, settings=settings, **kwargs)

    return _make


@pytest.fixture
def settle_keys():
    return settle


@pytest.fixture
def output_factory() -> type[FakeOutput]:
    return FakeOutput
