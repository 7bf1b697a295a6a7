from __future__ import annotations

import asyncio

import pytest

from termprompt.core.exceptions import (
    PromptCancelledError,
    PromptClosedError,
    StatusAssignmentError,
)
from termprompt.ui import ansi


def _record_events(prompt) -> list[tuple]:
    events: list[tuple] = []
    for name in ("state", "run", "submit", "cancel", "close"):
        prompt.on(name, lambda *args, event=name: events.append((event, *args)))
    return events


def _submit_focused(prompt, input, key) -> None:
    prompt.submit(prompt.focused.value)


@pytest.mark.asyncio
async def test_run_resolves_with_selected_choice(make_prompt, fake_input, settle_keys) -> None:
    prompt = make_prompt(
        message="Pick one",
        choices=["red", "green", "blue"],
        submit=_submit_focused,
    )
    events = _record_events(prompt)

    task = asyncio.create_task(prompt.run())
    await settle_keys()
    assert fake_input.attached

    fake_input.press("\t")
    fake_input.press("\r")

    assert await asyncio.wait_for(task, 1) == "green"
    assert [event[0] for event in events] == ["state", "run", "submit", "close"]
    assert ("submit", "green") in events
    assert prompt.status == "answered"
    assert prompt.state.answered is True
    assert prompt.state.closed is True
    assert prompt.state.is_listening is False
    assert fake_input.detach_calls == 1


@pytest.mark.asyncio
async def test_cancel_key_rejects_run_and_stops_dispatch(
    make_prompt, fake_input, settle_keys
) -> None:
    submitted: list[str] = []
    prompt = make_prompt(
        message="Pick one",
        submit=lambda p, input, key: submitted.append(input),
    )
    events = _record_events(prompt)

    task = asyncio.create_task(prompt.run())
    await settle_keys()
    fake_input.press("\x1b")

    with pytest.raises(PromptCancelledError) as exc_info:
        await asyncio.wait_for(task, 1)

    assert exc_info.value.reason is None
    assert prompt.status == "cancelled"
    assert [event[0] for event in events] == ["state", "run", "cancel", "close"]

    fake_input.press("\r")
    await settle_keys()
    assert submitted == []
    assert await prompt.keypress("\r") is None
    assert submitted == []


@pytest.mark.asyncio
async def test_cancel_reason_is_carried_to_caller(make_prompt, fake_input, settle_keys) -> None:
    prompt = make_prompt(cancel=lambda p, input, key: p.cancel("user aborted"))
    task = asyncio.create_task(prompt.run())
    await settle_keys()
    fake_input.press("\x03")

    with pytest.raises(PromptCancelledError) as exc_info:
        await asyncio.wait_for(task, 1)
    assert exc_info.value.reason == "user aborted"
    assert prompt.state.error == "user aborted"


@pytest.mark.asyncio
async def test_exception_reason_is_raised_as_is(make_prompt, settle_keys) -> None:
    prompt = make_prompt()
    task = asyncio.create_task(prompt.run())
    await settle_keys()
    prompt.cancel(TimeoutError("too slow"))

    with pytest.raises(TimeoutError, match="too slow"):
        await asyncio.wait_for(task, 1)


@pytest.mark.asyncio
async def test_run_stays_pending_without_submit_or_cancel(
    make_prompt, fake_input, settle_keys
) -> None:
    prompt = make_prompt(message="Waiting", choices=["a", "b"])
    task = asyncio.create_task(prompt.run())
    await settle_keys()

    for data in ("x", "\t", "\x1b[A", "\x1b[Z", "7"):
        fake_input.press(data)
    await settle_keys()

    done, _ = await asyncio.wait({task}, timeout=0.05)
    assert not done
    assert prompt.status == "pending"

    prompt.cancel()
    with pytest.raises(PromptCancelledError):
        await task


@pytest.mark.asyncio
async def test_handlers_run_one_at_a_time_in_arrival_order(
    make_prompt, fake_input, settle_keys
) -> None:
    gate = asyncio.Event()
    order: list[str] = []

    async def slow(prompt, input, key) -> None:
        order.append("slow:start")
        await gate.wait()
        order.append("slow:end")

    def fast(prompt, input, key) -> None:
        order.append("fast")

    prompt = make_prompt(keymap={"a": "slow", "b": "fast"}, slow=slow, fast=fast)
    task = asyncio.create_task(prompt.run())
    await settle_keys()

    fake_input.press("a")
    fake_input.press("b")
    await settle_keys()
    assert order == ["slow:start"]

    gate.set()
    await settle_keys()
    assert order == ["slow:start", "slow:end", "fast"]

    prompt.cancel()
    with pytest.raises(PromptCancelledError):
        await task


@pytest.mark.asyncio
async def test_failing_handler_rejects_run_and_closes(make_prompt, fake_input, settle_keys) -> None:
    def boom(prompt, input, key) -> None:
        raise RuntimeError("boom")

    prompt = make_prompt(submit=boom)
    task = asyncio.create_task(prompt.run())
    await settle_keys()
    fake_input.press("\r")

    with pytest.raises(RuntimeError, match="boom"):
        await asyncio.wait_for(task, 1)
    assert prompt.state.closed is True
    assert prompt.state.is_listening is False
    assert fake_input.detach_calls == 1


@pytest.mark.asyncio
async def test_cancelling_the_run_task_restores_terminal(
    make_prompt, fake_input, fake_output, settle_keys
) -> None:
    prompt = make_prompt(message="Interrupted")
    task = asyncio.create_task(prompt.run())
    await settle_keys()

    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert prompt.state.closed is True
    assert fake_input.detach_calls == 1
    assert fake_output.writes[-1] == f"\n{ansi.CURSOR_SHOW}"


@pytest.mark.asyncio
async def test_run_refuses_a_closed_prompt(make_prompt, settle_keys) -> None:
    prompt = make_prompt()
    task = asyncio.create_task(prompt.run())
    await settle_keys()
    prompt.submit("done")
    assert await task == "done"

    with pytest.raises(PromptClosedError):
        await prompt.run()


@pytest.mark.asyncio
async def test_close_twice_matches_closing_once(make_prompt, fake_output, fake_input) -> None:
    prompt = make_prompt(message="Close me")
    closes: list[None] = []
    prompt.on("close", lambda: closes.append(None))
    prompt.start_listening()

    prompt.close()
    writes = list(fake_output.writes)
    terminal = prompt.state.terminal

    prompt.close()

    assert fake_output.writes == writes
    assert prompt.state.terminal == terminal
    assert closes == [None]
    assert prompt.state.is_listening is False
    assert fake_input.detach_calls == 1
    assert writes[-1] == f"\n{ansi.CURSOR_SHOW}"


def test_close_before_listening_is_a_noop(make_prompt, fake_output) -> None:
    prompt = make_prompt()
    prompt.close()
    assert fake_output.writes == []
    assert prompt.state.closed is False


@pytest.mark.asyncio
async def test_start_listening_is_idempotent(make_prompt, fake_input) -> None:
    prompt = make_prompt()
    prompt.start_listening()
    prompt.start_listening()
    assert fake_input.listen_calls == 1
    prompt.close()


def test_submit_without_value_keeps_previous_value(make_prompt) -> None:
    prompt = make_prompt(initial="blue")
    submitted: list[object] = []
    prompt.on("submit", submitted.append)

    prompt.submit()

    assert submitted == ["blue"]
    assert prompt.state.value == "blue"
    assert prompt.state.answered is True


@pytest.mark.parametrize("value", [None, ""])
def test_submit_with_empty_value_does_not_overwrite(make_prompt, value) -> None:
    prompt = make_prompt()
    prompt.state.value = "typed"
    prompt.submit(value)
    assert prompt.state.value == "typed"


@pytest.mark.parametrize("value", [0, False, "x", ["a"]])
def test_submit_with_meaningful_value_replaces_it(make_prompt, value) -> None:
    prompt = make_prompt(initial="initial")
    prompt.submit(value)
    assert prompt.state.value == value


def test_second_submit_is_ignored(make_prompt) -> None:
    prompt = make_prompt()
    submitted: list[object] = []
    prompt.on("submit", submitted.append)

    prompt.submit("first")
    prompt.submit("second")
    prompt.cancel("late")

    assert submitted == ["first"]
    assert prompt.state.value == "first"
    assert prompt.state.cancelled is False
    assert prompt.status == "answered"


def test_cancel_after_cancel_is_ignored(make_prompt) -> None:
    prompt = make_prompt()
    reasons: list[object] = []
    prompt.on("cancel", reasons.append)

    prompt.cancel("one")
    prompt.cancel("two")
    prompt.submit("value")

    assert reasons == ["one"]
    assert prompt.state.answered is False


def test_status_cannot_be_assigned(make_prompt) -> None:
    prompt = make_prompt(initial="x")
    before = prompt.state.snapshot()

    with pytest.raises(StatusAssignmentError):
        prompt.status = "answered"

    assert prompt.state.snapshot() == before
    assert prompt.status == "pending"


def test_status_reflects_lifecycle_flags(make_prompt) -> None:
    prompt = make_prompt()
    assert prompt.status == "pending"

    prompt.state.completing = True
    assert prompt.status == "completing"

    prompt.state.answered = True
    assert prompt.status == "completing"

    prompt.state.completing = False
    assert prompt.status == "answered"

    prompt.state.cancelled = True
    assert prompt.status == "cancelled"


@pytest.mark.asyncio
async def test_completing_context_marks_status_and_redraws(make_prompt, fake_output) -> None:
    prompt = make_prompt(message="Validate")
    seen: list[str] = []

    async def check() -> None:
        seen.append(prompt.status)

    with prompt.completing():
        await check()
        assert "…" in fake_output.text

    assert seen == ["completing"]
    assert prompt.status == "pending"


def test_initialize_emits_state_then_renders(make_prompt, fake_output) -> None:
    prompt = make_prompt(message="Hello")
    payloads: list[object] = []
    prompt.on("state", lambda state: payloads.append((state, list(fake_output.writes))))

    prompt.initialize()

    state, writes_at_emit = payloads[0]
    assert state is prompt.state
    assert writes_at_emit == []
    assert "Hello" in fake_output.text


@pytest.mark.asyncio
async def test_submit_key_returns_focused_choice(make_prompt, fake_input, settle_keys) -> None:
    prompt = make_prompt(message="Pick one", choices=["red", "green", "blue"])
    task = asyncio.create_task(prompt.run())
    await settle_keys()

    fake_input.press("\t")
    fake_input.press("\r")

    assert await asyncio.wait_for(task, 1) == "green"


@pytest.mark.asyncio
async def test_submit_key_without_choices_keeps_initial(make_prompt, fake_input, settle_keys) -> None:
    prompt = make_prompt(message="Name", initial="ada")
    task = asyncio.create_task(prompt.run())
    await settle_keys()

    fake_input.press("\t")
    fake_input.press("\r")

    assert await asyncio.wait_for(task, 1) == "ada"


@pytest.mark.asyncio
async def test_submit_inside_completing_draws_answered_frame(make_prompt, fake_output) -> None:
    prompt = make_prompt(message="Validate")
    prompt.start_listening()

    with prompt.completing():
        prompt.submit("ok")

    final_frame = ansi.strip_ansi(fake_output.text.split(ansi.cursor_to(0))[-1])
    assert final_frame.strip() == "✔ Validate · ok"
    assert prompt.state.completing is False
    assert prompt.status == "answered"


@pytest.mark.asyncio
async def test_leaving_completing_redraws_pending_frame(make_prompt, fake_output) -> None:
    prompt = make_prompt(message="Validate")
    prompt.start_listening()

    with prompt.completing():
        prompt.state.error = "too short"
        written = len(fake_output.writes)

    redraw = ansi.strip_ansi("".join(fake_output.writes[written:]))
    assert "? Validate › too short" in redraw
    assert "…" not in redraw
    prompt.close()


@pytest.mark.asyncio
async def test_failed_listen_leaves_no_pending_tasks(make_prompt, settle_keys) -> None:
    class _NoTerminal:
        def listen(self, on_key):
            raise OSError("not a terminal")

    prompt = make_prompt(input=_NoTerminal())
    before = asyncio.all_tasks()

    with pytest.raises(OSError, match="not a terminal"):
        await prompt.run()
    await settle_keys()

    assert asyncio.all_tasks() <= before
    assert prompt._pump_task is None
    assert prompt.state.is_listening is False
