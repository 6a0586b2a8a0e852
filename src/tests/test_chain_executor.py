import asyncio
import inspect
from typing import Any

import anyio
import pytest

from hybrid_chain import chain_executor
from hybrid_chain.chain_executor import hybrid_chain, run, run_async
from hybrid_chain.errors import FutureRejection, StepFailure
from hybrid_chain.models import ChainResult
from hybrid_chain.step_adapter import observe, passthrough
from hybrid_chain.visibility import identity, invisible, with_visible


async def _resolved(value: Any) -> Any:
    return value


async def _rejected(message: str) -> Any:
    raise RuntimeError(message)


async def _await(awaitable: Any) -> Any:
    return await awaitable


class CallCounter:
    def __init__(self, return_value: Any = None) -> None:
        self.return_value = return_value
        self.calls: list[Any] = []

    def __call__(self, value: Any) -> Any:
        self.calls.append(value)
        return self.return_value


def _fail(value: Any) -> Any:
    raise ValueError(f"bad value {value!r}")


def test_hybrid_chain_preserves_visibility() -> None:
    assert hybrid_chain(1, with_visible) == ChainResult(value=1, visible=True)
    assert hybrid_chain(invisible(1), with_visible) == ChainResult(value=1, visible=False)
    assert hybrid_chain(1, identity, with_visible) == ChainResult(value=1, visible=True)
    assert hybrid_chain(invisible(1), identity, with_visible) == ChainResult(value=1, visible=False)
    assert hybrid_chain(1, lambda x: invisible(x), with_visible) == ChainResult(value=1, visible=False)


def test_run_without_steps_reports_initial_value() -> None:
    assert run(1, []) == ChainResult(value=1, visible=True)
    assert run(invisible(1), []) == ChainResult(value=1, visible=False)


def test_plain_step_resets_visibility_to_true() -> None:
    result = run(invisible(2), [lambda x: x * 3])

    assert result == ChainResult(value=6, visible=True)


def test_explicit_visible_tag_overrides_inherited_flag() -> None:
    result = run(invisible("a"), [passthrough(lambda x: ChainResult(value=x + "b", visible=True))])

    assert result == ChainResult(value="ab", visible=True)


def test_steps_apply_left_to_right() -> None:
    result = run("a", [lambda x: x + "b", lambda x: x + "c", str.upper])

    assert isinstance(result, ChainResult)
    assert result.value == "ABC"


def test_sync_chain_does_not_touch_event_loop(monkeypatch: pytest.MonkeyPatch) -> None:
    def _no_loop() -> None:
        raise AssertionError("event loop consulted for a synchronous chain")

    monkeypatch.setattr(chain_executor.asyncio, "get_running_loop", _no_loop)

    assert run(1, [identity, lambda x: x + 1]) == ChainResult(value=2, visible=True)


def test_step_failure_short_circuits() -> None:
    later = CallCounter()

    with pytest.raises(StepFailure) as excinfo:
        run(1, [identity, _fail, later])

    assert later.calls == []
    assert excinfo.value.step_index == 1
    assert excinfo.value.step_name == "_fail"
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_base_exceptions_are_not_wrapped() -> None:
    def _interrupt(value: Any) -> Any:
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        run(1, [_interrupt])


def test_rerunning_same_chain_is_independent() -> None:
    counter = CallCounter(return_value="x")
    steps = [identity, counter, invisible]

    first = run(1, steps)
    second = run(1, steps)

    assert first == second == ChainResult(value="x", visible=False)
    assert counter.calls == [1, 1]


def test_async_chain_without_running_loop_returns_coroutine() -> None:
    outcome = run(_resolved(1), [identity, with_visible])

    assert inspect.iscoroutine(outcome)
    assert anyio.run(_await, outcome) == ChainResult(value=1, visible=True)


@pytest.mark.anyio
async def test_sync_chain_inside_event_loop_returns_result_directly() -> None:
    outcome = run(1, [identity])

    assert outcome == ChainResult(value=1, visible=True)


@pytest.mark.anyio
async def test_async_chain_preserves_visibility() -> None:
    assert await run(_resolved(1), [with_visible]) == ChainResult(value=1, visible=True)
    assert await run(_resolved(invisible(1)), [with_visible]) == ChainResult(value=1, visible=False)
    assert await run(_resolved(1), [identity, with_visible]) == ChainResult(value=1, visible=True)
    assert await run(_resolved(invisible(1)), [identity, with_visible]) == ChainResult(value=1, visible=False)
    assert await run(_resolved(1), [lambda x: invisible(x), with_visible]) == ChainResult(value=1, visible=False)


@pytest.mark.anyio
async def test_async_steps_carry_visibility() -> None:
    async def hide(value: Any) -> Any:
        return invisible(value)

    async def echo(value: Any) -> Any:
        return value

    assert await run(1, [hide]) == ChainResult(value=1, visible=False)
    assert await run(invisible(1), [echo]) == ChainResult(value=1, visible=True)
    assert await run(invisible(1), [passthrough(echo)]) == ChainResult(value=1, visible=False)


@pytest.mark.anyio
async def test_tag_wrapping_awaitable_keeps_tag_flag() -> None:
    result = await run(1, [lambda x: invisible(_resolved(x + 1))])

    assert result == ChainResult(value=2, visible=False)


@pytest.mark.anyio
async def test_chain_switches_to_async_mid_chain_and_keeps_order() -> None:
    order: list[str] = []

    def first(value: int) -> int:
        order.append("first")
        return value + 1

    async def second(value: int) -> int:
        await asyncio.sleep(0)
        order.append("second")
        return value * 10

    def third(value: int) -> int:
        order.append("third")
        return value - 1

    outcome = run(1, [first, second, third])

    assert order == ["first"]
    assert isinstance(outcome, asyncio.Task)
    assert await outcome == ChainResult(value=19, visible=True)
    assert order == ["first", "second", "third"]


@pytest.mark.anyio
async def test_async_chain_progresses_without_being_awaited() -> None:
    seen = CallCounter(return_value="done")
    task = run(_resolved(1), [identity, seen])

    for _ in range(3):
        await asyncio.sleep(0)

    assert seen.calls == [1]
    assert await task == ChainResult(value="done", visible=True)


@pytest.mark.anyio
async def test_chain_waits_for_pending_future() -> None:
    loop = asyncio.get_running_loop()
    future: asyncio.Future[int] = loop.create_future()
    later = CallCounter(return_value="after")

    task = run(future, [later])
    await asyncio.sleep(0)

    assert later.calls == []
    assert isinstance(task, asyncio.Task)
    assert not task.done()

    future.set_result(5)

    assert await task == ChainResult(value="after", visible=True)
    assert later.calls == [5]


@pytest.mark.anyio
async def test_rejected_initial_future_fails_chain() -> None:
    later = CallCounter()

    with pytest.raises(FutureRejection) as excinfo:
        await run(_rejected("boom"), [later])

    assert excinfo.value.step_index is None
    assert isinstance(excinfo.value.__cause__, RuntimeError)
    assert later.calls == []


@pytest.mark.anyio
async def test_rejected_step_future_short_circuits() -> None:
    later = CallCounter()

    with pytest.raises(FutureRejection) as excinfo:
        await run(1, [identity, lambda x: _rejected("nope"), later])

    assert excinfo.value.step_index == 1
    assert later.calls == []


@pytest.mark.anyio
async def test_step_failure_after_suspension_fails_chain() -> None:
    later = CallCounter()

    with pytest.raises(StepFailure) as excinfo:
        await run(_resolved(1), [identity, _fail, later])

    assert excinfo.value.step_index == 1
    assert later.calls == []


@pytest.mark.anyio
async def test_run_async_accepts_sync_and_async_chains() -> None:
    assert await run_async(1, [identity]) == ChainResult(value=1, visible=True)
    assert await run_async(_resolved(invisible(1)), []) == ChainResult(value=1, visible=False)


@pytest.mark.anyio
async def test_rerunning_async_chain_is_independent() -> None:
    counter = CallCounter(return_value="y")
    steps = [identity, counter]

    first, second = await run(_resolved(1), steps), await run(_resolved(2), steps)

    assert first == second == ChainResult(value="y", visible=True)
    assert counter.calls == [1, 2]


def test_with_visible_reports_flag_to_observer_steps() -> None:
    seen: list[ChainResult] = []

    def capture(result: ChainResult) -> ChainResult:
        seen.append(result)
        return result

    hidden = run(invisible(1), [with_visible, observe(capture), lambda x: x + 1])
    shown = run(1, [identity, with_visible, observe(capture)])

    assert seen == [ChainResult(value=1, visible=False), ChainResult(value=1, visible=True)]
    assert hidden == ChainResult(value=2, visible=True)
    assert shown == ChainResult(value=1, visible=True)


def test_with_visible_mid_chain_hands_plain_value_on() -> None:
    later = CallCounter(return_value="z")

    result = run(invisible("a"), [with_visible, passthrough(later)])

    assert later.calls == ["a"]
    assert result == ChainResult(value="z", visible=False)


def test_observer_sees_flag_set_by_previous_step() -> None:
    seen: list[ChainResult] = []
    capture = observe(lambda result: seen.append(result) or result.value)

    run(1, [lambda x: invisible(x * 2), capture])

    assert seen == [ChainResult(value=2, visible=False)]


@pytest.mark.anyio
async def test_observer_sees_flag_carried_through_awaitables() -> None:
    seen: list[ChainResult] = []

    def capture(result: ChainResult) -> ChainResult:
        seen.append(result)
        return result

    await run(_resolved(invisible(1)), [identity, observe(capture)])
    await run(_resolved(1), [lambda x: invisible(x), observe(capture)])
    await run(_resolved(1), [identity, observe(capture)])

    assert seen == [
        ChainResult(value=1, visible=False),
        ChainResult(value=1, visible=False),
        ChainResult(value=1, visible=True),
    ]
