"""Hybrid sync/async chain execution."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Coroutine, Sequence, TypedDict

from hybrid_chain.errors import FutureRejection, StepFailure
from hybrid_chain.models.chain_result import ChainResult
from hybrid_chain.step_adapter import Adapted, Pending, Ready, Step, adapt, is_observer, is_passthrough, step_name
from hybrid_chain.visibility import next_visibility


logger = logging.getLogger(__name__)


class ChainState(TypedDict):
    current: Adapted
    visible: bool
    # Whether a pending value keeps the current flag when it settles to an untagged value.
    inherit: bool
    steps: list[Step]
    index: int


def run(initial: Any, steps: Sequence[Step]) -> ChainResult | Awaitable[ChainResult]:
    """
    Apply `steps` to `initial` left to right.

    Returns a ChainResult directly when nothing along the way had to be awaited.
    Otherwise returns an awaitable of the ChainResult: a task on the running
    asyncio loop, or the bare coroutine when no loop is running.
    """
    state = _init_state(steps)
    _accept(state, initial, inherit=False)
    _advance(state)
    if isinstance(state["current"], Pending):
        logger.debug("Chain suspended after %d of %d steps; continuing asynchronously.", state["index"], len(steps))
        return _schedule(_resume(state))
    return _finish(state)


def hybrid_chain(initial: Any, *steps: Step) -> ChainResult | Awaitable[ChainResult]:
    return run(initial, steps)


async def run_async(initial: Any, steps: Sequence[Step]) -> ChainResult:
    outcome = run(initial, steps)
    if isinstance(outcome, ChainResult):
        return outcome
    return await outcome


def _init_state(steps: Sequence[Step]) -> ChainState:
    return {
        "current": Ready(None),
        "visible": True,
        "inherit": False,
        "steps": list(steps),
        "index": 0,
    }


def _accept(state: ChainState, raw: Any, *, inherit: bool) -> None:
    value, visible = next_visibility(state["visible"], raw, inherit=inherit)
    state["visible"] = visible
    # A tag may wrap an awaitable; whatever it settles to keeps the tag's flag unless re-tagged.
    state["inherit"] = inherit or isinstance(raw, ChainResult)
    state["current"] = adapt(value)


def _advance(state: ChainState) -> None:
    steps = state["steps"]
    while state["index"] < len(steps):
        current = state["current"]
        if not isinstance(current, Ready):
            return
        index = state["index"]
        step = steps[index]
        state["index"] = index + 1
        logger.debug("Running step %d (%s).", index, step_name(step))
        arg = current.value
        if is_observer(step):
            arg = ChainResult(value=current.value, visible=state["visible"])
        try:
            raw = step(arg)
        except Exception as exc:
            logger.debug("Step %d (%s) raised %r.", index, step_name(step), exc)
            raise StepFailure(index, step_name(step)) from exc
        _accept(state, raw, inherit=is_passthrough(step))


async def _resume(state: ChainState) -> ChainResult:
    while True:
        current = state["current"]
        if isinstance(current, Ready):
            return _finish(state)
        source = state["index"] - 1 if state["index"] > 0 else None
        try:
            settled = await current.awaitable
        except Exception as exc:
            logger.debug("Awaited value from %s raised %r.", "initial value" if source is None else f"step {source}", exc)
            raise FutureRejection(source) from exc
        _accept(state, settled, inherit=state["inherit"])
        _advance(state)


def _finish(state: ChainState) -> ChainResult:
    current = state["current"]
    if not isinstance(current, Ready):
        raise RuntimeError("Chain finished while a value was still pending.")
    return ChainResult(value=current.value, visible=state["visible"])


def _schedule(coro: Coroutine[Any, Any, ChainResult]) -> Awaitable[ChainResult]:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        return coro
    return loop.create_task(coro)
