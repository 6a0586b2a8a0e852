"""Visibility tags and the rule that carries them from step to step."""

from __future__ import annotations

from typing import Any

from hybrid_chain.models.chain_result import ChainResult
from hybrid_chain.step_adapter import observe, passthrough


def invisible(value: Any) -> ChainResult:
    """Hand `value` to the next step, marked as suppressed."""
    return ChainResult(value=value, visible=False)


def visible(value: Any) -> ChainResult:
    return ChainResult(value=value, visible=True)


@passthrough
def identity(value: Any) -> Any:
    return value


@observe
def with_visible(result: ChainResult) -> ChainResult:
    """
    Report the incoming value together with the visibility it arrived with.
    The pair it returns restates that flag, so the chain's visibility is unchanged.
    """
    return result


def next_visibility(previous: bool, value: Any, *, inherit: bool) -> tuple[Any, bool]:
    """
    Apply the visibility rule to a step's return value.
    Returns the untagged value and the flag the chain should carry from now on.
    """
    if isinstance(value, ChainResult):
        return value.value, value.visible
    if inherit:
        return value, previous
    return value, True
