"""Normalization of step returns into ready or pending values."""

from __future__ import annotations

import functools
import inspect
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeAlias

Step: TypeAlias = Callable[[Any], Any]

PASSTHROUGH_ATTR = "__hybrid_chain_passthrough__"
OBSERVER_ATTR = "__hybrid_chain_observer__"


@dataclass(frozen=True)
class Ready:
    value: Any


@dataclass(frozen=True)
class Pending:
    awaitable: Awaitable[Any]


Adapted: TypeAlias = Ready | Pending


def adapt(value: Any) -> Adapted:
    """
    Tag a value as ready or pending.
    This is the only place that decides whether something must be awaited.
    """
    if inspect.isawaitable(value):
        return Pending(value)
    return Ready(value)


def passthrough(func: Step) -> Step:
    """
    Mark a step as pass-through: it makes no visibility decision of its own,
    so the chain keeps the flag it had before the step ran.
    """

    @functools.wraps(func)
    def wrapper(value: Any) -> Any:
        return func(value)

    setattr(wrapper, PASSTHROUGH_ATTR, True)
    return wrapper


def is_passthrough(step: Step) -> bool:
    return getattr(step, PASSTHROUGH_ATTR, False) is True


def observe(func: Step) -> Step:
    """
    Mark a step as an observer: it is called with a ChainResult holding the
    incoming value and the visibility it arrived with, instead of the bare value.
    """

    @functools.wraps(func)
    def wrapper(result: Any) -> Any:
        return func(result)

    setattr(wrapper, OBSERVER_ATTR, True)
    return wrapper


def is_observer(step: Step) -> bool:
    return getattr(step, OBSERVER_ATTR, False) is True


def step_name(step: Step) -> str:
    name = getattr(step, "__qualname__", None) or getattr(step, "__name__", None)
    if isinstance(name, str):
        return name
    return repr(step)
