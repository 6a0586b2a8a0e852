"""Helpers for turning captured expressions into callables."""

from __future__ import annotations

import inspect
from typing import Any, Callable, Sequence

from hybrid_chain.errors import ConfigurationError


def exprs_to_func(exprs: Sequence[Callable[[], Any]]) -> Callable[[], Any]:
    """
    Combine zero-argument callables into one.
    A single expression is returned as-is so that an awaitable it produces is
    not hidden inside a list; several produce a list of their values.
    """
    if len(exprs) == 0:
        raise ConfigurationError("Need at least one expression to use as cache key or event.")
    if len(exprs) == 1:
        return exprs[0]

    funcs = list(exprs)

    def evaluate_all() -> list[Any]:
        return [func() for func in funcs]

    return evaluate_all


def formals_and_body(func: Callable[..., Any] | None) -> dict[str, Any]:
    """
    Describe a callable by its parameters and compiled body only, so two
    definitions of the same function at different source locations compare equal.
    """
    if func is None:
        return {}
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        formals: list[tuple[str, str, Any]] = []
    else:
        formals = [
            (param.name, param.kind.name, None if param.default is inspect.Parameter.empty else param.default)
            for param in signature.parameters.values()
        ]
    code = getattr(inspect.unwrap(func), "__code__", None)
    if code is None:
        return {"formals": formals, "body": None}
    return {"formals": formals, "body": _code_body(code)}


def _code_body(code: Any) -> tuple[Any, ...]:
    consts = tuple(_code_body(c) if inspect.iscode(c) else c for c in code.co_consts)
    return (code.co_code, consts, code.co_names, code.co_varnames)
