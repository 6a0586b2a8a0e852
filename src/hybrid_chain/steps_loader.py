"""Resolve declared steps into callables."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from hybrid_chain.errors import ConfigurationError
from hybrid_chain.models.chain_spec import ChainSpec
from hybrid_chain.step_adapter import Step, observe, passthrough


logger = logging.getLogger(__name__)


def import_symbol(path: str) -> Any:
    """
    Imports a symbol given "package.module:Symbol.attr".
    """
    if ":" not in path:
        raise ConfigurationError(f"Expected import path 'module:Symbol', got {path!r}")
    mod, sym = path.split(":", 1)
    try:
        target: Any = importlib.import_module(mod)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module {mod!r} for {path!r}.") from exc
    for attr in sym.split("."):
        try:
            target = getattr(target, attr)
        except AttributeError as exc:
            raise ConfigurationError(f"{path!r} has no attribute {attr!r}.") from exc
    return target


def build_steps(spec: ChainSpec) -> list[Step]:
    steps: list[Step] = []
    for step_spec in spec.steps:
        func = import_symbol(step_spec.call)
        if not callable(func):
            raise ConfigurationError(f"Step {step_spec.id!r} target {step_spec.call!r} is not callable.")
        if step_spec.observe:
            func = observe(func)
        if step_spec.passthrough:
            func = passthrough(func)
        logger.debug("Loaded step %s from %s", step_spec.id, step_spec.call)
        steps.append(func)
    return steps
