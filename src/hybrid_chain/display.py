"""Rendering of chain results for display."""

from __future__ import annotations

import yaml
from pydantic import BaseModel

from hybrid_chain.models.chain_result import ChainResult


def render_result(result: ChainResult, *, show_invisible: bool = False) -> str | None:
    """
    Text to print for a result, or None when it is suppressed.
    Keep output stable: models as indented JSON, other data as sorted YAML.
    """
    if not result.visible and not show_invisible:
        return None
    value = result.value
    if isinstance(value, str):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump_json(indent=2)
    return yaml.safe_dump(
        value,
        allow_unicode=False,
        default_flow_style=False,
        sort_keys=True,
    ).rstrip()
