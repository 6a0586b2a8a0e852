"""Pydantic model for a chain result."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class ChainResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    value: Any
    visible: bool = True
