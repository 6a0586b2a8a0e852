"""Helper for running declared chains."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Awaitable

from hybrid_chain.chain_executor import run, run_async
from hybrid_chain.chain_registry import ChainRegistry
from hybrid_chain.input_adaptors import FileInput, InputAdaptor
from hybrid_chain.models.chain_result import ChainResult
from hybrid_chain.step_adapter import Step
from hybrid_chain.steps_loader import build_steps


class ChainRunner:
    def __init__(self, chain_roots: list[Path] | None = None) -> None:
        self.registry: ChainRegistry = ChainRegistry(chain_roots or [])
        self._steps: dict[str, list[Step]] = {}

    def steps_for(self, chain_id: str) -> list[Step]:
        if chain_id not in self._steps:
            loaded = self.registry.get(chain_id)
            self._steps[chain_id] = build_steps(loaded.spec)
        return self._steps[chain_id]

    def run(self, chain_id: str, input_data: InputAdaptor | Path | Any) -> ChainResult | Awaitable[ChainResult]:
        return run(self._initial_value(input_data), self.steps_for(chain_id))

    async def run_async(self, chain_id: str, input_data: InputAdaptor | Path | Any) -> ChainResult:
        return await run_async(self._initial_value(input_data), self.steps_for(chain_id))

    def _initial_value(self, input_data: InputAdaptor | Path | Any) -> Any:
        if isinstance(input_data, InputAdaptor):
            return input_data.load()
        if isinstance(input_data, Path):
            return FileInput(input_data).load()
        return input_data
