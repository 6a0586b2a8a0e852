"""Chain failure types."""

from __future__ import annotations


class ChainError(Exception):
    pass


class StepFailure(ChainError):
    def __init__(self, step_index: int, step_name: str) -> None:
        super().__init__(f"Step {step_index} ({step_name}) failed.")
        self.step_index = step_index
        self.step_name = step_name


class FutureRejection(ChainError):
    def __init__(self, step_index: int | None) -> None:
        if step_index is None:
            source = "initial value"
        else:
            source = f"value returned by step {step_index}"
        super().__init__(f"Awaited {source} failed.")
        self.step_index = step_index


class ConfigurationError(ChainError, ValueError):
    pass
