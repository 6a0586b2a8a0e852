"""Input adaptors that supply a chain's initial value."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from hybrid_chain.io_utils import load_input


class InputAdaptor:
    def load(self) -> Any:
        raise NotImplementedError("InputAdaptor.load must be implemented by subclasses.")


class FileInput(InputAdaptor):
    def __init__(self, path: Path) -> None:
        self._value = load_input(path)

    def load(self) -> Any:
        return self._value


class TextInput(InputAdaptor):
    def __init__(self, text: str) -> None:
        self._text = text

    def load(self) -> Any:
        return self._text
