"""Input helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def load_input(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(path)

    if path.suffix.lower() == ".json":
        return json.loads(path.read_text(encoding="utf-8"))
    return path.read_text(encoding="utf-8")
