"""Chain file discovery."""

from __future__ import annotations

import logging
from pathlib import Path

from hybrid_chain.models.loaded_chain_file import LoadedChainFile


logger = logging.getLogger(__name__)


def discover_chain_files(chain_roots: list[Path]) -> dict[str, Path]:
    """
    Map chain ids (file stems) to their markdown files.
    Earlier roots shadow later ones; shadowed files are reported, not loaded.
    """
    found: dict[str, Path] = {}
    for root in chain_roots:
        if not root.is_dir():
            logger.debug("Skipping missing chain root %s", root)
            continue
        for path in sorted(root.rglob("*.md")):
            kept = found.setdefault(path.stem, path)
            if kept != path:
                logger.warning("Chain %r at %s is shadowed by %s", path.stem, path, kept)
    return found


class ChainRegistry:
    def __init__(self, chain_roots: list[Path]) -> None:
        self.chain_roots = list(chain_roots)
        self._paths: dict[str, Path] | None = None
        self._loaded: dict[str, LoadedChainFile] = {}

    @property
    def paths(self) -> dict[str, Path]:
        if self._paths is None:
            self._paths = discover_chain_files(self.chain_roots)
        return self._paths

    def list_chains(self) -> list[str]:
        return sorted(self.paths)

    def describe(self) -> dict[str, str]:
        """Chain id -> one-line description, loading (and validating) every chain."""
        return {chain_id: self.get(chain_id).spec.description for chain_id in self.list_chains()}

    def get(self, chain_id: str) -> LoadedChainFile:
        loaded = self._loaded.get(chain_id)
        if loaded is None:
            path = self.paths.get(chain_id)
            if path is None:
                raise FileNotFoundError(f"Chain not found: {chain_id} (searched: {self.chain_roots})")
            loaded = LoadedChainFile(path)
            self._loaded[chain_id] = loaded
        return loaded
