"""Model types for chain configuration and results."""

from hybrid_chain.models.chain_result import ChainResult
from hybrid_chain.models.chain_spec import ChainSpec
from hybrid_chain.models.loaded_chain_file import LoadedChainFile
from hybrid_chain.models.step_spec import StepSpec

__all__ = [
    "ChainResult",
    "ChainSpec",
    "LoadedChainFile",
    "StepSpec",
]
