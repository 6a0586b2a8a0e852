"""Public package exports."""

from hybrid_chain.chain_executor import hybrid_chain
from hybrid_chain.chain_executor import run
from hybrid_chain.chain_executor import run_async
from hybrid_chain.errors import ChainError
from hybrid_chain.errors import ConfigurationError
from hybrid_chain.errors import FutureRejection
from hybrid_chain.errors import StepFailure
from hybrid_chain.input_adaptors import FileInput
from hybrid_chain.input_adaptors import InputAdaptor
from hybrid_chain.input_adaptors import TextInput
from hybrid_chain.models import ChainResult
from hybrid_chain.orchestrator import ChainRunner
from hybrid_chain.step_adapter import observe
from hybrid_chain.step_adapter import passthrough
from hybrid_chain.step_builder import exprs_to_func
from hybrid_chain.visibility import identity
from hybrid_chain.visibility import invisible
from hybrid_chain.visibility import visible
from hybrid_chain.visibility import with_visible

__all__ = [
    "ChainError",
    "ChainResult",
    "ChainRunner",
    "ConfigurationError",
    "FileInput",
    "FutureRejection",
    "InputAdaptor",
    "StepFailure",
    "TextInput",
    "exprs_to_func",
    "hybrid_chain",
    "identity",
    "invisible",
    "observe",
    "passthrough",
    "run",
    "run_async",
    "visible",
    "with_visible",
]
