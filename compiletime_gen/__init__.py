"""
compiletime-gen: synthetic SYCL kernel generator for compile-time benchmarking.

The generator varies program shape (kernel count, buffer count, loop nesting,
instruction mix, dimensionality) deterministically; identical configurations
always produce byte-identical artifacts.
"""

from compiletime_gen.config import ConfigurationError, GenerationConfig
from compiletime_gen.ops import UnknownOperationError
from compiletime_gen.pipeline import ArtifactPaths, GenerationResult, generate, write_artifacts, write_to

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConfigurationError",
    "GenerationConfig",
    "UnknownOperationError",
    "ArtifactPaths",
    "GenerationResult",
    "generate",
    "write_artifacts",
    "write_to",
]
