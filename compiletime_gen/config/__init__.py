from .config_types import (
    ConfigurationError,
    ScalarType,
    SCALAR_TYPES,
    MAX_BUFFERS,
    MAX_DIMENSIONS,
    DEFAULT_MIX,
    MixEntry,
    GenerationConfig,
    clamp,
    parse_mix,
    format_mix,
)

__all__ = [
    "ConfigurationError",
    "ScalarType",
    "SCALAR_TYPES",
    "MAX_BUFFERS",
    "MAX_DIMENSIONS",
    "DEFAULT_MIX",
    "MixEntry",
    "GenerationConfig",
    "clamp",
    "parse_mix",
    "format_mix",
]
