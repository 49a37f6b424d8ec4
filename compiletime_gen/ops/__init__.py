from .opset import (
    OPERATION_TEMPLATES,
    PLACEHOLDERS,
    SUPPORTED_OPS,
    OperationTemplate,
    UnknownOperationError,
    lookup,
)

__all__ = [
    "OPERATION_TEMPLATES",
    "PLACEHOLDERS",
    "SUPPORTED_OPS",
    "OperationTemplate",
    "UnknownOperationError",
    "lookup",
]
