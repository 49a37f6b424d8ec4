"""
Forward declarations for generated kernel names (the `kernel_declarations.inc` artifact).
"""

from __future__ import annotations

from typing import List, Sequence

from compiletime_gen.config import GenerationConfig


# Second parameter carries the dimensionality supplied at the parallel_for use site.
TEMPLATE_HEADER = "template <typename _TT, int _TN> "


def declaration_line(kernel_name: str, *, templated: bool = False) -> str:
    prefix = TEMPLATE_HEADER if templated else ""
    return f"{prefix}class {kernel_name};"


def emit_declarations(config: GenerationConfig, kernel_names: Sequence[str]) -> List[str]:
    return [declaration_line(kn, templated=config.templated) for kn in kernel_names]


__all__ = ["TEMPLATE_HEADER", "declaration_line", "emit_declarations"]
