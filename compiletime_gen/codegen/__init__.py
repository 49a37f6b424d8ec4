from .declarations import TEMPLATE_HEADER, declaration_line, emit_declarations
from .kernels import KernelBodySynthesizer, emit_kernel_bodies, expand_instruction
from .names import GeneratedNames, accessor_name, derive_names, make_names
from .rotator import OperandRotator
from .writer import LineWriter, render_lines

__all__ = [
    "TEMPLATE_HEADER",
    "declaration_line",
    "emit_declarations",
    "KernelBodySynthesizer",
    "emit_kernel_bodies",
    "expand_instruction",
    "GeneratedNames",
    "accessor_name",
    "derive_names",
    "make_names",
    "OperandRotator",
    "LineWriter",
    "render_lines",
]
