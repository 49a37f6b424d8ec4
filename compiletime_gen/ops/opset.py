"""
Instruction catalog for generated kernel bodies.

Each opcode maps to an expression template with named operand slots:
  - `OUT`: the destination accessor
  - `IN1`, `IN2`: source accessors

Arity is implicit in which slots a template mentions. A slot may appear more
than once (`mad` reuses `IN1` as the addend); every occurrence receives the
same operand.

This module only defines templates. It intentionally does NOT import
`compiletime_gen.config` (the config layer validates mixes against us).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping

from compiletime_gen.diagnostics import Diagnostic, did_you_mean


# Canonical slot order; operands are drawn from the rotator in this order.
PLACEHOLDERS: tuple[str, ...] = ("OUT", "IN1", "IN2")

_PLACEHOLDER_RE = re.compile(r"\b(OUT|IN1|IN2)\b")


class UnknownOperationError(LookupError):
    """Raised when an opcode is not in the catalog."""


@dataclass(frozen=True)
class OperationTemplate:
    opcode: str
    template: str

    @property
    def placeholders(self) -> tuple[str, ...]:
        present = set(_PLACEHOLDER_RE.findall(self.template))
        return tuple(p for p in PLACEHOLDERS if p in present)

    def render(self, bindings: Mapping[str, str]) -> str:
        missing = [p for p in self.placeholders if p not in bindings]
        if missing:
            raise KeyError(f"{self.opcode}: missing bindings for {missing}")
        return _PLACEHOLDER_RE.sub(lambda m: str(bindings[m.group(1)]), self.template)


OPERATION_TEMPLATES: Dict[str, OperationTemplate] = {
    op.opcode: op
    for op in (
        OperationTemplate("sin", "OUT = cl::sycl::sin(IN1);"),
        OperationTemplate("cos", "OUT = cl::sycl::cos(IN1);"),
        OperationTemplate("sqrt", "OUT = cl::sycl::sqrt(IN1);"),
        OperationTemplate("add", "OUT = IN1 + IN2;"),
        OperationTemplate("mad", "OUT = IN1 * IN2 + IN1;"),
    )
}

SUPPORTED_OPS: set[str] = set(OPERATION_TEMPLATES)


def lookup(opcode: str) -> OperationTemplate:
    try:
        return OPERATION_TEMPLATES[opcode]
    except KeyError:
        diag = Diagnostic(
            message=f"unknown opcode '{opcode}'",
            notes=did_you_mean(opcode, SUPPORTED_OPS),
            hints=[f"supported opcodes are {sorted(SUPPORTED_OPS)}"],
        )
        raise UnknownOperationError(diag.format()) from None


__all__ = [
    "PLACEHOLDERS",
    "UnknownOperationError",
    "OperationTemplate",
    "OPERATION_TEMPLATES",
    "SUPPORTED_OPS",
    "lookup",
]
